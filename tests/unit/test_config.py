"""
Tests for loading the Cassandra configuration
"""

import pytest
from pydantic import ValidationError

from platformq_cassandra.config import CassandraConfig, load_config, parse_config
from platformq_cassandra.exceptions import (
    ConfigError,
    ConfigReadError,
    DecodeError,
)


class TestLoadConfig:
    """Test decoding of valid configuration files"""

    def test_fields_match_file(self, write_config):
        """Test every field equals the literal value in the file"""
        path = write_config("""
            cassandra:
              cluster:
                - 10.0.0.1
                - 10.0.0.2
                - cass-3.internal
              keyspace: telemetry
              username: app
              password: s3cret
              numConns: 5
              port: 19042
        """)
        config = load_config(path)

        assert config.cluster == ["10.0.0.1", "10.0.0.2", "cass-3.internal"]
        assert config.keyspace == "telemetry"
        assert config.username == "app"
        assert config.password == "s3cret"
        assert config.num_conns == 5
        assert config.port == 19042

    def test_optional_fields_default(self, write_config):
        """Test credentials and port fall back to defaults"""
        path = write_config("""
            cassandra:
              cluster: [127.0.0.1]
              keyspace: test_ks
              numConns: 1
        """)
        config = load_config(str(path))

        assert config.username is None
        assert config.password is None
        assert config.port == 9042
        assert not config.has_credentials

    def test_empty_cluster_is_accepted(self, write_config):
        """Test the loader does not validate the node list"""
        path = write_config("""
            cassandra:
              cluster: []
              keyspace: test_ks
              numConns: 2
        """)
        assert load_config(path).cluster == []

    def test_unknown_keys_are_ignored(self, write_config):
        path = write_config("""
            logging:
              level: debug
            cassandra:
              cluster: [127.0.0.1]
              keyspace: test_ks
              numConns: 2
              datacenter: dc1
        """)
        config = load_config(path)
        assert config.cluster == ["127.0.0.1"]
        assert not hasattr(config, "datacenter")

    def test_numeric_scalars_load_as_text(self, write_config):
        """Test unquoted numeric credentials keep their literal value"""
        path = write_config("""
            cassandra:
              cluster: [127.0.0.1]
              keyspace: ks
              username: 1001
              password: 12345
              numConns: 2
        """)
        config = load_config(path)

        assert config.username == "1001"
        assert config.password == "12345"
        assert config.has_credentials

    def test_parse_config_from_string(self):
        config = parse_config("cassandra: {cluster: [a, b], keyspace: ks, numConns: 3}")
        assert config.cluster == ["a", "b"]
        assert config.num_conns == 3


class TestLoadConfigErrors:
    """Test malformed or missing configuration files"""

    def test_missing_file(self, tmp_path):
        path = tmp_path / "missing.yaml"
        with pytest.raises(ConfigReadError) as exc_info:
            load_config(path)

        assert isinstance(exc_info.value, OSError)
        assert isinstance(exc_info.value, ConfigError)
        assert exc_info.value.path == str(path)

    def test_directory_is_not_readable(self, tmp_path):
        with pytest.raises(ConfigReadError):
            load_config(tmp_path)

    def test_invalid_yaml(self, write_config):
        path = write_config("cassandra: [unclosed\n")
        with pytest.raises(DecodeError) as exc_info:
            load_config(path)
        assert exc_info.value.path == str(path)

    def test_top_level_must_be_mapping(self, write_config):
        path = write_config("- 127.0.0.1\n- 127.0.0.2\n")
        with pytest.raises(DecodeError):
            load_config(path)

    def test_empty_file(self, write_config):
        with pytest.raises(DecodeError):
            load_config(write_config(""))

    def test_missing_root_key(self, write_config):
        path = write_config("""
            cluster: [127.0.0.1]
            keyspace: test_ks
        """)
        with pytest.raises(DecodeError, match="cassandra"):
            load_config(path)

    @pytest.mark.parametrize("body", [
        "cassandra: null\n",
        "cassandra: [127.0.0.1]\n",
        "cassandra: {cluster: 127.0.0.1}\n",
        "cassandra: {cluster: [127.0.0.1], numConns: many}\n",
        "cassandra: {cluster: [127.0.0.1], keyspace: {name: ks}}\n",
    ])
    def test_wrong_shape(self, write_config, body):
        with pytest.raises(DecodeError):
            load_config(write_config(body))

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"\xff\xfe\x00cassandra")
        with pytest.raises(DecodeError):
            load_config(path)


class TestCassandraConfig:
    """Test the configuration record"""

    def test_record_is_immutable(self, config):
        with pytest.raises(ValidationError):
            config.keyspace = "other"

    def test_alias_and_field_name(self):
        by_alias = CassandraConfig(cluster=["h"], numConns=7)
        by_name = CassandraConfig(cluster=["h"], num_conns=7)
        assert by_alias == by_name

    @pytest.mark.parametrize("username,password,full,partial", [
        ("app", "secret", True, False),
        (None, None, False, False),
        ("", "", False, False),
        ("app", None, False, True),
        ("", "secret", False, True),
    ])
    def test_credentials(self, username, password, full, partial):
        config = CassandraConfig(cluster=["h"], username=username, password=password)
        assert config.has_credentials is full
        assert config.has_partial_credentials is partial
