"""
Pytest configuration for the Cassandra wrapper tests
"""

import os
import textwrap
from unittest.mock import MagicMock, patch

import pytest
from cassandra import ProtocolVersion, UnsupportedOperation

from platformq_cassandra.config import CassandraConfig
from platformq_cassandra.session import CassandraSession


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: needs a live Cassandra node (CASSANDRA_TEST_HOSTS)"
    )


@pytest.fixture
def write_config(tmp_path):
    """Write a YAML configuration file and return its path"""
    def _write(body: str, name: str = "cassandra.yaml"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(body), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def config():
    return CassandraConfig(cluster=["10.0.0.1", "10.0.0.2"], keyspace="test_ks", num_conns=4)


@pytest.fixture
def mock_cluster_cls():
    """Patch the driver Cluster used by the session module.

    The mocked cluster reports the driver's default protocol version and, like
    the driver, rejects per-host pool sizing from protocol v3 on.
    """
    with patch("platformq_cassandra.session.Cluster") as cluster_cls:
        cluster = cluster_cls.return_value
        cluster.protocol_version = ProtocolVersion.MAX_SUPPORTED

        def set_connections_per_host(host_distance, connections):
            if cluster.protocol_version >= 3:
                raise UnsupportedOperation(
                    "only has an effect when using protocol_version 1 or 2"
                )

        cluster.set_core_connections_per_host.side_effect = set_connections_per_host
        cluster.set_max_connections_per_host.side_effect = set_connections_per_host
        yield cluster_cls


@pytest.fixture
def driver_session():
    return MagicMock(name="Session")


@pytest.fixture
def cas(config, driver_session):
    """Handle wrapping a mocked driver session"""
    return CassandraSession(config, MagicMock(name="Cluster"), driver_session)


@pytest.fixture(scope="session")
def live_hosts():
    hosts = os.getenv("CASSANDRA_TEST_HOSTS")
    if not hosts:
        pytest.skip("CASSANDRA_TEST_HOSTS is not set")
    return [h.strip() for h in hosts.split(",") if h.strip()]
