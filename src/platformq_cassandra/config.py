"""
Cassandra connection configuration

Loads the cluster connection parameters from a YAML document of the form::

    cassandra:
      cluster: [10.0.0.1, 10.0.0.2]
      keyspace: telemetry
      username: app
      password: secret
      numConns: 2

and decodes them into an immutable CassandraConfig record.
"""

import os
import logging
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigReadError, DecodeError

logger = logging.getLogger(__name__)

CONFIG_ROOT_KEY = "cassandra"
DEFAULT_PORT = 9042
DEFAULT_NUM_CONNS = 2


class CassandraConfig(BaseModel):
    """Connection parameters for a Cassandra cluster"""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        # YAML reads `password: 12345` as an int
        coerce_numbers_to_str=True,
    )

    cluster: List[str] = Field(default_factory=list, description="Contact point hosts")
    keyspace: str = Field("", description="Keyspace selected on connect")
    username: Optional[str] = Field(None, description="Username for password authentication")
    password: Optional[str] = Field(None, description="Password for password authentication")
    num_conns: int = Field(DEFAULT_NUM_CONNS, alias="numConns", description="Connections per host")
    port: int = Field(DEFAULT_PORT, description="Native protocol port")

    @property
    def has_credentials(self) -> bool:
        """Both username and password are set"""
        return bool(self.username) and bool(self.password)

    @property
    def has_partial_credentials(self) -> bool:
        """Exactly one of username/password is set"""
        return bool(self.username) != bool(self.password)


class CassandraConfigFile(BaseModel):
    """Top-level document wrapping the configuration under the `cassandra` key"""

    model_config = ConfigDict(extra="ignore")

    cassandra: CassandraConfig


def parse_config(text: str, path: Optional[str] = None) -> CassandraConfig:
    """Decode a YAML document into a CassandraConfig"""
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DecodeError(f"invalid YAML: {e}", path=path) from e

    if not isinstance(document, dict):
        raise DecodeError("top level of the document must be a mapping", path=path)
    if CONFIG_ROOT_KEY not in document:
        raise DecodeError(f"missing top-level '{CONFIG_ROOT_KEY}' key", path=path)

    try:
        return CassandraConfigFile.model_validate(document).cassandra
    except ValidationError as e:
        raise DecodeError(f"invalid configuration: {e}", path=path) from e


def load_config(path: Union[str, os.PathLike]) -> CassandraConfig:
    """Read and decode the YAML configuration file at `path`"""
    path = os.fspath(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise DecodeError(f"file is not valid UTF-8: {e}", path=path) from e
    except OSError as e:
        raise ConfigReadError(path, str(e)) from e

    config = parse_config(text, path=path)
    logger.debug(f"Loaded Cassandra configuration from {path} ({len(config.cluster)} hosts)")
    return config
