"""PlatformQ Cassandra session wrapper

Loads cluster connection parameters from YAML, opens a session with a fixed
set of driver policies and runs CQL returning rows as plain mappings.
"""

from .config import CassandraConfig, load_config, parse_config
from .session import CassandraSession, connect, connect_from_yaml
from .values import CqlKind, CqlValue, Row, decode_row, decode_value, kind_of
from .logging_config import setup_structured_logging
from .exceptions import (
    DataAccessError,
    ConfigError,
    ConfigReadError,
    DecodeError,
    ConnectionError,
    ExecutionError,
    CursorError,
    UnsupportedValueError
)

__version__ = "0.1.0"

__all__ = [
    "CassandraConfig",
    "load_config",
    "parse_config",
    "CassandraSession",
    "connect",
    "connect_from_yaml",
    "CqlKind",
    "CqlValue",
    "Row",
    "decode_row",
    "decode_value",
    "kind_of",
    "setup_structured_logging",
    "DataAccessError",
    "ConfigError",
    "ConfigReadError",
    "DecodeError",
    "ConnectionError",
    "ExecutionError",
    "CursorError",
    "UnsupportedValueError"
]
