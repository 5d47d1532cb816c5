"""Exceptions raised by the Cassandra session wrapper"""

from typing import Optional, Sequence


class DataAccessError(Exception):
    """Base exception for Cassandra access errors"""
    pass


class ConfigError(DataAccessError):
    """Raised when the connection configuration cannot be loaded"""
    pass


class ConfigReadError(ConfigError, OSError):
    """Raised when the configuration file cannot be read"""
    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Cannot read configuration file '{path}': {message}")


class DecodeError(ConfigError):
    """Raised when configuration contents do not decode into the expected shape"""
    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class ConnectionError(DataAccessError):
    """Raised when a session against the cluster cannot be established"""
    def __init__(self, hosts: Sequence[str], message: str):
        self.hosts = list(hosts)
        super().__init__(f"Failed to connect to Cassandra {self.hosts}: {message}")


class ExecutionError(DataAccessError):
    """Raised when statement execution fails"""
    def __init__(self, query: str, message: str):
        self.query = query
        super().__init__(f"Failed to execute query: {message}")


class CursorError(DataAccessError):
    """Raised when iterating over a result fails after execution started"""
    def __init__(self, query: str, message: str):
        self.query = query
        super().__init__(f"Failed to read query results: {message}")


class UnsupportedValueError(CursorError):
    """Raised when a column value is outside the supported scalar kinds"""
    def __init__(self, column: str, value_type: type, query: str = ""):
        self.column = column
        self.value_type = value_type
        message = f"column '{column}' has unsupported type {value_type.__name__}"
        if query:
            message = f"{message} in query: {query}"
        super().__init__(query, message)
