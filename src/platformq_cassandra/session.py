import logging
import os
from typing import List, Optional, Union

from cassandra import DriverException, OperationTimedOut, UnsupportedOperation
from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import (
    EXEC_PROFILE_DEFAULT,
    Cluster,
    NoHostAvailable,
    Session,
)
from cassandra.policies import HostDistance
from cassandra.query import SimpleStatement

from . import policies
from .config import CassandraConfig, load_config
from .exceptions import (
    ConnectionError,
    CursorError,
    ExecutionError,
    UnsupportedValueError,
)
from .logging_config import connection_fields, query_fields
from .values import Row, decode_row

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (DriverException, NoHostAvailable, OperationTimedOut)


class CassandraSession:
    """A connected Cassandra session and the configuration it was built from.

    Instances are produced by `connect` and `connect_from_yaml`; a handle is
    always connected until `close` is called. The handle can be shared between
    threads, concurrency is handled by the driver's Session.
    """

    def __init__(self, config: CassandraConfig, cluster: Cluster, session: Session):
        self.config = config
        self.cluster = cluster
        self.session = session
        self.closed = False

    def query(self, query: str) -> List[Row]:
        """Execute a CQL statement and return every result row"""
        if self.closed:
            raise ExecutionError(query, "session is closed")

        statement = SimpleStatement(query)
        try:
            result = self.session.execute(statement, execution_profile=EXEC_PROFILE_DEFAULT)
        except _DRIVER_ERRORS as e:
            logger.error(f"Failed to execute query in Cassandra: {e}", extra=query_fields(query))
            raise ExecutionError(query, str(e)) from e

        rows = []
        try:
            # iterating pulls the remaining pages synchronously
            for row in result:
                rows.append(decode_row(row, query))
        except UnsupportedValueError as e:
            logger.error(f"Failed to decode Cassandra row: {e}", extra=query_fields(query))
            raise
        except _DRIVER_ERRORS as e:
            logger.error(f"Failed to read Cassandra results: {e}", extra=query_fields(query))
            raise CursorError(query, str(e)) from e

        logger.debug(f"Query returned {len(rows)} rows", extra=query_fields(query, len(rows)))
        return rows

    def close(self):
        if not self.closed:
            self.closed = True
            self.cluster.shutdown()
            logger.info("Cassandra connection closed.", extra=self._connection_fields())

    def _connection_fields(self) -> dict:
        return connection_fields(self.config.cluster, self.config.keyspace, self.config.port)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def _auth_provider(config: CassandraConfig) -> Optional[PlainTextAuthProvider]:
    if config.has_credentials:
        return PlainTextAuthProvider(username=config.username, password=config.password)
    if config.has_partial_credentials:
        logger.warning(
            "Only one of username/password is configured for Cassandra; "
            "connecting without authentication"
        )
    return None


def _apply_pool_size(cluster: Cluster, num_conns: int):
    try:
        cluster.set_max_connections_per_host(HostDistance.LOCAL, num_conns)
        cluster.set_core_connections_per_host(HostDistance.LOCAL, num_conns)
    except UnsupportedOperation:
        # protocol v3+ multiplexes requests over a single connection per host
        logger.debug(f"Protocol version {cluster.protocol_version} ignores numConns={num_conns}")


def build_cluster(config: CassandraConfig) -> Cluster:
    """Cluster descriptor carrying the fixed policy set"""
    kwargs = dict(
        contact_points=list(config.cluster),
        port=config.port,
        compression=policies.COMPRESSION,
        connect_timeout=policies.CONNECT_TIMEOUT,
        reconnection_policy=policies.build_reconnection_policy(),
        execution_profiles={
            EXEC_PROFILE_DEFAULT: policies.build_execution_profile(config.cluster),
        },
    )
    auth_provider = _auth_provider(config)
    if auth_provider:
        kwargs["auth_provider"] = auth_provider

    cluster = Cluster(**kwargs)
    _apply_pool_size(cluster, config.num_conns)
    return cluster


def connect(config: CassandraConfig) -> CassandraSession:
    """Open a session against the cluster described by `config`"""
    cluster = None
    try:
        cluster = build_cluster(config)
        session = cluster.connect(config.keyspace or None)
    except Exception as e:
        logger.error(
            f"Failed to connect to Cassandra: {e}",
            extra=connection_fields(config.cluster, config.keyspace, config.port),
        )
        if cluster is not None:
            cluster.shutdown()
        raise ConnectionError(config.cluster, str(e)) from e

    logger.info(
        "Successfully connected to Cassandra.",
        extra=connection_fields(config.cluster, config.keyspace, config.port),
    )
    return CassandraSession(config, cluster, session)


def connect_from_yaml(path: Union[str, os.PathLike]) -> CassandraSession:
    """Load the YAML configuration at `path` and connect with it"""
    return connect(load_config(path))
