"""Fixed driver policies applied to every Cassandra session"""

import logging
import socket
from typing import Callable, Iterable, Set

from cassandra import ConsistencyLevel
from cassandra.cluster import ExecutionProfile
from cassandra.policies import (
    ExponentialReconnectionPolicy,
    HostFilterPolicy,
    RetryPolicy,
    RoundRobinPolicy,
    TokenAwarePolicy,
    WriteType,
)
from cassandra.query import dict_factory

logger = logging.getLogger(__name__)

NUM_RETRIES = 3
REQUEST_TIMEOUT = 10.0
CONNECT_TIMEOUT = 10.0
CONSISTENCY = ConsistencyLevel.LOCAL_QUORUM
COMPRESSION = "snappy"
RECONNECT_BASE_DELAY = 0.1
RECONNECT_MAX_DELAY = 10.0


class BoundedRetryPolicy(RetryPolicy):
    """Retries a request at the same consistency level at most `num_retries` times.

    Timeouts are retried on the same host; unavailable and request errors move
    on to the next host in the query plan. Write timeouts are only retried for
    idempotent statements and never for unlogged batch writes.
    """

    def __init__(self, num_retries: int = NUM_RETRIES):
        self.num_retries = num_retries

    def _exhausted(self, retry_num: int) -> bool:
        return retry_num >= self.num_retries

    def on_read_timeout(self, query, consistency, required_responses,
                        received_responses, data_retrieved, retry_num):
        if self._exhausted(retry_num):
            return self.RETHROW, None
        return self.RETRY, consistency

    def on_write_timeout(self, query, consistency, write_type,
                         required_responses, received_responses, retry_num):
        if self._exhausted(retry_num) or write_type == WriteType.UNLOGGED_BATCH:
            return self.RETHROW, None
        if query is not None and not getattr(query, "is_idempotent", False):
            return self.RETHROW, None
        return self.RETRY, consistency

    def on_unavailable(self, query, consistency, required_replicas,
                       alive_replicas, retry_num):
        if self._exhausted(retry_num):
            return self.RETHROW, None
        return self.RETRY_NEXT_HOST, None

    def on_request_error(self, query, consistency, error, retry_num):
        if self._exhausted(retry_num):
            return self.RETHROW, None
        return self.RETRY_NEXT_HOST, None


def resolve_contact_points(contact_points: Iterable[str]) -> Set[str]:
    """Addresses a contact point may show up as in cluster metadata"""
    addresses = set()
    for contact_point in contact_points:
        addresses.add(contact_point)
        try:
            addresses.add(socket.gethostbyname(contact_point))
        except (socket.gaierror, UnicodeError):
            logger.debug(f"Could not resolve contact point {contact_point}")
    return addresses


def contact_point_filter(contact_points: Iterable[str]) -> Callable:
    """Host predicate that admits only the configured contact points"""
    allowed = resolve_contact_points(contact_points)

    def predicate(host) -> bool:
        return host.endpoint.address in allowed

    return predicate


def build_load_balancing_policy(contact_points: Iterable[str]) -> TokenAwarePolicy:
    """Token-aware round robin over the configured contact points only.

    Peers discovered through the control connection are ignored, so requests
    never leave the hosts listed in the configuration.
    """
    return TokenAwarePolicy(
        HostFilterPolicy(
            child_policy=RoundRobinPolicy(),
            predicate=contact_point_filter(contact_points),
        )
    )


def build_reconnection_policy() -> ExponentialReconnectionPolicy:
    return ExponentialReconnectionPolicy(
        base_delay=RECONNECT_BASE_DELAY,
        max_delay=RECONNECT_MAX_DELAY,
    )


def build_execution_profile(contact_points: Iterable[str]) -> ExecutionProfile:
    """Default execution profile used for every statement"""
    return ExecutionProfile(
        load_balancing_policy=build_load_balancing_policy(contact_points),
        retry_policy=BoundedRetryPolicy(NUM_RETRIES),
        consistency_level=CONSISTENCY,
        request_timeout=REQUEST_TIMEOUT,
        row_factory=dict_factory,
    )
