import logging
import logging.config
from typing import Iterable, Optional, Union

PACKAGE_LOGGER = "platformq_cassandra"


def setup_structured_logging(level: Union[str, int] = "INFO", package_only: bool = False):
    """
    Emit JSON log records carrying the connection and query fields of this
    package (hosts, keyspace, port, cql, row_count).

    By default the root logger is configured, so a service embedding the
    wrapper gets the same JSON output for every logger. With `package_only`
    only the `platformq_cassandra` logger is configured and it stops
    propagating, which leaves an application's own logging untouched.
    """
    logger_config = {
        "handlers": ["cassandra_json"],
        "level": level
    }
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "cassandra_json": {
                "class": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s"
            }
        },
        "handlers": {
            "cassandra_json": {
                "class": "logging.StreamHandler",
                "formatter": "cassandra_json"
            }
        }
    }
    if package_only:
        config["loggers"] = {
            PACKAGE_LOGGER: dict(logger_config, propagate=False)
        }
    else:
        config["root"] = logger_config
    logging.config.dictConfig(config)


def connection_fields(hosts: Iterable[str], keyspace: str, port: int) -> dict:
    """`extra` fields describing the cluster a session targets"""
    return {"hosts": list(hosts), "keyspace": keyspace or None, "port": port}


def query_fields(cql: str, row_count: Optional[int] = None) -> dict:
    fields = {"cql": cql}
    if row_count is not None:
        fields["row_count"] = row_count
    return fields
