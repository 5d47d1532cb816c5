"""Decoding of driver values into the supported scalar kinds"""

import datetime
import decimal
import ipaddress
import uuid
from enum import Enum
from typing import Any, Dict, Mapping, Union

from cassandra.util import Date

from .exceptions import UnsupportedValueError

CqlValue = Union[None, bool, int, float, str, datetime.datetime, bytes]
Row = Dict[str, CqlValue]


class CqlKind(Enum):
    """Scalar kinds a decoded column value can take"""
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    TIMESTAMP = "timestamp"
    BINARY = "binary"


_TEXT_TYPES = (str, uuid.UUID, ipaddress.IPv4Address, ipaddress.IPv6Address)
_BINARY_TYPES = (bytes, bytearray, memoryview)


def kind_of(value: CqlValue) -> CqlKind:
    """Classify an already decoded value"""
    if value is None:
        return CqlKind.NULL
    # bool before int, bool is an int subclass
    if isinstance(value, bool):
        return CqlKind.BOOLEAN
    if isinstance(value, int):
        return CqlKind.INTEGER
    if isinstance(value, float):
        return CqlKind.FLOAT
    if isinstance(value, str):
        return CqlKind.TEXT
    if isinstance(value, datetime.datetime):
        return CqlKind.TIMESTAMP
    if isinstance(value, bytes):
        return CqlKind.BINARY
    raise TypeError(f"{type(value).__name__} is not a decoded CQL value")


def decode_value(value: Any, column: str = "", query: str = "") -> CqlValue:
    """Map a value produced by the driver onto one of the CqlKind types.

    Raises UnsupportedValueError for collections, UDTs, tuples, durations and
    any other type without a scalar counterpart.
    """
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, decimal.Decimal):
        return float(value)
    if isinstance(value, _TEXT_TYPES):
        return str(value)
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    if isinstance(value, Date):
        try:
            day = value.date()
        except ValueError as e:
            # days outside datetime's range
            raise UnsupportedValueError(column, type(value), query) from e
        return datetime.datetime(day.year, day.month, day.day)
    if isinstance(value, _BINARY_TYPES):
        return bytes(value)
    raise UnsupportedValueError(column, type(value), query)


def decode_row(row: Mapping[str, Any], query: str = "") -> Row:
    """Decode every column of a dict_factory row, keeping column order.

    `query` is only used to name the statement in UnsupportedValueError.
    """
    return {column: decode_value(value, column, query) for column, value in row.items()}
