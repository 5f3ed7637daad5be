from __future__ import annotations
from collections.abc import Mapping, Sequence
from typing import Any, Literal

Kind = Literal["null", "bool", "integer", "float", "string", "bytes", "list", "record"]

INT_RANGES: dict[str, tuple[int, int]] = {
    "int32": (-2**31, 2**31 - 1),
    "sint32": (-2**31, 2**31 - 1),
    "sfixed32": (-2**31, 2**31 - 1),
    "uint32": (0, 2**32 - 1),
    "fixed32": (0, 2**32 - 1),
    "int64": (-2**63, 2**63 - 1),
    "sint64": (-2**63, 2**63 - 1),
    "sfixed64": (-2**63, 2**63 - 1),
    "uint64": (0, 2**64 - 1),
    "fixed64": (0, 2**64 - 1),
}
FLOAT_TYPES = frozenset({"double", "float"})
SCALAR_TYPES = frozenset(INT_RANGES) | FLOAT_TYPES | {"bool", "string", "bytes"}

_NOT_RECORDS = (str, bytes, bytearray, int, float, complex, list, tuple, set, frozenset)


def kind_of(value: Any) -> Kind:
    if value is None: return "null"
    if isinstance(value, bool): return "bool"
    if isinstance(value, int): return "integer"
    if isinstance(value, float): return "float"
    if isinstance(value, str): return "string"
    if isinstance(value, (bytes, bytearray)): return "bytes"
    if is_sequence(value): return "list"
    return "record"


def is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_record(value: Any) -> bool:
    """Anything a field value can be read off: mappings and attribute-bearing objects."""
    if value is None or isinstance(value, _NOT_RECORDS):
        return False
    return not is_sequence(value)


def coerce_record(value: Any) -> Any:
    return value if is_record(value) else {}


def read_field(data: Any, name: str) -> Any:
    if isinstance(data, Mapping):
        return data.get(name)
    return getattr(data, name, None)


def verify_scalar(type_name: str, value: Any) -> Any:
    """Check ``value`` against a scalar type.

    Returns the value, normalized where the type calls for it (floats).
    Raises ``TypeError`` for the wrong kind of value and ``ValueError`` for
    integers outside the type's range. The message is only the reason; callers
    add the field name.
    """
    if type_name in INT_RANGES:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("not an integer")
        low, high = INT_RANGES[type_name]
        if not low <= value <= high:
            raise ValueError(f"out of range [{low}, {high}]")
        return value
    if type_name in FLOAT_TYPES:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError("not a number")
        return float(value)
    if type_name == "bool":
        if not isinstance(value, bool):
            raise TypeError("not a boolean")
        return value
    if type_name == "string":
        if not isinstance(value, str):
            raise TypeError("not a string")
        return value
    if type_name == "bytes":
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("not bytes")
        return bytes(value)
    raise ValueError(f"unknown scalar type {type_name!r}")
