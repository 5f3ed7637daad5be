from types import SimpleNamespace

import pytest

from protoval.typing import is_record, kind_of, read_field, verify_scalar


def test_kind_of():
    assert kind_of(None) == "null"
    assert kind_of(True) == "bool"
    assert kind_of(3) == "integer"
    assert kind_of(1.5) == "float"
    assert kind_of("s") == "string"
    assert kind_of(b"s") == "bytes"
    assert kind_of([1]) == "list"
    assert kind_of({"a": 1}) == "record"
    assert kind_of(SimpleNamespace()) == "record"


def test_is_record():
    assert is_record({})
    assert is_record(SimpleNamespace(a=1))
    assert not is_record(None)
    assert not is_record("abc")
    assert not is_record(0)
    assert not is_record([{}])


def test_read_field():
    assert read_field({"a": 1}, "a") == 1
    assert read_field({}, "a") is None
    assert read_field(SimpleNamespace(a=0), "a") == 0
    assert read_field(SimpleNamespace(), "a") is None


@pytest.mark.parametrize(
    "type_name, value",
    [
        ("int32", 1234),
        ("int32", -2**31),
        ("uint32", 2**32 - 1),
        ("int64", 2**63 - 1),
        ("uint64", 0),
        ("bool", False),
        ("string", ""),
        ("bytes", b"\x00"),
    ],
)
def test_accepts(type_name, value):
    assert verify_scalar(type_name, value) == value


def test_floats_are_normalized():
    assert verify_scalar("double", 2) == 2.0
    assert isinstance(verify_scalar("float", 2), float)


@pytest.mark.parametrize(
    "type_name, value, exc",
    [
        ("int32", "1234", TypeError),
        ("int32", True, TypeError),
        ("int32", 1.0, TypeError),
        ("int32", 2**31, ValueError),
        ("uint32", -1, ValueError),
        ("double", "1.0", TypeError),
        ("bool", 1, TypeError),
        ("string", b"s", TypeError),
        ("bytes", "s", TypeError),
    ],
)
def test_rejects(type_name, value, exc):
    with pytest.raises(exc):
        verify_scalar(type_name, value)
