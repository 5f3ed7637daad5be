import pytest

from protoval.errors import InvalidValueError


def test_optional_fields_accept_none(types):
    assert types["A"].lookup("id").verify_value(None) is None
    assert types["A"].lookup("b").verify_value(None) is None


def test_repeated_fields(types):
    tags = types["C"].lookup("tags")
    assert tags.verify_value(None) == []
    assert tags.verify_value(("x", "y")) == ["x", "y"]
    with pytest.raises(TypeError, match=r"C\.tags of type string: string \(not a list\)"):
        tags.verify_value("x")
    with pytest.raises(TypeError, match="not a string"):
        tags.verify_value(["x", 1])


def test_scalar_failure_message(types):
    with pytest.raises(TypeError) as info:
        types["A"].lookup("id").verify_value("x")
    assert str(info.value) == "Illegal value for A.id of type int32: string (not an integer)"


def test_message_field_rejects_non_records(types):
    with pytest.raises(TypeError, match="not a message"):
        types["A"].lookup("b").verify_value(["b"])


def test_message_field_checks_nested_values(types):
    c = types["B"].lookup("c")
    assert c.verify_value({"name": "c", "num": 1}) == {"name": "c", "num": 1}
    with pytest.raises(InvalidValueError, match=r"C\.num"):
        c.verify_value({"name": "c", "num": "one"})


def test_message_field_leaves_presence_alone(types):
    # name is required on C but absence is not a value error
    types["B"].lookup("c").verify_value({})
