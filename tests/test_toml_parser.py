import pytest

from protoval.errors import SchemaError
from protoval.toml_parser import parse_schema


def test_fields_keep_declaration_order(types):
    assert [f.name for f in types["A"].get_fields()] == ["name", "b", "id"]
    assert [f.name for f in types["B"].get_fields()] == ["name", "c", "cs"]


def test_rules_and_references(types):
    name, b, id_ = types["A"].get_fields()
    assert name.required and not name.repeated
    assert b.resolved_type is types["B"]
    assert id_.resolved_type is None
    cs = types["B"].lookup("cs")
    assert cs.repeated and not cs.required
    assert cs.resolved_type is types["C"]
    assert cs.full_name == "B.cs"


def test_forward_and_self_references():
    types = parse_schema(
        """
        [Tree]
        root = "Node"

        [Node]
        label = "string"
        children = { type = "Node", rule = "repeated" }
        """
    )
    assert types["Tree"].lookup("root").resolved_type is types["Node"]
    assert types["Node"].lookup("children").resolved_type is types["Node"]


@pytest.mark.parametrize(
    "text, match",
    [
        ('[A]\nx = "Nope"', "Unknown type 'Nope' for field A.x"),
        ('[A]\nx = { type = "string", rule = "sometimes" }', "unknown rule"),
        ('[A]\nx = { rule = "required" }', "needs a type"),
        ('[A]\nx = { type = "string", default = 1 }', "unknown keys: default"),
        ("[A]\nx = 3", "must be a type name or a table"),
        ('A = "string"', "must be a table"),
        ('[int32]\nx = "string"', "collides with a scalar type"),
        ("[A\nx = 1", "Invalid schema document"),
    ],
)
def test_malformed_schemas(text, match):
    with pytest.raises(SchemaError, match=match):
        parse_schema(text)


def test_schema_error_carries_path():
    with pytest.raises(SchemaError) as info:
        parse_schema('[A]\nx = "Nope"')
    assert info.value.path == "A.x"
