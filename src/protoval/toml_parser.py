from __future__ import annotations
import logging
import pathlib
from typing import Any, Dict

import tomli

from .errors import SchemaError
from .reflect import RULES, Field, MessageType
from .typing import SCALAR_TYPES

logger = logging.getLogger(__name__)


def load_schema(path: str | pathlib.Path) -> Dict[str, MessageType]:
    text = pathlib.Path(path).read_text(encoding="utf-8")
    return parse_schema(text)


def parse_schema(text: str) -> Dict[str, MessageType]:
    """Parse a TOML schema document into message types keyed by name.

    Each top-level table declares a message; its keys are fields in declaration
    order. A field is either a bare type name or a table with ``type`` and an
    optional ``rule``::

        [A]
        name = { type = "string", rule = "required" }
        b = "B"
    """
    try:
        doc = tomli.loads(text)
    except tomli.TOMLDecodeError as exc:
        raise SchemaError(f"Invalid schema document: {exc}") from exc
    return build_types(doc)


def build_types(doc: Dict[str, Any]) -> Dict[str, MessageType]:
    types: Dict[str, MessageType] = {}
    for type_name, decls in doc.items():
        if type_name in SCALAR_TYPES:
            raise SchemaError(f"Message name {type_name!r} collides with a scalar type", type_name)
        if not isinstance(decls, dict):
            raise SchemaError(f"Message {type_name!r} must be a table", type_name)
        message = MessageType(type_name)
        for field_name, decl in decls.items():
            message.add(_build_field(type_name, field_name, decl))
        types[type_name] = message

    # resolve after every message is declared so forward and self references work
    for message in types.values():
        for f in message.fields:
            if f.type in SCALAR_TYPES:
                continue
            if f.type not in types:
                raise SchemaError(f"Unknown type {f.type!r} for field {f.full_name}", f.full_name)
            f.resolved_type = types[f.type]

    logger.debug("Loaded %d message types: %s", len(types), ", ".join(types))
    return types


def _build_field(type_name: str, field_name: str, decl: Any) -> Field:
    path = f"{type_name}.{field_name}"
    if isinstance(decl, str):
        decl = {"type": decl}
    if not isinstance(decl, dict):
        raise SchemaError(f"Field {path} must be a type name or a table", path)
    unknown = set(decl) - {"type", "rule"}
    if unknown:
        raise SchemaError(f"Field {path} has unknown keys: {', '.join(sorted(unknown))}", path)
    field_type = decl.get("type")
    if not isinstance(field_type, str) or not field_type:
        raise SchemaError(f"Field {path} needs a type", path)
    rule = decl.get("rule", "optional")
    if rule not in RULES:
        raise SchemaError(f"Field {path} has unknown rule {rule!r}, expected one of {', '.join(RULES)}", path)
    return Field(name=field_name, type=field_type, rule=rule)
