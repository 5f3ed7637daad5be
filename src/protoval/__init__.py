from .engine import CollectingValidator, ValidationContext, Validator, collect_errors
from .errors import (
    InvalidValueError,
    NestingTooDeepError,
    ProtovalError,
    RequiredFieldError,
    SchemaError,
    ValidationError,
)
from .reflect import Field, FieldSpec, MessageType, SchemaNode
from .toml_parser import load_schema, parse_schema

__all__ = [
    "CollectingValidator",
    "Field",
    "FieldSpec",
    "InvalidValueError",
    "MessageType",
    "NestingTooDeepError",
    "ProtovalError",
    "RequiredFieldError",
    "SchemaError",
    "SchemaNode",
    "ValidationContext",
    "ValidationError",
    "Validator",
    "collect_errors",
    "load_schema",
    "parse_schema",
]
