from __future__ import annotations
from typing import Any


class ProtovalError(Exception):
    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path


class SchemaError(ProtovalError):
    pass


class ValidationError(ProtovalError, ValueError):
    """Base for everything the validator reports about a data object."""

    kind = "validation"


class RequiredFieldError(ValidationError):
    """A required field was absent or ``None``."""

    kind = "required"

    def __init__(self, message: str, field: Any, value: Any = None, path: str | None = None):
        super().__init__(message, path)
        self.field = field
        self.value = value


class InvalidValueError(ValidationError):
    """A field was present but its verifier rejected the value."""

    kind = "invalid_value"

    def __init__(self, message: str, field: Any, value: Any = None, path: str | None = None):
        super().__init__(message, path)
        self.field = field
        self.value = value


class NestingTooDeepError(ValidationError):
    """Data nested past ``max_depth``; raised directly, never routed through the error hook."""

    kind = "too_deep"
