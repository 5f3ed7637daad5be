from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from .errors import InvalidValueError, NestingTooDeepError, RequiredFieldError, ValidationError
from .typing import coerce_record, is_sequence, read_field

if TYPE_CHECKING:
    from .reflect import FieldSpec, SchemaNode

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100

ErrorHandler = Callable[[ValidationError], None]


@dataclass(frozen=True)
class ValidationContext:
    """The schema, data and path prefix one level of traversal works against."""

    schema: "SchemaNode"
    data: Any
    prefix: str = ""
    depth: int = 0

    def descend(self, field: "FieldSpec", value: Any) -> "ValidationContext":
        return ValidationContext(
            schema=field.resolved_type,
            data=coerce_record(value),
            prefix=f"{self.prefix}{field.name}.",
            depth=self.depth + 1,
        )

    def path_of(self, field: "FieldSpec") -> str:
        return f"{self.prefix}{field.name}"


class Validator:
    """Checks a data object against a reflected message type.

    The data does not have to be an instance of a generated message class;
    dicts and plain objects with matching field names validate the same way.

    Every violation goes through :meth:`error`. By default that raises, so the
    first violation aborts the check. Pass ``on_error`` (or override
    :meth:`error`) to keep going and collect everything instead::

        errors = []
        Validator(schema, on_error=errors.append).validate(data).has_required_fields()
    """

    def __init__(
        self,
        schema: "SchemaNode",
        field_prefix: str = "",
        on_error: Optional[ErrorHandler] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        depth: int = 0,
    ):
        self.schema = schema
        self.field_prefix = field_prefix
        self.on_error = on_error
        self.max_depth = max_depth
        # nesting level of the bound data, non-zero for validators that message verifiers spawn
        self.depth = depth
        self.context = ValidationContext(schema, {}, field_prefix, depth)

    @property
    def message(self) -> Any:
        return self.context.data

    def validate(self, data: Any) -> "Validator":
        """Bind ``data`` for the checks that follow. Non-record data becomes ``{}``."""
        self.context = ValidationContext(self.schema, coerce_record(data), self.field_prefix, self.depth)
        return self

    def has_required_fields(self) -> "Validator":
        """Check that required fields are set, recursing into submessages."""
        self._check_required(self.context)
        return self

    def _check_depth(self, ctx: ValidationContext) -> None:
        if ctx.depth > self.max_depth:
            raise NestingTooDeepError(
                f"{ctx.prefix or '<root>'} nests deeper than {self.max_depth} levels", ctx.prefix
            )

    def _check_required(self, ctx: ValidationContext) -> None:
        self._check_depth(ctx)
        for field in ctx.schema.get_fields():
            value = read_field(ctx.data, field.name)
            if field.required and value is None:
                path = ctx.path_of(field)
                self.error(RequiredFieldError(f"{path} is required", field, value, path=path))

            if field.repeated:
                # absent and empty lists are valid whatever the rule says
                if value is None or not is_sequence(value) or len(value) == 0:
                    continue
                elements = value
            else:
                elements = (value,)

            if field.resolved_type is None or value is None:
                continue
            for element in elements:
                sub = ctx.descend(field, element)
                logger.debug("Checking required fields of %s", sub.prefix.rstrip("."))
                self._check_required(sub)

    def has_valid_values(self) -> "Validator":
        """Run each field's own verifier over its value.

        Submessages are not walked here: a message field's ``verify_value`` is
        responsible for checking the values inside it. Verifiers that set
        ``tracks_depth`` are handed the nesting state so the depth limit holds
        across them.
        """
        ctx = self.context
        self._check_depth(ctx)
        for field in ctx.schema.get_fields():
            # a nested type declaration, not a field
            if callable(getattr(field, "get_fields", None)):
                continue
            err = self._verify_field(ctx, field)
            if err is not None:
                self.error(err)
        return self

    def _verify_field(self, ctx: ValidationContext, field: "FieldSpec") -> Optional[InvalidValueError]:
        verify = getattr(field, "verify_value", None)
        if not callable(verify):
            raise TypeError(f"Cannot verify value of field {field.name!r} with no verify_value method")
        value = read_field(ctx.data, field.name)
        try:
            if getattr(field, "tracks_depth", False):
                verify(
                    value,
                    depth=ctx.depth + 1,
                    max_depth=self.max_depth,
                    prefix=f"{ctx.prefix}{field.name}.",
                )
            else:
                verify(value)
        except NestingTooDeepError:
            raise
        except (TypeError, ValueError) as exc:
            err = InvalidValueError(str(exc), field, value, path=ctx.path_of(field))
            err.__cause__ = exc
            return err
        return None

    def error(self, err: ValidationError) -> None:
        """Report a violation. Raises ``err`` unless an ``on_error`` handler was given.

        ``NestingTooDeepError`` never comes through here.
        """
        logger.debug("%s violation at %s: %s", err.kind, err.path, err.message)
        if self.on_error is None:
            raise err
        self.on_error(err)


class CollectingValidator(Validator):
    """A validator that records every violation in ``errors`` instead of raising."""

    def __init__(self, schema: "SchemaNode", field_prefix: str = "", max_depth: int = DEFAULT_MAX_DEPTH):
        super().__init__(schema, field_prefix=field_prefix, max_depth=max_depth)
        self.errors: list[ValidationError] = []

    def error(self, err: ValidationError) -> None:
        logger.debug("%s violation at %s: %s", err.kind, err.path, err.message)
        self.errors.append(err)


def collect_errors(schema: "SchemaNode", data: Any, values: bool = True) -> list[ValidationError]:
    """Run the required-field check and, optionally, the value check; return every violation."""
    validator = CollectingValidator(schema).validate(data)
    validator.has_required_fields()
    if values:
        validator.has_valid_values()
    return validator.errors
