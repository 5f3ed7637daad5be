from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Protocol, Sequence

from .engine import DEFAULT_MAX_DEPTH, Validator
from .typing import is_record, is_sequence, kind_of, verify_scalar

Rule = Literal["optional", "required", "repeated"]
RULES: tuple[Rule, ...] = ("optional", "required", "repeated")


class SchemaNode(Protocol):
    name: str

    def get_fields(self) -> Sequence["FieldSpec"]: ...


class FieldSpec(Protocol):
    """What the validator reads off a reflected field.

    ``verify_value`` raises ``TypeError`` or ``ValueError`` for an illegal
    value. For message-typed fields it must check the values of the nested
    message as well. Any other exception is not a verdict on the value: it
    propagates out of the check instead of going through the error hook.

    A field whose class sets ``tracks_depth = True`` is called with
    ``depth``, ``max_depth`` and ``prefix`` keywords as well, and must build
    its nested validator from them.
    """

    name: str
    required: bool
    repeated: bool
    resolved_type: Optional[SchemaNode]

    def verify_value(self, value: Any) -> Any: ...


@dataclass(eq=False)
class MessageType:
    name: str
    fields: list["Field"] = field(default_factory=list)

    def get_fields(self) -> list["Field"]:
        return list(self.fields)

    def add(self, f: "Field") -> "Field":
        f.parent = self
        self.fields.append(f)
        return f

    def lookup(self, name: str) -> Optional["Field"]:
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass(eq=False)
class Field:
    name: str
    type: str
    rule: Rule = "optional"
    parent: Optional[MessageType] = field(default=None, repr=False)
    resolved_type: Optional[MessageType] = field(default=None, repr=False)

    tracks_depth = True

    @property
    def required(self) -> bool:
        return self.rule == "required"

    @property
    def repeated(self) -> bool:
        return self.rule == "repeated"

    @property
    def full_name(self) -> str:
        return f"{self.parent.name}.{self.name}" if self.parent else self.name

    def verify_value(
        self,
        value: Any,
        depth: int = 0,
        max_depth: int = DEFAULT_MAX_DEPTH,
        prefix: str = "",
    ) -> Any:
        """Check ``value`` against this field's type.

        ``depth``, ``max_depth`` and ``prefix`` locate the value in the data
        being validated and are handed to the validator of a nested message.
        """
        if self.repeated:
            if value is None:
                return []
            if not is_sequence(value):
                raise TypeError(self._illegal(value, "not a list"))
            return [self._verify_single(v, depth, max_depth, prefix) for v in value]
        return self._verify_single(value, depth, max_depth, prefix)

    def _verify_single(self, value: Any, depth: int, max_depth: int, prefix: str) -> Any:
        # absence is the required-field check's business
        if value is None:
            return None
        if self.resolved_type is not None:
            if not is_record(value):
                raise TypeError(self._illegal(value, "not a message"))
            nested = Validator(self.resolved_type, field_prefix=prefix, max_depth=max_depth, depth=depth)
            nested.validate(value).has_valid_values()
            return value
        try:
            return verify_scalar(self.type, value)
        except TypeError as exc:
            raise TypeError(self._illegal(value, str(exc))) from exc
        except ValueError as exc:
            raise ValueError(self._illegal(value, str(exc))) from exc

    def _illegal(self, value: Any, reason: str) -> str:
        return f"Illegal value for {self.full_name} of type {self.type}: {kind_of(value)} ({reason})"
