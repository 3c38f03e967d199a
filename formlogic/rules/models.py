"""Models for the validation rule engine."""

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldKind(str, Enum):
    """Kind of form control a value was read from.

    Input types without special validation semantics (email, password,
    select, ...) map to OTHER.
    """

    TEXT = "text"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    FILE = "file"
    OTHER = "other"


class Subject(BaseModel):
    """The field a rule chain is evaluated against."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: FieldKind = Field(default=FieldKind.TEXT, description="Control kind")
    name: str | None = Field(default=None, description="Field name, for diagnostics")
    checked: bool = Field(default=False, description="Checked flag for checkboxes/radios")
    resolve_field: Callable[[str], Any] | None = Field(
        default=None,
        exclude=True,
        description="Looks up another field's value within the same form",
    )

    @field_validator("kind", mode="before")
    @classmethod
    def coerce_kind(cls, value: Any) -> Any:
        """Accept raw input type names, mapping unknown ones to OTHER."""
        if isinstance(value, str) and not isinstance(value, FieldKind):
            try:
                return FieldKind(value.lower())
            except ValueError:
                return FieldKind.OTHER
        return value

    def other_value(self, field_name: str | None) -> Any:
        """Current value of a sibling field, or None outside a form."""
        if self.resolve_field is None or field_name is None:
            return None
        return self.resolve_field(field_name)


class RuleToken(BaseModel):
    """One ``name[=param]`` entry of a rule chain."""

    model_config = ConfigDict(frozen=True)

    name: str
    param: str | None = None


class RuleChainResult(BaseModel):
    """Outcome of validating a value against a rule chain.

    Only the first failing rule is reported.
    """

    valid: bool
    failed: str | None = Field(default=None, description="Name of the first failing rule")
    param: str | None = Field(default=None, description="Parameter of the failing rule")

    @classmethod
    def passed(cls) -> "RuleChainResult":
        return cls(valid=True)

    @classmethod
    def failure(cls, rule_name: str, param: str | None) -> "RuleChainResult":
        return cls(valid=False, failed=rule_name, param=param)
