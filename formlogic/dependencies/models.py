"""Field dependency models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _split_names(text: str | None) -> list[str]:
    return [name.strip() for name in (text or "").split(",") if name.strip()]


class Dependency(BaseModel):
    """A conditional action linking source fields to target fields.

    When ``condition`` holds for a source field, ``action`` is applied to
    each target; otherwise ``inverse_action`` (or the natural inverse of
    ``action``) is applied.
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field(..., description="Comma-separated source field names")
    condition: str = Field(..., description="Expression evaluated against the source field")
    target: str | None = Field(default=None, description="Comma-separated target field names")
    action: str | None = Field(default=None, description="Action as name[:param]")
    inverse_action: str | None = Field(default=None, description="Action when the condition fails")
    confirm: str | None = Field(default=None, description="Confirmation text required before applying")
    message: str | None = Field(default=None, description="Status message key shown while met")
    time: int | None = Field(default=None, ge=0, description="Delay in milliseconds once met")

    @field_validator("time", mode="before")
    @classmethod
    def blank_time(cls, value: object) -> object:
        """Treat an empty delay as no delay."""
        if value == "":
            return None
        return value

    @property
    def sources(self) -> list[str]:
        return _split_names(self.source)

    @property
    def targets(self) -> list[str]:
        return _split_names(self.target)


class PlannedAction(BaseModel):
    """An action to apply to one target field."""

    model_config = ConfigDict(frozen=True)

    target: str
    action: str | None = Field(default=None, description="Action name, None when nothing applies")
    param: str | None = None
    delay_ms: int = Field(default=0, ge=0)
    met: bool = Field(..., description="Whether the dependency condition held")
    message: str | None = Field(default=None, description="Status message key to show or hide")
