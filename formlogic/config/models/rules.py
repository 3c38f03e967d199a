"""Configuration for the validation rule engine and expression evaluator."""

from pydantic import BaseModel, Field, field_validator

DEFAULT_IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "gif", "bmp", "webp", "svg", "tiff", "ico"]


class RulesConfig(BaseModel):
    """Validation rule engine settings."""

    warn_unknown: bool = Field(
        default=False,
        description="Log unknown rule names at warning level instead of debug",
    )
    image_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IMAGE_EXTENSIONS),
        description="Extensions accepted by the 'image' rule",
    )

    @field_validator("image_extensions")
    @classmethod
    def normalize_extensions(cls, value: list[str]) -> list[str]:
        """Lowercase extensions and drop leading dots."""
        return [ext.strip().lower().lstrip(".") for ext in value if ext.strip()]


class ExpressionsConfig(BaseModel):
    """Expression evaluator settings."""

    log_failures: bool = Field(
        default=True,
        description="Log expressions that are rejected or fail to evaluate",
    )
