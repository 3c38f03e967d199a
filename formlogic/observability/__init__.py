"""Observability: structured logging for expression and rule diagnostics."""

from formlogic.observability.logging import (
    ValueRedactor,
    configure_from_settings,
    get_logger,
    setup_logging,
)

__all__ = ["ValueRedactor", "configure_from_settings", "get_logger", "setup_logging"]
