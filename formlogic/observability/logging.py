"""Structured logging configuration using structlog.

Provides JSON logging for production and console logging for development.
Field values that appear in diagnostics are user input, so a redaction
processor scrubs them (and anything resembling personal data) before
rendering.
"""

import re
import sys
from collections.abc import MutableMapping
from typing import Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

# Keys whose values are always secret
SECRET_KEYS: frozenset[str] = frozenset({
    "password",
    "passwd",
    "secret",
    "token",
    "api_key",
    "authorization",
    "credential",
    "credit_card",
    "card_number",
    "cvv",
    "pin",
    "ssn",
})

# Keys that carry raw form input in diagnostics
VALUE_KEYS: frozenset[str] = frozenset({
    "value",
    "current_value",
    "field_value",
    "param",
})

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
SSN_PATTERN = re.compile(r"\b\d{3}-\d{2}-\d{4}\b")
CARD_PATTERN = re.compile(r"\b(?:\d[ -]?){13,19}\b")


class ValueRedactor:
    """Processor that scrubs form input and personal data from log events.

    Secret keys are always replaced. Keys carrying field values are replaced
    only when ``redact_values`` is set, so development logs can still show
    what was evaluated. String values are pattern-scrubbed in both cases.
    """

    def __init__(self, redact_values: bool = True) -> None:
        self._redact_values = redact_values

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """Redact sensitive data from the event dictionary."""
        return cast(EventDict, self._redact_dict(event_dict))

    def _is_sensitive(self, key: str) -> bool:
        key_lower = key.lower()
        if key_lower in SECRET_KEYS:
            return True
        return self._redact_values and key_lower in VALUE_KEYS

    def _redact_dict(self, data: MutableMapping[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            if self._is_sensitive(key):
                result[key] = "[REDACTED]"
            else:
                result[key] = self._redact_value(value)
        return result

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self._redact_dict(value)
        if isinstance(value, str):
            return self._redact_string(value)
        if isinstance(value, list):
            return [self._redact_value(item) for item in value]
        return value

    def _redact_string(self, value: str) -> str:
        value = EMAIL_PATTERN.sub("[EMAIL]", value)
        value = SSN_PATTERN.sub("[SSN]", value)
        return CARD_PATTERN.sub("[CARD]", value)


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    redact_values: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format - "json" for production, "console" for development
        redact_values: Whether to replace field values in log events
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        ValueRedactor(redact_values=redact_values),
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    level_map = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    level_num = level_map.get(level.upper(), 20)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def configure_from_settings() -> None:
    """Configure logging from the loaded settings."""
    from formlogic.config import get_settings

    logging_config = get_settings().observability.logging
    setup_logging(
        level=logging_config.level,
        format=logging_config.format,
        redact_values=logging_config.redact_values,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    If the host application has not configured structlog, the library
    defaults apply (INFO, JSON to stderr, values redacted) so diagnostics
    never reach stdout unfiltered.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        A bound structlog logger
    """
    if not structlog.is_configured():
        setup_logging()
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
