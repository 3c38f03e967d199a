"""Configuration model exports.

    from formlogic.config.models import RulesConfig, ObservabilityConfig
"""

from formlogic.config.models.observability import LoggingConfig, ObservabilityConfig
from formlogic.config.models.rules import (
    DEFAULT_IMAGE_EXTENSIONS,
    ExpressionsConfig,
    RulesConfig,
)

__all__ = [
    "DEFAULT_IMAGE_EXTENSIONS",
    "ExpressionsConfig",
    "LoggingConfig",
    "ObservabilityConfig",
    "RulesConfig",
]
