"""Built-in validation predicates.

Importing this package registers every built-in rule; ``DEFAULT_REGISTRY``
is the frozen result.
"""

from formlogic.rules.predicates import (  # noqa: F401
    comparison,
    content,
    formats,
    network,
    presence,
    temporal,
)
from formlogic.rules.registry import builtin_rules

DEFAULT_REGISTRY = builtin_rules.build()

__all__ = ["DEFAULT_REGISTRY"]
