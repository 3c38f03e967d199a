"""Rule chain validation."""

from typing import Any

from formlogic.coercion import UNDEFINED
from formlogic.observability.logging import get_logger
from formlogic.rules.chain import parse_rule_chain
from formlogic.rules.models import RuleChainResult, Subject
from formlogic.rules.predicates import DEFAULT_REGISTRY
from formlogic.rules.predicates.content import extension_rule
from formlogic.rules.registry import RuleRegistry

logger = get_logger(__name__)


def is_empty(value: Any) -> bool:
    """Empty values skip every rule except the presence rules."""
    return value is None or value is UNDEFINED or value == ""


class RuleEngine:
    """Validate values against rule chains.

    Rules run in chain order and the first failure ends the chain. Unknown
    rule names are skipped; use ``unknown_rules`` to catch typos when
    chains are authored.
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        warn_unknown: bool = False,
    ) -> None:
        """Initialize the engine.

        Args:
            registry: Rules available to chains (defaults to the built-ins)
            warn_unknown: Log skipped unknown rules at warning level
        """
        self._registry = registry if registry is not None else DEFAULT_REGISTRY
        self._warn_unknown = warn_unknown

    @classmethod
    def from_settings(cls) -> "RuleEngine":
        """Create an engine configured from the loaded settings."""
        from formlogic.config import get_settings

        rules_config = get_settings().rules
        registry = DEFAULT_REGISTRY.extend(
            {"image": extension_rule(rules_config.image_extensions)}
        )
        return cls(registry=registry, warn_unknown=rules_config.warn_unknown)

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    def validate(
        self,
        value: Any,
        rule_chain: str | None,
        subject: Subject | None = None,
    ) -> RuleChainResult:
        """Validate a value against a rule chain.

        Args:
            value: Current field value
            rule_chain: Comma-separated rule tokens
            subject: Field the value belongs to (plain text field if omitted)

        Returns:
            RuleChainResult naming the first failing rule, if any
        """
        if not rule_chain:
            return RuleChainResult.passed()

        subject = subject if subject is not None else Subject()
        empty = is_empty(value)

        for token in parse_rule_chain(rule_chain):
            definition = self._registry.get(token.name)
            if definition is None:
                self._log_unknown(token.name, subject)
                continue

            if empty and not definition.checks_empty:
                continue

            try:
                passed = definition.predicate(value, token.param, subject)
            except Exception as e:  # noqa: BLE001
                logger.error(
                    "rule_predicate_failed",
                    rule=token.name,
                    field=subject.name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                passed = False

            if not passed:
                logger.debug(
                    "rule_chain_failed",
                    rule=token.name,
                    param=token.param,
                    field=subject.name,
                )
                return RuleChainResult.failure(token.name, token.param)

        return RuleChainResult.passed()

    def unknown_rules(self, rule_chain: str | None) -> list[str]:
        """List rule names in a chain that the registry does not know."""
        unknown = [
            token.name for token in parse_rule_chain(rule_chain) if token.name not in self._registry
        ]
        if unknown:
            logger.warning(
                "unknown_validation_rules",
                rule_chain=rule_chain,
                unknown=unknown,
            )
        return unknown

    def _log_unknown(self, name: str, subject: Subject) -> None:
        log = logger.warning if self._warn_unknown else logger.debug
        log("rule_skipped_unknown", rule=name, field=subject.name)


_default_engine = RuleEngine()


def validate(
    value: Any,
    rule_chain: str | None,
    subject: Subject | None = None,
) -> RuleChainResult:
    """Validate a value with the default engine."""
    return _default_engine.validate(value, rule_chain, subject)
