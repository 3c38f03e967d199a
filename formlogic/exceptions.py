"""Exception hierarchy for formlogic.

All library exceptions inherit from FormLogicError. The evaluator and the
rule engine catch these internally; only registration-time mistakes reach
the caller.
"""


class FormLogicError(Exception):
    """Base exception for all formlogic errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ExpressionSyntaxError(FormLogicError):
    """Raised when an expression cannot be split into well-formed parts."""

    def __init__(self, message: str, expression: str | None = None) -> None:
        self.expression = expression
        super().__init__(message)


class RuleRegistrationError(FormLogicError):
    """Raised when a rule is registered with an invalid name or predicate."""

    def __init__(self, message: str, rule_name: str | None = None) -> None:
        self.rule_name = rule_name
        super().__init__(message)
