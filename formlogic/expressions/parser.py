"""Textual splitting helpers for condition expressions.

Expressions are never tokenized. Logical operators are located by a
parenthesis-depth scan, comparison operators by their first textual
occurrence in an atom. A quoted operand containing operator characters
(``value === 'a>b'``) is therefore split inside the quotes; callers should
keep such literals out of expressions.
"""

from formlogic.exceptions import ExpressionSyntaxError

# Checked in this order; longer symbols first so "===" is not read as "==".
COMPARISON_OPERATORS: tuple[str, ...] = ("===", "!==", "==", "!=", ">=", "<=", ">", "<")

ALLOWED_METHODS: tuple[str, ...] = ("includes", "startsWith", "endsWith")


def find_top_level(text: str, separator: str) -> int:
    """Return the index of the leftmost separator outside parentheses, or -1."""
    depth = 0
    for index, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif depth == 0 and text.startswith(separator, index):
            return index
    return -1


def split_top_level(text: str, separator: str) -> list[str]:
    """Split at every separator outside parentheses."""
    parts = []
    index = find_top_level(text, separator)
    while index != -1:
        parts.append(text[:index])
        text = text[index + len(separator):]
        index = find_top_level(text, separator)
    parts.append(text)
    return parts


def _wraps_whole(text: str) -> bool:
    """Check that the opening parenthesis closes at the final character."""
    depth = 0
    last = len(text) - 1
    for index, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index == last
    return False


def strip_enclosing_parens(expr: str) -> str:
    """Remove parentheses that enclose the entire expression.

    ``(a || b)`` becomes ``a || b``; ``(a) || (b)`` is left alone.
    """
    expr = expr.strip()
    while expr.startswith("(") and expr.endswith(")") and _wraps_whole(expr):
        expr = expr[1:-1].strip()
    return expr


def split_comparison(atom: str) -> tuple[str, str, str] | None:
    """Split an atom at the first comparison operator found, by priority."""
    for operator in COMPARISON_OPERATORS:
        index = atom.find(operator)
        if index != -1:
            left = atom[:index].strip()
            right = atom[index + len(operator):].strip()
            return left, operator, right
    return None


def split_method_call(atom: str) -> tuple[str, str, str] | None:
    """Split ``target.method(arg)`` for whitelisted methods only."""
    for method in ALLOWED_METHODS:
        marker = f".{method}("
        if marker in atom:
            parts = atom.split(marker)
            target = parts[0].strip()
            argument = parts[1]
            if argument.endswith(")"):
                argument = argument[:-1]
            return target, method, argument.strip()
    return None


def require_operand(atom: str, expression: str) -> str:
    """Reject empty operands left behind by a dangling logical operator."""
    atom = atom.strip()
    if not atom:
        raise ExpressionSyntaxError("Empty operand in expression", expression=expression)
    return atom
