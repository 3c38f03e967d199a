"""Rule chain parsing.

A chain is a comma-separated list of ``name``, ``name=param`` or
``name:param`` tokens, e.g. ``required,min:3,oneof=red green``. The
parameter is everything after the first separator, taken verbatim.
"""

from formlogic.rules.models import RuleToken


def _split_token(token: str) -> RuleToken:
    positions = [index for index in (token.find("="), token.find(":")) if index != -1]
    if not positions:
        return RuleToken(name=token)
    split_at = min(positions)
    return RuleToken(name=token[:split_at].strip(), param=token[split_at + 1:])


def parse_rule_chain(chain: str | None) -> list[RuleToken]:
    """Parse a rule chain into ordered tokens, dropping empty entries."""
    if not chain:
        return []
    tokens = []
    for raw in chain.split(","):
        raw = raw.strip()
        if raw:
            tokens.append(_split_token(raw))
    return tokens


def ensure_required(chain: str | None, required: bool) -> str:
    """Prepend ``required`` to the chain of a field flagged as required."""
    chain = chain or ""
    if not required:
        return chain
    if any(token.name == "required" for token in parse_rule_chain(chain)):
        return chain
    return f"required,{chain}" if chain else "required"
