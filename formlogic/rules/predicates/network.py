"""Address rules: email, URLs, IP networks, hosts and phone numbers."""

import re
from typing import Any

from formlogic.coercion import to_text
from formlogic.rules.models import Subject
from formlogic.rules.predicates.base import compile_pattern, matches, register_patterns
from formlogic.rules.registry import rule

EMAIL_RE = compile_pattern(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
URL_RE = compile_pattern(
    r"(https?|ftp|file|git)://[-a-zA-Z0-9+&@#/%?=~_|!:,.;]*[-a-zA-Z0-9+&@#/%=~_|]"
)
HTTP_PREFIX_RE = re.compile(r"https?://")

IPV4_RE = compile_pattern(
    r"(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
)
IPV6_RE = compile_pattern(
    r"(([0-9a-fA-F]{1,4}:){7,7}[0-9a-fA-F]{1,4}"
    r"|([0-9a-fA-F]{1,4}:){1,7}:"
    r"|([0-9a-fA-F]{1,4}:){1,6}:[0-9a-fA-F]{1,4}"
    r"|([0-9a-fA-F]{1,4}:){1,5}(:[0-9a-fA-F]{1,4}){1,2}"
    r"|([0-9a-fA-F]{1,4}:){1,4}(:[0-9a-fA-F]{1,4}){1,3}"
    r"|([0-9a-fA-F]{1,4}:){1,3}(:[0-9a-fA-F]{1,4}){1,4}"
    r"|([0-9a-fA-F]{1,4}:){1,2}(:[0-9a-fA-F]{1,4}){1,5}"
    r"|[0-9a-fA-F]{1,4}:((:[0-9a-fA-F]{1,4}){1,6})"
    r"|:((:[0-9a-fA-F]{1,4}){1,7}|:)"
    r"|fe80:(:[0-9a-fA-F]{0,4}){0,4}%[0-9a-zA-Z]{1,}"
    r"|::(ffff(:0{1,4}){0,1}:){0,1}((25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9])\.){3,3}"
    r"(25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9])"
    r"|([0-9a-fA-F]{1,4}:){1,4}:((25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9])\.){3,3}"
    r"(25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9]))"
)
HOSTNAME_RE = compile_pattern(r"(?=.{1,253}\Z)(?:(?!-)[a-zA-Z0-9-]{1,63}(?<!-)\.)+[a-zA-Z]{2,63}")
PORT_PREFIX_RE = re.compile(r"\s*([+-]?\d+)", re.ASCII)

register_patterns(
    {
        "uri": r"[a-zA-Z][a-zA-Z0-9+.-]*:[a-zA-Z0-9%/?#:@&=+$,_.!~*'()]*",
        "urn_rfc2141": r"urn:[a-zA-Z0-9]{1,31}:([a-zA-Z0-9()+,\-.:=@;$_!*']|%[0-9a-fA-F]{2})+",
        "url_encoded": r"[^%]+|.*%[0-9a-fA-F]{2}.*",
        "mac": r"([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})",
        "hostname_rfc1123": r"(?=.{1,253}\Z)(?:(?!-)[a-zA-Z0-9-]{1,63}(?<!-)\.)*[a-zA-Z0-9]{1,63}",
        "e164": r"\+[1-9]\d{1,14}",
        "phone": r"\+?(\d{1,3})?[-. (]*(\d{1,3})[-. )]*(\d{3})[-. ]*(\d{4})(?: *x(\d+))?",
    },
    category="network",
)


def is_ip(text: str, version: int = 0) -> bool:
    """Check for an IPv4 or IPv6 address; ``version`` narrows to one family."""
    if version == 4:
        return matches(IPV4_RE, text)
    if version == 6:
        return matches(IPV6_RE, text)
    return matches(IPV4_RE, text) or matches(IPV6_RE, text)


def is_cidr(text: str, version: int = 0) -> bool:
    """Check for ``address/prefix`` with a prefix in range for the family."""
    parts = text.split("/")
    if len(parts) != 2:
        return False
    address = parts[0]
    prefix = _leading_int(parts[1])
    if prefix is None:
        return False

    if version == 4 or (version == 0 and is_ip(address, 4)):
        return is_ip(address, 4) and 0 <= prefix <= 32
    if version == 6 or (version == 0 and is_ip(address, 6)):
        return is_ip(address, 6) and 0 <= prefix <= 128
    return False


def _leading_int(text: str) -> int | None:
    """Parse leading decimal digits, ignoring any trailing text."""
    match = PORT_PREFIX_RE.match(text)
    return int(match.group(1)) if match else None


@rule("email", category="network")
def email(value: Any, _param: str | None, _subject: Subject) -> bool:
    return matches(EMAIL_RE, value)


@rule("email_list", category="network")
def email_list(value: Any, _param: str | None, _subject: Subject) -> bool:
    """Comma-separated email addresses."""
    return all(matches(EMAIL_RE, part.strip()) for part in to_text(value).split(","))


@rule("email_domain", category="network")
def email_domain(value: Any, param: str | None, _subject: Subject) -> bool:
    return to_text(value).lower().endswith("@" + to_text(param).lower())


@rule("url", category="network")
def url(value: Any, _param: str | None, _subject: Subject) -> bool:
    return matches(URL_RE, value)


@rule("http_url", category="network")
def http_url(value: Any, _param: str | None, _subject: Subject) -> bool:
    text = to_text(value)
    return HTTP_PREFIX_RE.match(text) is not None and matches(URL_RE, text)


@rule("ip", category="network")
def ip(value: Any, _param: str | None, _subject: Subject) -> bool:
    return is_ip(to_text(value))


@rule("ipv4", category="network")
def ipv4(value: Any, _param: str | None, _subject: Subject) -> bool:
    return is_ip(to_text(value), 4)


@rule("ipv6", category="network")
def ipv6(value: Any, _param: str | None, _subject: Subject) -> bool:
    return is_ip(to_text(value), 6)


@rule("cidr", category="network")
def cidr(value: Any, _param: str | None, _subject: Subject) -> bool:
    return is_cidr(to_text(value))


@rule("cidrv4", category="network")
def cidrv4(value: Any, _param: str | None, _subject: Subject) -> bool:
    return is_cidr(to_text(value), 4)


@rule("cidrv6", category="network")
def cidrv6(value: Any, _param: str | None, _subject: Subject) -> bool:
    return is_cidr(to_text(value), 6)


@rule("hostname", "fqdn", category="network")
def hostname(value: Any, _param: str | None, _subject: Subject) -> bool:
    return matches(HOSTNAME_RE, value)


@rule("tcp_addr", "udp_addr", category="network")
def transport_address(value: Any, _param: str | None, _subject: Subject) -> bool:
    """``host:port`` where host is an IP or hostname and port is 0-65535."""
    parts = to_text(value).split(":")
    port = _leading_int(parts.pop())
    host = ":".join(parts)
    if port is None:
        return False
    return (is_ip(host) or matches(HOSTNAME_RE, host)) and 0 <= port <= 65535
