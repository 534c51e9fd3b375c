# ==============================================================================
# Referrer Classification
# ==============================================================================
"""
Classify referrer URLs into traffic source buckets.

Rules are evaluated top to bottom against the referrer's hostname and the
first match wins. Hostnames that match no rule become their own bucket.
Empty and unparseable referrers are "Direct".
"""

from collections.abc import Callable
from urllib.parse import urlsplit

DIRECT = "Direct"

# Ordered (predicate, label) table. Order matters: a hostname matching more
# than one rule takes the earliest label.
SOURCE_RULES: list[tuple[Callable[[str], bool], str]] = [
    (lambda host: "google" in host, "Google"),
    (lambda host: "bing" in host, "Bing"),
    (lambda host: "duckduckgo" in host, "DuckDuckGo"),
    (lambda host: "twitter" in host or host == "t.co", "Twitter"),
    (lambda host: "facebook" in host, "Facebook"),
    (lambda host: "reddit" in host, "Reddit"),
    (lambda host: "github" in host, "GitHub"),
]


# Characters a URL parser rejects in a domain host. urlsplit accepts them.
_FORBIDDEN_HOST_CHARS = frozenset(' #%/<>?@[\\]^|"') | frozenset(map(chr, range(0x20))) | {"\x7f"}

# Browsers drop tabs and newlines anywhere in a URL before parsing it
_TAB_OR_NEWLINE = str.maketrans("", "", "\t\n\r")


def referrer_hostname(referrer: str) -> str | None:
    """
    Extract the lowercase hostname from an absolute referrer URL.

    Returns:
        The hostname, or None if the referrer is not an absolute URL with a
        valid host (relative paths, bare words, bad ports, spaces or other
        forbidden characters in the host, etc.)
    """
    try:
        parts = urlsplit(referrer.strip().translate(_TAB_OR_NEWLINE))
        # Accessing .port validates it
        parts.port
    except ValueError:
        return None
    # Hostless URLs (javascript:, mailto:) count as Direct rather than an "" bucket
    if not parts.scheme or not parts.hostname:
        return None
    if not _FORBIDDEN_HOST_CHARS.isdisjoint(parts.hostname):
        return None
    return parts.hostname


def classify_hostname(hostname: str) -> str:
    """Map a hostname to its source label using SOURCE_RULES."""
    for matches, label in SOURCE_RULES:
        if matches(hostname):
            return label
    return hostname


def classify_referrer(referrer: str | None) -> str:
    """
    Classify a raw referrer into a traffic source label.

    Examples:
        >>> classify_referrer("https://www.google.com/search?q=x")
        'Google'
        >>> classify_referrer("https://t.co/abc")
        'Twitter'
        >>> classify_referrer("not a url")
        'Direct'
        >>> classify_referrer("https://news.ycombinator.com/")
        'news.ycombinator.com'
    """
    if not referrer:
        return DIRECT
    hostname = referrer_hostname(referrer)
    if hostname is None:
        return DIRECT
    return classify_hostname(hostname)
