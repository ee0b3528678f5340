"""
Input Validators and Sanitizers

Helpers that turn untrusted request input into safe values. None of them
raise: bad input degrades to a documented default.
"""

from typing import Any, Mapping, Optional

# Checked in order; the first present header wins
COUNTRY_HEADERS = (
    "cf-ipcountry",
    "x-vercel-ip-country",
    "x-country",
)

UNKNOWN_COUNTRY = "Unknown"


def parse_limit(raw: Optional[str], default: int = 100, maximum: int = 500) -> int:
    """
    Parse a ?limit= query value.

    Non-numeric and negative values fall back to default; everything is
    capped at maximum so the listing is never unbounded.

    Example:
        parse_limit("20") -> 20
        parse_limit("9999") -> 500
        parse_limit("-1") -> 100
        parse_limit("abc") -> 100
    """
    if raw is None:
        return min(default, maximum)

    try:
        value = int(str(raw).strip())
    except ValueError:
        return min(default, maximum)

    if value < 0:
        return min(default, maximum)

    return min(value, maximum)


def string_or_default(value: Any, default: str) -> str:
    """Return value when it is a string, otherwise default."""
    return value if isinstance(value, str) else default


def client_ip(headers: Mapping[str, str], peer_host: Optional[str]) -> str:
    """
    Best-effort client address.

    First entry of X-Forwarded-For (from proxy/load balancer), then the
    socket peer address, then the empty string.
    """
    forwarded_for = headers.get("x-forwarded-for") or ""
    first = forwarded_for.split(",")[0].strip()
    if first:
        return first
    return peer_host or ""


def detect_country(headers: Mapping[str, str]) -> str:
    """First country header set by a known proxy/CDN, else "Unknown"."""
    for name in COUNTRY_HEADERS:
        value = headers.get(name)
        if value:
            return value
    return UNKNOWN_COUNTRY
