"""
Field-level helpers shared by every settings category.

None marks an absent field. Any other value, including False, 0, ""
and [], is present and must never be replaced by a merge.
"""

import re
from datetime import timedelta
from ipaddress import IPv4Network, IPv6Network, ip_network
from typing import Optional, TypeVar, Union

T = TypeVar("T")

NOT_SET = "[not set]"
REDACTED = "[redacted]"


def merge_with(existing: Optional[T], other: Optional[T]) -> Optional[T]:
    """Keep the existing value, filling it from other only when absent."""
    if existing is not None:
        return existing
    return other


def override_with(existing: Optional[T], other: Optional[T]) -> Optional[T]:
    """Replace the existing value whenever other is present."""
    if other is not None:
        return other
    return existing


def default_to(existing: Optional[T], default: T) -> T:
    """Return the existing value, or the default when absent."""
    if existing is not None:
        return existing
    return default


def obfuscate_key(value: Optional[str]) -> str:
    """
    Hide a secret for display.

    The placeholder is the same for every non-empty value so it leaks
    neither content nor length.
    """
    if not value:
        return NOT_SET
    return REDACTED


def bool_to_yes_no(value: Optional[bool]) -> str:
    if value is None:
        return NOT_SET
    return "yes" if value else "no"


def display(value: object) -> str:
    """Render a plain field value, marking absent ones."""
    if value is None:
        return NOT_SET
    return str(value)


_DURATION_UNITS = {
    "ns": 1e-3,
    "us": 1,
    "µs": 1,
    "ms": 1_000,
    "s": 1_000_000,
    "m": 60_000_000,
    "h": 3_600_000_000,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration such as "1s", "1.5s", "300ms" or "1h2m3s".

    Raises:
        ValueError: If the text is not a valid duration
    """
    original = text
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {original!r}")

    micros = 0.0
    position = 0
    while position < len(text):
        match = _DURATION_PART.match(text, position)
        if match is None:
            raise ValueError(f"invalid duration {original!r}")
        micros += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()

    try:
        return timedelta(microseconds=sign * round(micros))
    except OverflowError:
        raise ValueError(f"duration {original!r} is out of range") from None


def parse_prefix(text: str) -> Union[IPv4Network, IPv6Network]:
    """
    Parse an IP network written as address/prefix-length.

    Host bits may be set; they are masked off. Netmask forms such as
    "10.0.0.0/255.0.0.0" are refused.

    Raises:
        ValueError: If the text is not an address followed by a prefix length
    """
    _, slash, length = text.partition("/")
    if not slash:
        raise ValueError("missing prefix length")
    if not (length.isascii() and length.isdigit()):
        raise ValueError(f"prefix length {length!r} is not a number")
    return ip_network(text, strict=False)


def format_duration(value: Optional[timedelta]) -> str:
    """Format a duration the way it is written in settings ("1m30s")."""
    if value is None:
        return NOT_SET

    micros = value // timedelta(microseconds=1)
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000_000:
        if micros % 1_000 == 0:
            return f"{sign}{micros // 1_000}ms"
        return f"{sign}{micros}µs"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds = f"{rest / 1_000_000:.6f}".rstrip("0").rstrip(".")
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"
