"""
Typed parsing of raw configuration literals.

Every function takes the name of the source the literal came from so
errors point at the exact variable or file to fix.
"""

import base64
import binascii
import re
from datetime import timedelta
from ipaddress import IPv4Address, IPv4Network, IPv6Address, IPv6Network, ip_address
from typing import Optional, Union

from ..errors import ParsingError, PortParsingError, PortValueError, RangeError
from ..settings.helpers import parse_duration as _parse_duration, parse_prefix

MIN_PORT = 1
MAX_PORT = 65535
MAX_UINT32 = 2**32 - 1
MAX_UINT64 = 2**64 - 1

_INTEGER = re.compile(r"([+-]?)0*([0-9]+)")
_UNSIGNED = re.compile(r"0*([0-9]+)")

# Longest digit strings that can still be in range
_MAX_PORT_DIGITS = len(str(MAX_PORT))
_MAX_UINT64_DIGITS = len(str(MAX_UINT64))

_TRUE = {"true", "yes", "on", "1", "enabled"}
_FALSE = {"false", "no", "off", "0", "disabled"}


def parse_ports(values: list[str], source: Optional[str] = None) -> list[int]:
    """
    Parse port literals.

    Raises:
        PortParsingError: If a literal is not an integer
        PortValueError: If a port is outside 1-65535
    """
    ports = []
    for value in values:
        match = _INTEGER.fullmatch(value)
        if match is None:
            raise PortParsingError(f"cannot parse port: {value}", source=source, value=value)
        sign, digits = match.groups()
        port = int(sign + digits) if len(digits) <= _MAX_PORT_DIGITS else None
        if port is None or port < MIN_PORT or port > MAX_PORT:
            raise PortValueError(
                f"port value is not valid: must be between {MIN_PORT} and {MAX_PORT}: {value}",
                source=source, value=value if port is None else port,
                minimum=MIN_PORT, maximum=MAX_PORT,
            )
        ports.append(port)
    return ports


def parse_prefixes(
    values: list[str],
    source: Optional[str] = None,
) -> list[Union[IPv4Network, IPv6Network]]:
    """
    Parse IP networks written as address/prefix-length.

    Host bits may be set; they are masked off. Netmask forms are refused.

    Raises:
        ParsingError: If a literal is not an IP network
    """
    prefixes = []
    for value in values:
        try:
            prefixes.append(parse_prefix(value))
        except ValueError as e:
            raise ParsingError(f"parsing IP network {value!r}: {e}", source=source, value=value) from None
    return prefixes


def parse_id(value: str, source: Optional[str] = None) -> int:
    """
    Parse a process user or group ID.

    Raises:
        ParsingError: If the value is not an unsigned 64-bit integer
        RangeError: If the value exceeds the unsigned 32-bit maximum
    """
    match = _UNSIGNED.fullmatch(value)
    if (
        match is None
        or len(match.group(1)) > _MAX_UINT64_DIGITS
        or int(match.group(1)) > MAX_UINT64
    ):
        raise ParsingError(
            f"system ID is not valid: {value!r} is not an unsigned integer",
            source=source, value=value,
        )
    number = int(match.group(1))
    if number > MAX_UINT32:
        raise RangeError(
            f"system ID is not valid: {number}: must be between 0 and {MAX_UINT32}",
            source=source, value=number, minimum=0, maximum=MAX_UINT32,
        )
    return number


def parse_bool(value: str, source: Optional[str] = None) -> bool:
    """
    Parse an on/off literal.

    Raises:
        ParsingError: If the value is not a recognised boolean
    """
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ParsingError(
        f"value {value!r} is not a boolean: use yes/no, on/off or true/false",
        source=source, value=value,
    )


def parse_duration(value: str, source: Optional[str] = None) -> timedelta:
    """
    Parse a duration such as "1s" or "1m30s".

    Raises:
        ParsingError: If the value is not a duration
    """
    try:
        return _parse_duration(value)
    except ValueError as e:
        raise ParsingError(str(e), source=source, value=value) from None


def parse_ip(value: str, source: Optional[str] = None) -> Union[IPv4Address, IPv6Address]:
    """
    Parse an IP address.

    Raises:
        ParsingError: If the value is not an IP address
    """
    try:
        return ip_address(value)
    except ValueError:
        raise ParsingError(f"IP address {value!r} is not valid", source=source, value=value) from None


def parse_base64(value: str, source: Optional[str] = None) -> str:
    """
    Check a value is base64 encoded and return it unchanged.

    Raises:
        ParsingError: If the value is not valid base64
    """
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        # The secret itself stays out of the error
        raise ParsingError("value is not valid base64", source=source) from None
    return value
