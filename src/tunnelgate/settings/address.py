"""
Listening address validation.
"""

from ipaddress import ip_address
from typing import Optional

from ..privileges import PrivilegeContext, ProcessPrivileges

MAX_PORT = 65535
MAX_PRIVILEGED_PORT = 1023


def split_host_port(address: str) -> tuple[str, str]:
    """
    Split "host:port", "[v6]:port" or ":port" into host and port.

    Raises:
        ValueError: If the address has no port part
    """
    if address.startswith("["):
        end = address.find("]")
        if end == -1 or address[end + 1:end + 2] != ":":
            raise ValueError(f"address {address} is missing a port")
        return address[1:end], address[end + 2:]

    host, sep, port = address.rpartition(":")
    if not sep:
        raise ValueError(f"address {address} is missing a port")
    if ":" in host:
        raise ValueError(f"address {address} has too many colons")
    return host, port


def validate_listening_address(
    address: str,
    privileges: Optional[PrivilegeContext] = None,
) -> None:
    """
    Check an address can be listened on by the current process.

    Raises:
        ValueError: Describing why the address is not usable
    """
    if not address:
        raise ValueError("address is empty")

    host, port_text = split_host_port(address)
    if host and host != "localhost":
        try:
            ip_address(host)
        except ValueError:
            raise ValueError(f"host {host} is not an IP address") from None

    if not port_text.isascii() or not port_text.isdigit():
        raise ValueError(f"port {port_text!r} is not a number")
    port = int(port_text)
    if port < 1 or port > MAX_PORT:
        raise ValueError(f"port {port} must be between 1 and {MAX_PORT}")

    if port <= MAX_PRIVILEGED_PORT:
        context = privileges or ProcessPrivileges()
        uid = context.uid()
        if uid != 0:
            raise ValueError(
                f"port {port} is privileged and cannot be used by user id {uid}"
            )
