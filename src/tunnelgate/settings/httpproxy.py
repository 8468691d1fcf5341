"""
HTTP proxy settings.
"""

from datetime import timedelta
from typing import Any, ClassVar, Optional

from pydantic import Field, field_validator

from ..errors import SettingsValidationError
from ..privileges import PrivilegeContext
from ..tree import Node
from .address import validate_listening_address
from .base import SettingsModel
from .helpers import bool_to_yes_no, display, format_duration, obfuscate_key, parse_duration

DEFAULT_LISTENING_ADDRESS = ":8888"
DEFAULT_READ_HEADER_TIMEOUT = timedelta(seconds=1)
DEFAULT_READ_TIMEOUT = timedelta(seconds=3)


class HTTPProxySettings(SettingsModel):
    """Settings of the HTTP proxy server."""

    title: ClassVar[str] = "HTTP proxy settings:"

    user: Optional[str] = Field(
        default=None,
        description="Username required by the proxy"
    )
    password: Optional[str] = Field(
        default=None,
        description="Password required by the proxy"
    )
    cert_file: Optional[str] = Field(
        default=None,
        description="Path to the TLS certificate"
    )
    key_file: Optional[str] = Field(
        default=None,
        description="Path to the TLS private key"
    )
    listening_address: Optional[str] = Field(
        default=None,
        description="Address the proxy server listens on"
    )
    enabled: Optional[bool] = Field(
        default=None,
        description="Run the HTTP proxy server"
    )
    stealth: Optional[bool] = Field(
        default=None,
        description="Hide that requests were proxied"
    )
    log: Optional[bool] = Field(
        default=None,
        description="Log each request and response"
    )
    read_header_timeout: Optional[timedelta] = Field(
        default=None,
        description="HTTP header read timeout"
    )
    read_timeout: Optional[timedelta] = Field(
        default=None,
        description="HTTP read timeout"
    )

    @field_validator("read_header_timeout", "read_timeout", mode="before")
    @classmethod
    def parse_duration_text(cls, v: Any) -> Any:
        """Accept durations written as "1s" or "1m30s"."""
        if isinstance(v, str):
            return parse_duration(v.strip())
        return v

    @classmethod
    def defaults(cls) -> "HTTPProxySettings":
        return cls(
            user="",
            password="",
            cert_file="",
            key_file="",
            listening_address=DEFAULT_LISTENING_ADDRESS,
            enabled=False,
            stealth=False,
            log=False,
            read_header_timeout=DEFAULT_READ_HEADER_TIMEOUT,
            read_timeout=DEFAULT_READ_TIMEOUT,
        )

    def _validate(self, privileges: Optional[PrivilegeContext]) -> None:
        # User and password are free-form
        try:
            validate_listening_address(self.listening_address, privileges)
        except ValueError as e:
            raise SettingsValidationError(
                "HTTP proxy", "listening_address",
                f"server listening address is not valid: {e}",
                value=self.listening_address,
            ) from None

        if bool(self.cert_file) != bool(self.key_file):
            raise SettingsValidationError(
                "HTTP proxy", "cert_file" if not self.cert_file else "key_file",
                "certificate and key files must be set together",
            )

        for name in ("read_header_timeout", "read_timeout"):
            value = getattr(self, name)
            if value <= timedelta(0):
                raise SettingsValidationError(
                    "HTTP proxy", name,
                    f"timeout must be positive: {format_duration(value)}",
                    value=value,
                )

    def to_node(self) -> Node:
        node = Node(self.title)
        node.appendf("Enabled: %s", bool_to_yes_no(self.enabled))
        if not self.enabled:
            return node

        node.appendf("Listening address: %s", display(self.listening_address))
        node.appendf("User: %s", display(self.user))
        node.appendf("Password: %s", obfuscate_key(self.password))
        node.appendf("Certificate file: %s", display(self.cert_file))
        node.appendf("Key file: %s", display(self.key_file))
        node.appendf("Stealth mode: %s", bool_to_yes_no(self.stealth))
        node.appendf("Log: %s", bool_to_yes_no(self.log))
        node.appendf("Read header timeout: %s", format_duration(self.read_header_timeout))
        node.appendf("Read timeout: %s", format_duration(self.read_timeout))
        return node
