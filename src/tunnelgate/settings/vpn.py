"""
VPN credentials settings.

Client certificate and key hold the base64 body of their PEM block.
"""

from typing import ClassVar, Optional

from pydantic import Field

from ..errors import SettingsValidationError
from ..privileges import PrivilegeContext
from ..tree import Node
from .base import SettingsModel
from .helpers import NOT_SET, obfuscate_key


class VPNSettings(SettingsModel):
    """Credentials used to authenticate the tunnel."""

    title: ClassVar[str] = "VPN settings:"

    user: Optional[str] = Field(
        default=None,
        description="VPN account username"
    )
    password: Optional[str] = Field(
        default=None,
        description="VPN account password"
    )
    client_certificate: Optional[str] = Field(
        default=None,
        description="Base64 DER of the client certificate"
    )
    client_key: Optional[str] = Field(
        default=None,
        description="Base64 DER of the client private key"
    )

    @classmethod
    def defaults(cls) -> "VPNSettings":
        return cls(user="", password="", client_certificate="", client_key="")

    def _validate(self, privileges: Optional[PrivilegeContext]) -> None:
        if bool(self.client_certificate) != bool(self.client_key):
            missing = "client_key" if self.client_certificate else "client_certificate"
            raise SettingsValidationError(
                "VPN", missing,
                "client certificate and client key must be set together",
            )

    def to_node(self) -> Node:
        node = Node(self.title)
        node.appendf("User: %s", obfuscate_key(self.user))
        node.appendf("Password: %s", obfuscate_key(self.password))
        node.appendf(
            "Client certificate: %s",
            "[set]" if self.client_certificate else NOT_SET,
        )
        node.appendf("Client key: %s", obfuscate_key(self.client_key))
        return node
