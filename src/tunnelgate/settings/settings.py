"""
Aggregate of every settings category.
"""

from typing import ClassVar, Optional

from pydantic import Field

from ..privileges import PrivilegeContext
from ..tree import Node
from .base import SettingsModel
from .dns import DNSSettings
from .firewall import FirewallSettings
from .httpproxy import HTTPProxySettings
from .system import SystemSettings
from .vpn import VPNSettings


class Settings(SettingsModel):
    """
    All gateway settings.

    Each source reads into one of these. Categories start empty, so a
    freshly built Settings is fully Partial.
    """

    title: ClassVar[str] = "Settings summary:"

    vpn: VPNSettings = Field(default_factory=VPNSettings)
    dns: DNSSettings = Field(default_factory=DNSSettings)
    firewall: FirewallSettings = Field(default_factory=FirewallSettings)
    http_proxy: HTTPProxySettings = Field(default_factory=HTTPProxySettings)
    system: SystemSettings = Field(default_factory=SystemSettings)

    @classmethod
    def defaults(cls) -> "Settings":
        return cls(
            vpn=VPNSettings.defaults(),
            dns=DNSSettings.defaults(),
            firewall=FirewallSettings.defaults(),
            http_proxy=HTTPProxySettings.defaults(),
            system=SystemSettings.defaults(),
        )

    def categories(self) -> list[SettingsModel]:
        return [getattr(self, name) for name in type(self).model_fields]

    def validate_settings(self, privileges: Optional[PrivilegeContext] = None) -> None:
        # Each category reports its own missing fields and errors
        for category in self.categories():
            category.validate_settings(privileges)

    def to_node(self) -> Node:
        node = Node(self.title)
        for category in self.categories():
            node.add(category.to_node())
        return node
