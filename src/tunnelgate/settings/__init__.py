"""
Tunnelgate Settings

Typed settings categories with merge, override, defaulting, validation
and redacted rendering.
"""

from .base import SettingsModel
from .dns import DNSSettings, PlaintextTarget, PROVIDERS, plaintext_target
from .firewall import FirewallSettings
from .httpproxy import HTTPProxySettings
from .settings import Settings
from .system import SystemSettings
from .vpn import VPNSettings

__all__ = [
    "SettingsModel",
    "Settings",
    # Categories
    "DNSSettings",
    "FirewallSettings",
    "HTTPProxySettings",
    "SystemSettings",
    "VPNSettings",
    # DNS
    "PlaintextTarget",
    "PROVIDERS",
    "plaintext_target",
]
