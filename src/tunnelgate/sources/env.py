"""
Environment variable source.

Reads every settings category from environment variables. Older
variable names are still honoured as retro keys when the current name
is unset.
"""

import os
from collections.abc import Mapping, Sequence
from typing import Optional

import structlog

from ..settings import (
    DNSSettings,
    FirewallSettings,
    HTTPProxySettings,
    Settings,
    SystemSettings,
    VPNSettings,
)
from .parse import (
    parse_base64,
    parse_bool,
    parse_duration,
    parse_id,
    parse_ip,
    parse_ports,
    parse_prefixes,
)

logger = structlog.get_logger(__name__)


def _source(key: str) -> str:
    return f"environment variable {key}"


class EnvSource:
    """Settings source backed by environment variables."""

    name = "environment"

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize the source.

        Args:
            environ: Variables to read (defaults to os.environ)
        """
        self._environ = os.environ if environ is None else environ

    def get(self, key: str) -> Optional[str]:
        """Return a variable's value, or None when unset or empty."""
        value = self._environ.get(key)
        if value is None:
            return None
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1].strip()
        return value or None

    def get_with_retro(
        self,
        key: str,
        retro_keys: Sequence[str] = (),
    ) -> tuple[str, Optional[str]]:
        """
        Read a variable, falling back on its retro keys.

        Returns:
            The key actually used and its value (None if nothing is set)
        """
        value = self.get(key)
        if value is not None:
            return key, value

        for retro_key in retro_keys:
            value = self.get(retro_key)
            if value is not None:
                logger.warning(
                    "Deprecated environment variable in use",
                    variable=retro_key,
                    replacement=key,
                )
                return retro_key, value

        return key, None

    def get_csv(self, key: str) -> Optional[list[str]]:
        """Split a comma separated variable into its stripped entries."""
        value = self.get(key)
        if value is None:
            return None
        return [item.strip() for item in value.split(",") if item.strip()]

    def get_bool(self, key: str, retro_keys: Sequence[str] = ()) -> Optional[bool]:
        key, value = self.get_with_retro(key, retro_keys)
        if value is None:
            return None
        return parse_bool(value, source=_source(key))

    def read(self) -> Settings:
        """
        Read all categories.

        Raises:
            ConfigurationError: On the first invalid variable
        """
        settings = Settings(
            vpn=self.read_vpn(),
            dns=self.read_dns(),
            firewall=self.read_firewall(),
            http_proxy=self.read_http_proxy(),
            system=self.read_system(),
        )
        logger.debug("Read settings source", source=self.name)
        return settings

    def read_http_proxy(self) -> HTTPProxySettings:
        _, user = self.get_with_retro("HTTPPROXY_USER", ["PROXY_USER", "TINYPROXY_USER"])
        _, password = self.get_with_retro(
            "HTTPPROXY_PASSWORD", ["PROXY_PASSWORD", "TINYPROXY_PASSWORD"]
        )

        address_key, listening_address = self.get_with_retro(
            "HTTPPROXY_LISTENING_ADDRESS",
            ["HTTPPROXY_PORT", "TINYPROXY_PORT", "PROXY_PORT"],
        )
        if listening_address is not None and address_key != "HTTPPROXY_LISTENING_ADDRESS":
            # Retro keys only held a port number
            listening_address = ":" + listening_address

        timeouts = {}
        for field, key in (
            ("read_header_timeout", "HTTPPROXY_READ_HEADER_TIMEOUT"),
            ("read_timeout", "HTTPPROXY_READ_TIMEOUT"),
        ):
            value = self.get(key)
            if value is not None:
                timeouts[field] = parse_duration(value, source=_source(key))

        return HTTPProxySettings(
            user=user,
            password=password,
            cert_file=self.get("HTTPPROXY_CERTFILE"),
            key_file=self.get("HTTPPROXY_KEYFILE"),
            listening_address=listening_address,
            enabled=self.get_bool("HTTPPROXY", ["PROXY", "TINYPROXY"]),
            stealth=self.get_bool("HTTPPROXY_STEALTH"),
            log=self.get_bool("HTTPPROXY_LOG"),
            **timeouts,
        )

    def read_firewall(self) -> FirewallSettings:
        ports = {}
        for field, key in (
            ("vpn_input_ports", "FIREWALL_VPN_INPUT_PORTS"),
            ("input_ports", "FIREWALL_INPUT_PORTS"),
        ):
            values = self.get_csv(key)
            if values is not None:
                ports[field] = parse_ports(values, source=_source(key))

        subnets_key, _ = self.get_with_retro("FIREWALL_OUTBOUND_SUBNETS", ["EXTRA_SUBNETS"])
        subnet_values = self.get_csv(subnets_key)
        outbound_subnets = None
        if subnet_values is not None:
            outbound_subnets = parse_prefixes(subnet_values, source=_source(subnets_key))

        return FirewallSettings(
            outbound_subnets=outbound_subnets,
            enabled=self.get_bool("FIREWALL"),
            debug=self.get_bool("FIREWALL_DEBUG"),
            **ports,
        )

    def read_system(self) -> SystemSettings:
        return SystemSettings(
            puid=self._read_id("PUID", "UID"),
            pgid=self._read_id("PGID", "GID"),
            timezone=self.get("TZ"),
        )

    def _read_id(self, key: str, retro_key: str) -> Optional[int]:
        key, value = self.get_with_retro(key, [retro_key])
        if value is None:
            return None
        return parse_id(value, source=_source(key))

    def read_vpn(self) -> VPNSettings:
        user = self.get("OPENVPN_USER")
        password = self.get("OPENVPN_PASSWORD")

        encoded = {}
        for field, key in (
            ("client_certificate", "OPENVPN_CERT"),
            ("client_key", "OPENVPN_KEY"),
        ):
            value = self.get(key)
            if value is not None:
                encoded[field] = parse_base64(value, source=_source(key))

        return VPNSettings(user=user, password=password, **encoded)

    def read_dns(self) -> DNSSettings:
        address_key, address = self.get_with_retro("DNS_ADDRESS", ["DNS_PLAINTEXT_ADDRESS"])
        server_address = None
        if address is not None:
            server_address = parse_ip(address, source=_source(address_key))

        providers = self.get_csv("DOT_PROVIDERS")
        if providers is not None:
            providers = [provider.lower() for provider in providers]

        return DNSSettings(
            server_address=server_address,
            keep_nameserver=self.get_bool("DNS_KEEP_NAMESERVER"),
            dot_enabled=self.get_bool("DOT"),
            dot_providers=providers,
        )
