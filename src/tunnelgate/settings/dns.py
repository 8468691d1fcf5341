"""
DNS settings and plaintext resolver selection.

The resolver loop itself lives elsewhere; it asks plaintext_target()
which address to use when DNS over TLS is off or failing.
"""

from ipaddress import IPv4Address, IPv6Address
from typing import ClassVar, NamedTuple, Optional, Union

from pydantic import Field

from ..errors import SettingsValidationError
from ..privileges import PrivilegeContext
from ..tree import Node
from .base import SettingsModel
from .helpers import bool_to_yes_no, display

IPAddress = Union[IPv4Address, IPv6Address]

# Address left configured when DNS over TLS serves locally
LOCAL_SENTINEL = IPv4Address("127.0.0.1")

DEFAULT_PROVIDER = "cloudflare"


class Provider(NamedTuple):
    """A public resolver reachable in plaintext."""
    name: str
    ipv4: tuple[IPv4Address, ...]
    ipv6: tuple[IPv6Address, ...]


def _build_providers(*providers: Provider) -> dict[str, Provider]:
    table = {provider.name: provider for provider in providers}
    default = table.get(DEFAULT_PROVIDER)
    if default is None or not default.ipv4:
        raise RuntimeError(
            f"default DNS provider {DEFAULT_PROVIDER} is missing or has no IPv4 address"
        )
    return table


PROVIDERS = _build_providers(
    Provider(
        "cloudflare",
        (IPv4Address("1.1.1.1"), IPv4Address("1.0.0.1")),
        (IPv6Address("2606:4700:4700::1111"), IPv6Address("2606:4700:4700::1001")),
    ),
    Provider(
        "google",
        (IPv4Address("8.8.8.8"), IPv4Address("8.8.4.4")),
        (IPv6Address("2001:4860:4860::8888"), IPv6Address("2001:4860:4860::8844")),
    ),
    Provider(
        "quad9",
        (IPv4Address("9.9.9.9"), IPv4Address("149.112.112.112")),
        (IPv6Address("2620:fe::fe"), IPv6Address("2620:fe::9")),
    ),
)


class DNSSettings(SettingsModel):
    """Settings of the DNS resolution used by the gateway."""

    title: ClassVar[str] = "DNS settings:"

    server_address: Optional[IPAddress] = Field(
        default=None,
        description="Plaintext DNS server address"
    )
    keep_nameserver: Optional[bool] = Field(
        default=None,
        description="Keep the existing nameservers in resolv.conf"
    )
    dot_enabled: Optional[bool] = Field(
        default=None,
        description="Resolve over TLS"
    )
    dot_providers: Optional[list[str]] = Field(
        default=None,
        description="DNS over TLS providers, in order of preference"
    )

    @classmethod
    def defaults(cls) -> "DNSSettings":
        return cls(
            server_address=LOCAL_SENTINEL,
            keep_nameserver=False,
            dot_enabled=True,
            dot_providers=[DEFAULT_PROVIDER],
        )

    def _validate(self, privileges: Optional[PrivilegeContext]) -> None:
        for name in self.dot_providers:
            if name not in PROVIDERS:
                raise SettingsValidationError(
                    "DNS", "dot_providers",
                    f"provider {name} is not valid: must be one of "
                    + ", ".join(sorted(PROVIDERS)),
                    value=name,
                )
        if self.dot_enabled and not self.dot_providers:
            raise SettingsValidationError(
                "DNS", "dot_providers",
                "at least one provider is required when DNS over TLS is enabled",
            )

    def to_node(self) -> Node:
        node = Node(self.title)
        node.appendf("Keep existing nameserver(s): %s", bool_to_yes_no(self.keep_nameserver))
        node.appendf("DNS server address: %s", display(self.server_address))
        dot = node.appendf("DNS over TLS: %s", bool_to_yes_no(self.dot_enabled))
        if self.dot_enabled and self.dot_providers:
            dot.appendf("Providers: %s", ", ".join(self.dot_providers))
        if self.server_address == LOCAL_SENTINEL:
            node.appendf("Plaintext fallback address: %s", plaintext_target(self).address)
        return node


class PlaintextTarget(NamedTuple):
    address: IPAddress
    from_provider: bool


def plaintext_target(settings: DNSSettings) -> PlaintextTarget:
    """
    Pick the address to use for plaintext DNS.

    The configured server address wins unless it is the local sentinel,
    in which case the first IPv4 address of the first known provider is
    used, falling back on the default provider.

    Args:
        settings: DNS settings, resolved or not

    Returns:
        The chosen address and whether it came from a provider
    """
    address = settings.server_address
    if address is not None and address != LOCAL_SENTINEL:
        return PlaintextTarget(address, False)

    for name in settings.dot_providers or ():
        provider = PROVIDERS.get(name)
        if provider is not None and provider.ipv4:
            return PlaintextTarget(provider.ipv4[0], True)
    return PlaintextTarget(PROVIDERS[DEFAULT_PROVIDER].ipv4[0], True)
