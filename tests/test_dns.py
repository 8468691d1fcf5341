"""Tests for DNS providers and plaintext resolver selection."""

from ipaddress import IPv4Address, IPv6Address

import pytest

from tunnelgate.settings import PROVIDERS, DNSSettings, plaintext_target
from tunnelgate.settings.dns import (
    DEFAULT_PROVIDER,
    LOCAL_SENTINEL,
    Provider,
    _build_providers,
)


class TestProviders:
    """Tests for the provider table."""

    def test_default_provider_present(self):
        assert DEFAULT_PROVIDER in PROVIDERS
        assert PROVIDERS[DEFAULT_PROVIDER].ipv4[0] == IPv4Address("1.1.1.1")

    def test_every_provider_has_ipv4(self):
        for provider in PROVIDERS.values():
            assert provider.ipv4

    def test_missing_default_provider(self):
        with pytest.raises(RuntimeError):
            _build_providers(Provider("google", (IPv4Address("8.8.8.8"),), ()))

    def test_default_provider_without_ipv4(self):
        with pytest.raises(RuntimeError):
            _build_providers(Provider("cloudflare", (), (IPv6Address("2606:4700:4700::1111"),)))


class TestPlaintextTarget:
    """Tests for the plaintext DNS address."""

    def test_configured_address(self):
        target = plaintext_target(DNSSettings(server_address=IPv4Address("9.9.9.9")))
        assert target.address == IPv4Address("9.9.9.9")
        assert target.from_provider is False

    def test_sentinel_uses_first_provider(self):
        settings = DNSSettings(server_address=LOCAL_SENTINEL, dot_providers=["google", "cloudflare"])
        target = plaintext_target(settings)
        assert target.address == IPv4Address("8.8.8.8")
        assert target.from_provider is True

    def test_unknown_providers_are_skipped(self):
        settings = DNSSettings(server_address=LOCAL_SENTINEL, dot_providers=["nope", "quad9"])
        assert plaintext_target(settings).address == IPv4Address("9.9.9.9")

    def test_no_providers_uses_default(self):
        settings = DNSSettings(server_address=LOCAL_SENTINEL, dot_providers=[])
        assert plaintext_target(settings).address == IPv4Address("1.1.1.1")

    def test_unresolved_settings(self):
        target = plaintext_target(DNSSettings())
        assert target.address == IPv4Address("1.1.1.1")
        assert target.from_provider is True

    def test_defaults(self):
        target = plaintext_target(DNSSettings().with_defaults())
        assert target == (IPv4Address("1.1.1.1"), True)
