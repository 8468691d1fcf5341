"""Tests for the environment variable source."""

from datetime import timedelta
from ipaddress import IPv4Address, IPv4Network

import pytest

from tunnelgate.errors import ParsingError, PortParsingError, PortValueError, RangeError
from tunnelgate.sources.env import EnvSource


class TestEnvAccess:
    """Tests for raw variable access."""

    def test_unset_is_none(self):
        assert EnvSource({}).get("FIREWALL") is None

    def test_empty_is_none(self):
        assert EnvSource({"FIREWALL": "  "}).get("FIREWALL") is None

    def test_strips_whitespace_and_quotes(self):
        source = EnvSource({"A": "  value ", "B": '"quoted"', "C": "'single'"})
        assert source.get("A") == "value"
        assert source.get("B") == "quoted"
        assert source.get("C") == "single"

    def test_csv(self):
        source = EnvSource({"PORTS": " 80, 443 ,,"})
        assert source.get_csv("PORTS") == ["80", "443"]
        assert source.get_csv("MISSING") is None

    def test_retro_unused_when_current_set(self):
        source = EnvSource({"FIREWALL_OUTBOUND_SUBNETS": "a", "EXTRA_SUBNETS": "b"})
        assert source.get_with_retro("FIREWALL_OUTBOUND_SUBNETS", ["EXTRA_SUBNETS"]) == (
            "FIREWALL_OUTBOUND_SUBNETS", "a"
        )

    def test_retro_used_when_current_unset(self):
        source = EnvSource({"EXTRA_SUBNETS": "b"})
        assert source.get_with_retro("FIREWALL_OUTBOUND_SUBNETS", ["EXTRA_SUBNETS"]) == (
            "EXTRA_SUBNETS", "b"
        )

    def test_retro_nothing_set(self):
        assert EnvSource({}).get_with_retro("PUID", ["UID"]) == ("PUID", None)

    def test_defaults_to_process_environment(self, monkeypatch):
        monkeypatch.setenv("FIREWALL_DEBUG", "on")
        assert EnvSource().read_firewall().debug is True


class TestReadFirewall:
    """Tests for firewall variables."""

    def test_all_unset(self):
        firewall = EnvSource({}).read_firewall()
        assert firewall.vpn_input_ports is None
        assert firewall.input_ports is None
        assert firewall.outbound_subnets is None
        assert firewall.enabled is None
        assert firewall.debug is None

    def test_values(self):
        firewall = EnvSource({
            "FIREWALL": "off",
            "FIREWALL_DEBUG": "on",
            "FIREWALL_VPN_INPUT_PORTS": "80,443",
            "FIREWALL_INPUT_PORTS": "22",
            "FIREWALL_OUTBOUND_SUBNETS": "10.0.0.0/8,192.168.0.0/16",
        }).read_firewall()
        assert firewall.enabled is False
        assert firewall.debug is True
        assert firewall.vpn_input_ports == [80, 443]
        assert firewall.input_ports == [22]
        assert firewall.outbound_subnets == [
            IPv4Network("10.0.0.0/8"),
            IPv4Network("192.168.0.0/16"),
        ]

    def test_bad_port(self):
        with pytest.raises(PortParsingError) as exc_info:
            EnvSource({"FIREWALL_VPN_INPUT_PORTS": "80,abc"}).read_firewall()
        assert "FIREWALL_VPN_INPUT_PORTS" in str(exc_info.value)
        assert "abc" in str(exc_info.value)

    def test_port_out_of_range(self):
        with pytest.raises(PortValueError) as exc_info:
            EnvSource({"FIREWALL_INPUT_PORTS": "0"}).read_firewall()
        assert exc_info.value.source == "environment variable FIREWALL_INPUT_PORTS"

    def test_very_long_port(self):
        with pytest.raises(PortValueError) as exc_info:
            EnvSource({"FIREWALL_INPUT_PORTS": "22," + "9" * 5000}).read_firewall()
        assert exc_info.value.source == "environment variable FIREWALL_INPUT_PORTS"

    def test_retro_subnets(self):
        firewall = EnvSource({"EXTRA_SUBNETS": "10.0.0.0/8"}).read_firewall()
        assert firewall.outbound_subnets == [IPv4Network("10.0.0.0/8")]

    def test_retro_subnets_error_names_retro_key(self):
        with pytest.raises(ParsingError) as exc_info:
            EnvSource({"EXTRA_SUBNETS": "not-an-ip"}).read_firewall()
        message = str(exc_info.value)
        assert "EXTRA_SUBNETS" in message
        assert "FIREWALL_OUTBOUND_SUBNETS" not in message
        assert "not-an-ip" in message

    def test_bad_bool(self):
        with pytest.raises(ParsingError) as exc_info:
            EnvSource({"FIREWALL": "sometimes"}).read_firewall()
        assert "FIREWALL" in str(exc_info.value)


class TestReadSystem:
    """Tests for process identity variables."""

    def test_values(self):
        system = EnvSource({"PUID": "1000", "PGID": "1001", "TZ": "Europe/Paris"}).read_system()
        assert system.puid == 1000
        assert system.pgid == 1001
        assert system.timezone == "Europe/Paris"

    def test_unset(self):
        system = EnvSource({}).read_system()
        assert system.puid is None
        assert system.pgid is None
        assert system.timezone is None

    def test_retro_keys(self):
        system = EnvSource({"UID": "33", "GID": "34"}).read_system()
        assert system.puid == 33
        assert system.pgid == 34

    def test_negative_id(self):
        with pytest.raises(ParsingError) as exc_info:
            EnvSource({"PUID": "-1"}).read_system()
        assert not isinstance(exc_info.value, RangeError)
        assert "PUID" in str(exc_info.value)

    def test_overflow_id(self):
        with pytest.raises(RangeError) as exc_info:
            EnvSource({"PGID": "99999999999"}).read_system()
        assert "4294967295" in str(exc_info.value)
        assert "PGID" in str(exc_info.value)

    def test_overflow_error_names_retro_key(self):
        with pytest.raises(RangeError) as exc_info:
            EnvSource({"UID": "99999999999"}).read_system()
        assert exc_info.value.source == "environment variable UID"

    def test_very_long_id(self):
        with pytest.raises(ParsingError) as exc_info:
            EnvSource({"PUID": "9" * 5000}).read_system()
        assert exc_info.value.source == "environment variable PUID"


class TestReadHTTPProxy:
    """Tests for HTTP proxy variables."""

    def test_values(self):
        proxy = EnvSource({
            "HTTPPROXY": "on",
            "HTTPPROXY_USER": "alice",
            "HTTPPROXY_PASSWORD": "secret",
            "HTTPPROXY_LISTENING_ADDRESS": ":9999",
            "HTTPPROXY_STEALTH": "yes",
            "HTTPPROXY_LOG": "no",
            "HTTPPROXY_CERTFILE": "/certs/proxy.crt",
            "HTTPPROXY_KEYFILE": "/certs/proxy.key",
            "HTTPPROXY_READ_HEADER_TIMEOUT": "2s",
            "HTTPPROXY_READ_TIMEOUT": "1m",
        }).read_http_proxy()
        assert proxy.enabled is True
        assert proxy.user == "alice"
        assert proxy.password == "secret"
        assert proxy.listening_address == ":9999"
        assert proxy.stealth is True
        assert proxy.log is False
        assert proxy.cert_file == "/certs/proxy.crt"
        assert proxy.key_file == "/certs/proxy.key"
        assert proxy.read_header_timeout == timedelta(seconds=2)
        assert proxy.read_timeout == timedelta(minutes=1)

    def test_unset(self):
        proxy = EnvSource({}).read_http_proxy()
        assert proxy.missing_fields() == list(type(proxy).model_fields)

    def test_retro_port_becomes_address(self):
        proxy = EnvSource({"HTTPPROXY_PORT": "8000"}).read_http_proxy()
        assert proxy.listening_address == ":8000"

    def test_retro_enabled_and_credentials(self):
        proxy = EnvSource({
            "TINYPROXY": "on",
            "PROXY_USER": "bob",
            "TINYPROXY_PASSWORD": "pw",
        }).read_http_proxy()
        assert proxy.enabled is True
        assert proxy.user == "bob"
        assert proxy.password == "pw"

    def test_bad_duration(self):
        with pytest.raises(ParsingError) as exc_info:
            EnvSource({"HTTPPROXY_READ_TIMEOUT": "3"}).read_http_proxy()
        assert "HTTPPROXY_READ_TIMEOUT" in str(exc_info.value)

    def test_duration_out_of_range(self):
        with pytest.raises(ParsingError) as exc_info:
            EnvSource({"HTTPPROXY_READ_TIMEOUT": "99999999999h"}).read_http_proxy()
        assert exc_info.value.source == "environment variable HTTPPROXY_READ_TIMEOUT"


class TestReadVPNAndDNS:
    """Tests for VPN credentials and DNS variables."""

    def test_vpn(self):
        vpn = EnvSource({
            "OPENVPN_USER": "user",
            "OPENVPN_PASSWORD": "pass",
            "OPENVPN_CERT": "Y2VydA==",
            "OPENVPN_KEY": "a2V5",
        }).read_vpn()
        assert vpn.user == "user"
        assert vpn.password == "pass"
        assert vpn.client_certificate == "Y2VydA=="
        assert vpn.client_key == "a2V5"

    def test_vpn_bad_key(self):
        with pytest.raises(ParsingError) as exc_info:
            EnvSource({"OPENVPN_KEY": "%%%"}).read_vpn()
        assert "OPENVPN_KEY" in str(exc_info.value)

    def test_dns(self):
        dns = EnvSource({
            "DNS_ADDRESS": "9.9.9.9",
            "DNS_KEEP_NAMESERVER": "on",
            "DOT": "off",
            "DOT_PROVIDERS": "Cloudflare, google",
        }).read_dns()
        assert dns.server_address == IPv4Address("9.9.9.9")
        assert dns.keep_nameserver is True
        assert dns.dot_enabled is False
        assert dns.dot_providers == ["cloudflare", "google"]

    def test_dns_retro_address(self):
        dns = EnvSource({"DNS_PLAINTEXT_ADDRESS": "8.8.8.8"}).read_dns()
        assert dns.server_address == IPv4Address("8.8.8.8")

    def test_dns_bad_address_names_retro_key(self):
        with pytest.raises(ParsingError) as exc_info:
            EnvSource({"DNS_PLAINTEXT_ADDRESS": "dns.example"}).read_dns()
        assert "DNS_PLAINTEXT_ADDRESS" in str(exc_info.value)


class TestRead:
    """Tests for reading every category at once."""

    def test_read_builds_settings(self):
        settings = EnvSource({"FIREWALL": "on", "PUID": "5", "HTTPPROXY": "on"}).read()
        assert settings.firewall.enabled is True
        assert settings.system.puid == 5
        assert settings.http_proxy.enabled is True
        assert not settings.is_resolved()
