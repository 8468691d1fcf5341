"""Tests for the command line interface."""

import logging
import os

import pytest
import structlog
from typer.testing import CliRunner

from tunnelgate import __version__
from tunnelgate.cli import app
from tunnelgate.core import get_app_settings

runner = CliRunner()

GATEWAY_PREFIXES = (
    "FIREWALL", "EXTRA_SUBNETS", "HTTPPROXY", "PROXY", "TINYPROXY",
    "OPENVPN", "DNS_", "DOT", "TZ", "PUID", "PGID", "UID", "GID", "TUNNELGATE_",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Run each command without gateway variables from the host."""
    for key in list(os.environ):
        if key.startswith(GATEWAY_PREFIXES):
            monkeypatch.delenv(key)
    get_app_settings.cache_clear()
    yield
    get_app_settings.cache_clear()
    structlog.reset_defaults()
    logging.basicConfig(force=True)


def invoke(*args, env=None, secrets_dir):
    return runner.invoke(app, [*args, "--secrets-dir", str(secrets_dir)], env=env)


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestShow:
    """Tests for the show command."""

    def test_plain_summary(self, tmp_path):
        result = invoke("show", "--plain", secrets_dir=tmp_path)
        assert result.exit_code == 0
        assert "Settings summary:" in result.output
        assert "HTTP proxy settings:" in result.output
        assert "DNS settings:" in result.output

    def test_secrets_are_not_printed(self, tmp_path):
        (tmp_path / "httpproxy_password").write_text("s3cr3t-pa55")
        env = {"HTTPPROXY": "on", "OPENVPN_PASSWORD": "vpn-s3cr3t"}
        result = invoke("show", "--plain", env=env, secrets_dir=tmp_path)
        assert result.exit_code == 0
        assert "s3cr3t-pa55" not in result.output
        assert "vpn-s3cr3t" not in result.output
        assert "[redacted]" in result.output

    def test_rich_summary(self, tmp_path):
        result = invoke("show", secrets_dir=tmp_path)
        assert result.exit_code == 0
        assert "Tunnelgate" in result.output
        assert "Firewall settings:" in result.output

    def test_config_file(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("system:\n  puid: 4242\n")
        result = invoke("show", "--plain", "--config", str(config), secrets_dir=tmp_path)
        assert result.exit_code == 0
        assert "Process UID: 4242" in result.output

    def test_missing_config_file(self, tmp_path):
        config = tmp_path / "typo.yaml"
        result = invoke("show", "--plain", "--config", str(config), secrets_dir=tmp_path)
        assert result.exit_code == 1
        assert "Settings summary:" not in result.output

    def test_invalid_settings(self, tmp_path):
        result = invoke("show", env={"FIREWALL_INPUT_PORTS": "ssh"}, secrets_dir=tmp_path)
        assert result.exit_code == 1
        assert "FIREWALL_INPUT_PORTS" in result.output
        assert "Settings summary:" not in result.output


class TestCheck:
    """Tests for the check command."""

    def test_valid(self, tmp_path):
        result = invoke("check", secrets_dir=tmp_path)
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_invalid(self, tmp_path):
        result = invoke("check", env={"PUID": "99999999999"}, secrets_dir=tmp_path)
        assert result.exit_code == 1
        assert "4294967295" in result.output


class TestDNSTarget:
    """Tests for the dns-target command."""

    def test_provider_fallback(self, tmp_path):
        result = invoke("dns-target", env={"DOT_PROVIDERS": "quad9"}, secrets_dir=tmp_path)
        assert result.exit_code == 0
        assert "9.9.9.9" in result.output
        assert "provider fallback" in result.output

    def test_configured(self, tmp_path):
        result = invoke("dns-target", env={"DNS_ADDRESS": "8.8.4.4"}, secrets_dir=tmp_path)
        assert result.exit_code == 0
        assert "8.8.4.4" in result.output
        assert "configured" in result.output
