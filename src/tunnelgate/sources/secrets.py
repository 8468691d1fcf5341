"""
Secret files source.

Secrets are mounted as files, by default under /run/secrets. The path of
each secret can be moved with its <NAME>_SECRETFILE environment variable.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

import structlog

from ..errors import SecretFileError
from ..settings import HTTPProxySettings, Settings, VPNSettings
from .files import read_from_file
from .pem import extract_pem

logger = structlog.get_logger(__name__)

DEFAULT_SECRETS_DIR = Path("/run/secrets")


class SecretsSource:
    """Settings source backed by secret files."""

    name = "secret files"

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        secrets_dir: Union[str, Path] = DEFAULT_SECRETS_DIR,
    ):
        """
        Initialize the source.

        Args:
            environ: Variables holding secret path overrides (defaults to os.environ)
            secrets_dir: Directory holding secrets at their default paths
        """
        self._environ = os.environ if environ is None else environ
        self._secrets_dir = Path(secrets_dir)

    def read(self) -> Settings:
        """
        Read every secret file present.

        Raises:
            ConfigurationError: If a secret cannot be read or decoded
        """
        settings = Settings(
            vpn=self.read_vpn(),
            http_proxy=self.read_http_proxy(),
        )
        logger.debug("Read settings source", source=self.name)
        return settings

    def read_http_proxy(self) -> HTTPProxySettings:
        return HTTPProxySettings(
            user=self.read_secret("HTTPPROXY_USER_SECRETFILE", "httpproxy_user"),
            password=self.read_secret("HTTPPROXY_PASSWORD_SECRETFILE", "httpproxy_password"),
        )

    def read_vpn(self) -> VPNSettings:
        return VPNSettings(
            user=self.read_secret("OPENVPN_USER_SECRETFILE", "openvpn_user"),
            password=self.read_secret("OPENVPN_PASSWORD_SECRETFILE", "openvpn_password"),
            client_certificate=self.read_pem_secret(
                "OPENVPN_CLIENTCRT_SECRETFILE", "openvpn_clientcrt"
            ),
            client_key=self.read_pem_secret(
                "OPENVPN_CLIENTKEY_SECRETFILE", "openvpn_clientkey"
            ),
        )

    def read_secret(self, path_key: str, default_name: str) -> Optional[str]:
        """
        Read a plain secret.

        Args:
            path_key: Environment variable that may hold the secret path
            default_name: File name used under the secrets directory otherwise

        Returns:
            The secret, or None when no file exists at the default path

        Raises:
            SecretFileError: If an explicitly configured file is missing
                or any secret file cannot be read
        """
        path, explicit = self._secret_path(path_key, default_name)
        source = f"secret file {path}"

        value = read_from_file(path, source=source)
        if value is None and explicit:
            raise SecretFileError(
                f"secret file does not exist (set by {path_key})",
                path=str(path),
                source=source,
            )
        return value

    def read_pem_secret(self, path_key: str, default_name: str) -> Optional[str]:
        """Read a PEM secret and return the base64 body of its block."""
        pem_data = self.read_secret(path_key, default_name)
        if pem_data is None:
            return None
        path, _ = self._secret_path(path_key, default_name)
        return extract_pem(pem_data, source=f"secret file {path}")

    def _secret_path(self, path_key: str, default_name: str) -> tuple[Path, bool]:
        explicit = (self._environ.get(path_key) or "").strip()
        if explicit:
            return Path(explicit), True
        return self._secrets_dir / default_name, False
