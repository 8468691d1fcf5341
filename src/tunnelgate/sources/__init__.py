"""
Tunnelgate Sources

Readers turning environment variables, secret files and settings files
into partial settings, and the reader resolving them together.
"""

from .config_file import ConfigFileSource
from .env import EnvSource
from .files import read_from_file
from .pem import extract_pem
from .reader import Reader, Source, default_sources, read_settings
from .secrets import DEFAULT_SECRETS_DIR, SecretsSource

__all__ = [
    "ConfigFileSource",
    "EnvSource",
    "SecretsSource",
    "DEFAULT_SECRETS_DIR",
    "Reader",
    "Source",
    "default_sources",
    "read_settings",
    "read_from_file",
    "extract_pem",
]
