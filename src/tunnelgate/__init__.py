"""
Tunnelgate - Settings resolution for a VPN gateway

Resolves gateway settings from:
- Environment variables, including retired variable names
- Secret files, plain or PEM encoded
- An optional YAML settings file

and renders a summary with every secret redacted.
"""

__version__ = "1.0.0"

from .errors import (
    ConfigurationError,
    ParsingError,
    RangeError,
    SecretFileError,
    SettingsNotResolvedError,
    SettingsValidationError,
)
from .privileges import ProcessPrivileges, StaticPrivileges
from .settings import Settings
from .sources import Reader, read_settings

__all__ = [
    "Settings",
    "Reader",
    "read_settings",
    "ProcessPrivileges",
    "StaticPrivileges",
    "ConfigurationError",
    "ParsingError",
    "RangeError",
    "SecretFileError",
    "SettingsNotResolvedError",
    "SettingsValidationError",
]
