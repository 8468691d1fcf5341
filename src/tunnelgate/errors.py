"""
Tunnelgate configuration errors.

Every error raised while reading, resolving or validating settings derives
from ConfigurationError so callers can abort startup on a single type.
"""

from typing import Any, Optional


class ConfigurationError(Exception):
    """Raised when configuration cannot be read, resolved or validated."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        value: Any = None,
    ):
        self.message = message
        self.source = source
        self.value = value
        super().__init__(f"{source}: {message}" if source else message)


class ParsingError(ConfigurationError):
    """Raised when a literal cannot be parsed into its typed value."""
    pass


class PortParsingError(ParsingError):
    """Raised when a port literal is not an integer."""
    pass


class PEMError(ParsingError):
    """Raised when PEM content has no valid encoded block."""
    pass


class RangeError(ConfigurationError):
    """Raised when a parsed value falls outside its permitted range."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        value: Any = None,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
    ):
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(message, source=source, value=value)


class PortValueError(RangeError):
    """Raised when a port number is outside 1-65535."""
    pass


class SecretFileError(ConfigurationError):
    """Raised when a secret file exists but cannot be read."""

    def __init__(self, message: str, path: str, source: Optional[str] = None):
        self.path = path
        super().__init__(message, source=source, value=path)


class SettingsValidationError(ConfigurationError):
    """Raised when a resolved settings value is semantically invalid."""

    def __init__(self, category: str, field: str, message: str, value: Any = None):
        self.category = category
        self.field = field
        super().__init__(message, source=f"{category} {field}", value=value)


class SettingsNotResolvedError(ConfigurationError):
    """Raised when reading a field that has not been resolved yet."""
    pass
