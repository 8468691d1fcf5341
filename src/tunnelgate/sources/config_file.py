"""
YAML settings file source.

The document maps category names to their fields, for example:

    firewall:
      enabled: true
      outbound_subnets: [10.0.0.0/8]
    http_proxy:
      listening_address: ":8888"
      read_timeout: 3s
"""

from pathlib import Path
from typing import Union

import structlog
import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from ..settings import Settings

logger = structlog.get_logger(__name__)


class ConfigFileSource:
    """Settings source backed by an optional YAML file."""

    name = "settings file"

    def __init__(self, path: Union[str, Path], required: bool = False):
        """
        Initialize the source.

        Args:
            path: YAML file to read
            required: Fail when the file does not exist
        """
        self.path = Path(path)
        self.required = required

    def read(self) -> Settings:
        """
        Read the file, returning empty settings when an optional file does not exist.

        Raises:
            ConfigurationError: If a required file is missing, or the file is
                unreadable or holds invalid values
        """
        source = f"file {self.path}"
        if not self.path.exists():
            if self.required:
                raise ConfigurationError("settings file does not exist", source=source)
            logger.debug("Settings file not found", file=str(self.path))
            return Settings()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"cannot load settings: {e}", source=source) from e

        if data is None:
            return Settings()
        if not isinstance(data, dict):
            raise ConfigurationError("top level must be a mapping of categories", source=source)

        try:
            settings = Settings.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(_describe(e), source=source) from None

        logger.debug("Read settings source", source=self.name, file=str(self.path))
        return settings


def _describe(error: ValidationError) -> str:
    # Input values are left out, they may be secrets
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)
