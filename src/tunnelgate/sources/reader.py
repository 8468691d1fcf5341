"""
Settings resolution across all sources.
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Optional, Protocol, Union

import structlog

from ..privileges import PrivilegeContext, ProcessPrivileges
from ..settings import Settings
from .config_file import ConfigFileSource
from .env import EnvSource
from .secrets import DEFAULT_SECRETS_DIR, SecretsSource

logger = structlog.get_logger(__name__)


class Source(Protocol):
    """Anything producing a partial Settings fragment."""

    name: str

    def read(self) -> Settings:
        ...


class Reader:
    """
    Resolve settings from sources in precedence order.

    Sources are given lowest precedence first. Each fragment overrides
    what the previous ones set, then defaults fill the rest and the
    result is validated as a whole.
    """

    def __init__(
        self,
        sources: Sequence[Source],
        privileges: Optional[PrivilegeContext] = None,
    ):
        self._sources = list(sources)
        self._privileges = ProcessPrivileges() if privileges is None else privileges

    def read(self) -> Settings:
        """
        Read, merge, default and validate settings.

        Raises:
            ConfigurationError: On the first invalid source or value
        """
        settings = Settings()
        for source in self._sources:
            settings = settings.override_with(source.read())

        settings = settings.with_defaults()
        settings.validate_settings(self._privileges)
        logger.info("Settings resolved", sources=[source.name for source in self._sources])
        return settings


def default_sources(
    environ: Optional[Mapping[str, str]] = None,
    secrets_dir: Union[str, Path] = DEFAULT_SECRETS_DIR,
    config_file: Optional[Union[str, Path]] = None,
) -> list[Source]:
    """
    Sources in ascending precedence: file, environment, secret files.

    A settings file given here must exist.
    """
    sources: list[Source] = []
    if config_file is not None:
        sources.append(ConfigFileSource(config_file, required=True))
    sources.append(EnvSource(environ))
    sources.append(SecretsSource(environ, secrets_dir))
    return sources


def read_settings(
    environ: Optional[Mapping[str, str]] = None,
    secrets_dir: Union[str, Path] = DEFAULT_SECRETS_DIR,
    config_file: Optional[Union[str, Path]] = None,
    privileges: Optional[PrivilegeContext] = None,
) -> Settings:
    """
    Resolve settings from the default sources.

    Args:
        environ: Environment variables (defaults to os.environ)
        secrets_dir: Directory of secret files
        config_file: Optional YAML settings file
        privileges: Identity used to validate listening addresses

    Returns:
        Resolved and validated settings

    Raises:
        ConfigurationError: If any source or value is invalid
    """
    reader = Reader(default_sources(environ, secrets_dir, config_file), privileges)
    return reader.read()
