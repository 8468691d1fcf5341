"""
Reading secret values from files.
"""

from pathlib import Path
from typing import Optional, Union

import structlog

from ..errors import SecretFileError

logger = structlog.get_logger(__name__)


def read_from_file(path: Union[str, Path], source: Optional[str] = None) -> Optional[str]:
    """
    Read a file holding a single value.

    Args:
        path: File to read
        source: Name reported in errors

    Returns:
        The stripped content, or None if the file does not exist

    Raises:
        SecretFileError: If the file exists but cannot be read
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise SecretFileError(f"reading file {path}: {e}", path=str(path), source=source) from e

    logger.debug("Read secret file", path=str(path))
    return content.strip()
