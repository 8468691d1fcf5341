"""
Extraction of the base64 body from PEM encoded content.
"""

import base64
import binascii
import re
from typing import Optional

from ..errors import PEMError

_BLOCK = re.compile(
    r"-----BEGIN ([A-Z0-9 ]+)-----\s*(.*?)\s*-----END \1-----",
    re.DOTALL,
)


def extract_pem(data: str, source: Optional[str] = None) -> str:
    """
    Return the base64 body of the first PEM block in data.

    Encapsulated header lines such as "Proc-Type: ..." are dropped and
    all whitespace is removed from the body.

    Raises:
        PEMError: If there is no PEM block or its body is not base64
    """
    match = _BLOCK.search(data)
    if match is None:
        raise PEMError("no PEM block found", source=source)

    lines = match.group(2).splitlines()
    if any(":" in line for line in lines):
        # Headers end at the first blank line
        blank = next((i for i, line in enumerate(lines) if not line.strip()), None)
        if blank is not None:
            lines = lines[blank + 1:]
        else:
            lines = [line for line in lines if ":" not in line]
    body = "".join("".join(lines).split())

    try:
        base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError):
        raise PEMError(f"{match.group(1)} block is not valid base64", source=source) from None
    if not body:
        raise PEMError(f"{match.group(1)} block is empty", source=source)
    return body
