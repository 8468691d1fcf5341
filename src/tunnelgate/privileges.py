"""
Privilege context consulted when validating listening addresses.

Validation asks this collaborator for the effective user ID instead of
calling os.getuid() directly, so checks can run under any identity.
"""

import os
from dataclasses import dataclass
from typing import Protocol


class PrivilegeContext(Protocol):
    """Anything able to report the effective user ID."""

    def uid(self) -> int:
        ...


class ProcessPrivileges:
    """Privileges of the running process."""

    def uid(self) -> int:
        # Platforms without getuid() have no privileged port restriction
        getuid = getattr(os, "getuid", None)
        return getuid() if getuid is not None else 0


@dataclass(frozen=True)
class StaticPrivileges:
    """Fixed user ID, for callers that already know it."""
    user_id: int

    def uid(self) -> int:
        return self.user_id

