"""
System identity settings.
"""

from typing import Annotated, ClassVar, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field

from ..errors import SettingsValidationError
from ..privileges import PrivilegeContext
from ..tree import Node
from .base import SettingsModel
from .helpers import display

MAX_ID = 2**32 - 1

ID = Annotated[int, Field(ge=0, le=MAX_ID)]


class SystemSettings(SettingsModel):
    """Identity the service processes run as."""

    title: ClassVar[str] = "System settings:"

    puid: Optional[ID] = Field(
        default=None,
        description="Process user ID"
    )
    pgid: Optional[ID] = Field(
        default=None,
        description="Process group ID"
    )
    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone name"
    )

    @classmethod
    def defaults(cls) -> "SystemSettings":
        return cls(puid=1000, pgid=1000, timezone="")

    def _validate(self, privileges: Optional[PrivilegeContext]) -> None:
        if not self.timezone:
            return
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise SettingsValidationError(
                "system", "timezone",
                f"timezone is not valid: {self.timezone}",
                value=self.timezone,
            ) from None

    def to_node(self) -> Node:
        node = Node(self.title)
        node.appendf("Process UID: %s", display(self.puid))
        node.appendf("Process GID: %s", display(self.pgid))
        if self.timezone:
            node.appendf("Timezone: %s", self.timezone)
        return node
