"""
Firewall settings.
"""

from ipaddress import IPv4Network, IPv6Network
from typing import Annotated, Any, ClassVar, Optional, Union

from pydantic import Field, field_validator

from ..errors import SettingsValidationError
from ..privileges import PrivilegeContext
from ..tree import Node
from .base import SettingsModel
from .helpers import bool_to_yes_no, display, parse_prefix

Port = Annotated[int, Field(ge=1, le=65535)]
Subnet = Union[IPv4Network, IPv6Network]


class FirewallSettings(SettingsModel):
    """Settings of the firewall protecting the tunnel."""

    title: ClassVar[str] = "Firewall settings:"

    vpn_input_ports: Optional[list[Port]] = Field(
        default=None,
        description="Ports allowed in through the VPN interface"
    )
    input_ports: Optional[list[Port]] = Field(
        default=None,
        description="Ports allowed in on the default interface"
    )
    outbound_subnets: Optional[list[Subnet]] = Field(
        default=None,
        description="Subnets reachable outside the tunnel"
    )
    enabled: Optional[bool] = Field(
        default=None,
        description="Enforce firewall rules"
    )
    debug: Optional[bool] = Field(
        default=None,
        description="Log every firewall command"
    )

    @field_validator("outbound_subnets", mode="before")
    @classmethod
    def parse_subnet_text(cls, v: Any) -> Any:
        """Read subnets written as text the same way as environment variables."""
        if isinstance(v, list):
            return [parse_prefix(item) if isinstance(item, str) else item for item in v]
        return v

    @classmethod
    def defaults(cls) -> "FirewallSettings":
        return cls(
            vpn_input_ports=[],
            input_ports=[],
            outbound_subnets=[],
            enabled=True,
            debug=False,
        )

    def _validate(self, privileges: Optional[PrivilegeContext]) -> None:
        for subnet in self.outbound_subnets:
            if subnet.network_address.is_unspecified:
                raise SettingsValidationError(
                    "firewall", "outbound_subnets",
                    f"outbound subnet has an unspecified address: {subnet}",
                    value=subnet,
                )

    def to_node(self) -> Node:
        node = Node(self.title)
        node.appendf("Enabled: %s", bool_to_yes_no(self.enabled))
        if not self.enabled:
            return node

        node.appendf("Debug mode: %s", bool_to_yes_no(self.debug))
        _append_list(node, "VPN input ports", self.vpn_input_ports)
        _append_list(node, "Input ports", self.input_ports)
        _append_list(node, "Outbound subnets", self.outbound_subnets)
        return node


def _append_list(node: Node, label: str, values: Optional[list]) -> None:
    if values is None:
        node.appendf("%s: %s", label, display(values))
        return
    if not values:
        node.appendf("%s: none", label)
        return
    child = node.appendf("%s:", label)
    for value in values:
        child.append(str(value))
