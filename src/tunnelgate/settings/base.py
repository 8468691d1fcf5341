"""
Base class for settings categories.

A settings object is Partial while any field is None and Resolved once
every field holds a value. The combining operations below are generic
over the declared fields, so categories only declare fields, defaults,
validation and rendering.
"""

import copy
from abc import abstractmethod
from typing import Any, Callable, ClassVar, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from ..errors import SettingsNotResolvedError
from ..privileges import PrivilegeContext
from ..tree import Node
from .helpers import merge_with, override_with

S = TypeVar("S", bound="SettingsModel")


class SettingsModel(BaseModel):
    """
    Immutable settings record whose fields are all optional until resolved.

    Categories subclass it and provide defaults() and to_node().
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    title: ClassVar[str] = "Settings:"

    @classmethod
    @abstractmethod
    def defaults(cls: type[S]) -> S:
        """Return a fully populated instance holding the category defaults."""

    def merge_with(self: S, other: S) -> S:
        """Fill only the absent fields from other."""
        return self._combine(other, merge_with)

    def override_with(self: S, other: S) -> S:
        """Replace every field that other has set."""
        return self._combine(other, override_with)

    def with_defaults(self: S) -> S:
        """Fill every absent field with its default."""
        return self.merge_with(type(self).defaults())

    def deep_copy(self: S) -> S:
        return self.model_copy(deep=True)

    def is_resolved(self) -> bool:
        return not self.missing_fields()

    def missing_fields(self) -> list[str]:
        """Dotted names of the fields still absent."""
        missing = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if value is None:
                missing.append(name)
            elif isinstance(value, SettingsModel):
                missing.extend(f"{name}.{sub}" for sub in value.missing_fields())
        return missing

    def require(self, name: str) -> Any:
        """
        Read a field that must be resolved.

        Raises:
            SettingsNotResolvedError: If the field is absent
        """
        value = getattr(self, name)
        if value is None:
            raise SettingsNotResolvedError(
                f"field {name} is not resolved", source=self.title.rstrip(":")
            )
        return value

    def validate_settings(self, privileges: Optional[PrivilegeContext] = None) -> None:
        """
        Check the resolved values against their domain constraints.

        Raises:
            SettingsNotResolvedError: If any field is still absent
            SettingsValidationError: If a value is invalid
        """
        missing = self.missing_fields()
        if missing:
            raise SettingsNotResolvedError(
                "fields are not resolved: " + ", ".join(missing),
                source=self.title.rstrip(":"),
            )
        self._validate(privileges)

    def _validate(self, privileges: Optional[PrivilegeContext]) -> None:
        pass

    @abstractmethod
    def to_node(self) -> Node:
        """Build the redacted summary tree of this category."""

    def __str__(self) -> str:
        return str(self.to_node())

    def _combine(
        self: S,
        other: S,
        combine: Callable[[Any, Any], Any],
    ) -> S:
        if type(other) is not type(self):
            raise TypeError(
                f"cannot combine {type(self).__name__} with {type(other).__name__}"
            )

        updates = {}
        for name in type(self).model_fields:
            mine = getattr(self, name)
            theirs = getattr(other, name)
            if isinstance(mine, SettingsModel) and isinstance(theirs, SettingsModel):
                updates[name] = mine._combine(theirs, combine)
            else:
                # Copies keep the result independent from both inputs
                updates[name] = copy.deepcopy(combine(mine, theirs))
        return self.model_copy(update=updates)
