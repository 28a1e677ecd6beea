"""
Access modifiers for contract members.

Python has no declared visibility, so the reflection provider derives it from
naming conventions (see ``AccessModifier.from_name``).
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class AccessModifier(Enum):
    """Visibility of a constant, property or method."""
    PRIVATE = "private"      # __name (name-mangled)
    PROTECTED = "protected"  # _name
    PUBLIC = "public"        # everything else, dunders included

    @classmethod
    def resolve(cls, modifier: Union["AccessModifier", str]) -> "AccessModifier":
        """
        Resolve an access modifier from a string or return the instance as is.

        Strings are matched case-insensitively against the modifier values,
        so "Public", "PUBLIC" and "public" all resolve to PUBLIC.
        """
        if isinstance(modifier, cls):
            return modifier
        return cls(str(modifier).strip().lower())

    @classmethod
    def from_name(cls, name: str) -> "AccessModifier":
        """Derive the visibility implied by a Python member name."""
        if name.startswith("__") and name.endswith("__"):
            return cls.PUBLIC
        if name.startswith("__"):
            return cls.PRIVATE
        if name.startswith("_"):
            return cls.PROTECTED
        return cls.PUBLIC

    def __str__(self) -> str:
        return self.value
