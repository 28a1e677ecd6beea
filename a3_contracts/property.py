"""Property blueprint."""

from __future__ import annotations

from typing import Any, Optional, Union

from .descriptors import PROPERTY
from .enums import AccessModifier
from .member import Member, _resolve_modifier, _type_suffix, join_parts
from .terms.property import PropertyMatchesSignatureTerm, PropertyValueTerm
from .values import UNSET, render_value


class Property(Member):
    """
    Expected field, class variable or property object.

    value is the live value expected on an instance (or the stored value of
    a static property on a class); default_value is the declared class-level
    default. static and read_only are tri-state: None means "not checked".
    """
    kind = PROPERTY
    WAIVABLE = {
        "type": None,
        "value": UNSET,
        "default_value": UNSET,
        "access_modifier": None,
        "static": None,
        "read_only": None,
    }
    VALUE_FIELDS = ("value", "default_value")

    def __init__(
        self,
        name: str,
        type: Optional[str] = None,
        value: Any = UNSET,
        default_value: Any = UNSET,
        access_modifier: Union[AccessModifier, str, None] = None,
        static: Optional[bool] = None,
        read_only: Optional[bool] = None,
        optional: bool = False,
    ):
        super().__init__(name, type)
        self.value = value
        self.default_value = default_value
        self.access_modifier = _resolve_modifier(access_modifier)
        self.static = static
        self.read_only = read_only
        self.optional = optional
        self.add_term(PropertyMatchesSignatureTerm())
        self.add_term(PropertyValueTerm())

    def expect(
        self,
        type: Optional[str] = None,
        value: Any = UNSET,
        default_value: Any = UNSET,
        access_modifier: Union[AccessModifier, str, None] = None,
        static: Optional[bool] = None,
        read_only: Optional[bool] = None,
        optional: bool = False,
    ) -> "Property":
        if type is not None:
            self.type = type
        if value is not UNSET:
            self.value = value
        if default_value is not UNSET:
            self.default_value = default_value
        if access_modifier is not None:
            self.access_modifier = AccessModifier.resolve(access_modifier)
        if static is not None:
            self.static = static
        if read_only is not None:
            self.read_only = read_only
        self.optional = optional
        return self

    def expect_value(self, value: Any) -> "Property":
        self.value = value
        return self

    def expect_default_value(self, default_value: Any) -> "Property":
        self.default_value = default_value
        return self

    def expect_static(self, static: bool = True) -> "Property":
        self.static = static
        return self

    def expect_read_only(self, read_only: bool = True) -> "Property":
        self.read_only = read_only
        return self

    def has_value(self) -> bool:
        return self.value is not UNSET

    def has_default_value(self) -> bool:
        return self.default_value is not UNSET

    @property
    def signature(self) -> str:
        parts = [self.access_modifier.value if self.access_modifier else "public"]
        if self.static is True:
            parts.append("static")
        if self.read_only is True:
            parts.append("readonly")
        text = f"{join_parts(parts)} {self.name}{_type_suffix(self.type)}"
        if self.has_default_value():
            text += f" = {render_value(self.default_value)}"
        return text
