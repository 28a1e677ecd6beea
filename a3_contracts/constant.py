"""Constant blueprint."""

from __future__ import annotations

from typing import Any, Optional, Union

from .descriptors import CONSTANT
from .enums import AccessModifier
from .member import Member, _resolve_modifier, _type_suffix, join_parts
from .terms.constant import ConstantMatchesSignatureTerm
from .values import UNSET, render_value


class Constant(Member):
    """
    Expected class constant: an UPPER_CASE or Final class attribute.

    value is UNSET unless an exact value is expected; None is a valid
    expectation of its own.
    """
    kind = CONSTANT
    WAIVABLE = {"type": None, "value": UNSET, "access_modifier": None}
    VALUE_FIELDS = ("value",)

    def __init__(
        self,
        name: str,
        access_modifier: Union[AccessModifier, str, None] = None,
        type: Optional[str] = None,
        value: Any = UNSET,
        optional: bool = False,
    ):
        super().__init__(name, type)
        self.access_modifier = _resolve_modifier(access_modifier)
        self.value = value
        self.optional = optional
        self.add_term(ConstantMatchesSignatureTerm())

    def expect(
        self,
        access_modifier: Union[AccessModifier, str, None] = None,
        type: Optional[str] = None,
        value: Any = UNSET,
        optional: bool = False,
    ) -> "Constant":
        if type is not None:
            self.type = type
        if value is not UNSET:
            self.value = value
        if access_modifier is not None:
            self.access_modifier = AccessModifier.resolve(access_modifier)
        self.optional = optional
        return self

    def expect_value(self, value: Any) -> "Constant":
        self.value = value
        return self

    def has_value(self) -> bool:
        return self.value is not UNSET

    @property
    def signature(self) -> str:
        modifier = self.access_modifier.value if self.access_modifier else ""
        text = f"{join_parts([modifier, 'const'])} {self.name}{_type_suffix(self.type)}"
        if self.has_value():
            text += f" = {render_value(self.value)}"
        return text
