"""Terms bound to property members."""

from __future__ import annotations

from typing import Any

from ..descriptors import PROPERTY, MemberInfo
from ..enums import AccessModifier
from ..inspector import get_inspector
from ..type_comparator import match_type
from ..values import render_value, strictly_equal
from .base import (
    ExistsTerm,
    FlagTerm,
    HasTagTerm,
    HasTypeTerm,
    MemberTerm,
    SignatureTerm,
    VisibilityTerm,
    register_term,
)


@register_term
class PropertyExistsTerm(ExistsTerm):
    member_kind = PROPERTY


@register_term
class PropertyHasTagTerm(HasTagTerm):
    member_kind = PROPERTY


@register_term
class PropertyHasTypeTerm(HasTypeTerm):
    member_kind = PROPERTY


@register_term
class PropertyIsPublicTerm(VisibilityTerm):
    member_kind = PROPERTY
    expected = AccessModifier.PUBLIC


@register_term
class PropertyIsProtectedTerm(VisibilityTerm):
    member_kind = PROPERTY
    expected = AccessModifier.PROTECTED


@register_term
class PropertyIsPrivateTerm(VisibilityTerm):
    member_kind = PROPERTY
    expected = AccessModifier.PRIVATE


@register_term
class PropertyIsReadOnlyTerm(FlagTerm):
    member_kind = PROPERTY
    flag = "read_only"
    adjective = "read-only"


@register_term
class PropertyIsStaticTerm(FlagTerm):
    member_kind = PROPERTY
    flag = "static"
    adjective = "static"


@register_term
class PropertyMatchesSignatureTerm(SignatureTerm):
    """Visibility, static/read-only modifiers, type and declared default of a property."""
    member_kind = PROPERTY

    def matches(self, info: MemberInfo, target: Any) -> bool:
        blueprint = self.member

        if blueprint.access_modifier is not None and blueprint.access_modifier is not info.visibility:
            return False

        if blueprint.static is not None and blueprint.static != info.static:
            return False

        if blueprint.read_only is not None and blueprint.read_only != info.read_only:
            return False

        if blueprint.type is not None:
            if info.type is None or not match_type(blueprint.type, info.type, target):
                return False

        if blueprint.has_default_value():
            if not info.has_default or not strictly_equal(info.default, blueprint.default_value):
                return False

        return True


@register_term
class PropertyValueTerm(MemberTerm):
    """
    Held value of a property.

    On a class target only static properties have a knowable value; other
    properties pass. On an instance the field must be initialized and hold
    exactly the expected value.
    """
    member_kind = PROPERTY

    def evaluate(self, target: Any) -> bool:
        blueprint = self.member
        if not blueprint.has_value():
            return True

        if not self.exists(target):
            return blueprint.optional

        inspector = get_inspector()
        info = self.describe(target)

        if not inspector.is_instance(target) and not info.static:
            return True

        try:
            actual = inspector.read_value(target, blueprint.name)
        except AttributeError:
            # Uninitialized field or failing getter
            return False
        return strictly_equal(actual, blueprint.value)

    def error_message(self) -> str:
        expected = render_value(self.member.value)
        return f"{self.member.label} does not match the required value: {expected}"
