"""Terms bound to constant members."""

from __future__ import annotations

from typing import Any

from ..descriptors import CONSTANT, MemberInfo
from ..enums import AccessModifier
from ..type_comparator import match_type
from ..values import strictly_equal
from .base import ExistsTerm, HasTagTerm, HasTypeTerm, SignatureTerm, VisibilityTerm, register_term


@register_term
class ConstantExistsTerm(ExistsTerm):
    member_kind = CONSTANT


@register_term
class ConstantHasTagTerm(HasTagTerm):
    member_kind = CONSTANT


@register_term
class ConstantHasTypeTerm(HasTypeTerm):
    member_kind = CONSTANT


@register_term
class ConstantIsPublicTerm(VisibilityTerm):
    member_kind = CONSTANT
    expected = AccessModifier.PUBLIC


@register_term
class ConstantIsProtectedTerm(VisibilityTerm):
    member_kind = CONSTANT
    expected = AccessModifier.PROTECTED


@register_term
class ConstantIsPrivateTerm(VisibilityTerm):
    member_kind = CONSTANT
    expected = AccessModifier.PRIVATE


@register_term
class ConstantMatchesSignatureTerm(SignatureTerm):
    """Visibility, type and value of a constant."""
    member_kind = CONSTANT

    def matches(self, info: MemberInfo, target: Any) -> bool:
        blueprint = self.member

        if blueprint.access_modifier is not None and blueprint.access_modifier is not info.visibility:
            return False

        if blueprint.type is not None:
            if info.type is None or not match_type(blueprint.type, info.type, target):
                return False

        if blueprint.has_value():
            if not info.has_default or not strictly_equal(info.default, blueprint.value):
                return False

        return True
