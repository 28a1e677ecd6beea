"""Terms bound to method members."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence

from ..descriptors import METHOD, MemberInfo, ParameterInfo
from ..enums import AccessModifier
from ..inspector import get_inspector
from ..type_comparator import match_type
from ..values import strictly_equal
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

if TYPE_CHECKING:
    from ..contract import Contract
    from ..parameter import Parameter


@register_term
class MethodExistsTerm(ExistsTerm):
    member_kind = METHOD


@register_term
class MethodHasTagTerm(HasTagTerm):
    member_kind = METHOD


@register_term
class MethodHasTypeTerm(HasTypeTerm):
    member_kind = METHOD
    noun = "return type"


@register_term
class MethodIsPublicTerm(VisibilityTerm):
    member_kind = METHOD
    expected = AccessModifier.PUBLIC


@register_term
class MethodIsProtectedTerm(VisibilityTerm):
    member_kind = METHOD
    expected = AccessModifier.PROTECTED


@register_term
class MethodIsPrivateTerm(VisibilityTerm):
    member_kind = METHOD
    expected = AccessModifier.PRIVATE


@register_term
class MethodIsAbstractTerm(FlagTerm):
    member_kind = METHOD
    flag = "abstract"
    adjective = "abstract"


@register_term
class MethodIsFinalTerm(FlagTerm):
    member_kind = METHOD
    flag = "final"
    adjective = "final"


@register_term
class MethodIsStaticTerm(FlagTerm):
    member_kind = METHOD
    flag = "static"
    adjective = "static"


def parameter_matches(expected: "Parameter", actual: ParameterInfo, target: Any) -> bool:
    """Compare one expected parameter with the declared one at the same position."""
    if expected.exact_name_required and actual.name != expected.name:
        return False

    if expected.type is not None:
        if actual.type is None or not match_type(expected.type, actual.type, target):
            return False

    if expected.passed_by_reference is not None and expected.passed_by_reference != actual.passed_by_reference:
        return False
    if expected.variadic is not None and expected.variadic != actual.variadic:
        return False
    if expected.keyword_only is not None and expected.keyword_only != actual.keyword_only:
        return False

    if expected.optional and not actual.optional:
        return False
    if expected.has_default_value():
        if not actual.has_default or not strictly_equal(actual.default, expected.default_value):
            return False

    return True


def parameters_match(expected: Sequence["Parameter"], actual: Sequence[ParameterInfo], target: Any) -> bool:
    """The expected parameters must be a positional prefix of the declared ones."""
    if len(actual) < len(expected):
        return False
    return all(parameter_matches(e, a, target) for e, a in zip(expected, actual))


@register_term
class MethodMatchesSignatureTerm(SignatureTerm):
    """Visibility, modifiers, return type and parameters of a method."""
    member_kind = METHOD

    def matches(self, info: MemberInfo, target: Any) -> bool:
        blueprint = self.member

        if blueprint.access_modifier is not None and blueprint.access_modifier is not info.visibility:
            return False

        for flag in ("static", "final", "abstract"):
            wanted = getattr(blueprint, flag)
            if wanted is not None and wanted != getattr(info, flag):
                return False

        if blueprint.type is not None:
            if info.type is None or not match_type(blueprint.type, info.type, target):
                return False

        return parameters_match(blueprint.parameters, info.parameters, target)

    def error_message(self) -> str:
        if not self._found:
            return f"{self.member.label} does not exist."
        return f"{self.member.label} does not match the defined signature: {self.member.signature}"


@register_term
class MethodReturnValueTerm(MemberTerm):
    """
    Return type of a method, optionally validated against a nested contract.

    Every class named in the declared return type must comply with the
    nested contract; builtin and unresolved names are skipped.
    """
    member_kind = METHOD

    def __init__(self, type: Optional[str] = None, contract: Optional["Contract"] = None):
        super().__init__()
        self.type = type
        self.contract = contract

    def evaluate(self, target: Any) -> bool:
        if not self.exists(target):
            return False
        if self.type is None and self.contract is None:
            return True

        info = self.describe(target)
        if info.type is None:
            return self.type is None

        if self.type is not None and not match_type(self.type, info.type, target):
            return False

        if self.contract is not None:
            inspector = get_inspector()
            for cls in info.type.classes:
                if cls.__module__ == "builtins":
                    continue
                if not inspector.complies(cls, self.contract):
                    return False

        return True

    def error_message(self) -> str:
        message = f"{self.member.label} return type does not satisfy the contract"
        if self.type:
            message += f" (expected: {self.type})"
        return message + "."
