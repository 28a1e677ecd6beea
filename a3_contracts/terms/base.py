"""
Term base class and term registry.

A term is one evaluable predicate bound to one member. Terms are looked up
by name through a registry of factories, so contracts can reference terms
by identifier (``member.add_term("MethodHasTagTerm", ["Route"])``) without
importing them.
"""

from __future__ import annotations

import copy
import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, List, Optional, Sequence, Tuple

from ..descriptors import MemberInfo, TagInfo
from ..enums import AccessModifier
from ..errors import DefinitionError
from ..inspector import get_inspector
from ..values import strictly_equal

if TYPE_CHECKING:
    from ..member import Member


class Term(ABC):
    """
    A single predicate over a target, bound to its member.

    member_kind restricts which members the term can be bound to (None
    accepts any member). args holds the evaluator arguments given at
    registration time.
    """
    member_kind: ClassVar[Optional[str]] = None

    def __init__(self) -> None:
        self.args: Tuple[Any, ...] = ()
        self._member_ref: Optional["weakref.ReferenceType[Member]"] = None

    @property
    def member(self) -> "Member":
        member = self._member_ref() if self._member_ref is not None else None
        if member is None:
            raise DefinitionError(f"{type(self).__name__} is not bound to a member.")
        return member

    def set_args(self, args: Sequence[Any]) -> "Term":
        self.args = tuple(args)
        return self

    def set_context(self, member: "Member") -> "Term":
        """Bind the term to its member (non-owning)."""
        if self.member_kind is not None and member.kind != self.member_kind:
            raise DefinitionError(
                f"{type(self).__name__} applies to {self.member_kind} members, not to {member.kind} '{member.name}'."
            )
        self._member_ref = weakref.ref(member)
        return self

    def clone(self) -> "Term":
        """Shallow copy with the same arguments and no member binding."""
        clone = copy.copy(self)
        clone._member_ref = None
        return clone

    @abstractmethod
    def evaluate(self, target: Any) -> bool:
        """Whether target satisfies this term. Never raises for a mismatch."""

    @abstractmethod
    def error_message(self) -> str:
        """Diagnostic for the last failed evaluation."""

    def __repr__(self) -> str:
        member = self._member_ref() if self._member_ref is not None else None
        bound = f" {member.kind} '{member.name}'" if member is not None else ""
        return f"<{type(self).__name__}{bound}>"


# =============================================================================
# REGISTRY
# =============================================================================

_term_registry: Dict[str, Callable[..., Term]] = {}


def register_term(factory=None, *, name: Optional[str] = None):
    """
    Register a term factory under an identifier.

    Usable as a plain call or as a class decorator. Classes must subclass
    Term; other callables are checked when they produce a term.
    """
    def _register(obj):
        if isinstance(obj, type):
            if not issubclass(obj, Term):
                raise DefinitionError(f"Class '{obj.__name__}' is not a valid contract term.")
        elif not callable(obj):
            raise DefinitionError(f"Term factory {obj!r} is not callable.")
        key = name or getattr(obj, "__name__", None)
        if not key:
            raise DefinitionError(f"Term factory {obj!r} needs an explicit name.")
        _term_registry[key] = obj
        return obj

    if factory is None:
        return _register
    return _register(factory)


def get_term_factory(name: str) -> Callable[..., Term]:
    try:
        return _term_registry[name]
    except KeyError:
        raise DefinitionError(f"Contract term '{name}' does not exist.") from None


def create_term(reference, *args: Any) -> Term:
    """Instantiate a term from a registered name or a Term subclass."""
    if isinstance(reference, str):
        factory = get_term_factory(reference)
    elif isinstance(reference, type):
        if not issubclass(reference, Term):
            raise DefinitionError(f"Class '{reference.__name__}' is not a valid contract term.")
        factory = reference
    else:
        raise DefinitionError(f"{reference!r} is not a contract term reference.")
    term = factory(*args)
    if not isinstance(term, Term):
        raise DefinitionError(f"Factory '{reference}' did not produce a contract term.")
    return term


def list_terms() -> List[str]:
    """Identifiers of every registered term."""
    return list(_term_registry.keys())


# =============================================================================
# SHARED TERM FAMILIES
# =============================================================================

class MemberTerm(Term):
    """Common lookups for terms that inspect the bound member on a target."""

    def exists(self, target: Any) -> bool:
        return self.member.exists(target)

    def describe(self, target: Any) -> Optional[MemberInfo]:
        return get_inspector().describe_member(target, self.member.kind, self.member.name)


class ExistsTerm(MemberTerm):
    def evaluate(self, target: Any) -> bool:
        return self.exists(target)

    def error_message(self) -> str:
        return f"{self.member.label} does not exist."


class VisibilityTerm(MemberTerm):
    """Passes when the member exists with the expected visibility."""
    expected: ClassVar[AccessModifier] = AccessModifier.PUBLIC

    def evaluate(self, target: Any) -> bool:
        info = self.describe(target)
        return info is not None and info.visibility is self.expected

    def error_message(self) -> str:
        return f"{self.member.label} is not {self.expected.value}."


class FlagTerm(MemberTerm):
    """Passes when the member exists and a boolean descriptor flag is set."""
    flag: ClassVar[str] = ""
    adjective: ClassVar[str] = ""

    def evaluate(self, target: Any) -> bool:
        info = self.describe(target)
        return info is not None and bool(getattr(info, self.flag))

    def error_message(self) -> str:
        return f"{self.member.label} is not {self.adjective}."


class HasTypeTerm(MemberTerm):
    """
    Checks the declared type as written.

    Without a type, any declared type passes. With one, the canonical
    string of the declared type must equal it exactly.
    """
    noun: ClassVar[str] = "type"

    def __init__(self, type: Optional[str] = None):
        super().__init__()
        self.type = type or ""

    def evaluate(self, target: Any) -> bool:
        info = self.describe(target)
        if info is None or info.type is None:
            return False
        if self.type == "":
            return True
        return str(info.type) == self.type

    def error_message(self) -> str:
        return f"{self.member.label} does not have the required {self.noun} '{self.type}'."


class HasTagTerm(MemberTerm):
    """
    Checks for a tag by name.

    With an evaluator argument, one of the matching tags must carry that
    value among its arguments, or have arguments equal to it.
    """

    def __init__(self, tag: str):
        super().__init__()
        self.tag = tag

    @staticmethod
    def _carries(found: TagInfo, value: Any) -> bool:
        if any(strictly_equal(arg, value) for arg in found.args):
            return True
        return isinstance(value, (list, tuple)) and strictly_equal(tuple(value), found.args)

    def evaluate(self, target: Any) -> bool:
        info = self.describe(target)
        if info is None:
            return False
        tags = info.tags_named(self.tag)
        if not tags:
            return False
        value = self.args[0] if self.args else None
        if value is None:
            return True
        return any(self._carries(found, value) for found in tags)

    def error_message(self) -> str:
        message = f"{self.member.label} does not have the required tag '{self.tag}'"
        if self.args and self.args[0] is not None:
            return f"{message} with value {self.args[0]!r}."
        return f"{message}."


class SignatureTerm(MemberTerm):
    """
    Composite structural check of one member.

    Subclasses implement matches(); this class handles existence and the
    optional waiver, and picks the error message.
    """

    def __init__(self) -> None:
        super().__init__()
        self._found = True

    def evaluate(self, target: Any) -> bool:
        info = self.describe(target) if self.exists(target) else None
        if info is None:
            self._found = False
            return self.member.optional
        self._found = True
        return self.matches(info, target)

    @abstractmethod
    def matches(self, info: MemberInfo, target: Any) -> bool:
        """Compare the blueprint with the declared member."""

    def error_message(self) -> str:
        if not self._found:
            return f"{self.member.label} does not exist."
        return f"{self.member.label} does not match the required signature: {self.member.signature}"
