"""
Member blueprints.

A member describes one constant, property or method a target is expected
to declare. It owns an ordered list of terms; the concrete member classes
attach their signature term on construction.
"""

from __future__ import annotations

import copy
import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .enums import AccessModifier
from .errors import DefinitionError
from .inspector import get_inspector
from .terms.base import Term, create_term
from .values import copy_expectation

if TYPE_CHECKING:
    from .contract import Contract


def _as_args(args: Any) -> Tuple[Any, ...]:
    if isinstance(args, (list, tuple)):
        return tuple(args)
    return (args,)


class Member(ABC):
    """
    Base blueprint.

    WAIVABLE maps every waivable field to the value it is reset to.
    VALUE_FIELDS are expected values whose containers a clone copies. optional
    members may be absent from a target without failing it.
    """
    kind: ClassVar[str] = ""
    WAIVABLE: ClassVar[Dict[str, Any]] = {"type": None}
    VALUE_FIELDS: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, name: str, type: Optional[str] = None):
        self.name = name
        self.type = type
        self.access_modifier: Optional[AccessModifier] = None
        self.optional = False
        self._terms: List[Term] = []
        self._contract_ref: Optional["weakref.ReferenceType[Contract]"] = None

    # -------------------------------------------------------------------------
    # Contract binding
    # -------------------------------------------------------------------------

    @property
    def contract(self) -> Optional["Contract"]:
        return self._contract_ref() if self._contract_ref is not None else None

    def bind_to_contract(self, contract: "Contract") -> "Member":
        self._contract_ref = weakref.ref(contract)
        return self

    def clone(self) -> "Member":
        """
        Independent copy: same expectations (expected-value containers copied),
        cloned terms rebound to the copy, no contract binding.
        """
        clone = copy.copy(self)
        clone._contract_ref = None
        clone._terms = []
        for field_name in self.VALUE_FIELDS:
            setattr(clone, field_name, copy_expectation(getattr(self, field_name)))
        self._clone_into(clone)
        for term in self._terms:
            clone._terms.append(term.clone().set_context(clone))
        return clone

    def _clone_into(self, clone: "Member") -> None:
        """Hook for subclasses holding mutable expectations."""

    # -------------------------------------------------------------------------
    # Terms
    # -------------------------------------------------------------------------

    @property
    def terms(self) -> Tuple[Term, ...]:
        return tuple(self._terms)

    def add_term(
        self,
        term: Union[Term, type, str],
        constructor_args: Any = (),
        evaluator_args: Any = (),
    ) -> "Member":
        """
        Attach a term.

        term is a Term instance, a Term subclass, or the name of a
        registered term; the latter two are instantiated with
        constructor_args.
        """
        if not isinstance(term, Term):
            if not isinstance(term, (str, type)):
                raise DefinitionError(f"{term!r} is not a valid contract term.")
            term = create_term(term, *_as_args(constructor_args))
        term.set_args(_as_args(evaluator_args))
        term.set_context(self)
        self._terms.append(term)
        return self

    def add_terms(self, terms: Iterable[Any]) -> "Member":
        """Attach several terms; tuple/list entries are unpacked into add_term arguments."""
        for term in terms:
            if isinstance(term, (list, tuple)):
                self.add_term(*term)
            else:
                self.add_term(term)
        return self

    def clear_terms(self) -> "Member":
        self._terms = []
        return self

    def remove_term(self, term: Term) -> "Member":
        self._terms = [item for item in self._terms if item is not term]
        return self

    def set_terms(self, terms: Iterable[Any]) -> "Member":
        self._terms = []
        return self.add_terms(terms)

    # -------------------------------------------------------------------------
    # Expectations
    # -------------------------------------------------------------------------

    def expect_type(self, type: Optional[str]) -> "Member":
        self.type = type
        return self

    def expect_access_modifier(self, access_modifier: Union[AccessModifier, str]) -> "Member":
        self.access_modifier = AccessModifier.resolve(access_modifier)
        return self

    def require(self, required: bool = True) -> "Member":
        """Mark the member as required (True) or optional (False)."""
        self.optional = not required
        return self

    def is_optional(self) -> bool:
        return self.optional

    def waive(self, *field_names: str) -> "Member":
        """Stop checking the named characteristics, permanently for this blueprint."""
        for field_name in field_names:
            if field_name not in self.WAIVABLE:
                raise DefinitionError(
                    f"{self.kind.capitalize()} characteristic '{field_name}' cannot be waived."
                )
            setattr(self, field_name, copy.copy(self.WAIVABLE[field_name]))
        return self

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def exists(self, target: Any) -> bool:
        return get_inspector().has_member(target, self.kind, self.name)

    @property
    def label(self) -> str:
        return f"{self.kind.capitalize()} '{self.name}'"

    @property
    @abstractmethod
    def signature(self) -> str:
        """Canonical text form of the expected shape, for diagnostics."""

    def __str__(self) -> str:
        return self.signature

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.signature!r}>"


def _resolve_modifier(access_modifier: Union[AccessModifier, str, None]) -> Optional[AccessModifier]:
    return AccessModifier.resolve(access_modifier) if access_modifier is not None else None


def _type_suffix(type: Optional[str]) -> str:
    return f": {type}" if type else ""


def join_parts(parts: Sequence[str]) -> str:
    return " ".join(part for part in parts if part)
