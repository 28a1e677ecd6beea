"""
Contract: a named, ordered set of member blueprints.

    shape = Contract.create("Shape", lambda c: (
        c.for_method("area").expect(type="float", static=False),
        c.for_constant("SIDES").expect(value=4),
    ))
    shape.is_satisfied_by(Square)
    shape.validate(Square(), all_errors=True)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, Union

from .constant import Constant
from .descriptors import CONSTANT, METHOD, PROPERTY, MemberInfo
from .errors import ContractViolationError, DefinitionError
from .inspector import get_inspector
from .member import Member
from .method import Method
from .parameter import Parameter
from .property import Property
from .provider import target_name
from .terms.base import Term

logger = logging.getLogger(__name__)


class Contract:
    """
    Named collection of members a target must satisfy.

    Members are attached as clones, so one blueprint can seed several
    contracts. Each attached member keeps a weak reference back to the
    contract.
    """

    def __init__(self, name: str, members: Sequence[Member] = ()):
        self.name = name
        self._members: List[Member] = []
        for member in members:
            self._attach(member)

    def __str__(self) -> str:
        return f"Contract '{self.name}' with {len(self._members)} members"

    def __repr__(self) -> str:
        return f"<Contract {self.name!r} members={len(self._members)}>"

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Member]:
        return iter(self._members)

    @classmethod
    def create(cls, name: str, callback: Callable[["Contract"], Any]) -> "Contract":
        """Build a contract by handing an empty one to callback."""
        contract = cls(name)
        callback(contract)
        return contract

    # -------------------------------------------------------------------------
    # Members
    # -------------------------------------------------------------------------

    def _attach(self, member: Member) -> Member:
        if not isinstance(member, Member):
            raise DefinitionError(f"{member!r} is not a contract member.")
        attached = member.clone()
        attached.bind_to_contract(self)
        self._members.append(attached)
        return attached

    def _for(self, blueprint_class: type, name_or_blueprint: Union[str, Member]) -> Member:
        if isinstance(name_or_blueprint, str):
            member = blueprint_class(name_or_blueprint)
            member.bind_to_contract(self)
            self._members.append(member)
            return member
        if not isinstance(name_or_blueprint, blueprint_class):
            raise DefinitionError(
                f"Expected a {blueprint_class.__name__} blueprint, got {type(name_or_blueprint).__name__}."
            )
        return self._attach(name_or_blueprint)

    def for_constant(self, name_or_blueprint: Union[str, Constant]) -> Constant:
        return self._for(Constant, name_or_blueprint)

    def for_property(self, name_or_blueprint: Union[str, Property]) -> Property:
        return self._for(Property, name_or_blueprint)

    def for_method(self, name_or_blueprint: Union[str, Method]) -> Method:
        return self._for(Method, name_or_blueprint)

    @property
    def members(self) -> Tuple[Member, ...]:
        return tuple(self._members)

    @property
    def terms(self) -> List[Term]:
        """Every term, in member order then registration order."""
        return [term for member in self._members for term in member.terms]

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def is_satisfied_by(self, target: Any) -> bool:
        for term in self.terms:
            if not term.evaluate(target):
                logger.debug(f"{target_name(target)} fails {term!r} of contract '{self.name}'")
                return False
        return True

    def validate(self, target: Any, all_errors: bool = False) -> None:
        """
        Raise ContractViolationError if target does not satisfy the contract.

        By default evaluation stops at the first failing term; with
        all_errors every failing term contributes one line to the message.
        """
        errors = []
        for term in self.terms:
            if term.evaluate(target):
                continue
            errors.append(term.error_message())
            if not all_errors:
                break

        if not errors:
            logger.debug(f"{target_name(target)} satisfies contract '{self.name}'")
            return

        header = f"Target '{target_name(target)}' violates contract '{self.name}':"
        if all_errors:
            message = "\n".join([header] + errors)
        else:
            message = f"{header} {errors[0]}"
        logger.debug(f"{len(errors)} violation(s) of contract '{self.name}' by {target_name(target)}")
        raise ContractViolationError(self, message, errors)

    # -------------------------------------------------------------------------
    # Synthesis
    # -------------------------------------------------------------------------

    @classmethod
    def from_interface(cls, interface: Any, name: Optional[str] = None) -> "Contract":
        """
        Contract requiring every member declared by interface.

        interface is a class or an import path. Constants expect their
        declared value, properties their type and default, methods their
        return type and parameter shape. Parameter names, abstract, final and
        read-only are not required, so concrete implementations of an ABC or
        Protocol satisfy the result.
        """
        inspector = get_inspector()
        info = inspector.describe_class(interface)
        resolved = info.cls if info is not None else None
        if resolved is None:
            raise DefinitionError(f"Interface '{target_name(interface)}' cannot be resolved.")

        contract = cls(name or info.name)
        for member in inspector.list_members(resolved):
            if member.kind == CONSTANT:
                _constant_from(contract, member)
            elif member.kind == PROPERTY:
                _property_from(contract, member)
            elif member.kind == METHOD:
                _method_from(contract, member)
        logger.debug(f"Synthesized {contract} from {info.name}")
        return contract


def _type_expression(info: MemberInfo) -> Optional[str]:
    return info.type.expression if info.type is not None else None


def _constant_from(contract: Contract, info: MemberInfo) -> None:
    contract.for_constant(info.name).expect(
        access_modifier=info.visibility,
        type=_type_expression(info),
        value=info.default,
    )


def _property_from(contract: Contract, info: MemberInfo) -> None:
    prop = contract.for_property(info.name).expect(
        type=_type_expression(info),
        access_modifier=info.visibility,
        static=info.static,
    )
    if info.has_default:
        prop.expect_default_value(info.default)


def _method_from(contract: Contract, info: MemberInfo) -> None:
    method = contract.for_method(info.name).expect(
        type=_type_expression(info),
        access_modifier=info.visibility,
        static=info.static,
    )
    for param in info.parameters:
        method.expect_parameter(Parameter(
            param.name,
            type=param.type.expression if param.type is not None else None,
            optional=param.optional,
            variadic=param.variadic,
            keyword_only=param.keyword_only,
        ))
        if param.has_default:
            method.parameters[-1].expect_default_value(param.default)


