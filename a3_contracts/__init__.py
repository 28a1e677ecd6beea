"""
a3-contracts: structural contracts for Python classes and objects.

Declare the constants, properties and methods a target must provide, then
check classes or live instances against the declaration:

    from a3_contracts import Contract

    shape = Contract("Shape")
    shape.for_method("area").expect(type="float", static=False)
    shape.for_constant("SIDES").expect(value=4)

    shape.is_satisfied_by(Square)     # bool
    shape.validate(Square())          # raises ContractViolationError
"""

from .enums import AccessModifier
from .errors import ContractViolationError, DefinitionError
from .values import UNSET, strictly_equal
from .descriptors import Tag, tag, TypeInfo, ParameterInfo, MemberInfo, ClassInfo, TagInfo
from .provider import MetadataProvider, ReflectionProvider
from .inspector import Inspector, get_inspector, set_inspector, configure, enforce, complies
from .type_comparator import match_type, compare_types, resolve_alias
from .parameter import Parameter
from .member import Member
from .constant import Constant
from .property import Property
from .method import Method
from .contract import Contract
from .terms import Term, register_term, get_term_factory, create_term, list_terms

__version__ = "0.1.0"

__all__ = [
    "AccessModifier",
    "ContractViolationError",
    "DefinitionError",
    "UNSET",
    "strictly_equal",
    "Tag",
    "tag",
    "TypeInfo",
    "ParameterInfo",
    "MemberInfo",
    "ClassInfo",
    "TagInfo",
    "MetadataProvider",
    "ReflectionProvider",
    "Inspector",
    "get_inspector",
    "set_inspector",
    "configure",
    "enforce",
    "complies",
    "match_type",
    "compare_types",
    "resolve_alias",
    "Parameter",
    "Member",
    "Constant",
    "Property",
    "Method",
    "Contract",
    "Term",
    "register_term",
    "get_term_factory",
    "create_term",
    "list_terms",
]
