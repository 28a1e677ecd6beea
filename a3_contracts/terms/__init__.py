"""
Contract terms.

Importing this package registers every built-in term, so they can be
referenced by class name through the registry.
"""

from .base import (
    Term,
    MemberTerm,
    ExistsTerm,
    VisibilityTerm,
    FlagTerm,
    HasTypeTerm,
    HasTagTerm,
    SignatureTerm,
    register_term,
    get_term_factory,
    create_term,
    list_terms,
)
from .constant import (
    ConstantExistsTerm,
    ConstantHasTagTerm,
    ConstantHasTypeTerm,
    ConstantIsPrivateTerm,
    ConstantIsProtectedTerm,
    ConstantIsPublicTerm,
    ConstantMatchesSignatureTerm,
)
from .property import (
    PropertyExistsTerm,
    PropertyHasTagTerm,
    PropertyHasTypeTerm,
    PropertyIsPrivateTerm,
    PropertyIsProtectedTerm,
    PropertyIsPublicTerm,
    PropertyIsReadOnlyTerm,
    PropertyIsStaticTerm,
    PropertyMatchesSignatureTerm,
    PropertyValueTerm,
)
from .method import (
    MethodExistsTerm,
    MethodHasTagTerm,
    MethodHasTypeTerm,
    MethodIsAbstractTerm,
    MethodIsFinalTerm,
    MethodIsPrivateTerm,
    MethodIsProtectedTerm,
    MethodIsPublicTerm,
    MethodIsStaticTerm,
    MethodMatchesSignatureTerm,
    MethodReturnValueTerm,
    parameter_matches,
    parameters_match,
)

__all__ = [
    "Term",
    "MemberTerm",
    "ExistsTerm",
    "VisibilityTerm",
    "FlagTerm",
    "HasTypeTerm",
    "HasTagTerm",
    "SignatureTerm",
    "register_term",
    "get_term_factory",
    "create_term",
    "list_terms",
    "ConstantExistsTerm",
    "ConstantHasTagTerm",
    "ConstantHasTypeTerm",
    "ConstantIsPrivateTerm",
    "ConstantIsProtectedTerm",
    "ConstantIsPublicTerm",
    "ConstantMatchesSignatureTerm",
    "PropertyExistsTerm",
    "PropertyHasTagTerm",
    "PropertyHasTypeTerm",
    "PropertyIsPrivateTerm",
    "PropertyIsProtectedTerm",
    "PropertyIsPublicTerm",
    "PropertyIsReadOnlyTerm",
    "PropertyIsStaticTerm",
    "PropertyMatchesSignatureTerm",
    "PropertyValueTerm",
    "MethodExistsTerm",
    "MethodHasTagTerm",
    "MethodHasTypeTerm",
    "MethodIsAbstractTerm",
    "MethodIsFinalTerm",
    "MethodIsPrivateTerm",
    "MethodIsProtectedTerm",
    "MethodIsPublicTerm",
    "MethodIsStaticTerm",
    "MethodMatchesSignatureTerm",
    "MethodReturnValueTerm",
    "parameter_matches",
    "parameters_match",
]
