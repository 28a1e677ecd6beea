"""
Type comparator.

Reconciles a blueprint type expression ("int|str", "?Foo", "Self") with the
declared type of a target member. The comparison is structural equality of
the type algebra: both sides must list exactly the same alternatives, in
any order. No subtyping or widening is attempted.
"""

from __future__ import annotations

import re
from typing import Any, List, Sequence

from .descriptors import INTERSECTION, NAMED, TypeInfo, split_type
from .provider import resolve_class, target_name

_OPTIONAL_RE = re.compile(r"^\s*(?:typing\.)?Optional\[(.*)\]\s*$", re.S)

# Case-insensitive synonyms
ALIASES = {
    "boolean": "bool",
    "integer": "int",
    "double": "float",
    "string": "str",
    "null": "None",
    "none": "None",
    "nonetype": "None",
    "mixed": "Any",
    "any": "Any",
}


def _class_name(target: Any) -> str:
    cls = resolve_class(target)
    return cls.__name__ if cls is not None else target_name(target)


def _parent_name(target: Any) -> str:
    cls = resolve_class(target)
    if cls is None:
        return "parent"
    for base in cls.__bases__:
        if base is not object:
            return base.__name__
    return "parent"


def resolve_alias(name: str, target: Any) -> str:
    """Map one atomic type name to its canonical form for target."""
    lowered = name.lower()
    if lowered in ("self", "static"):
        return _class_name(target)
    if lowered == "parent":
        return _parent_name(target)
    return ALIASES.get(lowered, name)


def expand_nullable(expression: str) -> str:
    """Rewrite ``?Foo`` and ``Optional[Foo]`` as ``Foo|null``."""
    expression = expression.strip()
    if expression.startswith("?"):
        return f"{expression[1:]}|null"
    match = _OPTIONAL_RE.match(expression)
    if match:
        return f"{match.group(1)}|null"
    return expression


def compare_types(blueprint: str, actual_parts: Sequence[str], target: Any, separator: str = "|") -> bool:
    """Compare a blueprint expression with the atoms of an actual type."""
    expected = sorted(resolve_alias(part, target) for part in split_type(blueprint, separator))
    actual = sorted(resolve_alias("".join(part.split()), target) for part in actual_parts)
    return expected == actual


def actual_parts(actual: TypeInfo) -> List[str]:
    """Atoms of a declared type, with the implicit None of a nullable named type."""
    parts = list(actual.names)
    if actual.kind == NAMED and actual.allows_null and parts and parts[0] not in ("Any", "mixed"):
        parts.append("None")
    return parts


def match_type(expected: str, actual: TypeInfo, target: Any) -> bool:
    """
    Whether the declared type matches the expected expression.

    target is the class or instance being validated, used to resolve
    self/static/parent.
    """
    separator = "&" if actual.kind == INTERSECTION else "|"
    return compare_types(expand_nullable(expected), actual_parts(actual), target, separator)
