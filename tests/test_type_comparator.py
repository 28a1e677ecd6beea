"""
Tests for the type comparator.

The comparison is structural: same alternatives, any order, with aliases
and nullable shorthands normalized on both sides.
"""

from typing import Optional

import pytest

from a3_contracts.descriptors import INTERSECTION, NAMED, UNION, TypeInfo, split_type
from a3_contracts.type_comparator import (
    actual_parts,
    compare_types,
    expand_nullable,
    match_type,
    resolve_alias,
)


class Base:
    pass


class Child(Base):
    pass


class TestAliases:
    """Alias resolution for scalar synonyms and self/parent."""

    @pytest.mark.parametrize("name,expected", [
        ("boolean", "bool"),
        ("Integer", "int"),
        ("double", "float"),
        ("string", "str"),
        ("null", "None"),
        ("NoneType", "None"),
        ("mixed", "Any"),
        ("Foo", "Foo"),
    ])
    def test_scalar_aliases(self, name, expected):
        assert resolve_alias(name, Child) == expected

    def test_self_and_static_resolve_to_target_class(self):
        assert resolve_alias("self", Child) == "Child"
        assert resolve_alias("static", Child()) == "Child"

    def test_parent_resolves_to_first_base(self):
        assert resolve_alias("parent", Child) == "Base"

    def test_parent_without_base_stays_literal(self):
        assert resolve_alias("parent", Base) == "parent"


def test_expand_nullable():
    assert expand_nullable("?int") == "int|null"
    assert expand_nullable("Optional[Foo]") == "Foo|null"
    assert expand_nullable("int|str") == "int|str"


def test_split_type_respects_brackets():
    assert split_type("dict[str, int | None] | None") == ["dict[str,int|None]", "None"]
    assert split_type("A & B", "&") == ["A", "B"]


def test_union_order_is_irrelevant():
    actual = TypeInfo(("int", "str"), UNION)
    assert match_type("str|int", actual, Base)
    assert match_type("int | str", actual, Base)
    assert not match_type("int", actual, Base)
    assert not match_type("int|str|float", actual, Base)


def test_question_mark_equals_explicit_null_union():
    nullable = TypeInfo(("int",), NAMED, allows_null=True)
    union = TypeInfo(("int", "None"), UNION)
    for expected in ("?int", "int|null", "int|None", "Optional[int]"):
        assert match_type(expected, nullable, Base)
        assert match_type(expected, union, Base)


def test_nullable_any_does_not_add_none():
    actual = TypeInfo(("Any",), NAMED, allows_null=True)
    assert actual_parts(actual) == ["Any"]
    assert match_type("mixed", actual, Base)


def test_intersection_uses_ampersand():
    actual = TypeInfo(("Sized", "Iterable"), INTERSECTION)
    assert match_type("Iterable&Sized", actual, Base)
    assert not match_type("Iterable|Sized", actual, Base)


def test_self_expected_against_declared_class():
    actual = TypeInfo(("Child",), NAMED)
    assert match_type("self", actual, Child)
    assert not match_type("self", actual, Base)


def test_compare_types_normalizes_both_sides():
    assert compare_types("Boolean|null", ["bool", "NoneType"], Base)


def test_optional_annotation_round_trip():
    from a3_contracts.descriptors import type_info_from_annotation
    info = type_info_from_annotation(Optional[Base])
    assert info.kind == UNION
    assert info.names == ("Base", "None")
    assert info.classes == (Base,)
    assert match_type("?Base", info, Child)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
