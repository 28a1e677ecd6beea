"""Tests for the Parameter blueprint."""

import pytest

from a3_contracts import UNSET, DefinitionError, Parameter


def test_defaults_expect_nothing():
    param = Parameter("x")
    assert param.type is None
    assert param.optional is False
    assert param.default_value is UNSET
    assert not param.has_default_value()
    assert param.passed_by_reference is None
    assert param.variadic is None
    assert param.keyword_only is None
    assert param.exact_name_required is False


def test_none_is_a_real_default_expectation():
    param = Parameter("x", default_value=None)
    assert param.has_default_value()
    assert param.signature == "x = None"


def test_expect_leaves_unspecified_fields_alone():
    param = Parameter("x", type="int", variadic=False)
    param.expect(default_value=3)
    assert param.type == "int"
    assert param.variadic is False
    assert param.default_value == 3


def test_require_toggles_optional():
    param = Parameter("x")
    assert param.require(False).optional is True
    assert param.require().optional is False


class TestWaive:
    def test_waive_resets_to_no_expectation(self):
        param = Parameter("x", type="int", optional=True, default_value=1, variadic=True,
                          keyword_only=True, exact_name_required=True)
        param.waive("type", "optional", "default_value", "variadic", "keyword_only", "exact_name_required")
        assert param.type is None
        assert param.optional is False
        assert param.default_value is UNSET
        assert param.variadic is None
        assert param.keyword_only is None
        assert param.exact_name_required is False

    def test_name_cannot_be_waived(self):
        with pytest.raises(DefinitionError):
            Parameter("x").waive("name")


def test_clone_is_independent():
    param = Parameter("x", type="int")
    copy = param.clone()
    copy.expect_type("str")
    assert param.type == "int"
    assert copy.type == "str"


def test_clone_copies_default_value():
    param = Parameter("items", default_value={"ids": [1]})
    copy = param.clone()
    copy.default_value["ids"].append(2)
    assert param.default_value == {"ids": [1]}


@pytest.mark.parametrize("param,expected", [
    (Parameter("x"), "x"),
    (Parameter("x", type="int"), "x: int"),
    (Parameter("args", variadic=True), "*args"),
    (Parameter("out", type="list", passed_by_reference=True), "&out: list"),
    (Parameter("y", type="str", default_value="a"), "y: str = 'a'"),
])
def test_signature(param, expected):
    assert param.signature == expected
    assert str(param) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
