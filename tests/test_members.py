"""
Tests for member blueprints: signature rendering, waivers, cloning and term
management.
"""

import gc

import pytest

from a3_contracts import (
    UNSET,
    AccessModifier,
    Constant,
    DefinitionError,
    Method,
    Parameter,
    Property,
)
from a3_contracts.terms import (
    ConstantMatchesSignatureTerm,
    MethodExistsTerm,
    MethodHasTagTerm,
    MethodMatchesSignatureTerm,
    PropertyMatchesSignatureTerm,
    PropertyValueTerm,
)


class TestSignatures:
    """Canonical text forms used in diagnostics."""

    def test_constant(self):
        assert Constant("SIDES", "public", "int", 4).signature == "public const SIDES: int = 4"
        assert Constant("SIDES").signature == "const SIDES"
        assert Constant("NAME", value=None).signature == "const NAME = None"

    def test_property(self):
        prop = Property("count", type="int", default_value=0, access_modifier="protected",
                        static=True, read_only=True)
        assert prop.signature == "protected static readonly count: int = 0"
        assert Property("name").signature == "public name"

    def test_method(self):
        method = Method("area", type="float", access_modifier="public", static=True, final=True, abstract=True)
        method.expect_parameter("x", type="int")
        method.expect_parameter("args", variadic=True)
        method.expect_parameter("y", type="str", default_value="a")
        assert method.signature == "abstract final public static def area(x: int, *args, y: str = 'a') -> float"
        assert str(method) == method.signature

    def test_method_without_expectations(self):
        assert Method("run").signature == "def run()"


class TestConstruction:
    def test_signature_terms_are_attached(self):
        assert [type(t) for t in Constant("A").terms] == [ConstantMatchesSignatureTerm]
        assert [type(t) for t in Property("a").terms] == [PropertyMatchesSignatureTerm, PropertyValueTerm]
        assert [type(t) for t in Method("a").terms] == [MethodMatchesSignatureTerm]

    def test_access_modifier_strings_are_resolved(self):
        assert Method("a", access_modifier="Protected").access_modifier is AccessModifier.PROTECTED
        assert Property("a").expect_access_modifier("PRIVATE").access_modifier is AccessModifier.PRIVATE

    def test_unknown_access_modifier(self):
        with pytest.raises(ValueError):
            Method("a", access_modifier="internal")

    def test_fluent_api_returns_member(self):
        method = Method("a")
        assert method.expect(type="int") is method
        assert method.expect_static() is method
        assert method.require(False) is method
        assert method.waive("static") is method
        assert method.add_term(MethodExistsTerm) is method

    def test_expect_accepts_parameters(self):
        method = Method("a").expect(parameters=["x", Parameter("y", type="int")])
        assert [p.name for p in method.parameters] == ["x", "y"]
        assert method.return_type is None


class TestWaive:
    def test_constant_fields(self):
        constant = Constant("A", "public", "int", 1)
        constant.waive("type", "value", "access_modifier")
        assert constant.type is None
        assert constant.value is UNSET
        assert constant.access_modifier is None

    def test_property_fields(self):
        prop = Property("a", "int", 1, 2, "public", True, True)
        prop.waive("type", "value", "default_value", "access_modifier", "static", "read_only")
        assert (prop.type, prop.access_modifier, prop.static, prop.read_only) == (None, None, None, None)
        assert prop.value is UNSET and prop.default_value is UNSET

    def test_method_fields(self):
        method = Method("a", "int", "public", True, True, True, parameters=[Parameter("x")])
        method.waive("static", "final", "abstract", "access_modifier", "parameters", "type")
        assert (method.static, method.final, method.abstract) == (None, None, None)
        assert method.access_modifier is None and method.type is None
        assert method.parameters == []

    def test_waived_parameters_list_is_fresh(self):
        first = Method("a").waive("parameters")
        second = Method("b").waive("parameters")
        first.expect_parameter("x")
        assert second.parameters == []

    def test_unknown_field(self):
        with pytest.raises(DefinitionError):
            Constant("A").waive("static")
        with pytest.raises(DefinitionError):
            Method("a").waive("name")


class TestClone:
    def test_clone_rebinds_terms(self):
        method = Method("area", type="float")
        method.expect_parameter("x", type="int")
        copy = method.clone()

        assert copy is not method
        assert all(term.member is copy for term in copy.terms)
        assert all(term.member is method for term in method.terms)
        assert copy.parameters[0] is not method.parameters[0]

        copy.parameters[0].expect_type("str")
        copy.expect_return_type("int")
        assert method.parameters[0].type == "int"
        assert method.type == "float"

    def test_clone_is_unbound(self):
        from a3_contracts import Contract
        contract = Contract("C")
        member = contract.for_method("a")
        assert member.contract is contract
        assert member.clone().contract is None

    def test_clone_copies_expected_containers(self):
        """Mutating a clone's expected values leaves the original untouched."""
        constant = Constant("LIMITS", value=[1, {"max": [2]}])
        prop = Property("tags", value=["a"], default_value={"k": ["v"]})

        constant_copy = constant.clone()
        constant_copy.value[1]["max"].append(3)
        prop_copy = prop.clone()
        prop_copy.value.append("b")
        prop_copy.default_value["k"].append("w")

        assert constant.value == [1, {"max": [2]}]
        assert prop.value == ["a"]
        assert prop.default_value == {"k": ["v"]}

    def test_clone_keeps_leaf_objects(self):
        marker = object()
        prop = Property("owner", value=[marker])
        copy = prop.clone()
        assert copy.value is not prop.value
        assert copy.value[0] is marker
        assert Constant("NONE").clone().value is UNSET

    def test_attached_blueprint_does_not_share_values(self):
        from a3_contracts import Contract
        blueprint = Property("tags", value=["a"])
        attached = Contract("C").for_property(blueprint)
        attached.value.append("b")
        assert blueprint.value == ["a"]

    def test_method_clone_copies_parameter_defaults(self):
        method = Method("fill").expect_parameter("items", default_value=[0])
        copy = method.clone()
        copy.parameters[0].default_value.append(1)
        assert method.parameters[0].default_value == [0]


class TestExists:
    def test_exists_checks_kind_and_name(self):
        class Door:
            WIDTH = 2
            height: int = 3

            def open(self):
                pass

        assert Method("open").exists(Door)
        assert Constant("WIDTH").exists(Door)
        assert Property("height").exists(Door())
        assert not Property("open").exists(Door)
        assert not Method("close").exists(Door)

    def test_exists_term_follows_the_member(self):
        method = Method("open").add_term(MethodExistsTerm)
        term = method.terms[-1]
        assert isinstance(term, MethodExistsTerm)
        assert term.evaluate(type("Door", (), {"open": lambda self: None}))
        assert not term.evaluate(type("Wall", (), {}))


class TestTermManagement:
    def test_add_term_by_name_with_arguments(self):
        method = Method("render").add_term("MethodHasTagTerm", ["Route"], ["/users"])
        term = method.terms[-1]
        assert isinstance(term, MethodHasTagTerm)
        assert term.tag == "Route"
        assert term.args == ("/users",)
        assert term.member is method

    def test_add_terms_unpacks_tuples(self):
        method = Method("render").add_terms([MethodExistsTerm, ("MethodHasTagTerm", ["Route"])])
        assert [type(t).__name__ for t in method.terms[1:]] == ["MethodExistsTerm", "MethodHasTagTerm"]

    def test_remove_and_clear_terms(self):
        method = Method("a")
        signature = method.terms[0]
        method.remove_term(signature)
        assert method.terms == ()
        method.add_term(MethodExistsTerm).clear_terms()
        assert method.terms == ()

    def test_set_terms_replaces(self):
        method = Method("a").set_terms([MethodExistsTerm])
        assert [type(t) for t in method.terms] == [MethodExistsTerm]

    def test_invalid_term_references(self):
        with pytest.raises(DefinitionError):
            Method("a").add_term(42)
        with pytest.raises(DefinitionError):
            Method("a").add_term("NoSuchTerm")
        with pytest.raises(DefinitionError):
            Method("a").add_term(dict)

    def test_term_kind_must_match_member(self):
        with pytest.raises(DefinitionError):
            Method("a").add_term("ConstantExistsTerm")

    def test_terms_do_not_keep_members_alive(self):
        term = Method("a").terms[0]
        gc.collect()
        with pytest.raises(DefinitionError):
            term.member


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
