"""
Tests for the Inspector: descriptor caching, default-inspector configuration
and the enforce/complies conveniences.
"""

import gc
import threading
import weakref

import pytest

from a3_contracts import Contract, ContractViolationError, complies, configure, enforce
from a3_contracts.descriptors import METHOD, PROPERTY, MemberInfo, TypeInfo
from a3_contracts.inspector import Inspector, get_inspector, set_inspector
from a3_contracts.provider import MetadataProvider


class Gadget:
    def run(self) -> int:
        return 1


class Tight:
    __slots__ = ("a",)

    def __init__(self):
        self.a = 1


class SchemaProvider(MetadataProvider):
    """Provider over hand-registered shapes, keyed by target name."""

    def __init__(self, schemas):
        self.schemas = schemas

    def _members(self, target):
        return self.schemas.get(target, [])

    def has_member(self, target, kind, name):
        return self.describe_member(target, kind, name) is not None

    def describe_member(self, target, kind, name):
        for info in self._members(target):
            if info.kind == kind and info.name == name:
                return info
        return None

    def list_members(self, target):
        return list(self._members(target))

    def is_initialized(self, target, name):
        return False

    def read_value(self, target, name):
        raise AttributeError(name)


class TestDescriptorCache:
    """Descriptors are memoized per target identity."""

    def test_class_descriptors_are_cached(self):
        inspector = Inspector()
        first = inspector.describe_member(Gadget, METHOD, "run")
        assert inspector.describe_member(Gadget, METHOD, "run") is first
        assert inspector.describe_member("test_inspector_missing_mod:Gadget", METHOD, "run") is None

    def test_cache_can_be_disabled(self):
        inspector = Inspector(cache=False)
        first = inspector.describe_member(Gadget, METHOD, "run")
        second = inspector.describe_member(Gadget, METHOD, "run")
        assert first == second
        assert first is not second

    def test_clear_cache(self):
        inspector = Inspector()
        first = inspector.describe_member(Gadget, METHOD, "run")
        inspector.clear_cache()
        assert inspector.describe_member(Gadget, METHOD, "run") is not first

    def test_missing_members_are_not_cached(self):
        inspector = Inspector()
        assert inspector.describe_member(Gadget, METHOD, "stop") is None
        Gadget.stop = lambda self: None
        try:
            assert inspector.describe_member(Gadget, METHOD, "stop") is not None
        finally:
            del Gadget.stop

    def test_instance_entries_are_evicted_with_the_instance(self):
        inspector = Inspector()
        gadget = Gadget()
        key = id(gadget)
        inspector.describe_member(gadget, METHOD, "run")
        assert key in inspector._object_cache

        del gadget
        gc.collect()
        assert key not in inspector._object_cache

    def test_class_entries_do_not_keep_the_class_alive(self):
        """Cached descriptors refer to their class weakly, so it can be collected."""
        inspector = Inspector()

        class Transient:
            pass

        def copy(self):
            return self

        copy.__annotations__ = {"return": Transient}
        Transient.copy = copy

        info = inspector.describe_class(Transient)
        member = inspector.describe_member(Transient, METHOD, "copy")
        same_class = info.cls is Transient
        return_classes = member.type.classes
        assert same_class
        assert return_classes == (Transient,)

        ref = weakref.ref(Transient)
        del Transient, copy, return_classes
        gc.collect()
        assert ref() is None
        assert len(inspector._class_cache) == 0
        assert info.cls is None
        assert member.type.classes == ()

    def test_objects_without_weakref_support_are_not_cached(self):
        inspector = Inspector()
        tight = Tight()
        info = inspector.describe_member(tight, PROPERTY, "a")
        assert info is not None
        assert inspector._object_cache == {}

    def test_concurrent_readers_see_one_descriptor(self):
        inspector = Inspector()
        results = []
        lock = threading.Lock()

        def worker():
            info = inspector.describe_member(Gadget, METHOD, "run")
            with lock:
                results.append(info)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(info is results[0] for info in results)


class TestDefaultInspector:
    def test_environment_disables_cache(self, monkeypatch):
        monkeypatch.setenv("A3_CONTRACTS_CACHE", "0")
        set_inspector(None)
        assert get_inspector().cache_enabled is False

    def test_environment_default_enables_cache(self, monkeypatch):
        monkeypatch.delenv("A3_CONTRACTS_CACHE", raising=False)
        set_inspector(None)
        assert get_inspector().cache_enabled is True

    def test_configure_installs_new_inspector(self):
        before = get_inspector()
        after = configure(cache=False)
        assert after is get_inspector()
        assert after is not before
        assert after.cache_enabled is False

    def test_set_inspector_returns_previous(self):
        current = get_inspector()
        replacement = Inspector()
        assert set_inspector(replacement) is current
        assert get_inspector() is replacement


class TestEnforcement:
    def test_enforce_and_complies(self):
        contract = Contract("Runner")
        contract.for_method("run").expect(type="int")

        enforce(Gadget, contract)
        assert complies(Gadget(), contract)

        contract.for_method("stop")
        assert not complies(Gadget, contract)
        with pytest.raises(ContractViolationError):
            enforce(Gadget, contract)

    def test_contracts_evaluate_through_a_custom_provider(self):
        configure(provider=SchemaProvider({
            "Square": [MemberInfo(kind=METHOD, name="area", owner="Square", type=TypeInfo(("float",)))],
            "Blob": [MemberInfo(kind=METHOD, name="area", owner="Blob", type=TypeInfo(("int",)))],
        }))
        contract = Contract("Shape")
        contract.for_method("area").expect(type="float")

        assert contract.is_satisfied_by("Square")
        assert not contract.is_satisfied_by("Blob")
        assert not contract.is_satisfied_by("Nothing")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
