"""
Inspector: cached access to a MetadataProvider, plus enforce/complies.

Descriptors are memoized per target identity:
- classes in a WeakKeyDictionary, so a cached class can still be collected;
- instances by id(), evicted through weakref.finalize when the instance
  dies; instances that cannot be weakly referenced are never cached.

Existence checks and live values (initialization, field values) always go
to the provider. Cache writes are insert-if-absent under a lock, and the
lock is never held while a descriptor is being built.

The module keeps one default inspector, used by every term. It can be
swapped with set_inspector()/configure(), and caching can be switched off
for it with A3_CONTRACTS_CACHE=0.
"""

from __future__ import annotations

import logging
import os
import threading
import weakref
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from .descriptors import ClassInfo, MemberInfo
from .errors import ContractViolationError
from .provider import MetadataProvider, ReflectionProvider, is_instance_target, resolve_class

if TYPE_CHECKING:
    from .contract import Contract

logger = logging.getLogger(__name__)

_CLASS_KEY = ("class", "")


class Inspector:
    """Enforces contracts against targets and caches their descriptors."""

    def __init__(self, provider: Optional[MetadataProvider] = None, cache: bool = True):
        self.provider = provider or ReflectionProvider()
        self.cache_enabled = cache
        self._lock = threading.Lock()
        self._class_cache: "weakref.WeakKeyDictionary[type, Dict[Tuple[str, str], Any]]" = weakref.WeakKeyDictionary()
        self._object_cache: Dict[int, Dict[Tuple[str, str], Any]] = {}

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    def _store_for(self, target: Any) -> Optional[Dict[Tuple[str, str], Any]]:
        """Per-target store, created on first use; None if target is not cacheable."""
        if not self.cache_enabled:
            return None
        if isinstance(target, str):
            target = resolve_class(target)
            if target is None:
                return None
        if isinstance(target, type):
            with self._lock:
                store = self._class_cache.get(target)
                if store is None:
                    store = self._class_cache[target] = {}
                return store

        key = id(target)
        with self._lock:
            store = self._object_cache.get(key)
            if store is not None:
                return store
        try:
            weakref.finalize(target, self._evict, key)
        except TypeError:
            return None
        with self._lock:
            return self._object_cache.setdefault(key, {})

    def _evict(self, key: int) -> None:
        with self._lock:
            self._object_cache.pop(key, None)

    def _cached(self, target: Any, key: Tuple[str, str], build):
        store = self._store_for(target)
        if store is None:
            return build()
        with self._lock:
            if key in store:
                return store[key]
        logger.debug(f"Descriptor cache miss for {key[0]} '{key[1]}'")
        value = build()
        if value is None:
            return None
        with self._lock:
            return store.setdefault(key, value)

    def clear_cache(self) -> None:
        """Drop every cached descriptor."""
        with self._lock:
            self._class_cache = weakref.WeakKeyDictionary()
            self._object_cache = {}

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def describe_class(self, target: Any) -> Optional[ClassInfo]:
        return self._cached(target, _CLASS_KEY, lambda: self.provider.describe_class(target))

    def has_member(self, target: Any, kind: str, name: str) -> bool:
        return self.provider.has_member(target, kind, name)

    def describe_member(self, target: Any, kind: str, name: str) -> Optional[MemberInfo]:
        return self._cached(target, (kind, name), lambda: self.provider.describe_member(target, kind, name))

    def list_members(self, target: Any) -> List[MemberInfo]:
        return self.provider.list_members(target)

    def is_initialized(self, target: Any, name: str) -> bool:
        return self.provider.is_initialized(target, name)

    def read_value(self, target: Any, name: str) -> Any:
        return self.provider.read_value(target, name)

    @staticmethod
    def is_instance(target: Any) -> bool:
        return is_instance_target(target)

    # -------------------------------------------------------------------------
    # Enforcement
    # -------------------------------------------------------------------------

    def enforce(self, target: Any, contract: "Contract") -> None:
        """Raise ContractViolationError on the first violated term."""
        contract.validate(target)

    def complies(self, target: Any, contract: "Contract") -> bool:
        """Same check as enforce, reported as a boolean."""
        try:
            self.enforce(target, contract)
        except ContractViolationError:
            return False
        return True


# =============================================================================
# DEFAULT INSPECTOR
# =============================================================================

_default_inspector: Optional[Inspector] = None
_default_lock = threading.Lock()


def _cache_from_env() -> bool:
    return os.environ.get("A3_CONTRACTS_CACHE", "1").strip().lower() not in ("0", "false", "no", "off")


def get_inspector() -> Inspector:
    """The inspector used by terms during evaluation."""
    global _default_inspector
    if _default_inspector is None:
        with _default_lock:
            if _default_inspector is None:
                _default_inspector = Inspector(cache=_cache_from_env())
    return _default_inspector


def set_inspector(inspector: Inspector) -> Inspector:
    """Replace the default inspector; returns the previous one."""
    global _default_inspector
    with _default_lock:
        previous = _default_inspector
        _default_inspector = inspector
    return previous


def configure(provider: Optional[MetadataProvider] = None, cache: Optional[bool] = None) -> Inspector:
    """Install a fresh default inspector with the given provider and cache setting."""
    if cache is None:
        cache = _cache_from_env()
    inspector = Inspector(provider=provider, cache=cache)
    set_inspector(inspector)
    return inspector


def enforce(target: Any, contract: "Contract") -> None:
    get_inspector().enforce(target, contract)


def complies(target: Any, contract: "Contract") -> bool:
    return get_inspector().complies(target, contract)
