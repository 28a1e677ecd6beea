"""
Metadata providers.

A MetadataProvider answers every question the matching engine asks about a
target: does a member exist, what does it look like, is a field initialized,
what value does it hold. The engine only sees the descriptors defined in
``descriptors.py``, so a provider can be backed by anything: reflection,
generated schemas, hand-registered shapes.

ReflectionProvider is the default, built on ``inspect`` and ``typing``.
Targets are classes, instances, or import paths ("pkg.mod:Cls").
"""

from __future__ import annotations

import functools
import inspect
import logging
import pkgutil
import typing
import weakref
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .descriptors import (
    CONSTANT,
    METHOD,
    PROPERTY,
    TAGS_ATTRIBUTE,
    ClassInfo,
    DescribedAnnotation,
    MemberInfo,
    ParameterInfo,
    TagInfo,
    describe_annotation,
    type_info_from_annotation,
)
from .enums import AccessModifier

logger = logging.getLogger(__name__)


# Classes never walked when listing declared members
_SKIPPED_MODULES = frozenset({"builtins", "typing", "typing_extensions", "abc"})

# Bookkeeping attributes that typing.Protocol and ABCMeta leave on user classes
_INTERNAL_NAMES = frozenset({"_is_protocol", "_is_runtime_protocol", "_abc_impl"})

_MISSING = object()


# =============================================================================
# TARGET HELPERS
# =============================================================================

def resolve_class(target: Any) -> Optional[type]:
    """
    Runtime class behind a target.

    Strings are import paths; an unresolvable path yields None, which every
    provider treats as a target without members.
    """
    if isinstance(target, type):
        return target
    if isinstance(target, str):
        return _import_class(target)
    return type(target)


@functools.lru_cache(maxsize=256)
def _import_class(path: str) -> Optional[type]:
    try:
        obj = pkgutil.resolve_name(path)
    except (ImportError, AttributeError, ValueError):
        return None
    return obj if isinstance(obj, type) else None


def is_instance_target(target: Any) -> bool:
    """True for live objects, False for classes and import paths."""
    return not isinstance(target, (type, str))


def target_name(target: Any) -> str:
    """Name of a target for messages: class name, or the path as given."""
    if isinstance(target, str):
        return target
    if isinstance(target, type):
        return target.__name__
    return type(target).__name__


def mangle(cls: type, name: str) -> str:
    """Apply Python's private-name mangling for ``__name`` members of cls."""
    if name.startswith("__") and not name.endswith("__"):
        stripped = cls.__name__.lstrip("_")
        if stripped:
            return f"_{stripped}{name}"
    return name


def demangle(cls: type, attr: str) -> str:
    prefix = f"_{cls.__name__.lstrip('_')}__"
    if attr.startswith(prefix) and not attr.endswith("__"):
        return attr[len(prefix) - 2:]
    return attr


def _is_constant_name(name: str) -> bool:
    core = name.strip("_")
    return bool(core) and core.isupper()


def _is_listable(name: str) -> bool:
    if name.startswith("__") and name.endswith("__"):
        return False
    return name not in _INTERNAL_NAMES and not name.startswith("_abc_")


# =============================================================================
# ANNOTATION ACCESS
# =============================================================================

def _string_annotations(obj: Any) -> Dict[str, Any]:
    try:
        import annotationlib
    except ImportError:
        return {}
    try:
        return dict(annotationlib.get_annotations(obj, format=annotationlib.Format.STRING))
    except (NameError, SyntaxError, TypeError, AttributeError):
        return {}


def class_annotations(klass: type) -> Dict[str, Any]:
    """
    Annotations declared directly on klass.

    Evaluated where possible; falls back to the raw (possibly string) form
    when a forward reference cannot be resolved.
    """
    try:
        return dict(inspect.get_annotations(klass, eval_str=True))
    except (NameError, SyntaxError, TypeError, AttributeError):
        pass
    try:
        return dict(inspect.get_annotations(klass))
    except (NameError, SyntaxError, TypeError, AttributeError):
        return _string_annotations(klass)


def function_hints(func: Any) -> Dict[str, Any]:
    """Type hints of a function, keeping Annotated metadata."""
    try:
        return typing.get_type_hints(func, include_extras=True)
    except (NameError, SyntaxError, TypeError, AttributeError):
        pass
    try:
        return dict(inspect.get_annotations(func))
    except (NameError, SyntaxError, TypeError, AttributeError):
        return _string_annotations(func)


# =============================================================================
# PROVIDER INTERFACE
# =============================================================================

class MetadataProvider(ABC):
    """Source of introspection descriptors for targets."""

    def resolve_class(self, target: Any) -> Optional[type]:
        return resolve_class(target)

    def describe_class(self, target: Any) -> Optional[ClassInfo]:
        cls = self.resolve_class(target)
        if cls is None:
            return None
        parent = next((base.__name__ for base in cls.__bases__ if base is not object), None)
        return ClassInfo(cls.__name__, parent, weakref.ref(cls))

    @abstractmethod
    def has_member(self, target: Any, kind: str, name: str) -> bool:
        """Whether target declares a member of the given kind and name."""

    @abstractmethod
    def describe_member(self, target: Any, kind: str, name: str) -> Optional[MemberInfo]:
        """Descriptor of the member, or None if it does not exist."""

    @abstractmethod
    def list_members(self, target: Any) -> List[MemberInfo]:
        """All declared members, in declaration order."""

    @abstractmethod
    def is_initialized(self, target: Any, name: str) -> bool:
        """Whether a field holds a value on an instance target."""

    @abstractmethod
    def read_value(self, target: Any, name: str) -> Any:
        """Live value of a field (instance) or class-level value (class); AttributeError when it cannot be read."""


# =============================================================================
# REFLECTION PROVIDER
# =============================================================================

@dataclass(frozen=True)
class _Declaration:
    """Where a name is declared on a class and what is stored there."""
    owner: type
    attr: str
    raw: Any = _MISSING
    annotation: Optional[DescribedAnnotation] = None


class ReflectionProvider(MetadataProvider):
    """
    MetadataProvider over Python's own reflection.

    Visibility comes from naming conventions, constants are UPPER_CASE or
    Final class attributes, static properties are ClassVar, static methods
    are staticmethod/classmethod objects.
    """

    def _lookup(self, cls: type, name: str) -> Optional[_Declaration]:
        owner = None
        attr = name
        raw = _MISSING
        annotation = _MISSING
        for klass in cls.__mro__:
            if klass is object:
                continue
            candidate = mangle(klass, name)
            namespace = vars(klass)
            if raw is _MISSING and candidate in namespace:
                raw = namespace[candidate]
                if owner is None:
                    owner, attr = klass, candidate
            if annotation is _MISSING:
                annotations = class_annotations(klass)
                if candidate in annotations:
                    annotation = annotations[candidate]
                    if owner is None:
                        owner, attr = klass, candidate
        if owner is None:
            return None
        described = describe_annotation(annotation) if annotation is not _MISSING else None
        return _Declaration(owner, attr, raw, described)

    @staticmethod
    def _classify(name: str, decl: _Declaration) -> Optional[str]:
        raw = decl.raw
        if isinstance(raw, type):
            return None
        if isinstance(raw, (property, functools.cached_property)):
            return PROPERTY
        if isinstance(raw, (staticmethod, classmethod)) or inspect.isroutine(raw):
            return METHOD
        if inspect.isdatadescriptor(raw):
            return PROPERTY
        if raw is not _MISSING:
            if (decl.annotation is not None and decl.annotation.final) or _is_constant_name(name):
                return CONSTANT
        return PROPERTY

    def _kind_of(self, target: Any, name: str) -> Tuple[Optional[str], Optional[_Declaration]]:
        cls = self.resolve_class(target)
        if cls is None:
            return None, None
        decl = self._lookup(cls, name)
        if decl is not None:
            kind = self._classify(name, decl)
            if kind is not None:
                return kind, decl
        if is_instance_target(target) and mangle(cls, name) in _instance_dict(target):
            return PROPERTY, None
        return None, None

    def has_member(self, target: Any, kind: str, name: str) -> bool:
        found, _ = self._kind_of(target, name)
        return found == kind

    def describe_member(self, target: Any, kind: str, name: str) -> Optional[MemberInfo]:
        found, decl = self._kind_of(target, name)
        if found != kind:
            return None
        cls = self.resolve_class(target)
        if kind == CONSTANT:
            return self._describe_constant(name, decl)
        if kind == METHOD:
            return self._describe_method(name, decl)
        return self._describe_property(cls, name, decl)

    def _describe_constant(self, name: str, decl: _Declaration) -> MemberInfo:
        described = decl.annotation or DescribedAnnotation()
        value = decl.raw
        declared = described.type or type_info_from_annotation(type(value))
        return MemberInfo(
            kind=CONSTANT,
            name=name,
            owner=decl.owner.__name__,
            visibility=AccessModifier.from_name(name),
            type=declared,
            static=True,
            final=True,
            read_only=True,
            has_default=True,
            default=value,
            tags=described.tags,
        )

    def _describe_property(self, cls: type, name: str, decl: Optional[_Declaration]) -> MemberInfo:
        visibility = AccessModifier.from_name(name)
        if decl is None:
            # Instance attribute assigned at runtime, nothing declared
            return MemberInfo(kind=PROPERTY, name=name, owner=cls.__name__, visibility=visibility)

        raw = decl.raw
        if isinstance(raw, (property, functools.cached_property)):
            getter = raw.fget if isinstance(raw, property) else raw.func
            hints = function_hints(getter) if getter is not None else {}
            returned = describe_annotation(hints["return"]) if "return" in hints else DescribedAnnotation()
            tags = _function_tags(getter) + returned.tags
            return MemberInfo(
                kind=PROPERTY,
                name=name,
                owner=decl.owner.__name__,
                visibility=visibility,
                type=returned.type,
                abstract=bool(getattr(raw, "__isabstractmethod__", False)),
                read_only=isinstance(raw, property) and raw.fset is None,
                tags=tags,
            )

        described = decl.annotation or DescribedAnnotation()
        has_default = raw is not _MISSING and not inspect.isdatadescriptor(raw)
        return MemberInfo(
            kind=PROPERTY,
            name=name,
            owner=decl.owner.__name__,
            visibility=visibility,
            type=described.type,
            static=described.class_var,
            read_only=described.final or _is_frozen_field(cls, decl.attr),
            has_default=has_default,
            default=raw if has_default else None,
            tags=described.tags,
        )

    def _describe_method(self, name: str, decl: _Declaration) -> MemberInfo:
        raw = decl.raw
        static = isinstance(raw, (staticmethod, classmethod))
        func = raw.__func__ if static else raw
        hints = function_hints(func)
        returned = describe_annotation(hints["return"]) if "return" in hints else DescribedAnnotation()
        return MemberInfo(
            kind=METHOD,
            name=name,
            owner=decl.owner.__name__,
            visibility=AccessModifier.from_name(name),
            type=returned.type,
            static=static,
            final=bool(getattr(raw, "__final__", False) or getattr(func, "__final__", False)),
            abstract=bool(getattr(raw, "__isabstractmethod__", False)),
            parameters=_parameters(func, hints, skip_first=not isinstance(raw, staticmethod)),
            tags=_function_tags(func) + returned.tags,
        )

    def list_members(self, target: Any) -> List[MemberInfo]:
        cls = self.resolve_class(target)
        if cls is None:
            return []
        names: List[str] = []
        for klass in reversed(cls.__mro__):
            if klass is object or klass.__module__ in _SKIPPED_MODULES:
                continue
            for attr in list(vars(klass)) + list(class_annotations(klass)):
                name = demangle(klass, attr)
                if name not in names and _is_listable(name):
                    names.append(name)
        members = []
        for name in names:
            kind, _ = self._kind_of(cls, name)
            if kind is not None:
                members.append(self.describe_member(cls, kind, name))
        return members

    def _attr_for(self, target: Any, name: str) -> Tuple[Optional[type], str]:
        cls = self.resolve_class(target)
        if cls is None:
            return None, name
        decl = self._lookup(cls, name)
        return cls, decl.attr if decl is not None else mangle(cls, name)

    def is_initialized(self, target: Any, name: str) -> bool:
        try:
            self.read_value(target, name)
        except AttributeError:
            return False
        return True

    def read_value(self, target: Any, name: str) -> Any:
        """
        Read a field once.

        A getter that fails for any reason reports the field as unreadable
        with an AttributeError chained to the original error.
        """
        cls, attr = self._attr_for(target, name)
        if cls is None:
            raise AttributeError(name)
        holder = target if is_instance_target(target) else cls
        try:
            return getattr(holder, attr)
        except AttributeError:
            raise
        except Exception as e:
            logger.debug(f"Reading '{name}' on {target_name(target)} failed: {e!r}")
            raise AttributeError(f"{name}: {e}") from e


def _instance_dict(target: Any) -> Dict[str, Any]:
    try:
        return vars(target)
    except TypeError:
        return {}


def _is_frozen_field(cls: type, attr: str) -> bool:
    params = getattr(cls, "__dataclass_params__", None)
    fields = getattr(cls, "__dataclass_fields__", {})
    return bool(params is not None and params.frozen and attr in fields)


def _function_tags(func: Any) -> Tuple[TagInfo, ...]:
    return tuple(TagInfo.from_metadata(t) for t in getattr(func, TAGS_ATTRIBUTE, ()))


def _parameters(func: Any, hints: Dict[str, Any], skip_first: bool) -> Tuple[ParameterInfo, ...]:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return ()
    params = list(signature.parameters.values())
    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    if skip_first and params and params[0].kind in positional:
        params = params[1:]

    result = []
    for param in params:
        variadic = param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        has_default = param.default is not inspect.Parameter.empty
        if param.name in hints:
            declared = describe_annotation(hints[param.name]).type
        elif param.annotation is not inspect.Parameter.empty:
            declared = describe_annotation(param.annotation).type
        else:
            declared = None
        result.append(ParameterInfo(
            name=param.name,
            type=declared,
            optional=has_default or variadic,
            has_default=has_default,
            default=param.default if has_default else None,
            variadic=variadic,
            keyword_only=param.kind is inspect.Parameter.KEYWORD_ONLY,
        ))
    return tuple(result)
