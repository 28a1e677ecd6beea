"""
Introspection descriptors.

These are the plain-data records a MetadataProvider hands to the matching
engine. The engine never touches the reflection machinery directly: anything
it knows about a target comes through a ClassInfo, MemberInfo, ParameterInfo
or TypeInfo.

Also defines Tag, the Python counterpart of a declarative member attribute:

    class Service:
        @tag("Route", "/users")
        def list_users(self) -> list: ...

        owner: Annotated[str, tag("Column", "owner_id")]
"""

from __future__ import annotations

import re
import types
import typing
import weakref
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .enums import AccessModifier


# =============================================================================
# KINDS
# =============================================================================

CONSTANT = "constant"
PROPERTY = "property"
METHOD = "method"

# Composite kinds of a TypeInfo
NAMED = "named"
UNION = "union"
INTERSECTION = "intersection"

TAGS_ATTRIBUTE = "__contract_tags__"


# =============================================================================
# TAGS
# =============================================================================

@dataclass(frozen=True)
class Tag:
    """
    A named marker with arguments, attached to a member.

    Used as a decorator on functions, staticmethods, classmethods and
    property objects, or as Annotated metadata on fields and constants.
    """
    name: str
    args: Tuple[Any, ...] = ()

    def __call__(self, obj):
        holder = obj
        if isinstance(obj, (staticmethod, classmethod)):
            holder = obj.__func__
        elif isinstance(obj, property):
            holder = obj.fget
        existing = getattr(holder, TAGS_ATTRIBUTE, ())
        setattr(holder, TAGS_ATTRIBUTE, tuple(existing) + (self,))
        return obj


def tag(name: str, *args: Any) -> Tag:
    """Create a Tag, usable as ``@tag("Name", ...)`` or inside ``Annotated``."""
    return Tag(name, tuple(args))


@dataclass(frozen=True)
class TagInfo:
    """A tag found on a member: its name and argument list."""
    name: str
    args: Tuple[Any, ...] = ()

    @staticmethod
    def from_metadata(item: Any) -> "TagInfo":
        if isinstance(item, (Tag, TagInfo)):
            return TagInfo(item.name, tuple(item.args))
        # Arbitrary Annotated metadata matches by class name, without arguments
        return TagInfo(type(item).__name__, ())


# =============================================================================
# TYPES
# =============================================================================

@dataclass(frozen=True)
class TypeInfo:
    """
    Declared type of a member, parameter or return value.

    names holds one entry for a named type and one per alternative for
    unions and intersections. class_refs holds weak references to the
    runtime classes behind the names where they are known, for
    nested-contract validation; classes resolves the ones still alive.
    """
    names: Tuple[str, ...]
    kind: str = NAMED
    allows_null: bool = False
    class_refs: Tuple[Any, ...] = field(default=(), compare=False, repr=False)

    @property
    def classes(self) -> Tuple[type, ...]:
        return tuple(cls for cls in (ref() for ref in self.class_refs) if cls is not None)

    @property
    def separator(self) -> str:
        return "&" if self.kind == INTERSECTION else "|"

    def _parts(self) -> list:
        names = list(self.names)
        if self.kind == NAMED and self.allows_null and names and names[0] != "Any":
            names.append("None")
        return names

    @property
    def expression(self) -> str:
        """Compact type expression, parseable back by the type comparator."""
        return self.separator.join(self._parts())

    def __str__(self) -> str:
        return f" {self.separator} ".join(self._parts())


def _type_name(annotation: Any) -> str:
    if annotation is None or annotation is type(None):
        return "None"
    if annotation is typing.Any:
        return "Any"
    if isinstance(annotation, typing.ForwardRef):
        return annotation.__forward_arg__
    if isinstance(annotation, typing.TypeVar):
        return annotation.__name__
    if isinstance(annotation, type) and not typing.get_args(annotation):
        return annotation.__name__
    return "".join(repr(annotation).replace("typing.", "").split())


def _is_union(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    return origin is typing.Union or isinstance(annotation, types.UnionType)


def split_type(expression: str, separator: str = "|") -> list:
    """
    Split a type expression on a top-level separator.

    Brackets nest, so ``dict[str, int | None] | None`` splits into two atoms.
    Whitespace is removed from every atom.
    """
    parts = []
    depth = 0
    current = []
    for char in expression:
        if char in "[(":
            depth += 1
        elif char in "])":
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join("".join(current).split()))
            current = []
            continue
        current.append(char)
    parts.append("".join("".join(current).split()))
    return parts


_OPTIONAL_RE = re.compile(r"^\s*(?:typing\.)?Optional\[(.*)\]\s*$", re.S)


def _type_from_string(text: str) -> Optional[TypeInfo]:
    text = text.strip()
    if not text:
        return None
    match = _OPTIONAL_RE.match(text)
    if match:
        text = f"{match.group(1)}|None"
    union = split_type(text, "|")
    if len(union) > 1:
        return TypeInfo(tuple(union), UNION)
    intersection = split_type(text, "&")
    if len(intersection) > 1:
        return TypeInfo(tuple(intersection), INTERSECTION)
    return TypeInfo((union[0],), NAMED)


def type_info_from_annotation(annotation: Any) -> Optional[TypeInfo]:
    """Build a TypeInfo from an already unwrapped annotation."""
    if annotation is _EMPTY:
        return None
    if isinstance(annotation, str):
        return _type_from_string(annotation)
    if _is_union(annotation):
        names = []
        refs = []
        for arg in typing.get_args(annotation):
            info = type_info_from_annotation(arg)
            if info is None:
                continue
            names.extend(info.names)
            refs.extend(info.class_refs)
        return TypeInfo(tuple(names), UNION, class_refs=tuple(refs))
    name = _type_name(annotation)
    refs = ()
    if isinstance(annotation, type) and annotation is not type(None) and not typing.get_args(annotation):
        refs = (weakref.ref(annotation),)
    return TypeInfo((name,), NAMED, allows_null=annotation is typing.Any, class_refs=refs)


# =============================================================================
# ANNOTATION UNWRAPPING
# =============================================================================

_EMPTY = object()

_QUALIFIER_RE = re.compile(r"^\s*(?:typing\.)?(ClassVar|Final)(?:\[(.*)\])?\s*$", re.S)
_ANNOTATED_RE = re.compile(r"^\s*(?:typing\.)?Annotated\[(.*)\]\s*$", re.S)


@dataclass(frozen=True)
class DescribedAnnotation:
    """An annotation split into its type, tags and qualifiers."""
    type: Optional[TypeInfo] = None
    tags: Tuple[TagInfo, ...] = ()
    class_var: bool = False
    final: bool = False


def describe_annotation(annotation: Any = _EMPTY) -> DescribedAnnotation:
    """
    Peel Annotated, ClassVar and Final off an annotation.

    Works on evaluated annotations and, on a best-effort basis, on string
    annotations that could not be evaluated.
    """
    tags = []
    class_var = False
    final = False
    while True:
        if isinstance(annotation, str):
            match = _ANNOTATED_RE.match(annotation)
            if match:
                annotation = split_type(match.group(1), ",")[0]
                continue
            match = _QUALIFIER_RE.match(annotation)
            if match:
                if match.group(1) == "ClassVar":
                    class_var = True
                else:
                    final = True
                annotation = match.group(2) if match.group(2) else _EMPTY
                continue
            break
        origin = typing.get_origin(annotation)
        if origin is typing.Annotated:
            tags.extend(TagInfo.from_metadata(item) for item in annotation.__metadata__)
            annotation = annotation.__origin__
        elif origin is typing.ClassVar or annotation is typing.ClassVar:
            class_var = True
            args = typing.get_args(annotation)
            annotation = args[0] if args else _EMPTY
        elif origin is typing.Final or annotation is typing.Final:
            final = True
            args = typing.get_args(annotation)
            annotation = args[0] if args else _EMPTY
        else:
            break
    return DescribedAnnotation(
        type=type_info_from_annotation(annotation),
        tags=tuple(tags),
        class_var=class_var,
        final=final,
    )


# =============================================================================
# MEMBER DESCRIPTORS
# =============================================================================

@dataclass(frozen=True)
class ParameterInfo:
    """One declared parameter of a method, in signature order."""
    name: str
    type: Optional[TypeInfo] = None
    optional: bool = False
    has_default: bool = False
    default: Any = None
    passed_by_reference: bool = False
    variadic: bool = False
    keyword_only: bool = False


@dataclass(frozen=True)
class MemberInfo:
    """
    Declared shape of one constant, property or method on a target.

    default holds a constant's value, a property's class-level default, or
    nothing for methods (has_default tells which).
    """
    kind: str
    name: str
    owner: str
    visibility: AccessModifier = AccessModifier.PUBLIC
    type: Optional[TypeInfo] = None
    static: bool = False
    final: bool = False
    abstract: bool = False
    read_only: bool = False
    has_default: bool = False
    default: Any = None
    parameters: Tuple[ParameterInfo, ...] = ()
    tags: Tuple[TagInfo, ...] = ()

    def tags_named(self, name: str) -> Tuple[TagInfo, ...]:
        return tuple(t for t in self.tags if t.name == name)


@dataclass(frozen=True)
class ClassInfo:
    """
    Runtime class of a target and its first base class.

    The class is held weakly so a cached ClassInfo never keeps it alive.
    """
    name: str
    parent: Optional[str] = None
    cls_ref: Optional[Any] = field(default=None, compare=False, repr=False)

    @property
    def cls(self) -> Optional[type]:
        return self.cls_ref() if self.cls_ref is not None else None
