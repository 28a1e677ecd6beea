"""
Value helpers shared by blueprints and terms.

UNSET marks "no expectation" so that an expected value of None stays
expressible. strictly_equal is the value comparison used for constant
values, property values and parameter defaults.
"""

from __future__ import annotations

from typing import Any


class _Unset:
    """Singleton marker type for unset expectations."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Unset, ())


UNSET: Any = _Unset()


def strictly_equal(left: Any, right: Any) -> bool:
    """
    Type-strict equality.

    Both sides must have exactly the same type (so 1, 1.0 and True are all
    different) and compare equal. Lists and tuples are compared element-wise
    and dicts key-by-key in insertion order, with the same strictness.
    Other objects fall back to their own __eq__, which is identity unless
    the class overrides it.
    """
    if left is right:
        return True
    if type(left) is not type(right):
        return False
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(
            strictly_equal(a, b) for a, b in zip(left, right)
        )
    if isinstance(left, dict):
        if list(left.keys()) != list(right.keys()):
            return False
        return all(strictly_equal(left[k], right[k]) for k in left)
    return bool(left == right)


def render_value(value: Any) -> str:
    """Render a value for signatures and error messages."""
    return repr(value)


def copy_expectation(value: Any) -> Any:
    """
    Copy the container structure of an expected value.

    Lists, tuples, dicts and sets are rebuilt recursively so a cloned
    blueprint never shares them. Other objects are kept as they are.
    """
    if type(value) is list:
        return [copy_expectation(item) for item in value]
    if type(value) is tuple:
        return tuple(copy_expectation(item) for item in value)
    if type(value) is dict:
        return {key: copy_expectation(item) for key, item in value.items()}
    if type(value) is set:
        return set(value)
    return value
