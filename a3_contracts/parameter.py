"""
Parameter blueprint: the expected shape of one method parameter.

Parameters are matched by position. The name only matters when
exact_name_required is set, so a contract asking for ``x: int`` is met by
``def f(self, amount: int)``.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from .errors import DefinitionError
from .values import UNSET, copy_expectation, render_value


class Parameter:
    """One expected method parameter. Tri-state flags use None for "not checked"."""

    WAIVABLE: Dict[str, Any] = {
        "type": None,
        "optional": False,
        "default_value": UNSET,
        "passed_by_reference": None,
        "variadic": None,
        "keyword_only": None,
        "exact_name_required": False,
    }

    def __init__(
        self,
        name: str,
        type: Optional[str] = None,
        optional: bool = False,
        default_value: Any = UNSET,
        passed_by_reference: Optional[bool] = None,
        variadic: Optional[bool] = None,
        exact_name_required: bool = False,
        keyword_only: Optional[bool] = None,
    ):
        self.name = name
        self.type = type
        self.optional = optional
        self.default_value = default_value
        self.passed_by_reference = passed_by_reference
        self.variadic = variadic
        self.exact_name_required = exact_name_required
        self.keyword_only = keyword_only

    def expect(
        self,
        type: Optional[str] = None,
        optional: bool = False,
        default_value: Any = UNSET,
        passed_by_reference: Optional[bool] = None,
        variadic: Optional[bool] = None,
        exact_name_required: bool = False,
        keyword_only: Optional[bool] = None,
    ) -> "Parameter":
        """Set several expectations at once; None/UNSET arguments leave a field untouched."""
        if type is not None:
            self.type = type
        if default_value is not UNSET:
            self.default_value = default_value
        if passed_by_reference is not None:
            self.passed_by_reference = passed_by_reference
        if variadic is not None:
            self.variadic = variadic
        if keyword_only is not None:
            self.keyword_only = keyword_only
        self.optional = optional
        self.exact_name_required = exact_name_required
        return self

    def expect_type(self, type: str) -> "Parameter":
        self.type = type
        return self

    def expect_optional(self, optional: bool = True) -> "Parameter":
        self.optional = optional
        return self

    def expect_default_value(self, default_value: Any) -> "Parameter":
        self.default_value = default_value
        return self

    def expect_passed_by_reference(self, by_reference: bool = True) -> "Parameter":
        self.passed_by_reference = by_reference
        return self

    def expect_variadic(self, variadic: bool = True) -> "Parameter":
        self.variadic = variadic
        return self

    def expect_keyword_only(self, keyword_only: bool = True) -> "Parameter":
        self.keyword_only = keyword_only
        return self

    def require(self, required: bool = True) -> "Parameter":
        """Mark the parameter as required (True) or optional (False)."""
        self.optional = not required
        return self

    def require_exact_name(self, exact_name_required: bool = True) -> "Parameter":
        self.exact_name_required = exact_name_required
        return self

    def has_default_value(self) -> bool:
        return self.default_value is not UNSET

    def waive(self, *field_names: str) -> "Parameter":
        """Stop checking the named characteristics."""
        for field_name in field_names:
            if field_name not in self.WAIVABLE:
                raise DefinitionError(f"Parameter characteristic '{field_name}' cannot be waived.")
            setattr(self, field_name, copy.copy(self.WAIVABLE[field_name]))
        return self

    def clone(self) -> "Parameter":
        clone = copy.copy(self)
        clone.default_value = copy_expectation(self.default_value)
        return clone

    @property
    def signature(self) -> str:
        prefix = ""
        if self.passed_by_reference is True:
            prefix += "&"
        if self.variadic is True:
            prefix += "*"
        text = f"{prefix}{self.name}"
        if self.type:
            text += f": {self.type}"
        if self.has_default_value():
            text += f" = {render_value(self.default_value)}"
        return text

    def __str__(self) -> str:
        return self.signature

    def __repr__(self) -> str:
        return f"Parameter({self.signature!r})"
