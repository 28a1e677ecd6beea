"""Method blueprint."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Union

from .descriptors import METHOD
from .enums import AccessModifier
from .member import Member, _resolve_modifier, join_parts
from .parameter import Parameter
from .terms.method import MethodMatchesSignatureTerm, MethodReturnValueTerm
from .values import UNSET

if TYPE_CHECKING:
    from .contract import Contract


class Method(Member):
    """
    Expected method.

    type is the expected return type. parameters is matched as a positional
    prefix of the declared parameters (self/cls excluded).
    """
    kind = METHOD
    WAIVABLE = {
        "static": None,
        "final": None,
        "abstract": None,
        "access_modifier": None,
        "parameters": [],
        "type": None,
    }

    def __init__(
        self,
        name: str,
        type: Optional[str] = None,
        access_modifier: Union[AccessModifier, str, None] = None,
        static: Optional[bool] = None,
        final: Optional[bool] = None,
        abstract: Optional[bool] = None,
        optional: bool = False,
        parameters: Optional[Sequence[Parameter]] = None,
    ):
        super().__init__(name, type)
        self.access_modifier = _resolve_modifier(access_modifier)
        self.static = static
        self.final = final
        self.abstract = abstract
        self.optional = optional
        self.parameters: List[Parameter] = list(parameters or [])
        self.add_term(MethodMatchesSignatureTerm())

    def _clone_into(self, clone: "Method") -> None:
        clone.parameters = [parameter.clone() for parameter in self.parameters]

    def expect(
        self,
        type: Optional[str] = None,
        access_modifier: Union[AccessModifier, str, None] = None,
        static: Optional[bool] = None,
        final: Optional[bool] = None,
        abstract: Optional[bool] = None,
        optional: bool = False,
        parameters: Optional[Sequence[Union[Parameter, str]]] = None,
    ) -> "Method":
        if type is not None:
            self.type = type
        if access_modifier is not None:
            self.access_modifier = AccessModifier.resolve(access_modifier)
        if static is not None:
            self.static = static
        if final is not None:
            self.final = final
        if abstract is not None:
            self.abstract = abstract
        self.optional = optional
        for parameter in parameters or ():
            self.expect_parameter(parameter)
        return self

    def expect_parameter(
        self,
        name_or_parameter: Union[str, Parameter],
        type: Optional[str] = None,
        optional: bool = False,
        default_value: Any = UNSET,
        passed_by_reference: Optional[bool] = None,
        variadic: Optional[bool] = None,
        exact_name_required: bool = False,
        keyword_only: Optional[bool] = None,
    ) -> "Method":
        """Append an expected parameter, given as a Parameter or by its fields."""
        if isinstance(name_or_parameter, Parameter):
            self.parameters.append(name_or_parameter)
            return self
        self.parameters.append(Parameter(
            name_or_parameter,
            type=type,
            optional=optional,
            default_value=default_value,
            passed_by_reference=passed_by_reference,
            variadic=variadic,
            exact_name_required=exact_name_required,
            keyword_only=keyword_only,
        ))
        return self

    def expect_return_type(self, type: Optional[str]) -> "Method":
        self.type = type
        return self

    def expect_return_value(self, type: Optional[str] = None, contract: Optional["Contract"] = None) -> "Method":
        """Attach a return-value term, optionally validating returned classes against a nested contract."""
        return self.add_term(MethodReturnValueTerm(type, contract))

    def expect_static(self, static: bool = True) -> "Method":
        self.static = static
        return self

    def expect_final(self, final: bool = True) -> "Method":
        self.final = final
        return self

    def expect_abstract(self, abstract: bool = True) -> "Method":
        self.abstract = abstract
        return self

    @property
    def return_type(self) -> Optional[str]:
        return self.type

    @property
    def signature(self) -> str:
        parts = []
        if self.abstract is True:
            parts.append("abstract")
        if self.final is True:
            parts.append("final")
        if self.access_modifier:
            parts.append(self.access_modifier.value)
        if self.static is True:
            parts.append("static")
        parts.append("def")
        params = ", ".join(parameter.signature for parameter in self.parameters)
        text = f"{join_parts(parts)} {self.name}({params})"
        if self.type:
            text += f" -> {self.type}"
        return text
