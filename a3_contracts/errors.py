"""
Exceptions raised by the contract system.

Two families:
- DefinitionError: the contract itself is malformed (construction time).
- ContractViolationError: a target failed validation (evaluation time).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from .contract import Contract


class DefinitionError(ValueError):
    """Invalid contract definition: bad term reference, unknown field, unresolvable interface."""


class ContractViolationError(Exception):
    """
    Raised when a target does not satisfy a contract.

    Carries the violated contract and every error message that was collected
    (a single one in short-circuit mode).
    """

    def __init__(self, contract: "Contract", message: str = "", errors: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.contract = contract
        self.message = message
        self.errors: List[str] = list(errors) if errors is not None else []
