"""Shared fixtures for the contract tests."""

import pytest

from a3_contracts.inspector import Inspector, get_inspector, set_inspector


@pytest.fixture(autouse=True)
def fresh_inspector():
    """Every test starts with an empty default inspector and restores the previous one."""
    previous = set_inspector(Inspector())
    yield get_inspector()
    set_inspector(previous)
