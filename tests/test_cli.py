"""
Tests for the a3-contracts command line checker.
"""

import subprocess
import sys
import textwrap

import pytest

from a3_contracts.cli import main
from a3_contracts.inspector import get_inspector

SHAPES = textwrap.dedent('''
    from abc import ABC, abstractmethod


    class Shape(ABC):
        SIDES = 4

        @abstractmethod
        def area(self) -> float:
            ...


    class Square:
        SIDES = 4

        def area(self) -> float:
            return 1.0


    class Triangle:
        SIDES = 3

        def area(self) -> int:
            return 1
''')


@pytest.fixture
def shapes_module(tmp_path, monkeypatch):
    (tmp_path / "cli_shapes_mod.py").write_text(SHAPES)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "cli_shapes_mod"


def test_cli_help():
    """The module entry point prints usage and exits cleanly."""
    result = subprocess.run(
        [sys.executable, "-m", "a3_contracts", "--help"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "a3-contracts" in result.stdout


def test_satisfied_target(shapes_module, capsys):
    assert main([f"{shapes_module}:Square", f"{shapes_module}:Shape"]) == 0
    assert "satisfies contract 'Shape'" in capsys.readouterr().out


def test_violating_target(shapes_module, capsys):
    assert main([f"{shapes_module}:Triangle", f"{shapes_module}:Shape"]) == 1
    out = capsys.readouterr().out
    assert "violates contract 'Shape'" in out
    assert len(out.strip().splitlines()) == 1


def test_all_errors(shapes_module, capsys):
    assert main([f"{shapes_module}:Triangle", f"{shapes_module}:Shape", "--all-errors"]) == 1
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[1:] == [
        "Constant 'SIDES' does not match the required signature: public const SIDES: int = 4",
        "Method 'area' does not match the defined signature: public def area() -> float",
    ]


def test_show_contract(shapes_module, capsys):
    assert main([f"{shapes_module}.Square", f"{shapes_module}.Shape", "--show-contract"]) == 0
    out = capsys.readouterr().out
    assert "Contract 'Shape' with 2 members" in out
    assert "public const SIDES: int = 4" in out


def test_no_cache(shapes_module):
    assert main([f"{shapes_module}:Square", f"{shapes_module}:Shape", "--no-cache"]) == 0
    assert get_inspector().cache_enabled is False


def test_unresolvable_interface(capsys):
    assert main(["collections:OrderedDict", "no_such_module_for_cli:Shape"]) == 3
    assert "cannot be resolved" in capsys.readouterr().err


def test_unresolvable_target(shapes_module, capsys):
    assert main(["no_such_module_for_cli:Square", f"{shapes_module}:Shape"]) == 3
    assert "cannot be resolved" in capsys.readouterr().err


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
