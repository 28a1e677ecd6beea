#!/usr/bin/env python3
"""
CLI entrypoint for the contract checker.

Usage:
    a3-contracts <target> <interface> [options]
    a3-contracts myapp.shapes:Square myapp.shapes:Shape
    a3-contracts myapp.shapes.Square myapp.shapes.Shape --all-errors

Builds a contract from every member declared on <interface> and validates
<target> against it. Both are import paths.

Returns:
    0: target satisfies the contract
    1: target violates the contract
    3: Error
"""

import argparse
import logging
import sys

from .contract import Contract
from .errors import ContractViolationError, DefinitionError
from .inspector import configure, get_inspector


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="a3-contracts",
        description="Check that a class satisfies the contract declared by an interface class",
    )
    parser.add_argument("target", help="Import path of the class to check (pkg.mod:Cls or pkg.mod.Cls)")
    parser.add_argument("interface", help="Import path of the class declaring the contract")
    parser.add_argument(
        "--all-errors",
        action="store_true",
        help="Report every violated term instead of stopping at the first one",
    )
    parser.add_argument(
        "--show-contract",
        action="store_true",
        help="Print the signature of every synthesized member before validating",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Disable descriptor caching (same as A3_CONTRACTS_CACHE=0)",
    )
    parser.add_argument("--verbose", action="store_true", help="Verbose output")
    return parser


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.no_cache:
        configure(cache=False)

    try:
        contract = Contract.from_interface(args.interface)
    except DefinitionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 3

    if get_inspector().describe_class(args.target) is None:
        print(f"Error: Target '{args.target}' cannot be resolved.", file=sys.stderr)
        return 3

    if args.show_contract:
        print(contract)
        for member in contract:
            print(f"  {member.signature}")

    try:
        contract.validate(args.target, all_errors=args.all_errors)
    except ContractViolationError as e:
        print(e.message)
        return 1

    print(f"OK: '{args.target}' satisfies contract '{contract.name}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
