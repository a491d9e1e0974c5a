"""Command-line interface: evaluate one expression given on the command line."""

from __future__ import annotations

import argparse
import json
import sys

from . import config
from .api import evaluate
from .calculator import SELF_TEST_CASES, evaluate as evaluate_text
from .logging_config import LOG_LEVELS, setup_logging

USAGE_TEXT = """Usage: linkalk "expression"
Example: linkalk "3 + 4*5"
         linkalk "x + x * (10 / cos(2)) = min(15, pow(2, 3))"

Expressions use numbers, + - * /, parentheses and the functions
log, max, min, pow, sin, cos. An equation must contain the variable x
and exactly one equal sign; its solution is printed.
Options go before the expression; everything from the first
non-option argument on is part of the expression."""


def _self_test() -> int:
    """Run the built-in regression cases.

    Returns:
        Exit code (0 when every case passes, 1 otherwise)
    """
    failed = 0
    print("Running linkalk self-test...")
    print("-" * 50)
    for expression, expected in SELF_TEST_CASES:
        actual = evaluate_text(expression)
        if actual == expected:
            print(f"[OK] {expression!r} -> {actual!r}")
        else:
            print(f"[FAIL] {expression!r}: expected {expected!r}, got {actual!r}")
            failed += 1
    print("-" * 50)
    print(f"{len(SELF_TEST_CASES) - failed} passed, {failed} failed")
    return 1 if failed else 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkalk",
        description="Evaluate arithmetic expressions and solve linear equations in x.",
    )
    parser.add_argument(
        "expression",
        nargs="*",
        help="Expression parts, concatenated without separator",
    )
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Emit JSON for machine parsing (same as --format json)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=list(LOG_LEVELS),
        default=config.LOG_LEVEL.upper(),
        help="Set logging level (DEBUG traces every pipeline stage)",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--self-test",
        action="store_true",
        help="Run the built-in regression cases and exit",
    )
    return parser


def _mark_expression_start(
    parser: argparse.ArgumentParser, argv: list[str]
) -> list[str]:
    """Insert "--" where the expression begins.

    Expression parts such as "-x" or "-(2)" look like options to argparse;
    every argument from the first one that is neither a known option nor an
    option value onwards belongs to the expression.
    """
    known = parser._option_string_actions
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            return list(argv)
        name = arg.split("=", 1)[0] if arg.startswith("--") else arg
        action = known.get(name)
        if action is None:
            break
        # options taking a value consume the next argument unless given as --opt=value
        takes_value = action.nargs != 0
        i += 2 if takes_value and name == arg else 1
    return [*argv[:i], "--", *argv[i:]]


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the linkalk CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code; evaluation errors are reported in the output and still
        return 0
    """
    parser = _build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(_mark_expression_start(parser, argv))

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.precision and args.precision > 0:
        config.OUTPUT_PRECISION = int(args.precision)

    if args.version:
        print(config.VERSION)
        return 0
    if args.self_test:
        return _self_test()
    if not args.expression:
        print(USAGE_TEXT)
        return 0

    expression = "".join(args.expression)
    output_format = "json" if args.json else args.format

    result = evaluate(expression)
    if output_format == "json":
        print(json.dumps(result.to_dict(), allow_nan=False))
    else:
        print(f"Result: {result.result if result.ok else result.error}")
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
