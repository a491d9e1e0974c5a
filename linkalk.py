#!/usr/bin/env python3
"""
linkalk - Linear Kalkulator

Main entry point for the linkalk calculator. This file is a thin wrapper
that delegates all functionality to the linkalk_pkg package.

Usage:
    python linkalk.py 4 + 9                 # Evaluate expression
    python linkalk.py "x + 5 = 11"          # Solve for x
    python linkalk.py --help                # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for linkalk.

    Delegates to the linkalk_pkg.cli module, which handles argument
    parsing, expression evaluation, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    from linkalk_pkg.cli import main_entry

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
