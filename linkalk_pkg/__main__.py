"""Main entry point for running linkalk_pkg as a module.

This allows running linkalk with:
    python -m linkalk_pkg "4 + 9"
    python -m linkalk_pkg x + 5 = 11
    python -m linkalk_pkg --self-test

This is equivalent to running:
    python -m linkalk_pkg.cli
    python linkalk.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
