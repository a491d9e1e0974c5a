"""Centralized configuration for linkalk.

This module defines:
- Numeric tolerance used for every "effectively zero" check
- Output precision of rendered answers
- Input validation limits
- Operator symbols and precedences of the built-in operators

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with LINKALK_)
"""

import os

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("linkalk")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Numeric tolerance (shared by polynomial arithmetic, root solving and log)
ZERO_TOLERANCE = float(os.getenv("LINKALK_ZERO_TOLERANCE", "1e-6"))

# Output configuration
OUTPUT_PRECISION = int(
    os.getenv("LINKALK_OUTPUT_PRECISION", "6")
)  # significant digits

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("LINKALK_MAX_INPUT_LENGTH", "10000"))  # characters

LOG_LEVEL = os.getenv("LINKALK_LOG_LEVEL", "INFO")

# Lexical symbols
VARIABLE_SYMBOL = "x"
NEGATION_SYMBOL = "~"
WHITESPACE_CHARS = " \t"
OPERATOR_CHARS = "+-*/"

OPERATOR_PRECEDENCE = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    NEGATION_SYMBOL: 10,  # binds tighter than every binary operator
}
