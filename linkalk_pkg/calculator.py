"""Evaluation of constant expressions and solving of linear equations.

An input either contains no variable and no equal sign, and evaluates to a
number, or contains the variable ``x`` and exactly one equal sign. In the
second case ``L = R`` is rewritten to ``L - R`` and the root of the
resulting linear polynomial is returned.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from . import config
from .logging_config import get_logger
from .operations import DEFAULT_REGISTRY, OperationRegistry
from .polynomial import Polynomial
from .postfix import build_postfix, evaluate_postfix
from .tokenizer import MINUS, Token, TokenKind, tokenize
from .types import (
    AlgebraError,
    CalculatorError,
    EvaluationError,
    InconsistentEquationFormError,
    LexicalError,
    StructuralError,
    TooManyEqualsSignsError,
)

logger = get_logger("calculator")

CONSTANT_MODE = "constant"
EQUATION_MODE = "equation"

TOKENIZER_STAGE = "Error in tokenizer"
BUILD_STAGE = "Error building postfix sequence"
EVALUATION_STAGE = "Error evaluating postfix sequence"


@dataclass(frozen=True)
class Answer:
    value: float
    mode: str


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with ``precision`` significant digits.

    Args:
        val: Numeric value to format
        precision: Significant digits (default: OUTPUT_PRECISION)

    Returns:
        General-format string, e.g. ``13``, ``-0.347373`` or ``1e+06``
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    fmt = "{:." + str(int(precision)) + "g}"
    return fmt.format(float(val))


def detect_mode(tokens: list[Token]) -> str:
    """Decide between constant evaluation and equation solving.

    Raises:
        TooManyEqualsSignsError: more than one ``=``
        InconsistentEquationFormError: a variable without ``=`` or the reverse
    """
    equals_signs = sum(1 for token in tokens if token.kind is TokenKind.EQUALS)
    has_variable = any(token.kind is TokenKind.VARIABLE for token in tokens)

    if equals_signs > 1:
        raise TooManyEqualsSignsError("Expression contains too many equal signs")
    if has_variable != (equals_signs == 1):
        raise InconsistentEquationFormError(
            "Expression must contain both a variable and equal sign or neither"
        )
    return EQUATION_MODE if has_variable else CONSTANT_MODE


def equals_to_minus(tokens: list[Token]) -> list[Token]:
    """Turn ``L = R`` into ``L - R``."""
    return [
        replace(token, text=MINUS, kind=TokenKind.OPERATOR)
        if token.kind is TokenKind.EQUALS
        else token
        for token in tokens
    ]


def reduce_expression(
    tokens: list[Token], registry: OperationRegistry = DEFAULT_REGISTRY
) -> Polynomial:
    """Run the postfix stages, tagging their errors with the failing stage."""
    try:
        nodes = build_postfix(tokens, registry)
    except StructuralError as e:
        raise e.with_prefix(BUILD_STAGE) from e

    try:
        return evaluate_postfix(nodes)
    except (EvaluationError, AlgebraError) as e:
        raise e.with_prefix(EVALUATION_STAGE) from e


def solve(expression: str, registry: OperationRegistry = DEFAULT_REGISTRY) -> Answer:
    """Evaluate ``expression`` or solve it for ``x``.

    Raises:
        CalculatorError: the first error of whichever stage fails
    """
    logger.info("Evaluating expression: %s", expression)
    try:
        tokens = tokenize(expression)
    except LexicalError as e:
        raise e.with_prefix(TOKENIZER_STAGE) from e

    mode = detect_mode(tokens)
    logger.debug("Mode: %s", mode)

    result = reduce_expression(equals_to_minus(tokens), registry)
    if mode == CONSTANT_MODE:
        return Answer(result.constant_term(), mode)

    logger.debug("Final polynomial: %s", result)
    return Answer(result.solve_linear(), mode)


def compute(expression: str, registry: OperationRegistry = DEFAULT_REGISTRY) -> float:
    """Numeric answer of ``expression``; see :func:`solve`."""
    return solve(expression, registry).value


def evaluate(expression: str, registry: OperationRegistry = DEFAULT_REGISTRY) -> str:
    """Return the formatted answer, or the error message when evaluation fails.

    Example:
        >>> evaluate("4 + 9")
        '13'
        >>> evaluate("x + 5 = 11")
        '6'
        >>> evaluate("x * 0 = 10")
        "Constant can't equal 0, no solutions"
    """
    try:
        return format_number(compute(expression, registry))
    except CalculatorError as e:
        logger.debug("Evaluation failed [%s]: %s", e.code, e)
        return str(e)


# Regression cases checked by ``--self-test``: (expression, expected output)
SELF_TEST_CASES = (
    ("4 + 9", "13"),
    ("x + 5 = 11", "6"),
    ("x * 0 = 10", "Constant can't equal 0, no solutions"),
    ("=", "Expression must contain both a variable and equal sign or neither"),
    ("max(1)", f"{EVALUATION_STAGE}: Insufficient number of operands for max"),
    ("x + x * (10 / cos(2)) = min(15, pow(2, 3))", "-0.347373"),
    ("(5", f"{BUILD_STAGE}: Mismatched parentheses"),
    ("lag(10)", f"{BUILD_STAGE}: Invalid mathematical function lag"),
)
