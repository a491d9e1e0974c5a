"""Public API for linkalk - returns structured objects without side effects."""

from __future__ import annotations

from .calculator import detect_mode, equals_to_minus, format_number, solve
from .logging_config import get_logger
from .operations import DEFAULT_REGISTRY, OperationRegistry
from .postfix import build_postfix
from .tokenizer import tokenize
from .types import CalculatorError, EvalResult

logger = get_logger("api")


def evaluate(
    expression: str, registry: OperationRegistry = DEFAULT_REGISTRY
) -> EvalResult:
    """Evaluate an expression or solve a linear equation in ``x``.

    Args:
        expression: Expression or equation (e.g., "4 + 9", "x + 5 = 11")
        registry: Operators and functions available to the expression

    Returns:
        EvalResult with the formatted answer, or the error and its code

    Example:
        >>> from linkalk_pkg.api import evaluate
        >>> evaluate("x + 5 = 11").result
        '6'
        >>> evaluate("x * x = 1").error_code
        'UNSUPPORTED_OPERATION'
    """
    try:
        answer = solve(expression, registry)
    except CalculatorError as e:
        return EvalResult(ok=False, error=str(e), error_code=e.code)
    return EvalResult(
        ok=True,
        result=format_number(answer.value),
        value=answer.value,
        mode=answer.mode,
    )


def validate_expression(
    expression: str, registry: OperationRegistry = DEFAULT_REGISTRY
) -> tuple[bool, str | None]:
    """Check that an expression is well formed without evaluating it.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from linkalk_pkg.api import validate_expression
        >>> validate_expression("max(1, 2)")
        (True, None)
        >>> validate_expression("(5")
        (False, 'Mismatched parentheses')
    """
    try:
        tokens = tokenize(expression)
        detect_mode(tokens)
        build_postfix(equals_to_minus(tokens), registry)
    except CalculatorError as e:
        logger.debug("Validation failed [%s]: %s", e.code, e)
        return False, str(e)
    return True, None
