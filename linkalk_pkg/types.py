"""Error taxonomy and result dataclasses for consistent API responses."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass
class EvalResult:
    """Result of evaluating an expression or solving a linear equation."""

    ok: bool
    result: str | None = None
    value: float | None = None
    mode: str | None = None  # "constant" or "equation"
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        # JSON has no literal for inf or nan; "result" still carries them as text
        if self.value is not None and math.isfinite(self.value):
            result_dict["value"] = self.value
        if self.mode is not None:
            result_dict["mode"] = self.mode
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        return f"EvalResult(ok=True, result={self.result!r}, mode={self.mode!r})"


class CalculatorError(Exception):
    """Base class of every error raised while evaluating an expression."""

    code = "CALCULATOR_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def with_prefix(self, prefix: str) -> CalculatorError:
        """Return an error of the same kind whose message names the failing stage."""
        return type(self)(f"{prefix}: {self.message}", self.code)


# Lexical errors (tokenizer)


class LexicalError(CalculatorError):
    code = "LEXICAL_ERROR"


class MalformedNumberError(LexicalError):
    code = "MALFORMED_NUMBER"


class InvalidFunctionNameError(LexicalError):
    code = "INVALID_FUNCTION_NAME"


class InvalidOperatorError(LexicalError):
    code = "INVALID_OPERATOR"


class InputTooLongError(LexicalError):
    code = "TOO_LONG"


# Structural errors (postfix builder)


class StructuralError(CalculatorError):
    code = "STRUCTURAL_ERROR"


class MismatchedParenError(StructuralError):
    code = "MISMATCHED_PAREN"


class UnknownTokenError(StructuralError):
    code = "UNKNOWN_TOKEN"


class UnknownSymbolError(StructuralError):
    code = "UNKNOWN_SYMBOL"


# Evaluation errors (postfix evaluator)


class EvaluationError(CalculatorError):
    code = "EVALUATION_ERROR"


class InsufficientOperandsError(EvaluationError):
    code = "INSUFFICIENT_OPERANDS"


class ExcessOperandsError(EvaluationError):
    code = "EXCESS_OPERANDS"


class ArityMismatchError(EvaluationError):
    code = "ARITY_MISMATCH"


# Algebraic errors (polynomial arithmetic and function application)


class AlgebraError(CalculatorError):
    code = "ALGEBRA_ERROR"


class UnsupportedOperationError(AlgebraError):
    code = "UNSUPPORTED_OPERATION"


class DivisionUnsupportedError(AlgebraError):
    code = "DIVISION_UNSUPPORTED"


class DivisionByZeroError(AlgebraError):
    code = "DIVISION_BY_ZERO"


class NonConstantArgumentError(AlgebraError):
    code = "NON_CONSTANT_ARGUMENT"


class DomainError(AlgebraError):
    code = "DOMAIN_ERROR"


# Semantic errors (mode orchestrator)


class SemanticError(CalculatorError):
    code = "SEMANTIC_ERROR"


class TooManyEqualsSignsError(SemanticError):
    code = "TOO_MANY_EQUALS_SIGNS"


class InconsistentEquationFormError(SemanticError):
    code = "INCONSISTENT_EQUATION_FORM"


class NoSolutionError(SemanticError):
    code = "NO_SOLUTION"


class InfiniteSolutionsError(SemanticError):
    code = "INFINITE_SOLUTIONS"
