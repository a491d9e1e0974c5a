"""Tests for mode detection, equation solving and the evaluate() entry point."""

import unittest

import pytest
import sympy as sp

from linkalk_pkg import config
from linkalk_pkg.calculator import (
    CONSTANT_MODE,
    EQUATION_MODE,
    SELF_TEST_CASES,
    compute,
    detect_mode,
    equals_to_minus,
    evaluate,
    format_number,
    solve,
)
from linkalk_pkg.tokenizer import TokenKind, tokenize
from linkalk_pkg.types import (
    DivisionByZeroError,
    DomainError,
    InconsistentEquationFormError,
    InfiniteSolutionsError,
    InsufficientOperandsError,
    MalformedNumberError,
    MismatchedParenError,
    NoSolutionError,
    TooManyEqualsSignsError,
    UnknownSymbolError,
    UnsupportedOperationError,
)


class TestKnownResults(unittest.TestCase):
    def test_addition(self):
        self.assertEqual(evaluate("4 + 9"), "13")

    def test_simple_equation(self):
        self.assertEqual(evaluate("x + 5 = 11"), "6")

    def test_no_solution(self):
        self.assertEqual(evaluate("x * 0 = 10"), "Constant can't equal 0, no solutions")

    def test_infinite_solutions(self):
        self.assertEqual(
            evaluate("x * 0 = 0"),
            "Expression evaluates to 0, infinite number of solutions",
        )

    def test_lone_equals_sign(self):
        self.assertEqual(
            evaluate("="),
            "Expression must contain both a variable and equal sign or neither",
        )

    def test_missing_function_argument(self):
        result = evaluate("max(1)")
        self.assertIn("Insufficient number of operands for max", result)
        self.assertTrue(result.startswith("Error evaluating postfix sequence"))

    def test_mixed_equation(self):
        self.assertEqual(
            evaluate("x + x * (10 / cos(2)) = min(15, pow(2, 3))"), "-0.347373"
        )

    def test_unclosed_paren(self):
        self.assertEqual(
            evaluate("(5"), "Error building postfix sequence: Mismatched parentheses"
        )

    def test_unknown_function(self):
        result = evaluate("lag(10)")
        self.assertIn("Invalid mathematical function lag", result)

    def test_self_test_cases(self):
        for expression, expected in SELF_TEST_CASES:
            with self.subTest(expression=expression):
                self.assertEqual(evaluate(expression), expected)

    def test_idempotent(self):
        for expression in ("4 + 9", "x + 5 = 11", "(5", "max(1)", "2 / 3"):
            with self.subTest(expression=expression):
                self.assertEqual(evaluate(expression), evaluate(expression))


class TestModeDetection(unittest.TestCase):
    def test_constant_mode(self):
        self.assertEqual(detect_mode(tokenize("1 + 2")), CONSTANT_MODE)

    def test_equation_mode(self):
        self.assertEqual(detect_mode(tokenize("x = 2")), EQUATION_MODE)

    def test_too_many_equals(self):
        with self.assertRaises(TooManyEqualsSignsError):
            detect_mode(tokenize("x = 1 = 2"))

    def test_variable_without_equals(self):
        with self.assertRaises(InconsistentEquationFormError):
            detect_mode(tokenize("x + 1"))

    def test_equals_without_variable(self):
        with self.assertRaises(InconsistentEquationFormError):
            detect_mode(tokenize("1 = 1"))

    def test_equals_rewritten_to_minus(self):
        tokens = equals_to_minus(tokenize("x=3"))
        self.assertEqual(tokens[1].kind, TokenKind.OPERATOR)
        self.assertEqual(tokens[1].text, "-")


class TestStageErrors(unittest.TestCase):
    """Errors keep their type and code while gaining a stage prefix."""

    def test_tokenizer_error(self):
        with self.assertRaises(MalformedNumberError) as ctx:
            compute("1.2.3 + 1")
        self.assertTrue(str(ctx.exception).startswith("Error in tokenizer: "))
        self.assertEqual(ctx.exception.code, "MALFORMED_NUMBER")
        self.assertIsInstance(ctx.exception.__cause__, MalformedNumberError)

    def test_build_error(self):
        with self.assertRaises(MismatchedParenError):
            compute("(1 + 2")
        with self.assertRaises(UnknownSymbolError):
            compute("tan(1)")

    def test_evaluation_errors(self):
        with self.assertRaises(InsufficientOperandsError):
            compute("max(1)")
        with self.assertRaises(DivisionByZeroError) as ctx:
            compute("1 / 0")
        self.assertTrue(str(ctx.exception).startswith("Error evaluating postfix sequence: "))
        with self.assertRaises(DomainError):
            compute("log(0)")

    def test_two_linear_operands(self):
        with self.assertRaises(UnsupportedOperationError):
            compute("x * x = 1")
        with self.assertRaises(UnsupportedOperationError):
            compute("x = x")

    def test_semantic_errors_have_no_prefix(self):
        with self.assertRaises(NoSolutionError) as ctx:
            compute("x * 0 = 10")
        self.assertEqual(str(ctx.exception), "Constant can't equal 0, no solutions")
        with self.assertRaises(InfiniteSolutionsError):
            compute("0 * x = 5 - 5")


class TestEquations(unittest.TestCase):
    def test_solutions(self):
        cases = [
            ("x = 5", 5.0),
            ("2 * x = 7", 3.5),
            ("x / 4 + 1 = 3", 8.0),
            ("-x = 3", -3.0),
            ("3 * (x + 2) = 0", -2.0),
            ("x * pow(2, 2) = log(1) + 12", 3.0),
        ]
        for expression, expected in cases:
            with self.subTest(expression=expression):
                self.assertAlmostEqual(compute(expression), expected)

    def test_mode_reported(self):
        self.assertEqual(solve("x = 5").mode, EQUATION_MODE)
        self.assertEqual(solve("5").mode, CONSTANT_MODE)

    def test_subtraction_keeps_left_x_coefficient(self):
        # only constant terms take part in subtraction, so 10 - x loses its x
        with self.assertRaises(NoSolutionError):
            compute("10 = x")


class TestFormatNumber(unittest.TestCase):
    def test_general_format(self):
        self.assertEqual(format_number(13.0), "13")
        self.assertEqual(format_number(0.5), "0.5")
        self.assertEqual(format_number(1.0 / 3.0), "0.333333")
        self.assertEqual(format_number(1234567.0), "1.23457e+06")

    def test_explicit_precision(self):
        self.assertEqual(format_number(1.0 / 3.0, precision=3), "0.333")

    def test_configured_precision(self):
        saved = config.OUTPUT_PRECISION
        try:
            config.OUTPUT_PRECISION = 2
            self.assertEqual(evaluate("2 / 3"), "0.67")
        finally:
            config.OUTPUT_PRECISION = saved


# Cross-check constant expressions against SymPy's own evaluation
ORACLE_EXPRESSIONS = [
    "1 + 2 * 3 - 4 / 5",
    "(1 + 2) * (3 - 4) / 5",
    "10 - 4 - 3 - 2",
    "2 * -3 + -(4 - 1)",
    "sin(0.5) * cos(0.25) + log(3)",
    "pow(2, 0.5) * max(3, 7) - min(2, -1)",
    "100 / 7 / 3",
    "log(pow(2, 8)) / log(2)",
    "max(sin(1), cos(1)) + 0.125",
]


def _sympy_value(expression):
    translated = expression.replace("log(", "ln(").replace("pow(", "Pow(")
    translated = translated.replace("max(", "Max(").replace("min(", "Min(")
    return float(sp.sympify(translated, locals={"ln": sp.log}).evalf())


@pytest.mark.parametrize("expression", ORACLE_EXPRESSIONS)
def test_matches_direct_evaluation(expression):
    assert compute(expression) == pytest.approx(_sympy_value(expression), rel=1e-12)
