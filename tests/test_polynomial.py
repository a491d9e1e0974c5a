"""Unit tests for the bounded-degree polynomial."""

import unittest

from linkalk_pkg.polynomial import Polynomial
from linkalk_pkg.types import (
    DivisionByZeroError,
    DivisionUnsupportedError,
    InfiniteSolutionsError,
    NoSolutionError,
    UnsupportedOperationError,
)

C = Polynomial.constant
X = Polynomial.variable()


def linear(c0, c1):
    return Polynomial((float(c0), float(c1)))


class TestConstruction(unittest.TestCase):
    def test_constant(self):
        self.assertTrue(C(4).is_constant())
        self.assertEqual(C(4).constant_term(), 4.0)

    def test_variable(self):
        self.assertFalse(X.is_constant())
        self.assertEqual(X.coefficients, (0.0, 1.0))


class TestArithmetic(unittest.TestCase):
    def test_negate(self):
        self.assertEqual((-linear(2, -3)).coefficients, (-2.0, 3.0))

    def test_add_pads_shorter_operand(self):
        self.assertEqual((C(5) + linear(1, 2)).coefficients, (6.0, 2.0))
        self.assertEqual((linear(1, 2) + linear(3, 4)).coefficients, (4.0, 6.0))

    def test_subtract_constants(self):
        self.assertEqual((C(5) - C(7)).coefficients, (-2.0,))

    def test_subtract_only_touches_constant_term(self):
        self.assertEqual((linear(1, 2) - C(3)).coefficients, (-2.0, 2.0))
        # the x coefficient of a linear right operand is dropped
        self.assertEqual((C(5) - linear(1, 2)).coefficients, (4.0,))

    def test_subtract_two_linear_rejected(self):
        with self.assertRaises(UnsupportedOperationError) as ctx:
            linear(1, 2) - X
        self.assertIn("degree >= 1", str(ctx.exception))

    def test_multiply_scales_longer_operand(self):
        self.assertEqual((linear(1, 2) * C(3)).coefficients, (3.0, 6.0))
        self.assertEqual((C(3) * linear(1, 2)).coefficients, (3.0, 6.0))
        self.assertEqual((C(3) * C(4)).coefficients, (12.0,))

    def test_multiply_two_linear_rejected(self):
        with self.assertRaises(UnsupportedOperationError):
            X * X

    def test_divide(self):
        self.assertEqual((linear(2, 4) / C(2)).coefficients, (1.0, 2.0))

    def test_divide_by_linear_rejected(self):
        with self.assertRaises(DivisionUnsupportedError):
            C(1) / X

    def test_divide_by_zero(self):
        with self.assertRaises(DivisionByZeroError):
            C(1) / C(0)
        with self.assertRaises(DivisionByZeroError):
            C(1) / C(1e-7)

    def test_divide_then_multiply_restores(self):
        for a, c in [(7.5, 3.0), (-2.0, 1e-5), (1e6, -0.25)]:
            restored = (C(a) / C(c)) * C(c)
            self.assertAlmostEqual(restored.constant_term(), a, places=6)

    def test_operands_not_mutated(self):
        a, b = linear(1, 2), C(3)
        _ = a + b, a - b, a * b, a / b, -a
        self.assertEqual(a.coefficients, (1.0, 2.0))
        self.assertEqual(b.coefficients, (3.0,))


class TestSolveLinear(unittest.TestCase):
    def test_root(self):
        self.assertEqual(linear(-6, 1).solve_linear(), 6.0)
        self.assertAlmostEqual(linear(3, 4).solve_linear(), -0.75)

    def test_no_solution(self):
        with self.assertRaises(NoSolutionError):
            linear(-10, 0).solve_linear()
        with self.assertRaises(NoSolutionError):
            C(5).solve_linear()

    def test_infinite_solutions(self):
        with self.assertRaises(InfiniteSolutionsError):
            linear(0, 1e-9).solve_linear()
        with self.assertRaises(InfiniteSolutionsError):
            C(0).solve_linear()


class TestFormatting(unittest.TestCase):
    def test_to_string(self):
        self.assertEqual(str(C(3)), "3")
        self.assertEqual(str(linear(-8, -2.5)), "-8 - 2.5*x")


if __name__ == "__main__":
    unittest.main()
