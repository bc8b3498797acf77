#!/usr/bin/env python3
r"""@package dagdiff.exprs.test_forward

Forward mode differentiation test suite.
"""

import unittest
import sys
import math

import numpy as np
from mpmath import mp

from testutils import DagTestCase, slowtest
from ..utils import lmap
from .common import InvalidNodeError
from .node import Node, make_constant, make_variable
from .node import sin, cos, ln, pow # pylint: disable=redefined-builtin
from .evaluators import evaluate
from .symbolic import symbolic_derivative
from .forward import derivative_at, value_and_derivative_at


class TestDerivativeAt(DagTestCase):
    def test_constant(self):
        f = make_constant(5)
        for x in (-5, 0, 5):
            self.assertEqual(derivative_at(f, x), 0)

    def test_add(self):
        x = make_variable()
        f = x + x + 17.0
        for t in (-5, 0, 5):
            self.assertEqual(derivative_at(f, t), 2)

    def test_sub(self):
        x = make_variable()
        f = 3.0 * x - x - 17.0
        for t in (-5, 0, 5):
            self.assertEqual(derivative_at(f, t), 2)

    def test_mul(self):
        x = make_variable()
        f = x * x * x + (12.5 * x + 35.2)
        self.assertAlmostEqual(derivative_at(f, -5), 87.5, delta=1e-12)
        self.assertAlmostEqual(derivative_at(f, 0), 12.5, delta=1e-12)
        self.assertAlmostEqual(derivative_at(f, 5), 87.5, delta=1e-12)

    def test_div(self):
        x = make_variable()
        f = 1.0 / x + 1.0 / (x * x)
        self.assertAlmostEqual(derivative_at(f, -5), -0.024, delta=1e-15)
        self.assertAlmostEqual(derivative_at(f, 5), -0.056, delta=1e-15)
        self.assertIsNaN(derivative_at(f, 0))
        self.assertEqual(derivative_at(1.0 / x, 0), -math.inf)

    def test_sin(self):
        x = make_variable()
        f = sin(2.0 * x)
        pi = math.pi
        self.assertAlmostEqual(derivative_at(f, 0), 2, delta=1e-15)
        self.assertAlmostEqual(derivative_at(f, pi/4), 0, delta=1e-15)
        self.assertAlmostEqual(derivative_at(f, pi/2), -2, delta=1e-15)

    def test_cos(self):
        x = make_variable()
        f = cos(2.0 * x)
        pi = math.pi
        self.assertAlmostEqual(derivative_at(f, 0), 0, delta=1e-15)
        self.assertAlmostEqual(derivative_at(f, pi/4), -2, delta=1e-15)
        self.assertAlmostEqual(derivative_at(f, pi/2), 0, delta=1e-15)

    def test_ln(self):
        x = make_variable()
        e = math.e
        f = ln(e * x + e)
        self.assertEqual(derivative_at(f, -1), math.inf)
        self.assertAlmostEqual(derivative_at(f, 0), 1, delta=1e-15)
        self.assertAlmostEqual(derivative_at(f, e - 1), 1/e, delta=1e-15)

    def test_pow(self):
        x = make_variable()
        e = math.e
        f = pow(x, ln(x))
        self.assertAlmostEqual(derivative_at(f, e), 2, delta=1e-14)
        self.assertAlmostEqual(derivative_at(f, e*e), 4*e*e, delta=1e-12)
        self.assertAlmostEqual(derivative_at(x ** 3, 2), 12, delta=1e-14)
        self.assertAlmostEqual(derivative_at(2 ** x, 1), 2*math.log(2), delta=1e-15)

    def test_value_and_derivative(self):
        x = make_variable()
        f = x * sin(x)
        value, deriv = value_and_derivative_at(f, 0.5)
        self.assertAlmostEqual(value, 0.5 * math.sin(0.5), delta=1e-15)
        self.assertAlmostEqual(deriv, math.sin(0.5) + 0.5 * math.cos(0.5),
                               delta=1e-15)
        value, deriv = value_and_derivative_at(1.0 / x + 1.0 / (x * x), 0)
        self.assertEqual(value, math.inf)
        self.assertIsNaN(deriv)

    def test_arrays(self):
        x = make_variable()
        f = x * x * x
        space = np.linspace(-1, 1, 5)
        values = derivative_at(f, space)
        self.assertEqual(values.shape, space.shape)
        self.assertListAlmostEqual(values, [3*t*t for t in space], delta=1e-15)
        values = derivative_at(make_constant(2.0), space)
        self.assertEqual(values.shape, space.shape)
        self.assertListAlmostEqual(values, [0.0] * len(space))
        value, deriv = value_and_derivative_at(x + 1, space)
        self.assertEqual(value.shape, space.shape)
        self.assertEqual(deriv.shape, space.shape)
        self.assertListAlmostEqual(deriv, [1.0] * len(space))
        self.assertIsInstance(derivative_at(x + 1, 0.5), np.float64)

    def test_mpmath(self):
        x = make_variable()
        f = ln(x) * x
        with mp.workdps(30):
            deriv = derivative_at(f, 2, use_mp=True)
            self.assertIsInstance(deriv, mp.mpf)
            self.assertTrue(mp.almosteq(deriv, mp.log(2) + 1,
                                        rel_eps=mp.mpf(10)**-28))
        self.assertIsNaN(derivative_at(1.0 / x + 1.0 / (x * x), 0, use_mp=True))
        self.assertEqual(derivative_at(1.0 / x, 0, use_mp=True), -mp.inf)

    def test_invalid_node(self):
        class _Bogus(Node):
            __slots__ = ()
        with self.assertRaises(InvalidNodeError):
            derivative_at(cos(_Bogus()), 1.0)


class TestConsistency(DagTestCase):
    r"""Forward mode and symbolic derivatives must agree."""
    def _expressions(self):
        x = make_variable()
        e = math.e
        f = x * x
        return [
            make_constant(5),
            x + x + 17.0,
            3.0 * x - x - 17.0,
            x * x * x + 12.5 * x + 35.2,
            1.0 / x + 1.0 / (x * x),
            sin(2.0 * x),
            cos(2.0 * x),
            ln(e * x + e),
            pow(x, ln(x)),
            sin(f) * cos(f) / (f + 1),
            ln(sin(x) ** 2 + 1) - x ** 0.5,
            -(2 ** cos(x)),
        ]

    def test_agree_with_symbolic(self):
        points = [-2.5, -1.0, -0.5, 0.0, 0.5, 1.0, math.e, 4.0]
        for expr in self._expressions():
            dexpr = symbolic_derivative(expr)
            for t in points:
                with self.subTest(expr=expr.str(), x=t):
                    self.assertValueClose(derivative_at(expr, t),
                                          evaluate(dexpr, t))

    def test_agree_on_arrays(self):
        space = np.linspace(0.1, 3.0, 11)
        for expr in self._expressions():
            dexpr = symbolic_derivative(expr)
            expected = lmap(lambda t: evaluate(dexpr, t), space)
            values = derivative_at(expr, space)
            self.assertEqual(values.shape, space.shape)
            for a, b in zip(values, expected):
                self.assertValueClose(a, b)

    def test_second_derivative(self):
        x = make_variable()
        f = sin(x) * ln(x)
        df = symbolic_derivative(f)
        d2f = symbolic_derivative(df)
        for t in (0.5, 1.5, 3.0):
            self.assertValueClose(derivative_at(df, t), evaluate(d2f, t))
            expected = (-math.sin(t)*math.log(t) + 2*math.cos(t)/t
                        - math.sin(t)/t**2)
            self.assertValueClose(derivative_at(df, t), expected, delta=1e-13)

    @slowtest
    def test_high_order(self):
        x = make_variable()
        ev = (x * sin(x)).evaluator()
        n = 10
        for t in (0.7, 2.0):
            expected = (t * math.sin(t + n*math.pi/2)
                        + n * math.sin(t + (n-1)*math.pi/2))
            self.assertValueClose(ev.diff(t, n), expected, delta=1e-10)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
