#!/usr/bin/env python3
r"""@package dagdiff.exprs.test_node

Expression node construction test suite.
"""

import unittest
import sys
import copy
import pickle

import numpy as np
from mpmath import mp

from testutils import DagTestCase
from .node import UnaryOp, BinaryOp, Node, Constant, Variable, Unary, Binary
from .node import to_node, make_constant, make_variable
from .node import negate, sin, cos, ln, add, sub, mul, div, pow # pylint: disable=redefined-builtin
from .node import d


class TestConstruction(DagTestCase):
    def test_leaves(self):
        c = make_constant(5)
        self.assertIsType(c, Constant)
        self.assertEqual(c.value, 5)
        self.assertEqual(c.children(), ())
        x = make_variable()
        self.assertIsType(x, Variable)
        self.assertEqual(x.children(), ())
        self.assertIsNot(make_variable(), x)

    def test_combinators(self):
        x = make_variable()
        for func, op in [(negate, UnaryOp.NEGATE), (sin, UnaryOp.SIN),
                         (cos, UnaryOp.COS), (ln, UnaryOp.LN)]:
            e = func(x)
            self.assertIsType(e, Unary)
            self.assertIs(e.op, op)
            self.assertIs(e.operand, x)
        for func, op in [(add, BinaryOp.ADD), (mul, BinaryOp.MUL),
                         (div, BinaryOp.DIV), (pow, BinaryOp.POW)]:
            e = func(x, 2)
            self.assertIsType(e, Binary)
            self.assertIs(e.op, op)
            self.assertIs(e.left, x)
            self.assertIsType(e.right, Constant)
            self.assertEqual(e.right.value, 2)

    def test_subtraction(self):
        x = make_variable()
        e = sub(x, 3.0)
        self.assertIsType(e, Binary)
        self.assertIs(e.op, BinaryOp.ADD)
        self.assertIs(e.left, x)
        self.assertIsType(e.right, Unary)
        self.assertIs(e.right.op, UnaryOp.NEGATE)
        self.assertEqual(e.right.operand.value, 3.0)

    def test_to_node(self):
        x = make_variable()
        self.assertIs(to_node(x), x)
        for value in (1, 2.5, np.float64(-1.5), np.int64(3), mp.mpf('0.1')):
            c = to_node(value)
            self.assertIsType(c, Constant)
            self.assertIs(c.value, value)
        for value in ("1", None, [1.0], 1j, np.array([1.0, 2.0]), True, False):
            with self.assertRaises(TypeError):
                to_node(value)
        with self.assertRaises(TypeError):
            make_constant("5")
        with self.assertRaises(TypeError):
            make_constant(True)

    def test_invalid_construction(self):
        x = make_variable()
        with self.assertRaises(TypeError):
            Unary(BinaryOp.ADD, x)
        with self.assertRaises(TypeError):
            Unary(UnaryOp.SIN, 1.0)
        with self.assertRaises(TypeError):
            Binary(UnaryOp.SIN, x, x)
        with self.assertRaises(TypeError):
            Binary(BinaryOp.ADD, x, 1.0)

    def test_sharing(self):
        x = make_variable()
        f = x * x
        g = f + f
        self.assertIs(g.left, g.right)
        self.assertIs(g.left.left, x)
        self.assertIs(g.left.right, x)


class TestImmutability(DagTestCase):
    def test_no_attribute_changes(self):
        x = make_variable()
        c = make_constant(1.0)
        e = x + c
        with self.assertRaises(AttributeError):
            c.value = 2.0
        with self.assertRaises(AttributeError):
            e.left = c
        with self.assertRaises(AttributeError):
            e.foo = 1
        with self.assertRaises(AttributeError):
            del e.right
        with self.assertRaises(AttributeError):
            x.foo = 1
        self.assertIs(e.left, x)
        self.assertIs(e.right, c)
        self.assertEqual(c.value, 1.0)

    def test_identity(self):
        x = make_variable()
        a = x + 1
        b = x + 1
        self.assertNotEqual(a, b)
        self.assertEqual(len({a, b, a}), 2)

    def test_pickle(self):
        x = make_variable()
        f = x * x
        g = sin(f) + f / 2.5
        s = pickle.dumps(g)
        h = pickle.loads(s)
        self.assertIsType(h, Binary)
        self.assertEqual(h.str(), g.str())
        # Sharing of the sub-expression survives the round trip.
        self.assertIs(h.left.operand, h.right.left)
        self.assertAlmostEqual(h(1.5), g(1.5))

    def test_copy(self):
        x = make_variable()
        f = cos(x) ** 2
        self.assertEqual(copy.deepcopy(f).str(), f.str())
        self.assertEqual(copy.copy(f).str(), f.str())


class TestOperators(DagTestCase):
    def test_operators(self):
        x = make_variable()
        self.assertEqual((x + 1).str(), "(x + 1)")
        self.assertEqual((1 + x).str(), "(1 + x)")
        self.assertEqual((x - 1).str(), "(x + -(1))")
        self.assertEqual((1 - x).str(), "(1 + -(x))")
        self.assertEqual((2 * x).str(), "(2 * x)")
        self.assertEqual((x * 2).str(), "(x * 2)")
        self.assertEqual((x / 2).str(), "(x / 2)")
        self.assertEqual((2 / x).str(), "(2 / x)")
        self.assertEqual((x ** 2).str(), "(x ** 2)")
        self.assertEqual((2 ** x).str(), "(2 ** x)")
        self.assertEqual((-x).str(), "-(x)")
        self.assertEqual(sin(cos(ln(x))).str(), "sin(cos(ln(x)))")

    def test_numpy_scalars(self):
        x = make_variable()
        e = np.float64(2.0) * x
        self.assertIsInstance(e, Node)
        self.assertEqual(e.str(), "(2.0 * x)")
        e = np.float64(2.0) ** x
        self.assertIsInstance(e, Node)
        self.assertIs(e.op, BinaryOp.POW)

    def test_repr(self):
        x = make_variable()
        self.assertEqual(repr(x), "<Variable(x)>")
        self.assertEqual(repr(x + 17.0), "<Binary((x + 17.0))>")
        self.assertEqual(str(make_constant(12.5)), "12.5")

    def test_call(self):
        x = make_variable()
        f = x + x + 17.0
        self.assertEqual(f(-5), 7)
        self.assertEqual(f(0), 17)
        self.assertEqual(f(5), 27)

    def test_d(self):
        x = make_variable()
        f = x * x * x + 12.5 * x + 35.2
        self.assertAlmostEqual(d(f, -5.0), 87.5)
        self.assertAlmostEqual(d(f)(-5.0), 87.5)
        self.assertIsInstance(d(f), Node)
        self.assertEqual(d(5).value, 0)
        self.assertAlmostEqual(d(f, 0.0, use_mp=True), 12.5)
        value = d(ln(make_variable()), 3, use_mp=True, dps=40)
        with mp.workdps(40):
            self.assertTrue(mp.almosteq(value, mp.mpf(1)/3,
                                        rel_eps=mp.mpf(10)**-38))


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
