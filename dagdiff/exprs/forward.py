r"""@package dagdiff.exprs.forward

Pointwise (forward mode) differentiation of expression graphs.

Instead of constructing a derivative graph, derivative_at() walks the
original graph once and propagates pairs of values and derivatives at the
requested point, combining them according to the same chain rules as used in
symbolic.symbolic_derivative(). The result agrees with
`evaluate(symbolic_derivative(node), x)` wherever both are finite, but the
cost is that of a single evaluation of `node`, independent of how often
derivatives are taken.
"""

from .arith import arithmetic
from .common import _unknown_node, _unknown_op
from .node import Constant, Variable, Unary, Binary, UnaryOp, BinaryOp


__all__ = [
    "derivative_at",
    "value_and_derivative_at",
]


def derivative_at(node, x, use_mp=False, dps=None):
    r"""Evaluate the derivative of the expression `node` at `x`.

    Args:
        node: Root node of the expression.
        x: Point to evaluate the derivative at. In floating point mode, this
            may also be an array of points.
        use_mp: Whether to use `mpmath` arbitrary precision arithmetics.
            Default is `False`.
        dps: Decimal places for `mpmath` computations.
    """
    return value_and_derivative_at(node, x, use_mp=use_mp, dps=dps)[1]


def value_and_derivative_at(node, x, use_mp=False, dps=None):
    r"""Return the value and the derivative of `node` at `x` as a pair.

    See derivative_at() for the arguments.
    """
    with arithmetic(use_mp, dps) as ar:
        x = ar.convert(x)
        f, df = _forward(node, x, ar)
        return ar.shape_like(f, x), ar.shape_like(df, x)


def _forward(node, x, ar):
    r"""Recursively compute `(f(x), f'(x))` using the arithmetics `ar`."""
    if isinstance(node, Constant):
        return ar.convert(node.value), ar.zero
    if isinstance(node, Variable):
        return x, ar.one
    if isinstance(node, Unary):
        f, df = _forward(node.operand, x, ar)
        op = node.op
        if op is UnaryOp.NEGATE:
            return ar.neg(f), ar.neg(df)
        if op is UnaryOp.SIN:
            return ar.sin(f), ar.mul(ar.cos(f), df)
        if op is UnaryOp.COS:
            return ar.cos(f), ar.neg(ar.mul(ar.sin(f), df))
        if op is UnaryOp.LN:
            return ar.log(f), ar.div(df, f)
        raise _unknown_op(node)
    if isinstance(node, Binary):
        f, df = _forward(node.left, x, ar)
        g, dg = _forward(node.right, x, ar)
        op = node.op
        if op is BinaryOp.ADD:
            return ar.add(f, g), ar.add(df, dg)
        if op is BinaryOp.MUL:
            return ar.mul(f, g), ar.add(ar.mul(df, g), ar.mul(f, dg))
        if op is BinaryOp.DIV:
            num = ar.add(ar.mul(df, g), ar.neg(ar.mul(f, dg)))
            return ar.div(f, g), ar.div(num, ar.mul(g, g))
        if op is BinaryOp.POW:
            value = ar.pow(f, g)
            inner = ar.add(ar.div(ar.mul(df, g), f), ar.mul(dg, ar.log(f)))
            return value, ar.mul(value, inner)
        raise _unknown_op(node)
    raise _unknown_node(node)
