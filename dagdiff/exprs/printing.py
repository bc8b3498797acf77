r"""@package dagdiff.exprs.printing

Conversion of expression graphs to SymPy objects and LaTeX.

This is useful for displaying expressions in a more readable form and for
cross-checking results against SymPy's own differentiation. Note that SymPy
may automatically simplify parts of the converted expression (e.g. `x + x`
becomes `2*x`).

@b Examples

```
    >>> x = make_variable()
    >>> latex(sin(2 * x) / x)
    '\\frac{\\sin{\\left(2 x \\right)}}{x}'
```
"""

import sympy as sp

from .common import _unknown_node, _unknown_op
from .node import Constant, Variable, Unary, Binary, UnaryOp, BinaryOp


__all__ = [
    "to_sympy",
    "latex",
]


def to_sympy(node, symbol=None):
    r"""Convert an expression graph to a SymPy expression.

    Args:
        node: Root node of the expression.
        symbol: SymPy symbol to use for the variable. By default, a real
            symbol `x` is used.
    """
    if symbol is None:
        symbol = sp.Symbol('x', real=True)
    cache = dict()
    def _conv(n):
        try:
            return cache[id(n)]
        except KeyError:
            pass
        result = _convert(n, symbol, _conv)
        cache[id(n)] = result
        return result
    return _conv(node)


def _convert(node, symbol, conv):
    if isinstance(node, Constant):
        return sp.sympify(node.value)
    if isinstance(node, Variable):
        return symbol
    if isinstance(node, Unary):
        f = conv(node.operand)
        op = node.op
        if op is UnaryOp.NEGATE:
            return -f
        if op is UnaryOp.SIN:
            return sp.sin(f)
        if op is UnaryOp.COS:
            return sp.cos(f)
        if op is UnaryOp.LN:
            return sp.log(f)
        raise _unknown_op(node)
    if isinstance(node, Binary):
        f = conv(node.left)
        g = conv(node.right)
        op = node.op
        if op is BinaryOp.ADD:
            return f + g
        if op is BinaryOp.MUL:
            return f * g
        if op is BinaryOp.DIV:
            return f / g
        if op is BinaryOp.POW:
            return f ** g
        raise _unknown_op(node)
    raise _unknown_node(node)


def latex(node, symbol=None):
    r"""Return a LaTeX representation of an expression graph."""
    return sp.latex(to_sympy(node, symbol=symbol))
