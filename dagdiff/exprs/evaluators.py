r"""@package dagdiff.exprs.evaluators

Numeric evaluation of expression graphs.

The basic operation is evaluate(), which recursively descends the graph
starting at a given node. Nothing is cached, i.e. a node shared by several
parents is evaluated once per path leading to it. This is what makes
repeatedly differentiated expressions expensive to evaluate (see
symbolic.symbolic_derivative()).

For repeated evaluations of an expression and its derivatives, a
NodeEvaluator can be created using node.Node.evaluator(). This is a callable
object resembling the evaluators of a numeric expression:

~~~.py
x = make_variable()
ev = sin(2 * x).evaluator()
ev(0.5)             # value at 0.5
ev.diff(0.5)        # first derivative at 0.5
ev.diff(0.5, n=2)   # second derivative at 0.5
f2 = ev.function(2) # plain callable for the second derivative
~~~
"""

from .arith import arithmetic
from .common import _unknown_node, _unknown_op
from .node import Constant, Variable, Unary, Binary, UnaryOp, BinaryOp


__all__ = [
    "evaluate",
    "NodeEvaluator",
]


def evaluate(node, x, use_mp=False, dps=None):
    r"""Evaluate the expression represented by `node` at `x`.

    Special values (division by zero, logarithm of non-positive values, etc.)
    follow IEEE-754 rules and do not raise (see arith).

    Args:
        node: Root node of the expression.
        x: Point to evaluate at. In floating point mode, this may also be an
            array (or sequence) of points, in which case the expression is
            evaluated element-wise.
        use_mp: Whether to use `mpmath` arbitrary precision arithmetics.
            Default is `False`.
        dps: Decimal places for `mpmath` computations.
    """
    with arithmetic(use_mp, dps) as ar:
        x = ar.convert(x)
        return ar.shape_like(_evaluate(node, x, ar), x)


def _evaluate(node, x, ar):
    r"""Recursive evaluation using an arithmetics back end `ar`."""
    if isinstance(node, Constant):
        return ar.convert(node.value)
    if isinstance(node, Variable):
        return x
    if isinstance(node, Unary):
        f = _evaluate(node.operand, x, ar)
        op = node.op
        if op is UnaryOp.NEGATE:
            return ar.neg(f)
        if op is UnaryOp.SIN:
            return ar.sin(f)
        if op is UnaryOp.COS:
            return ar.cos(f)
        if op is UnaryOp.LN:
            return ar.log(f)
        raise _unknown_op(node)
    if isinstance(node, Binary):
        f = _evaluate(node.left, x, ar)
        g = _evaluate(node.right, x, ar)
        op = node.op
        if op is BinaryOp.ADD:
            return ar.add(f, g)
        if op is BinaryOp.MUL:
            return ar.mul(f, g)
        if op is BinaryOp.DIV:
            return ar.div(f, g)
        if op is BinaryOp.POW:
            return ar.pow(f, g)
        raise _unknown_op(node)
    raise _unknown_node(node)


class NodeEvaluator(object):
    r"""Callable snapshot of an expression for evaluating it and its derivatives.

    Since nodes are immutable, the evaluator always reflects the expression it
    was created for. First derivatives are computed in forward mode (see
    forward.derivative_at()). Higher derivatives of order `n` use the
    symbolic derivative of order `n-1`, which is constructed once and cached
    on the evaluator, and differentiate that in forward mode.

    Note that the cost of evaluating higher derivatives grows exponentially
    with the order due to expression swell.
    """
    def __init__(self, node, use_mp=False, dps=None):
        r"""Create an evaluator for a given expression.

        @param node
            Root node of the expression.
        @param use_mp
            Whether to use `mpmath` arbitrary precision arithmetics.
        @param dps
            Decimal places for `mpmath` computations.
        """
        ## Root node of the evaluated expression.
        self.node = node
        ## Whether `mpmath` arithmetics is used.
        self.use_mp = use_mp
        ## Decimal places for `mpmath` computations.
        self.dps = dps
        self._derivs = [node]

    def __call__(self, x):
        r"""Evaluate the expression at a point x."""
        return evaluate(self.node, x, use_mp=self.use_mp, dps=self.dps)

    def diff(self, x, n=1):
        r"""Evaluate the n'th derivative of the expression at a point x."""
        from .forward import derivative_at
        if n < 0:
            raise ValueError("Derivative order must be non-negative, got %s." % n)
        if n == 0:
            return self(x)
        return derivative_at(self.symbolic(n-1), x, use_mp=self.use_mp,
                             dps=self.dps)

    def symbolic(self, n=1):
        r"""Return the (cached) symbolic n'th derivative of the expression."""
        from .symbolic import symbolic_derivative
        if n < 0:
            raise ValueError("Derivative order must be non-negative, got %s." % n)
        for _ in range(len(self._derivs), n+1):
            self._derivs.append(symbolic_derivative(self._derivs[-1]))
        return self._derivs[n]

    def function(self, n=0):
        r"""Return a callable for the n'th derivative."""
        if n < 0:
            raise ValueError("Derivative order must be non-negative, got %s." % n)
        if n > 1:
            self.symbolic(n-1)
        return lambda x: self.diff(x, n)
