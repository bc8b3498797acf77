r"""@package dagdiff.exprs.symbolic

Symbolic differentiation of expression graphs.

symbolic_derivative() constructs a new graph representing the exact
derivative of an expression by applying the chain rule for each node:

| node       | derivative                                       |
|------------|--------------------------------------------------|
| c          | 0                                                |
| x          | 1                                                |
| -f         | -f'                                              |
| sin(f)     | cos(f) * f'                                      |
| cos(f)     | -(sin(f) * f')                                   |
| ln(f)      | f' / f                                           |
| f + g      | f' + g'                                          |
| f * g      | f' * g + f * g'                                  |
| f / g      | (f' * g - f * g') / (g * g)                      |
| f ** g     | f**g * (f' * g / f + g' * ln(f))                 |

The last rule is the generalized power rule following from
\f$ f^g = e^{g \ln f} \f$. It needs the derivatives of both, base and
exponent.

The original sub-expressions `f` and `g` are referenced, not copied, by the
new nodes. In addition, the derivative of a node reachable along several paths
is built only once per call. Construction therefore stays linear in the number
of distinct nodes. No simplification is performed, so e.g. `0 * x` terms
remain in the result.

@b Notes

Evaluation does not cache results of shared nodes. Each differentiation
roughly doubles the length of the evaluation paths, so the cost of evaluating
the n'th symbolic derivative grows exponentially with n (expression swell),
even though the number of distinct nodes grows much slower. Use
forward.derivative_at() when only numeric values of the first derivative are
needed. The functions in tree can be used to quantify the swell.
"""

import warnings

from .common import ExpressionWarning, Settings, _unknown_node, _unknown_op
from .node import Constant, Variable, Unary, Binary, UnaryOp, BinaryOp
from .node import negate, sin, cos, ln, add, sub, mul, div, pow # pylint: disable=redefined-builtin


__all__ = [
    "symbolic_derivative",
    "nth_derivative",
]


def symbolic_derivative(node):
    r"""Return a new expression graph representing the derivative of `node`.

    The given graph is not modified and remains independently usable. Calling
    this twice on the same node produces two independent (but structurally
    equal) graphs.
    """
    return _derivative(node, dict())


def _derivative(node, memo):
    r"""Recursive differentiation with a per-call cache keyed by node identity.

    The cache stores the node along with its derivative to keep it alive
    while its `id()` is in use.
    """
    key = id(node)
    try:
        return memo[key][1]
    except KeyError:
        pass
    result = _derivative_rule(node, memo)
    memo[key] = (node, result)
    return result


def _derivative_rule(node, memo):
    r"""Apply the chain rule for a single node."""
    if isinstance(node, Constant):
        return Constant(0)
    if isinstance(node, Variable):
        return Constant(1)
    if isinstance(node, Unary):
        f = node.operand
        df = _derivative(f, memo)
        op = node.op
        if op is UnaryOp.NEGATE:
            return negate(df)
        if op is UnaryOp.SIN:
            return mul(cos(f), df)
        if op is UnaryOp.COS:
            return negate(mul(sin(f), df))
        if op is UnaryOp.LN:
            return div(df, f)
        raise _unknown_op(node)
    if isinstance(node, Binary):
        f, g = node.left, node.right
        df = _derivative(f, memo)
        dg = _derivative(g, memo)
        op = node.op
        if op is BinaryOp.ADD:
            return add(df, dg)
        if op is BinaryOp.MUL:
            return add(mul(df, g), mul(f, dg))
        if op is BinaryOp.DIV:
            return div(sub(mul(df, g), mul(f, dg)), mul(g, g))
        if op is BinaryOp.POW:
            return mul(pow(f, g), add(div(mul(df, g), f), mul(dg, ln(f))))
        raise _unknown_op(node)
    raise _unknown_node(node)


def nth_derivative(node, n):
    r"""Apply symbolic_derivative() `n` times.

    An ExpressionWarning is issued if evaluating the result would visit more
    than common.Settings.swell_warning_threshold nodes.

    Args:
        node: Expression to differentiate.
        n: Derivative order. `n=0` returns `node` itself.
    """
    from .tree import count_visits
    if n < 0:
        raise ValueError("Derivative order must be non-negative, got %s." % n)
    result = node
    for _ in range(n):
        result = symbolic_derivative(result)
    threshold = Settings.swell_warning_threshold
    if threshold is not None and n > 0:
        visits = count_visits(result)
        if visits > threshold:
            warnings.warn(
                "Derivative of order %d needs %d node visits per evaluation."
                % (n, visits),
                ExpressionWarning
            )
    return result
