r"""@package dagdiff.exprs

Expression system for single-variable real functions represented as DAGs,
with symbolic and pointwise differentiation.

The idea is to have each expression be a graph of immutable nodes (see
node), where each node is a constant, the variable `x`, or a unary or binary
operation on other nodes. Since nodes never change, sub-expressions can be
shared freely between expressions.

Three independent traversals operate on these graphs:

    * evaluators.evaluate() computes the value at a point
    * symbolic.symbolic_derivative() constructs a new graph representing the
      exact derivative
    * forward.derivative_at() computes the value of the derivative at a point
      without constructing anything (forward mode automatic differentiation)

The results of symbolic differentiation are ordinary expressions again and
can be evaluated and differentiated further. However, their evaluation cost
grows exponentially with the number of successive differentiations
(*expression swell*), which can be examined with the functions in tree.

All traversals can use either fast floating point operations or slower
`mpmath` arbitrary precision operations (see arith). Special values like
division by zero follow IEEE-754 rules in both cases.
"""

from .common import InvalidNodeError, ExpressionWarning, Settings
from .node import UnaryOp, BinaryOp, Node, Constant, Variable, Unary, Binary
from .node import to_node, make_constant, make_variable
from .node import negate, sin, cos, ln, add, sub, mul, div, pow, d # pylint: disable=redefined-builtin
from .evaluators import evaluate, NodeEvaluator
from .symbolic import symbolic_derivative, nth_derivative
from .forward import derivative_at, value_and_derivative_at
