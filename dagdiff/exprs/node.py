r"""@package dagdiff.exprs.node

Immutable nodes of an expression DAG in a single real variable.

An expression is represented by its root node. Each node is one of a closed
set of variants:

    * Constant: leaf holding a fixed real number
    * Variable: leaf representing the free input `x`
    * Unary:    one of UnaryOp applied to an operand node
    * Binary:   one of BinaryOp applied to a left and a right node

Nodes never change after construction. Operations that seem to "modify" an
expression (like taking its derivative) create new nodes which may reference
existing ones. Many parents can therefore share a child, which makes the
structure a DAG rather than a tree. Ownership is plain Python reference
semantics, i.e. a node stays alive as long as anything refers to it.

Nodes are usually not created by calling the variant classes directly but via
the leaf constructors make_constant() and make_variable() and the combinators
negate(), sin(), cos(), ln(), add(), sub(), mul(), div() and pow(). These
accept real numbers wherever a node is expected and convert them using
to_node(). The Python operators are available too:

~~~.py
x = make_variable()
f = x * x * x + 12.5 * x + 35.2
print(f(-5))            # -152.3
print(d(f, 0.0))        # 12.5 (forward mode)
print(d(f)(0.0))        # 12.5 (symbolic derivative evaluated at 0)
~~~

Subtraction has no node of its own, `a - b` is built as `a + (-b)`.
"""

import enum
import numbers

from mpmath import mp


__all__ = [
    "UnaryOp",
    "BinaryOp",
    "Node",
    "Constant",
    "Variable",
    "Unary",
    "Binary",
    "to_node",
    "make_constant",
    "make_variable",
    "negate",
    "sin",
    "cos",
    "ln",
    "add",
    "sub",
    "mul",
    "div",
    "pow",
    "d",
]


class UnaryOp(enum.Enum):
    r"""Operators of Unary nodes."""
    NEGATE = "-"
    SIN = "sin"
    COS = "cos"
    LN = "ln"


class BinaryOp(enum.Enum):
    r"""Operators of Binary nodes."""
    ADD = "+"
    MUL = "*"
    DIV = "/"
    POW = "**"


def _is_real(value):
    r"""Return whether `value` is a real number we can store in a Constant.

    Booleans are rejected even though Python registers them as real numbers.
    """
    if isinstance(value, (Node, bool)):
        return False
    return isinstance(value, (numbers.Real, mp.mpf))


class Node(object):
    r"""Base class of all expression nodes.

    Nodes are immutable and compared by identity. Subclasses set their
    attributes once in `__init__` via `object.__setattr__()`.
    """
    __slots__ = ()

    # Make numpy scalars defer to our reflected operators.
    __array_ufunc__ = None

    def __setattr__(self, name, value):
        raise AttributeError("Expression nodes are immutable.")

    def __delattr__(self, name):
        raise AttributeError("Expression nodes are immutable.")

    def children(self):
        r"""Return a tuple of `(key, child)` pairs of this node."""
        return ()

    def str(self):
        r"""Return the expression as fully parenthesized infix string."""
        return self._expr_str()

    def _expr_str(self):
        raise NotImplementedError

    def __str__(self):
        return self.str()

    def __repr__(self):
        return "<%s(%s)>" % (type(self).__name__, self.str())

    def __call__(self, x):
        r"""Evaluate the expression at `x` using floating point arithmetics."""
        from .evaluators import evaluate
        return evaluate(self, x)

    def evaluator(self, use_mp=False):
        r"""Create a callable evaluator object for this expression.

        See evaluators.NodeEvaluator for details.

        Args:
            use_mp: Whether the evaluator should use `mpmath` arbitrary
                precision arithmetics instead of floating point operations.
                Default is `False`.
        """
        from .evaluators import NodeEvaluator
        return NodeEvaluator(self, use_mp=use_mp)

    def __neg__(self):
        return negate(self)

    def __add__(self, other):
        return add(self, other)

    def __radd__(self, other):
        return add(other, self)

    def __sub__(self, other):
        return sub(self, other)

    def __rsub__(self, other):
        return sub(other, self)

    def __mul__(self, other):
        return mul(self, other)

    def __rmul__(self, other):
        return mul(other, self)

    def __truediv__(self, other):
        return div(self, other)

    def __rtruediv__(self, other):
        return div(other, self)

    def __pow__(self, other):
        return pow(self, other)

    def __rpow__(self, other):
        return pow(other, self)


class Constant(Node):
    r"""Leaf representing a fixed real number `c`."""
    __slots__ = ("value",)

    def __init__(self, value):
        r"""Init function.

        Args:
            value:  The constant value. May be any real Python or numpy
                    number or an `mpmath.mpf`.
        """
        if not _is_real(value):
            raise TypeError("Constant value must be a real number, got %r."
                            % (value,))
        ## The constant value this node represents.
        object.__setattr__(self, "value", value)

    def _expr_str(self):
        return "%s" % self.value

    def __reduce__(self):
        return (Constant, (self.value,))


class Variable(Node):
    r"""Leaf representing the single free input `x`.

    All Variable instances denote the same input.
    """
    __slots__ = ()

    def _expr_str(self):
        return "x"

    def __reduce__(self):
        return (Variable, ())


class Unary(Node):
    r"""Apply a UnaryOp to a single operand node."""
    __slots__ = ("op", "operand")

    def __init__(self, op, operand):
        if not isinstance(op, UnaryOp):
            raise TypeError("Not a unary operator: %r" % (op,))
        if not isinstance(operand, Node):
            raise TypeError("Operand must be an expression node, got %r."
                            % (operand,))
        object.__setattr__(self, "op", op)
        object.__setattr__(self, "operand", operand)

    def children(self):
        return (("operand", self.operand),)

    def _expr_str(self):
        return "%s(%s)" % (self.op.value, self.operand.str())

    def __reduce__(self):
        return (Unary, (self.op, self.operand))


class Binary(Node):
    r"""Apply a BinaryOp to a left and a right node."""
    __slots__ = ("op", "left", "right")

    def __init__(self, op, left, right):
        if not isinstance(op, BinaryOp):
            raise TypeError("Not a binary operator: %r" % (op,))
        if not isinstance(left, Node) or not isinstance(right, Node):
            raise TypeError("Operands must be expression nodes, got %r and %r."
                            % (left, right))
        object.__setattr__(self, "op", op)
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    def children(self):
        return (("left", self.left), ("right", self.right))

    def _expr_str(self):
        return "(%s %s %s)" % (self.left.str(), self.op.value, self.right.str())

    def __reduce__(self):
        return (Binary, (self.op, self.left, self.right))


def to_node(value):
    r"""Return `value` as expression node.

    Nodes are returned unchanged and real numbers are wrapped in a new
    Constant. Anything else raises a `TypeError`.
    """
    if isinstance(value, Node):
        return value
    if _is_real(value):
        return Constant(value)
    raise TypeError("Cannot convert %r to an expression node." % (value,))


def make_constant(value):
    r"""Create a Constant leaf."""
    return Constant(value)


def make_variable():
    r"""Create a Variable leaf."""
    return Variable()


def negate(f):
    return Unary(UnaryOp.NEGATE, to_node(f))


def sin(f):
    return Unary(UnaryOp.SIN, to_node(f))


def cos(f):
    return Unary(UnaryOp.COS, to_node(f))


def ln(f):
    return Unary(UnaryOp.LN, to_node(f))


def add(f, g):
    return Binary(BinaryOp.ADD, to_node(f), to_node(g))


def sub(f, g):
    r"""Build `f - g` as `f + (-g)`."""
    return add(f, negate(g))


def mul(f, g):
    return Binary(BinaryOp.MUL, to_node(f), to_node(g))


def div(f, g):
    return Binary(BinaryOp.DIV, to_node(f), to_node(g))


def pow(f, g): # pylint: disable=redefined-builtin
    return Binary(BinaryOp.POW, to_node(f), to_node(g))


def d(expr, x=None, use_mp=False, dps=None):
    r"""Differentiate an expression symbolically or at a point.

    Args:
        expr:   Expression node (or real number) to differentiate.
        x:      If `None` (default), return the symbolic derivative as new
                expression node. Otherwise, return the numeric value of the
                derivative at `x` computed in forward mode.
        use_mp: Whether to use `mpmath` arithmetics for the pointwise
                derivative. Ignored for symbolic derivatives.
        dps:    Decimal places for `mpmath` computations. Ignored for
                symbolic derivatives.
    """
    expr = to_node(expr)
    if x is None:
        from .symbolic import symbolic_derivative
        return symbolic_derivative(expr)
    from .forward import derivative_at
    return derivative_at(expr, x, use_mp=use_mp, dps=dps)
