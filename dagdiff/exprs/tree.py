r"""@package dagdiff.exprs.tree

Inspection of expression graphs.

The functions here help understanding the structure of an expression and,
in particular, quantify the *expression swell* of repeated symbolic
differentiation. Two measures are distinguished:

    * count_nodes() counts the distinct node objects reachable from a root,
      i.e. the memory held by the graph
    * count_visits() counts how many nodes an evaluation visits, i.e. the
      size of the tree obtained by expanding all shared nodes

For an expression without shared sub-expressions, both agree. Repeated
differentiation lets the latter grow exponentially.

@b Examples

```
    >>> x = make_variable()
    >>> print_swell_table(x * sin(x), 4)
    order      nodes         visits
    0          3             4
    ...
```
"""

from ..utils import timethis
from .node import Constant, Unary, Binary


__all__ = [
    "traverse_tree",
    "print_tree",
    "iter_nodes",
    "count_nodes",
    "count_visits",
    "depth",
    "structurally_equal",
    "swell_profile",
    "print_swell_table",
]


def traverse_tree(node, include_root=False, parents=None):
    r"""Generator that walks through a complete expression graph.

    In each iteration, the returned values represent the current node's
    parents (as a list from root to immediate parent), its key under which it
    is stored in its parent (`"operand"`, `"left"` or `"right"`), and the
    node itself.

    Shared nodes are visited once per path leading to them, i.e. in the same
    way an evaluation would visit them.

    Args:
        include_root: Whether to include the root as first item. Default
            is `False`.
        parents: Optional list of parents of the root. Normally only used
            internally for the recursion.

    @b Examples
    \code
        for parents, key, node in traverse_tree(root):
            print("-"*len(parents), key)
    \endcode
    """
    if parents is None:
        parents = []
    if include_root:
        yield parents, "", node
    parents = parents + [node]
    for key, child in node.children():
        yield parents, key, child
        for item in traverse_tree(child, include_root=False, parents=parents):
            yield item


def print_tree(node, root_name='root'):
    r"""Print the whole expression graph.

    Each line shows the key under which the node is stored in its parent and
    the node's variant. Nodes that have been printed before on a different
    path are marked with `*` and their children are not repeated.
    """
    seen = set()
    def _p(n, key, level):
        shared = id(n) in seen
        seen.add(id(n))
        print("%s%s [%s]%s" % (". " * level, key, _label(n),
                               " *" if shared else ""))
        if not shared:
            for k, child in n.children():
                _p(child, k, level + 1)
    _p(node, root_name, 0)


def _label(node):
    r"""Short description of a single node (without its children)."""
    if isinstance(node, Constant):
        return "Constant %s" % node.value
    if isinstance(node, (Unary, Binary)):
        return "%s %s" % (type(node).__name__, node.op.name)
    return type(node).__name__


def iter_nodes(node):
    r"""Generator yielding each distinct node reachable from `node` once.

    Children are yielded before their parents and `node` comes last.
    """
    seen = set()
    stack = [(node, False)]
    while stack:
        n, expanded = stack.pop()
        if expanded:
            yield n
            continue
        if id(n) in seen:
            continue
        seen.add(id(n))
        stack.append((n, True))
        for _, child in reversed(n.children()):
            if id(child) not in seen:
                stack.append((child, False))


def count_nodes(node):
    r"""Return the number of distinct nodes reachable from `node`."""
    return sum(1 for _ in iter_nodes(node))


def count_visits(node):
    r"""Return the number of node visits of one evaluation of `node`.

    This is computed from the distinct nodes without actually performing the
    (possibly very expensive) walk.
    """
    visits = dict()
    for n in iter_nodes(node):
        visits[id(n)] = 1 + sum(visits[id(c)] for _, c in n.children())
    return visits[id(node)]


def depth(node):
    r"""Return the number of nodes on the longest path from `node` to a leaf."""
    depths = dict()
    for n in iter_nodes(node):
        depths[id(n)] = 1 + max([depths[id(c)] for _, c in n.children()],
                                default=0)
    return depths[id(node)]


def structurally_equal(a, b):
    r"""Return whether two graphs have the same structure and values.

    Two graphs are structurally equal if they consist of the same variants
    with the same operators and constant values arranged in the same way. The
    nodes themselves need not be identical objects, and sharing is not taken
    into account.
    """
    memo = set()
    def _eq(p, q):
        if p is q:
            return True
        key = (id(p), id(q))
        if key in memo:
            return True
        if type(p) is not type(q):
            return False
        if isinstance(p, Constant):
            if p.value != q.value:
                return False
        elif isinstance(p, (Unary, Binary)):
            if p.op is not q.op:
                return False
            if not all(_eq(c1, c2) for (_, c1), (_, c2)
                       in zip(p.children(), q.children())):
                return False
        memo.add(key)
        return True
    return _eq(a, b)


def swell_profile(node, max_order):
    r"""Measure the graph sizes of repeated symbolic derivatives.

    Returns a list of `(order, nodes, visits)` tuples for derivative orders
    `0, ..., max_order`, where `nodes` is the count_nodes() and `visits` the
    count_visits() result for the respective derivative.
    """
    from .symbolic import symbolic_derivative
    result = []
    expr = node
    for order in range(max_order + 1):
        if order > 0:
            expr = symbolic_derivative(expr)
        result.append((order, count_nodes(expr), count_visits(expr)))
    return result


def print_swell_table(node, max_order, timing=False):
    r"""Print the swell_profile() of `node` as a table.

    Args:
        node: Expression to differentiate repeatedly.
        max_order: Highest derivative order to include.
        timing: Whether to also time the construction of each derivative.
    """
    from .symbolic import symbolic_derivative
    print("%-10s %-13s %s" % ("order", "nodes", "visits"))
    expr = node
    for order in range(max_order + 1):
        if order > 0:
            with timethis(end_msg="  construction time: {}", silent=not timing):
                expr = symbolic_derivative(expr)
        print("%-10d %-13d %d" % (order, count_nodes(expr), count_visits(expr)))
