r"""@package dagdiff.exprs.common

Utils used by multiple modules in dagdiff.exprs.
"""


__all__ = [
    "InvalidNodeError",
    "ExpressionWarning",
    "Settings",
]


class InvalidNodeError(TypeError):
    r"""Raised when a traversal encounters an unknown node or operator.

    Nodes can only be created through the constructors in node, which never
    produce anything else than the known variants. This exception therefore
    signals a programming error and is not meant to be caught.
    """
    pass


class ExpressionWarning(UserWarning):
    """Warning issued when expressions might not evaluate as expected."""
    pass


class Settings(object):
    """Global settings for the expression system."""
    ## Number of evaluation-time node visits above which nth_derivative()
    ## warns about expression swell.
    swell_warning_threshold = 10**6
    ## Decimal places used for `mpmath` evaluation if none are given
    ## explicitly. `None` keeps the current `mp.dps`.
    default_dps = None


def _unknown_node(node):
    r"""Create the exception for an unknown node variant."""
    return InvalidNodeError("Unknown expression node: %r" % (node,))


def _unknown_op(node):
    r"""Create the exception for an unknown operator of a known variant."""
    return InvalidNodeError("Unknown operator %r in node %s"
                            % (getattr(node, 'op', None), type(node).__name__))
