r"""@package dagdiff.numutils

Miscellaneous numerical utilities and helpers.


@b Examples

```
    >>> isclose(1e7+1, 1e7, rel_tol=1e-6)
    True
    >>> isclose(float('nan'), float('nan'), equal_nan=True)
    True
```
"""

from contextlib import contextmanager
import math
import warnings

import numpy as np
from mpmath import mp

from .exprs.common import ExpressionWarning


__all__ = [
    "isclose",
    "raise_all_warnings",
]


def isclose(a, b, rel_tol=None, abs_tol=None, use_mp=False, equal_nan=False):
    r"""Test if two numbers agree within an absolute/relative tolerance.

    For floating point comparison (i.e. if `use_mp==False`), the default
    relative tolerance is `1e-9` and the absolute one `0.0`.

    Infinities are only close to infinities of the same sign. NaN values are
    never close to anything unless `equal_nan=True`, in which case two NaN
    values are considered close.
    """
    if use_mp:
        if mp.isnan(a) or mp.isnan(b):
            return bool(equal_nan and mp.isnan(a) and mp.isnan(b))
        if mp.isinf(a) or mp.isinf(b):
            return a == b
        return mp.almosteq(a, b, rel_eps=rel_tol, abs_eps=abs_tol)
    if math.isnan(a) or math.isnan(b):
        return bool(equal_nan and math.isnan(a) and math.isnan(b))
    if math.isinf(a) or math.isinf(b):
        return a == b
    if rel_tol is None:
        rel_tol = 1e-9
    if abs_tol is None:
        abs_tol = 0.0
    return abs(a-b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)


@contextmanager
def raise_all_warnings():
    r"""Context manager for turning numpy and expression warnings into exceptions.

    For example:
    ```
        with raise_all_warnings():
            nth_derivative(expr, 20)
    ```
    Without the `raise_all_warnings()` context, the above code would just
    issue an ExpressionWarning if the result is expensive to evaluate. This
    allows catching the exception to act upon it, e.g.
    ```
        with raise_all_warnings():
            try:
                nth_derivative(expr, 20)
            except ExpressionWarning:
                print("Derivative too expensive, using forward mode.")
    ```

    Note that evaluating expressions never raises for IEEE-754 special values,
    since the expression system temporarily ignores floating point errors.
    """
    old_settings = np.seterr(divide='raise', over='raise', invalid='raise')
    try:
        with warnings.catch_warnings():
            warnings.filterwarnings('error', category=ExpressionWarning)
            yield
    finally:
        np.seterr(**old_settings)
