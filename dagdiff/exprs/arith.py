r"""@package dagdiff.exprs.arith

Scalar arithmetics used by the traversals over expression graphs.

Evaluation can use either fast floating point operations (`numpy.float64`,
which also allows evaluating on whole arrays at once) or slower `mpmath`
arbitrary precision operations. Both back ends implement the same small set
of operations with IEEE-754 semantics for the special cases:

    * division by zero results in a signed infinity (NaN for `0/0`)
    * `ln(0) = -inf` and `ln(x) = nan` for `x < 0`
    * NaN and infinities propagate through subsequent operations

No exceptions are raised and no warnings are emitted in these cases.

Powers follow `numpy.power()`: `a**0 == 1` and `1**b == 1` (even for NaN),
`0**(-1) == inf`, a negative base with non-integer exponent gives NaN and
infinite exponents give the real limits (e.g. `(-0.5)**inf == 0`). The
`mpmath` back end mimics this convention (note that `mpmath` has no signed
zero, so `0**(-1)` is always `+inf` there).

In floating point mode, results are broadcast to the shape of the evaluation
points, even for expressions not depending on `x` (see
FloatArithmetic.shape_like()).

Use the arithmetic() context manager to obtain a configured back end:

~~~.py
with arithmetic(use_mp=True, dps=30) as ar:
    y = ar.div(ar.convert(1), ar.convert(3))
~~~
"""

from contextlib import contextmanager

import numpy as np
from mpmath import mp

from ..utils import isiterable
from .common import Settings


__all__ = [
    "FloatArithmetic",
    "MpArithmetic",
    "arithmetic",
]


class FloatArithmetic(object):
    r"""Floating point arithmetics based on `numpy`.

    Values are `numpy.float64` scalars or `numpy` arrays of these. Should be
    used inside a `numpy.errstate()` context ignoring all floating point
    errors, which arithmetic() takes care of.
    """
    use_mp = False
    zero = np.float64(0.0)
    one = np.float64(1.0)

    def convert(self, x):
        r"""Convert a number (or sequence of numbers) to a value of this back end."""
        if isinstance(x, np.ndarray) or isiterable(x):
            return np.asarray(x, dtype=np.float64)
        return np.float64(x)

    def shape_like(self, value, x):
        r"""Broadcast a result to the shape of the evaluation point(s) `x`.

        Sub-expressions not depending on `x` produce scalars even when `x` is
        an array.
        """
        if np.ndim(x) == 0 or np.shape(value) == np.shape(x):
            return value
        return np.full(np.shape(x), value)

    def neg(self, a):
        return -a

    def sin(self, a):
        return np.sin(a)

    def cos(self, a):
        return np.cos(a)

    def log(self, a):
        return np.log(a)

    def add(self, a, b):
        return a + b

    def mul(self, a, b):
        return a * b

    def div(self, a, b):
        return np.true_divide(a, b)

    def pow(self, a, b):
        return np.power(a, b)


class MpArithmetic(object):
    r"""Arbitrary precision arithmetics based on `mpmath`.

    The precision is the current `mp.dps` setting. Only scalars are
    supported.
    """
    use_mp = True
    zero = mp.zero
    one = mp.one

    def convert(self, x):
        r"""Convert a number to an `mpmath.mpf`."""
        return mp.mpf(x)

    def shape_like(self, value, x):
        return value

    def neg(self, a):
        return -a

    def sin(self, a):
        return mp.sin(a)

    def cos(self, a):
        return mp.cos(a)

    def log(self, a):
        if mp.isnan(a):
            return a
        if a < 0:
            return mp.nan
        return mp.log(a)

    def add(self, a, b):
        return a + b

    def mul(self, a, b):
        return a * b

    def div(self, a, b):
        if b == 0:
            if a == 0 or mp.isnan(a):
                return mp.nan
            return mp.inf if a > 0 else -mp.inf
        return a / b

    def pow(self, a, b):
        if b == 0 or a == 1:
            return mp.one
        if mp.isnan(a) or mp.isnan(b):
            return mp.nan
        if mp.isinf(b):
            # Real limits as in numpy.power(), also for negative bases.
            if abs(a) == 1:
                return mp.one
            if (abs(a) < 1) == (b > 0):
                return mp.zero
            return mp.inf
        if a == 0 and b < 0:
            return mp.inf
        result = mp.power(a, b)
        if isinstance(result, mp.mpc):
            # Real arithmetics only: negative base with non-integer exponent.
            return mp.nan
        return result


_FLOAT = FloatArithmetic()
_MP = MpArithmetic()


@contextmanager
def arithmetic(use_mp=False, dps=None):
    r"""Context manager yielding the configured arithmetics back end.

    Args:
        use_mp: Whether to use `mpmath` (if `True`) or floating point
            operations. Default is `False`.
        dps: Decimal places to use in `mpmath` computations. Ignored for
            floating point arithmetics. If `None`, uses
            common.Settings.default_dps, which by default keeps the current
            precision.
    """
    if not use_mp:
        with np.errstate(all='ignore'):
            yield _FLOAT
        return
    if dps is None:
        dps = Settings.default_dps
    if dps is None:
        yield _MP
        return
    with mp.workdps(dps):
        yield _MP
