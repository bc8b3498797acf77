r"""@package testutils

Utilities to add more features to `unittest` classes.

This module provides a custom subclass of `unittest.TestCase`, namely
DagTestCase, which obeys the global configuration settings in TestSettings
and offers assertions for comparing values of expressions, including the
IEEE-754 special values NaN and infinity. The settings can be configured by
the script invoking the test run.

This module also introduces a new decorator slowtest, which, when applied,
leads to the test being skipped on normal runs. The script starting the test
must set `TestSettings.skipslow` to `False` for the slow tests to be run.
"""

import sys
import functools
import math
import unittest
import time


__all__ = [
    "DagTestCase",
    "TestSettings",
    "slowtest",
]


def slowtest(func):
    """Decorator for skipping a test if TestSettings.skipslow is true."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if TestSettings.skipslow:
            raise unittest.SkipTest("skipping slow tests")
        return func(*args, **kwargs)
    return wrapper


class DagTestCase(unittest.TestCase):
    """Tweaked baseclass for unit tests.

    By deriving from this class, you:
        * Get timed individual tests (needs `verbosity=2`) if
          TestSettings.timing is true.
        * Can compare values which may be NaN or infinite using
          assertValueClose() and assertListAlmostEqual().
    """
    def run(self, result=None):
        start = time.time()
        failures_before = self.__count_problems(result)
        unittest.TestCase.run(self, result)
        if self.__should_print_timing(result, failures_before):
            print("(%.4f seconds) ... " % (time.time() - start),
                  file=sys.stderr, end='')

    @staticmethod
    def __count_problems(result):
        r"""Return the number of errors, failures and skips recorded so far."""
        # Other runners (e.g. pytest) may pass result objects without these.
        return sum(len(getattr(result, attr, ()))
                   for attr in ('errors', 'failures', 'skipped'))

    def __should_print_timing(self, result, failures_before):
        r"""Return whether timing information should be printed."""
        if not TestSettings.timing or not hasattr(result, 'errors'):
            return False
        if self.__count_problems(result) > failures_before:
            return False
        return not getattr(result, 'dots', True) and getattr(result, 'showAll', False)

    def assertIsType(self, obj, cls):
        r"""Assert that an object is exactly of a certain type."""
        self.assertIs(type(obj), cls)

    def assertIsNaN(self, value):
        r"""Assert that a (float or mpmath) value is NaN."""
        if value == value:
            raise self.failureException("%r is not NaN" % (value,))

    def assertValueClose(self, a, b, delta=1e-12):
        r"""Assert that two values agree, treating NaN and inf values exactly.

        Two NaN values are considered equal. Infinite values must be equal
        including their sign. Finite values may differ by at most `delta`
        (relative to their magnitude if that exceeds one).
        """
        a, b = float(a), float(b)
        if math.isnan(a) or math.isnan(b):
            if not (math.isnan(a) and math.isnan(b)):
                raise self.failureException("%r != %r" % (a, b))
            return
        if math.isinf(a) or math.isinf(b):
            if a != b:
                raise self.failureException("%r != %r" % (a, b))
            return
        scale = max(1.0, abs(a), abs(b))
        if abs(a - b) > delta * scale:
            raise self.failureException(
                "%r != %r within %r (difference: %r)" % (a, b, delta, b - a)
            )

    def assertListAlmostEqual(self, a, b, places=None, delta=None):
        r"""Assert that two iterables contain (almost) the same values."""
        if places is not None and delta is not None:
            raise TypeError("Cannot use delta and places at the same time")
        if places is None and delta is None:
            places = 7
        if len(a) != len(b):
            raise self.failureException("Lists have different lengths (%d != %d)" % (len(a), len(b)))
        fails = []
        for i, (ai, bi) in enumerate(zip(a, b)):
            if ai == bi or (ai != ai and bi != bi):
                continue
            if delta is not None:
                if not abs(ai-bi) <= delta:
                    fails.append(i)
            elif not round(abs(ai-bi), places) == 0:
                fails.append(i)
        if fails:
            maxN = 9
            msg = "%d elements differ.\n" % len(fails)
            msg += "Differing elements:\n" if len(fails) <= maxN else "First few differing elements:\n"
            msg += "\n".join(["  [{i}] {a} != {b}".format(i=i, a=a[i], b=b[i])
                              for i in fails[:maxN]])
            raise self.failureException(msg)


class TestSettings(object):
    """Global settings for tests."""
    ## Stop test run on first fail/error.
    failfast = False
    ## Whether output is buffered.\ Just information, cannot be used to toggle output buffering.
    buffering = False
    ## Whether the timing for each test case should be printed.
    timing = False
    ## Control whether tests marked as slowtest should be skipped.
    skipslow = True
