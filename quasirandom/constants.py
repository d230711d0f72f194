# -*- coding: utf-8 -*-

"""Additive constants of the R_d quasirandom sequences.

Overview
========

The R_d sequence in dimension d is the additive recurrence::

    x_{n+1} = frac(x_n + alpha),   alpha_i = g_d^{-i},  i = 1, ..., d

where g_d, the generalised golden ratio, is the unique root > 1 of
``x^(d+1) = x + 1`` (g_1 is the golden ratio, g_2 the plastic number).
See Martin Roberts, `The unreasonable effectiveness of quasirandom sequences
<http://extremelearning.com.au/unreasonable-effectiveness-of-quasirandom-sequences/>`_.

The constants for d = 1, ..., `MAX_DIM` are shipped as static data (module
``_tables``); use `constants_for` to get them. Function `compute_constants`
re-derives a row from scratch (bisection search for g_d), which lets you
check the table independently::

    >>> np.allclose(compute_constants(3), constants_for(3), atol=1e-12)
    True

"""

import numbers

import numpy as np
from numba import jit

from quasirandom._tables import GOLDEN_CONSTANTS

MAX_DIM = 32


def check_dim(d, max_dim=MAX_DIM):
    """Raise ValueError if d is not an integer in 1, ..., max_dim."""
    if isinstance(d, bool) or not isinstance(d, numbers.Integral):
        raise ValueError("dimension must be an integer, got %r" % (d,))
    if not 1 <= d <= max_dim:
        raise ValueError("dimension must be in 1..%i, got %i" % (max_dim, d))


def _freeze(row):
    a = np.array(row, dtype=np.float64)
    a.flags.writeable = False
    return a


_constants = [_freeze(row) for row in GOLDEN_CONSTANTS]


def constants_for(d):
    """Additive constants for dimension d.

    Parameters
    ----------
    d: int
        dimension (1 <= d <= 32)

    Returns
    -------
    (d,) read-only float numpy array
        constant i (0-based) is g_d^{-(i+1)}

    Examples
    --------
    >>> constants_for(1)
    array([0.61803399])
    """
    check_dim(d)
    return _constants[d - 1]


@jit(nopython=True)
def golden_root(d, tol=1e-14):
    """Generalised golden ratio g_d, by bisection.

    Returns the lower end of the bracket, once the bracket [lower, upper]
    (initially [1, 2]) is narrower than tol.
    """
    lower, upper = 1., 2.
    while upper - lower > tol:
        mid = 0.5 * (lower + upper)
        y = mid ** (d + 1)
        if y < mid + 1.:
            lower = mid
        elif y > mid + 1.:
            upper = mid
        else:
            return mid
    return lower


def compute_constants(d, tol=1e-14):
    """Re-derive the d constants of dimension d (see module doc).

    Agrees with `constants_for` up to rounding (~1e-15).
    """
    check_dim(d)
    g = golden_root(d, tol)
    return 1. / g ** np.arange(1, d + 1)
