# -*- coding: utf-8 -*-

"""Phase state and sequence generator of the R_d sequences.

A `PhaseState` holds d running phases in [0, 1). Each call to
`PhaseState.advance` adds the d constants of dimension d (see module
`constants`) to the phases, modulo one, and returns the new phases: these are
the raw quasirandom coordinates. The recurrence is computed incrementally (not
as ``frac(n * alpha)``), so that the k-th output only depends on the initial
phases and on k successive double-precision additions.

Seeding
=======

The phases are initialised from a seed s in [0, 1) as::

    phase[i] = frac(s * i),   i = 0, ..., d-1

Note that phase[0] is therefore zero whatever the seed; in particular, all
one-dimensional streams are identical. This is kept on purpose, for
compatibility with existing reference sequences. To get disjoint streams in
dimension one, take different blocks of the same stream (see
`PhaseState.skip`).

Block generation
================

For vectorised use, `rd_sequence` returns the first N points at once, with
the same calling convention as `halton(N, dim)` in other QMC modules::

    >>> rd_sequence(3, 2, seed=0.5)
    array([[0.75487767, 0.06984029],
           [0.50975533, 0.63968058],
           [0.264633  , 0.20952087]])

"""

import numbers

import numpy as np
from numba import jit

from quasirandom.constants import check_dim, constants_for


def fract(x):
    """Fractional part, x - floor(x) (never negative)."""
    return x - np.floor(x)


def check_seed(seed):
    """Raise ValueError unless 0 <= seed < 1."""
    try:
        valid = 0. <= seed < 1.
    except TypeError:
        raise ValueError("seed must be a real number in [0, 1), got %r" % (seed,))
    if not valid:  # also catches NaN
        raise ValueError("seed must be in [0, 1), got %r" % (seed,))


def initial_phases(seed, dim):
    """Initial phases frac(seed * i), i=0, ..., dim-1."""
    check_seed(seed)
    check_dim(dim)
    return fract(float(seed) * np.arange(dim, dtype=np.float64))


@jit(nopython=True)
def _advance(phases, alphas):
    for i in range(phases.shape[0]):
        x = phases[i] + alphas[i]
        phases[i] = x - np.floor(x)


@jit(nopython=True)
def _advance_many(phases, alphas, n):
    d = phases.shape[0]
    out = np.empty((n, d))
    for k in range(n):
        for i in range(d):
            x = phases[i] + alphas[i]
            phases[i] = x - np.floor(x)
            out[k, i] = phases[i]
    return out


@jit(nopython=True)
def _skip(phases, alphas, n):
    for _ in range(n):
        for i in range(phases.shape[0]):
            x = phases[i] + alphas[i]
            phases[i] = x - np.floor(x)


def _check_count(n):
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise ValueError("number of steps must be an integer, got %r" % (n,))
    if n < 0:
        raise ValueError("number of steps must be non-negative, got %i" % n)
    return int(n)


class PhaseState:
    """Running phases of the R_d recurrence.

    Parameters
    ----------
    dim: int
        dimension d (1 <= d <= 32)
    seed: float
        seed in [0, 1), see module doc

    Note
    ----
    A PhaseState is meant to be owned by a single generator; it is not
    thread-safe.
    """

    def __init__(self, dim, seed):
        self.alphas = constants_for(dim)
        self._phases = initial_phases(seed, dim)

    @property
    def dim(self):
        return self.alphas.shape[0]

    @property
    def phases(self):
        """Copy of the current phases."""
        return self._phases.copy()

    def advance(self):
        """Advance by one step; returns the new phases ((d,) array)."""
        _advance(self._phases, self.alphas)
        return self._phases.copy()

    def advance_many(self, n):
        """Advance by n steps; returns the n successive phases ((n, d) array).

        Row k is the output the (k+1)-th call to `advance` would have
        returned.
        """
        return _advance_many(self._phases, self.alphas, _check_count(n))

    def skip(self, n):
        """Advance by n steps, discarding the output."""
        _skip(self._phases, self.alphas, _check_count(n))

    def copy(self):
        new = self.__class__.__new__(self.__class__)
        new.alphas = self.alphas
        new._phases = self._phases.copy()
        return new

    def __repr__(self):
        return "PhaseState(dim=%i, phases=%r)" % (self.dim, self._phases.tolist())


def rd_sequence(N, dim, seed=0.):
    """R_d quasirandom sequence.

    Parameters
    ----------
    N : int
        length of sequence
    dim: int
        dimension (1 <= dim <= 32)
    seed: float
        seed in [0, 1) (see module doc)

    Returns
    -------
    (N, dim) numpy array.

    Examples
    --------
    >>> res = rd_sequence(10000, 5)
    >>> bool(np.all(np.abs(res.mean(0) - 0.5) < 1e-3))
    True
    """
    return PhaseState(dim, seed).advance_many(N)
