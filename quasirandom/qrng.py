# -*- coding: utf-8 -*-

"""
Quasirandom number generator.

Overview
========

A `Qrng` generates values of a given shape (see module `uniform`) that,
unlike random or pseudorandom values, evenly cover the space of possible
values as the number of samples grows. This is useful for e.g. Monte Carlo
integration, where an even covering of the domain improves convergence.

Under the hood, a Qrng of dimension d follows the R_d additive recurrence
(see modules `constants` and `sequence`): each call to `Qrng.gen` advances
the recurrence by one step, which produces d coordinates in [0, 1), and maps
coordinate j to field j of the requested shape. The dimension d is the number
of fields of the shape: 1 for a scalar shape, k for a tuple of k fields
(k <= 32).

For instance, to estimate pi::

    from quasirandom import Qrng, f64

    qrng = Qrng((f64, f64), seed=0.123)
    hits = 0
    for _ in range(100_000):
        x, y = qrng.gen()
        hits += (x**2 + y**2 < 1.)
    print(4. * hits / 100_000)

A Qrng is also an (infinite) iterator, and may generate several values at
once::

    >>> from quasirandom import boolean, u8
    >>> qrng = Qrng((u8, boolean), seed=0.25)
    >>> qrng.gen_many(3)
    [(192, False), (129, True), (67, False)]

The generator is fully deterministic: two generators with the same shape and
seed always produce the same values. See module `sequence` for how the seed
initialises the recurrence; in particular, note that the seed has no effect
in dimension one.

Acknowledgments
===============

The technique is taken from Martin Roberts' blog post `The unreasonable
effectiveness of quasirandom sequences
<http://extremelearning.com.au/unreasonable-effectiveness-of-quasirandom-sequences/>`_.

"""

import numpy as np

from quasirandom.sequence import PhaseState
from quasirandom.uniform import as_mapping


class Qrng:
    """Quasirandom generator of values of a given shape.

    Parameters
    ----------
    shape: shape object, registered type, tuple or dict
        shape of the generated values (see module `uniform`)
    seed: float
        seed in [0, 1)

    Raises
    ------
    ValueError
        if seed is not in [0, 1), or the shape has more than 32 fields
    TypeError
        if shape is not a valid shape

    """

    def __init__(self, shape, seed):
        self.shape = as_mapping(shape)
        self.state = PhaseState(getattr(self.shape, 'dim', 1), seed)
        self._multi = hasattr(self.shape, 'from_uniforms')

    def _assemble(self, coords):
        if self._multi:
            return self.shape.from_uniforms(coords)
        return self.shape.from_uniform(coords[0])

    @property
    def dim(self):
        return self.state.dim

    @property
    def phases(self):
        """Copy of the current phases of the recurrence."""
        return self.state.phases

    def gen(self):
        """Generate the next value."""
        return self._assemble(self.state.advance())

    def gen_many(self, n):
        """Generate the next n values (as a list)."""
        return [self._assemble(coords) for coords in self.state.advance_many(n)]

    def gen_array(self, n):
        """Generate the next n values, as a numpy array.

        For a tuple (or struct) shape, the output is a structured array, with
        one field per coordinate (named ``f0``, ``f1``, ... or after the keys
        of the struct); otherwise, a 1-D array. Dtypes are taken from
        attribute ``dtype`` of the shapes (object if missing).

        Example
        -------
        >>> from quasirandom import boolean, u8
        >>> Qrng((u8, boolean), seed=0.25).gen_array(2)['f0']
        array([192, 129], dtype=uint8)
        """
        values = self.gen_many(n)
        out = np.empty(len(values), dtype=getattr(self.shape, 'dtype', object))
        as_record = getattr(self.shape, 'as_record', None)
        for i, v in enumerate(values):
            out[i] = v if as_record is None else as_record(v)
        return out

    def coordinates(self, n):
        """Generate the next n raw points, as a (n, dim) array.

        Same as `gen_many`, without the mapping to the shape.
        """
        return self.state.advance_many(n)

    def skip(self, n):
        """Skip the next n values."""
        self.state.skip(n)

    def copy(self):
        """Independent generator, with the same shape and current state."""
        new = self.__class__.__new__(self.__class__)
        new.shape = self.shape
        new.state = self.state.copy()
        new._multi = self._multi
        return new

    def __iter__(self):
        return self

    def __next__(self):
        return self.gen()

    def __repr__(self):
        return "Qrng(%r, dim=%i)" % (self.shape, self.dim)
