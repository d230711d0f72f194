# -*- coding: utf-8 -*-

"""Legacy (non-generic) quasirandom generator.

`LegacyQrng` is the older, simpler interface: it takes an integer seed, and
returns raw points of dimension 1 to 16 (method `LegacyQrng.next`), or values
of one-coordinate shapes (method `LegacyQrng.gen`). Point n (n = seed,
seed + 1, ...) is computed directly as ``frac(n * alpha)``, with the
constants of table ``LEGACY_CONSTANTS``, so its output differs slightly from
that of `Qrng`. New code should use `Qrng`.
"""

import warnings

import numpy as np

from quasirandom._tables import LEGACY_CONSTANTS
from quasirandom.constants import check_dim
from quasirandom.sequence import fract
from quasirandom.uniform import as_scalar_mapping, f64

LEGACY_MAX_DIM = 16
MAX_SEED = 2 ** 32 - 1
MAX_EXACT_COUNTER = 2 ** 53

_legacy_constants = [np.array(row) for row in LEGACY_CONSTANTS]

counter_warning = """
LegacyQrng: counter exceeds 2^53, successive points may no longer be distinct
"""


class LegacyQrng:
    """Counter-based quasirandom generator.

    Parameters
    ----------
    seed: int
        starting value of the counter (0 <= seed < 2^32)
    """

    def __init__(self, seed=0):
        if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
            raise ValueError("LegacyQrng: seed must be an integer, got %r" % (seed,))
        if not 0 <= seed <= MAX_SEED:
            raise ValueError("LegacyQrng: seed must be in 0..2^32-1, got %i" % seed)
        self.counter = float(seed)
        self._warned = False

    def next(self, dim=1):
        """Next point in [0, 1)^dim; a float if dim is one, a tuple otherwise."""
        check_dim(dim, max_dim=LEGACY_MAX_DIM)
        if self.counter > MAX_EXACT_COUNTER and not self._warned:
            warnings.warn(counter_warning, RuntimeWarning)
            self._warned = True
        n = self.counter
        point = tuple(fract(n * _legacy_constants[dim - 1]).tolist())
        self.counter += 1.
        return point[0] if dim == 1 else point

    def gen(self, *shapes):
        """Next value of the given shapes (one coordinate per shape).

        Without argument, same as ``gen(f64)``; with a single shape, returns
        a single value, and a tuple otherwise.
        """
        laws = [as_scalar_mapping(s) for s in shapes] or [f64]
        point = self.next(len(laws))
        if len(laws) == 1:
            return laws[0].from_uniform(point)
        return tuple(law.from_uniform(u) for law, u in zip(laws, point))
