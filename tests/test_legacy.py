"""Tests of the legacy counter-based generator."""

import math

import numpy as np
import pytest

from quasirandom import LegacyQrng, boolean, f64, u8
from quasirandom._tables import LEGACY_CONSTANTS


def test_first_values():
    qrng = LegacyQrng(0)
    alpha = LEGACY_CONSTANTS[0][0]
    assert qrng.next() == 0.
    assert qrng.next() == alpha
    x = 2. * alpha
    assert qrng.next() == x - math.floor(x)


def test_seed_is_counter_start():
    q1, q2 = LegacyQrng(0), LegacyQrng(5)
    for _ in range(5):
        q1.next(3)
    assert q1.next(3) == q2.next(3)


@pytest.mark.parametrize('dim', range(2, 17))
def test_points(dim):
    qrng = LegacyQrng(7)
    pt = qrng.next(dim)
    assert isinstance(pt, tuple) and len(pt) == dim
    assert all(0. <= u < 1. for u in pt)


@pytest.mark.parametrize('dim', [0, 17])
def test_invalid_dim(dim):
    with pytest.raises(ValueError):
        LegacyQrng().next(dim)


@pytest.mark.parametrize('seed', [-1, 2 ** 32, 0.5, True])
def test_invalid_seed(seed):
    with pytest.raises(ValueError):
        LegacyQrng(seed)


def test_gen():
    qrng = LegacyQrng(1)
    assert qrng.gen() == LEGACY_CONSTANTS[0][0]
    assert isinstance(qrng.gen(boolean), bool)
    x, b = qrng.gen(u8, boolean)
    assert 0 <= x <= 255 and isinstance(b, bool)
    assert isinstance(qrng.gen(f64, f64, f64), tuple)
    with pytest.raises(TypeError):
        qrng.gen((f64, f64))


def test_coverage():
    for n in [100, 1_000, 100_000]:
        qrng = LegacyQrng(0)
        rng = np.random.default_rng(0)
        q_bins = {int(qrng.next() * n) for _ in range(n)}
        r_bins = set((rng.random(n) * n).astype(np.int64).tolist())
        assert len(q_bins) > len(r_bins)


def test_counter_warning():
    qrng = LegacyQrng()
    qrng.counter = 2. ** 53 + 2.
    with pytest.warns(RuntimeWarning):
        qrng.next()
