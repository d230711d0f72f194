"""Tests of the quasirandom generator.

Distributional properties are checked against numpy's pseudorandom
generator.
"""

import numpy as np
import pytest
from scipy.stats import qmc

from quasirandom import (Qrng, Optional, Result, Ok, Err, Tuple, rd_sequence,
                         constants_for, register, f64, u8, i16, boolean, unit)


def nearest_neighbour_distances(pts):
    dist = np.sqrt(((pts[:, np.newaxis, :] - pts[np.newaxis, :, :]) ** 2).sum(axis=2))
    np.fill_diagonal(dist, np.inf)
    return dist.min(axis=1)


@pytest.mark.parametrize('shape', [f64, (f64, f64, f64), (u8, boolean, Optional(i16)),
                                   Result(f64, unit)])
def test_determinism(shape):
    q1, q2 = Qrng(shape, 0.37), Qrng(shape, 0.37)
    assert q1.gen_many(500) == [q2.gen() for _ in range(500)]
    assert np.array_equal(q1.phases, q2.phases)


def test_gen_matches_sequence():
    qrng = Qrng((f64, f64), 0.6)
    expected = rd_sequence(100, 2, seed=0.6)
    assert np.array_equal(np.array(qrng.gen_many(100)), expected)


def test_range_invariant():
    qrng = Qrng(tuple([f64] * 32), 0.999)
    x = np.array(qrng.gen_many(2000))
    assert np.all(x >= 0.) and np.all(x < 1.)
    ph = qrng.phases
    assert np.all(ph >= 0.) and np.all(ph < 1.)


@pytest.mark.parametrize('n', [100, 1_000, 100_000])
def test_coverage(n):
    qrng = Qrng(f64, 0.)
    rng = np.random.default_rng(0x5c329d7775ca89e6)
    q_bins = set((np.array(qrng.gen_many(n)) * n).astype(np.int64).tolist())
    r_bins = set((rng.random(n) * n).astype(np.int64).tolist())
    assert len(q_bins) > len(r_bins)


def test_packing():
    n = 1000
    qrng = Qrng((f64, f64, f64), 0.)
    rng = np.random.default_rng(1234)
    q_dist = nearest_neighbour_distances(np.array(qrng.gen_many(n)))
    r_dist = nearest_neighbour_distances(rng.random((n, 3)))
    assert np.std(q_dist) < np.std(r_dist) / 3.


def test_discrepancy():
    rng = np.random.default_rng(42)
    qrng = Qrng((f64, f64), 0.5)
    assert qmc.discrepancy(qrng.coordinates(256)) < qmc.discrepancy(rng.random((256, 2)))


def test_pi():
    x = Qrng((f64, f64), 0.123).coordinates(100_000)
    pi_hat = 4. * np.mean(np.sum(x ** 2, axis=1) < 1.)
    assert pi_hat == pytest.approx(np.pi, abs=2e-3)


def test_tuple_independence():
    qrng = Qrng((f64, f64), 0.4)
    x = np.array(qrng.gen_many(1000))
    alphas = constants_for(2)
    for j in range(2):
        steps = np.diff(x[:, j]) % 1.
        assert np.allclose(steps, alphas[j])
    offsets = (x[:, 1] - x[:, 0]) % 1.
    assert np.ptp(offsets) > 0.5


def test_each_call_consumes_one_step():
    shape = (Optional(Optional(boolean)), Result(u8, Optional(f64)))
    q1, q2 = Qrng(shape, 0.2), Qrng((f64, f64), 0.2)
    for _ in range(10):
        q1.gen()
        q2.gen()
    assert np.array_equal(q1.phases, q2.phases)


def test_values():
    qrng = Qrng((u8, boolean), seed=0.25)
    assert qrng.gen_many(3) == [(192, False), (129, True), (67, False)]
    qrng = Qrng(Result(u8, boolean), 0.)
    # first coordinate is frac(0.618...) for any seed
    assert qrng.gen() == Err(True)
    assert qrng.gen() == Ok(120)


def test_scalar_and_one_tuple():
    assert Qrng(f64, 0.5).dim == 1
    assert isinstance(Qrng(f64, 0.5).gen(), float)
    one = Qrng((f64,), 0.5).gen()
    assert isinstance(one, tuple) and len(one) == 1
    assert Qrng(float, 0.).gen() == Qrng(f64, 0.).gen()


def test_arity_boundary():
    assert Qrng(tuple([f64] * 32), 0.5).dim == 32
    assert len(Qrng(Tuple(*[boolean] * 32), 0.5).gen()) == 32
    for k in [0, 33]:
        with pytest.raises(ValueError):
            Qrng(tuple([f64] * k), 0.5)


@pytest.mark.parametrize('seed', [-1e-12, 1., 3., np.nan])
def test_invalid_seed(seed):
    with pytest.raises(ValueError):
        Qrng(f64, seed)


def test_invalid_shape():
    with pytest.raises(TypeError):
        Qrng(int, 0.5)


def test_iteration():
    qrng = Qrng((f64, boolean), 0.1)
    ref = Qrng((f64, boolean), 0.1).gen_many(5)
    assert [v for _, v in zip(range(5), qrng)] == ref
    assert next(qrng) == Qrng((f64, boolean), 0.1).gen_many(6)[-1]


def test_skip_and_copy():
    q1 = Qrng((f64, f64), 0.3)
    q1.skip(10)
    q2 = q1.copy()
    assert q1.gen() == q2.gen()
    q1.gen()
    assert q1.gen() != q2.gen()
    q3 = Qrng((f64, f64), 0.3)
    assert q3.gen_many(11)[-1] == tuple(Qrng((f64, f64), 0.3).coordinates(11)[-1])
    assert 'dim=2' in repr(q1)


def test_registered_tuple_shape():
    class Point:
        pass

    register(Point, (f64, f64))
    qrng = Qrng(Point, 0.5)
    assert qrng.dim == 2
    pt = qrng.gen()
    assert isinstance(pt, tuple) and len(pt) == 2
    assert pt == Qrng((f64, f64), 0.5).gen()


def test_gen_many_rejects_non_integer_count():
    qrng = Qrng(f64, 0.5)
    for n in [3., 2.5]:
        with pytest.raises(ValueError):
            qrng.gen_many(n)
        with pytest.raises(ValueError):
            qrng.skip(n)


def test_gen_array_tuple():
    arr = Qrng((u8, boolean), 0.25).gen_array(10)
    ref = Qrng((u8, boolean), 0.25).gen_many(10)
    assert arr.shape == (10,)
    assert arr.dtype.names == ('f0', 'f1')
    assert arr['f0'].dtype == np.uint8 and arr['f1'].dtype == np.bool_
    assert [tuple(r) for r in arr.tolist()] == ref


def test_gen_array_struct():
    arr = Qrng({'x': f64, 'n': i16}, 0.7).gen_array(8)
    ref = Qrng({'x': f64, 'n': i16}, 0.7).gen_many(8)
    assert arr.dtype.names == ('x', 'n')
    assert arr['n'].dtype == np.int16
    assert arr['x'].tolist() == [v['x'] for v in ref]
    assert arr['n'].tolist() == [v['n'] for v in ref]


def test_gen_array_scalar():
    arr = Qrng(i16, 0.).gen_array(20)
    assert arr.dtype == np.int16
    assert arr.tolist() == Qrng(i16, 0.).gen_many(20)
    opt = Qrng(Optional(u8), 0.).gen_array(6)
    assert opt.dtype == np.dtype(object)
    assert opt.tolist() == Qrng(Optional(u8), 0.).gen_many(6)
    assert Qrng(f64, 0.).gen_array(0).shape == (0,)
