# -*- coding: utf-8 -*-

"""
Mapping uniform coordinates to values of arbitrary shapes.

Overview
========

A quasirandom generator (see module `qrng`) produces raw coordinates in
[0, 1). This module defines how such a coordinate is turned into a value of
a requested *shape*: a float, a fixed-width integer, a boolean, and so on.

A shape is any object with a method ``from_uniform(u)``, which takes a single
float u in [0, 1) and returns a value. This module provides the following
built-in shapes:

=====================================  ====================================
  shape                                  value returned for coordinate u
=====================================  ====================================
f64                                    u (a float)
f32                                    u, cast to numpy.float32
u8, u16, u32, u64, u128, usize         int(MAX * u), MAX = 2^bits - 1
i8, i16, i32, i64, i128, isize         int((MAX - MIN + 1) * u + MIN)
UInt(bits), Int(bits)                  same, for other widths
boolean                                True if u < 0.5, False otherwise
unit                                   () whatever u
Optional(law)                          law.from_uniform(2u) if u < 0.5,
                                       None otherwise
Result(ok, err)                        Ok(ok.from_uniform(2u)) if u < 0.5,
                                       Err(err.from_uniform(2u - 1))
                                       otherwise
Choice(values, p=None)                 values[k] with probability p[k]
Dist(law)                              law.ppf(u) (e.g. a frozen scipy
                                       distribution)
=====================================  ====================================

Integers are truncated towards zero, and saturate at the bounds of their
type; the arithmetic is done in double precision, so for widths above 53 bits
not every integer may be produced.

Note that `Optional` and `Result` spend half of the coordinate range on each
branch; the "absent" branch of `Optional` carries no payload, so the upper
half of the range is simply discarded.

Tuples
======

Tuples are not mapped from a single coordinate: a tuple of k fields consumes
k coordinates, one per field, in declared order::

    shape = Tuple(f64, u8, Optional(i16))   # or simply (f64, u8, Optional(i16))
    shape.from_uniforms([0.2, 0.5, 0.9])    # (0.2, 127, None)

The fields must themselves be one-coordinate shapes, and k must be between 1
and 32. `Struct` is the same thing with named fields (mapped in insertion
order), and returns a dict.

Implementing your own shapes
============================

Any object with a ``from_uniform`` method may be used as a shape, including a
class with a ``from_uniform`` class method::

    class Colour:
        def __init__(self, hue):
            self.hue = hue

        @classmethod
        def from_uniform(cls, u):
            return cls(hue=360. * u)

Try to use a mapping which is monotonic, and which partitions [0, 1) without
gaps (as `Choice` does), so that the good spreading properties of the
generator carry over to your values.

Function `register` associates a shape to a Python type, so that the type may
be used directly; e.g. ``float`` and ``bool`` stand for `f64` and `boolean`.

"""

from collections import OrderedDict

import numpy as np

from quasirandom.constants import MAX_DIM

_registry = {}  # populated by function register below


class FromUniform:
    """Base class for shapes.

    To define a shape, subclass FromUniform and define method
    ``from_uniform(self, u)``. Attribute ``dim`` is the number of
    coordinates consumed by the shape (one for scalar shapes); attribute
    ``dtype`` is the numpy dtype of the values (see `Qrng.gen_array`).
    """

    dim = 1
    dtype = 'float64'

    def from_uniform(self, u):
        raise NotImplementedError(
            "%s: method from_uniform is missing" % self.__class__.__name__
        )

    def __repr__(self):
        return "%s()" % self.__class__.__name__


class Float64(FromUniform):
    """Identity mapping."""

    def from_uniform(self, u):
        return float(u)


class Float32(FromUniform):
    """Identity mapping, narrowed to single precision.

    Note
    ----
    Coordinates very close to one round to 1.0 in single precision.
    """

    dtype = 'float32'

    def from_uniform(self, u):
        return np.float32(u)


class UInt(FromUniform):
    """Unsigned integers of a given width, uniform in 0, ..., 2^bits - 1."""

    def __init__(self, bits=32):
        self.bits = bits
        self.min = 0
        self.max = 2 ** bits - 1
        self.dtype = 'uint%i' % bits if bits <= 64 else object

    def from_uniform(self, u):
        return min(int(float(self.max) * u), self.max)

    def __repr__(self):
        return "UInt(%i)" % self.bits


class Int(FromUniform):
    """Signed integers of a given width, uniform in -2^(bits-1), ..., 2^(bits-1) - 1."""

    def __init__(self, bits=32):
        self.bits = bits
        self.min = -2 ** (bits - 1)
        self.max = 2 ** (bits - 1) - 1
        self.dtype = 'int%i' % bits if bits <= 64 else object

    def from_uniform(self, u):
        lo = float(self.min)
        x = int((float(self.max) - lo + 1.) * u + lo)
        return max(self.min, min(x, self.max))

    def __repr__(self):
        return "Int(%i)" % self.bits


class Bool(FromUniform):
    """True for u < 0.5, False otherwise."""

    dtype = 'bool'

    def from_uniform(self, u):
        return bool(u < 0.5)


class Unit(FromUniform):
    """Always returns the empty tuple."""

    dtype = object

    def from_uniform(self, u):
        return ()


class Optional(FromUniform):
    """law.from_uniform(2u) for u < 0.5, None otherwise."""

    dtype = object

    def __init__(self, law):
        self.law = as_scalar_mapping(law)

    def from_uniform(self, u):
        if u < 0.5:
            return self.law.from_uniform(u * 2.)
        else:
            return None

    def __repr__(self):
        return "Optional(%r)" % (self.law,)


class _Branch:
    __slots__ = ('value',)

    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        return type(other) is type(self) and other.value == self.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.value)


class Ok(_Branch):
    """Success branch of `Result`."""

    __slots__ = ()
    is_ok = True


class Err(_Branch):
    """Failure branch of `Result`."""

    __slots__ = ()
    is_ok = False


class Result(FromUniform):
    """Ok(ok.from_uniform(2u)) for u < 0.5, Err(err.from_uniform(2u - 1)) otherwise."""

    dtype = object

    def __init__(self, ok, err):
        self.ok = as_scalar_mapping(ok)
        self.err = as_scalar_mapping(err)

    def from_uniform(self, u):
        if u < 0.5:
            return Ok(self.ok.from_uniform(u * 2.))
        else:
            return Err(self.err.from_uniform(u * 2. - 1.))

    def __repr__(self):
        return "Result(%r, %r)" % (self.ok, self.err)


class Choice(FromUniform):
    """Finite set of values, selected by partitioning [0, 1).

    Parameters
    ----------
    values: sequence
        the k possible values
    p: (k,) array, optional
        probabilities of each value (>=0, sum to one); equal by default

    Note
    ----
    value k is returned for u in [p[0] + ... + p[k-1], p[0] + ... + p[k]).
    """

    dtype = object

    def __init__(self, values, p=None):
        self.values = list(values)
        k = len(self.values)
        if k == 0:
            raise ValueError('Choice: no values')
        if p is None:
            p = np.full(k, 1. / k)
        p = np.asarray(p, dtype=np.float64)
        if p.shape != (k,):
            raise ValueError("Choice: size of p and nr of values should match")
        if np.any(p < 0.) or not np.isclose(p.sum(), 1.):
            raise ValueError("Choice: p should be >=0 and sum to one")
        self.p = p
        self.cdf = np.cumsum(p)

    def index(self, u):
        return min(int(np.searchsorted(self.cdf, u, side='right')),
                   len(self.values) - 1)

    def from_uniform(self, u):
        return self.values[self.index(u)]

    def __repr__(self):
        return "Choice(%r)" % (self.values,)


class Dist(FromUniform):
    """Bridge to distributions that define an inverse CDF (method ppf).

    Example::

        from scipy import stats
        normal = Dist(stats.norm(loc=2.))
    """

    def __init__(self, law):
        if not callable(getattr(law, 'ppf', None)):
            raise TypeError("Dist: %r has no method ppf" % (law,))
        if getattr(law, 'dim', 1) != 1:
            raise TypeError("Dist: only univariate distributions are supported")
        self.law = law
        self.dtype = getattr(law, 'dtype', 'float64')

    def from_uniform(self, u):
        return self.law.ppf(u)

    def __repr__(self):
        return "Dist(%r)" % (self.law,)


class Tuple:
    """Tuple of independently mapped fields, one coordinate per field.

    Parameters
    ----------
    *fields: shapes
        between 1 and 32 one-coordinate shapes
    """

    def __init__(self, *fields):
        if not 1 <= len(fields) <= MAX_DIM:
            raise ValueError(
                "tuples must have between 1 and %i fields, got %i"
                % (MAX_DIM, len(fields))
            )
        self.fields = [as_scalar_mapping(f) for f in fields]
        self.names = ['f%i' % j for j in range(len(self.fields))]

    @property
    def dim(self):
        return len(self.fields)

    @property
    def dtype(self):
        """Structured dtype, one field per coordinate (see `Qrng.gen_array`)."""
        return np.dtype([(name, getattr(f, 'dtype', object))
                         for name, f in zip(self.names, self.fields)])

    def as_record(self, value):
        """Row of a structured array of dtype `self.dtype`."""
        return tuple(value)

    def from_uniforms(self, coords):
        return tuple(f.from_uniform(u) for f, u in zip(self.fields, coords))

    def __repr__(self):
        return "Tuple(%s)" % ", ".join(repr(f) for f in self.fields)


class Struct(Tuple):
    """Named fields, one coordinate per field; values are dicts.

    Parameters
    ----------
    laws: dict
        keys are field names, values are one-coordinate shapes; field k
        (in insertion order) is mapped from coordinate k.
    """

    def __init__(self, laws):
        if not isinstance(laws, dict):
            raise TypeError("Struct requires a dict or an ordered dict")
        self.laws = OrderedDict(laws)
        super().__init__(*self.laws.values())
        self.names = list(self.laws.keys())

    def from_uniforms(self, coords):
        return dict(zip(self.names, super().from_uniforms(coords)))

    def as_record(self, value):
        return tuple(value[name] for name in self.names)

    def __repr__(self):
        return "Struct(%r)" % (dict(zip(self.names, self.fields)),)


def register(pytype, law):
    """Use shape law whenever type pytype is requested.

    law may be any shape description accepted by `as_mapping` (e.g. a tuple
    of shapes); it is resolved once, here.
    """
    _registry[pytype] = as_mapping(law)


def as_mapping(shape):
    """Resolve a shape description into a shape object.

    A tuple becomes a `Tuple`, a dict a `Struct`, a registered type its
    registered shape; any object with a method ``from_uniform`` or
    ``from_uniforms`` is returned as is.
    """
    if isinstance(shape, tuple):
        return Tuple(*shape)
    if isinstance(shape, dict):
        return Struct(shape)
    if isinstance(shape, type):
        if shape in _registry:
            return _registry[shape]
        if issubclass(shape, FromUniform):
            return shape()
    if hasattr(shape, 'from_uniform') or hasattr(shape, 'from_uniforms'):
        return shape
    raise TypeError("%r is not a valid shape (no method from_uniform)" % (shape,))


def as_scalar_mapping(shape):
    """Same as `as_mapping`, for shapes that consume a single coordinate."""
    law = as_mapping(shape)
    if getattr(law, 'dim', 1) != 1 or not hasattr(law, 'from_uniform'):
        raise TypeError("%r consumes more than one coordinate" % (law,))
    return law


f64 = Float64()
f32 = Float32()
u8, u16, u32, u64, u128 = [UInt(b) for b in (8, 16, 32, 64, 128)]
i8, i16, i32, i64, i128 = [Int(b) for b in (8, 16, 32, 64, 128)]
usize, isize = u64, i64
boolean = Bool()
unit = Unit()

register(float, f64)
register(bool, boolean)
