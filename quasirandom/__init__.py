"""
Quasirandom (low-discrepancy) sequences in python.

"""

__version__ = '0.1'

from quasirandom.constants import MAX_DIM, constants_for
from quasirandom.legacy import LegacyQrng
from quasirandom.qrng import Qrng
from quasirandom.sequence import PhaseState, rd_sequence
from quasirandom.uniform import (FromUniform, Tuple, Struct, Optional, Result,
                                 Ok, Err, Choice, Dist, UInt, Int, register,
                                 f64, f32, u8, u16, u32, u64, u128, usize,
                                 i8, i16, i32, i64, i128, isize, boolean, unit)
