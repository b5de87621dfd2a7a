"""dB <-> linear power conversion and band integration.

Trace content is stored in dB. Sums of power are only meaningful in the linear
domain, so every band sum converts first and adds afterwards.
"""

from __future__ import annotations

import numpy as np

from satrace.errors import InvalidRange
from satrace.models.trace import Trace


def db_to_linear(db):
    """``10 ** (db / 10)``; dBm in, mW out. Works on scalars and arrays."""
    return np.power(10.0, np.asarray(db, dtype=np.float64) / 10.0)


def linear_to_db(mw):
    """Inverse of :func:`db_to_linear`. Zero power gives ``-inf``."""
    with np.errstate(divide="ignore"):
        return 10.0 * np.log10(np.asarray(mw, dtype=np.float64))


def check_band(trace: Trace, m: int, n: int) -> None:
    """Raise InvalidRange unless ``0 <= m <= n < trace.points``."""
    if m > n:
        raise InvalidRange(f"band {m}-{n}: lower bound exceeds upper bound")
    if m < 0 or n >= trace.points:
        raise InvalidRange(f"band {m}-{n} outside trace of {trace.points} point(s)")


def signal_band(trace: Trace, m: int, n: int) -> float:
    """Linear power summed over samples ``m..n`` inclusive ("electric energy", mW).

    Example: content ``[0, 3, 6, 10]`` dB, band 0-2 -> ``1 + 1.995 + 3.981 = 6.976``.
    """
    check_band(trace, m, n)
    return float(np.sum(db_to_linear(trace.content[m : n + 1])))
