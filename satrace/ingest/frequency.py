from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

import numpy as np

from satrace.errors import MalformedHeader
from satrace.ingest.header import as_float, as_int
from satrace.models.trace import CENTER_KEY, POINTS_KEY, SPAN_KEY

REQUIRED_KEYS = (CENTER_KEY, SPAN_KEY, POINTS_KEY)


def build_frequency_index(config: Mapping[str, str], path: Optional[Path] = None) -> np.ndarray:
    """Frequency axis of a sweep from center, span and point count.

    ``start = center - span/2``; ``points`` equally spaced values from ``start``
    to ``start + span`` inclusive. A single-point sweep is ``[start]``.

    Parameters
    ----------
    config:
        Parsed header; must contain ``:FREQ:CENT``, ``:FREQ:SPAN`` and ``:SWE:POIN``.
    path:
        Only used in error messages.

    Returns
    -------
    np.ndarray
        float64 array of length ``points``, in the unit of the center frequency.
    """
    missing = [k for k in REQUIRED_KEYS if k not in config]
    if missing:
        raise MalformedHeader(f"header lacks required key(s) {missing}", path=path, line_no=1)

    center = as_float(config[CENTER_KEY], key=CENTER_KEY, path=path)
    span = as_float(config[SPAN_KEY], key=SPAN_KEY, path=path)
    points = as_int(config[POINTS_KEY], key=POINTS_KEY, path=path)
    if points < 1:
        raise MalformedHeader(f"{POINTS_KEY}={points} must be >= 1", path=path, line_no=1)

    start = center - span / 2.0
    if points == 1:
        return np.array([start], dtype=np.float64)

    end = start + span
    step = (end - start) / float(points - 1)
    return start + step * np.arange(points, dtype=np.float64)
