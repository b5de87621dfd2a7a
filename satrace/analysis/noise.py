from __future__ import annotations

from typing import Union

import numpy as np

from satrace.errors import EmptyTraceStatistic
from satrace.models.trace import Trace

NOISE_QUANTILE = 25.0


def noise_floor(trace: Union[Trace, np.ndarray], quantile: float = NOISE_QUANTILE) -> float:
    r"""Noise floor of a trace: the first quartile of its content.

    The percentile is taken at position :math:`n \cdot p` on the sorted samples
    (1-based) with linear interpolation between neighbours
    (numpy ``interpolated_inverted_cdf``). For ``1..10`` this gives exactly 2.5.
    Positions below the first sample clamp to it.

    Parameters
    ----------
    trace:
        Trace or plain array of dB values.
    quantile:
        Percent in ``(0, 100]``.

    Raises
    ------
    EmptyTraceStatistic
        If there are no samples.
    """
    values = trace.content if isinstance(trace, Trace) else np.asarray(trace, dtype=np.float64).reshape(-1)
    if values.size == 0:
        raise EmptyTraceStatistic("noise floor of an empty trace is undefined")
    if not 0.0 < quantile <= 100.0:
        raise ValueError(f"quantile must be in (0, 100], got {quantile}")
    return float(np.percentile(values, quantile, method="interpolated_inverted_cdf"))
