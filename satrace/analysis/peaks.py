from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from satrace.analysis.noise import noise_floor
from satrace.models.trace import Trace


@dataclass(frozen=True)
class PeakResult:
    """Samples above ``noise_floor + delta``, in ascending sample order.

    Attributes
    ----------
    frequencies:
        ``trace.index`` at each peak.
    values:
        ``trace.content`` at each peak (dB).
    noise_floor:
        Reference level used for the search.
    """

    frequencies: np.ndarray
    values: np.ndarray
    noise_floor: float

    def __len__(self) -> int:
        return int(self.frequencies.size)


def peak_search(trace: Trace, delta: float) -> PeakResult:
    """Every sample whose level exceeds the noise floor by more than ``delta`` dB.

    No local-maximum logic: adjacent samples above the threshold are all reported.
    An empty result is valid.
    """
    if delta < 0:
        raise ValueError(f"delta must be >= 0, got {delta}")
    nf = noise_floor(trace)
    mask = (trace.content - nf) > float(delta)
    return PeakResult(
        frequencies=trace.index[mask].copy(),
        values=trace.content[mask].copy(),
        noise_floor=nf,
    )
