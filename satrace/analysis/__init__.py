"""Signal analysis on parsed traces.

Design principle:
  - Ingest produces validated :class:`~satrace.models.trace.Trace` objects.
  - Analysis consumes a Trace and never mutates it.

Content is in dB; anything that adds power goes through the linear domain.
"""

from .noise import noise_floor
from .peaks import PeakResult, peak_search
from .power import db_to_linear, linear_to_db, signal_band

__all__ = [
    "PeakResult",
    "db_to_linear",
    "linear_to_db",
    "noise_floor",
    "peak_search",
    "signal_band",
]
