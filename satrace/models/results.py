from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class OutRow:
    """One output line, before formatting.

    Attributes
    ----------
    filename:
        Input path as given on the command line.
    datetime:
        ``YYYY-MM-DD HH:MM:SS`` derived from the file name, empty when not requested.
    center:
        Raw ``:FREQ:CENT`` header value.
    noise_floor:
        25th-percentile content value; NaN when it could not be computed.
    fields:
        Operation-specific numbers (samples, band sums or peak frequencies).
    """

    filename: str
    datetime: str
    center: str
    noise_floor: float
    fields: Tuple[float, ...] = ()


@dataclass(frozen=True)
class FileResult:
    """Outcome of processing one file: either ``row`` or ``error`` is set."""

    filename: str
    row: Optional[OutRow] = None
    error: Optional[str] = None
    warnings: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None
