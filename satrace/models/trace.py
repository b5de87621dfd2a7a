from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from satrace.errors import TraceShapeError

CENTER_KEY = ":FREQ:CENT"
SPAN_KEY = ":FREQ:SPAN"
POINTS_KEY = ":SWE:POIN"


def _frozen_array(x) -> np.ndarray:
    arr = np.array(x, dtype=np.float64, copy=True).reshape(-1)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class Trace:
    """
    One spectrum-analyzer dump after parsing.

    config:
      header key (``:FREQ:CENT``, ...) -> raw value string, unit suffix kept ("5 MHz").
    content:
      one sample per data row, in dB, row order (= ascending frequency).
    index:
      reconstructed frequency axis, same length as content, in ``unit``.
    unit:
      unit token of the center frequency ("MHz"), empty if the header had none.

    Notes
    - Arrays are copied and made read-only on construction.
    - len(index) == len(content) is enforced here; a mismatch raises TraceShapeError.
    """
    config: Mapping[str, str]
    content: np.ndarray
    index: np.ndarray
    unit: str = ""
    source_path: Optional[Path] = None
    warnings: Tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        content = _frozen_array(self.content)
        index = _frozen_array(self.index)
        if index.size != content.size:
            raise TraceShapeError(
                f"index/content length mismatch: len(index)={index.size}, len(content)={content.size}",
                path=self.source_path,
            )
        object.__setattr__(self, "content", content)
        object.__setattr__(self, "index", index)
        object.__setattr__(self, "config", MappingProxyType(dict(self.config)))
        object.__setattr__(self, "warnings", tuple(self.warnings))

    @property
    def points(self) -> int:
        return int(self.content.size)

    @property
    def center(self) -> str:
        """Raw center-frequency value, verbatim from the header."""
        return self.config.get(CENTER_KEY, "")

    def to_frame(self) -> pd.DataFrame:
        """Samples as a two-column DataFrame (``index``, ``content``)."""
        return pd.DataFrame({"index": self.index, "content": self.content})
