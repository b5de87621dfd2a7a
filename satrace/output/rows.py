from __future__ import annotations

import re
from pathlib import Path
from typing import List, Sequence

from satrace.errors import FilenameDatetimeError
from satrace.models.results import OutRow

_STAMP = re.compile(r"^(\d{4})(\d{2})(\d{2})_(\d{2})(\d{2})(\d{2})")


def parse_datetime(name: str) -> str:
    """``"20200718_190716.txt"`` -> ``"2020-07-18 19:07:16"`` (directory part ignored)."""
    base = Path(name).name
    m = _STAMP.match(base)
    if not m:
        raise FilenameDatetimeError(f"file name {base!r} does not start with YYYYMMDD_HHMMSS")
    y, mo, d, h, mi, s = m.groups()
    return f"{y}-{mo}-{d} {h}:{mi}:{s}"


def format_fields(row: OutRow, fmt: str) -> List[str]:
    return [fmt % f for f in row.fields]


def format_shows(row: OutRow, show: Sequence[str], fmt: str) -> List[str]:
    """Leading columns in the order requested; unknown names are ignored."""
    out: List[str] = []
    for s in show:
        if s == "date":
            out.append(row.datetime)
        elif s == "center":
            out.append(row.center)
        elif s == "noise":
            out.append(fmt % row.noise_floor)
    return out


def row_cells(row: OutRow, show: Sequence[str], fmt: str) -> List[str]:
    return format_shows(row, show, fmt) + format_fields(row, fmt)


def format_row(row: OutRow, show: Sequence[str], fmt: str) -> str:
    """Comma-joined line, e.g. ``2020-06-27 18:05:05,5 MHz,12.500000,10.000000,...``."""
    return ",".join(row_cells(row, show, fmt))


def header_cells(show: Sequence[str], fields: Sequence[str]) -> List[str]:
    return list(show) + list(fields)
