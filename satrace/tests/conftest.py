from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import pytest

HEADER = (
    "# 20200627_180505 *RST;*CLS;:INP:COUP DC;:BAND:RES 1 Hz;:AVER:COUNT 10;:SWE:POIN 11;"
    ":FREQ:CENT 5 MHz;:FREQ:SPAN 1 MHz;:TRAC1:TYPE AVER;:INIT:CONT 0;:FORM REAL,32;"
    ":FORM:BORD SWAP;:INIT:IMM;:POW:ATT 0;:DISP:WIND:TRAC:Y:RLEV -30 dBm;\n"
)


def make_trace_text(
    levels: Iterable[float] = range(10, 21),
    header: str = HEADER,
    terminator: Optional[str] = "# <eof>\n",
) -> str:
    rows = [f"{i}\t{v} \t-99.0\n" for i, v in enumerate(levels)]
    return header + "".join(rows) + (terminator or "")


def write_trace_file(path: Path, **kwargs) -> Path:
    path.write_text(make_trace_text(**kwargs), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """cli.main() reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sample_trace(tmp_path: Path) -> Path:
    """Reference dump: 5 MHz center, 1 MHz span, 11 points, levels 10..20 dB."""
    return write_trace_file(tmp_path / "20200627_180505.txt")
