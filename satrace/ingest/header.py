from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from satrace.errors import MalformedHeader, NumericParseError

log = logging.getLogger(__name__)

# Leading fields of the header that are not key/value pairs:
# the time stamp ("# 20200627_180505 *RST") and the clear marker ("*CLS").
N_LEADING_FIELDS = 2


def parse_config_line(line: str, path: Optional[Path] = None) -> Dict[str, str]:
    """
    Parse the first line of a trace dump into a key -> value map.

    Example header (fields separated by ';', trailing ';' before the newline)::

        # 20200627_180505 *RST;*CLS;:FREQ:CENT 5 MHz;:FREQ:SPAN 1 MHz;:SWE:POIN 11;:INIT:IMM;

    gives ``{":FREQ:CENT": "5 MHz", ":FREQ:SPAN": "1 MHz", ":SWE:POIN": "11", ":INIT:IMM": ""}``.

    Fields without any token are skipped (logged), never stored under an empty key.
    """
    fields = line.rstrip("\r\n").split(";")
    if len(fields) < N_LEADING_FIELDS:
        raise MalformedHeader(
            f"header has {len(fields)} ';'-separated field(s), need at least {N_LEADING_FIELDS}",
            path=path,
            line_no=1,
        )
    fields = fields[N_LEADING_FIELDS:]
    if fields and not fields[-1].strip():
        fields = fields[:-1]

    config: Dict[str, str] = {}
    for pos, raw in enumerate(fields, start=N_LEADING_FIELDS + 1):
        tokens = raw.split()
        if not tokens:
            log.warning("%s: empty header field #%d skipped", path or "<header>", pos)
            continue
        config[tokens[0]] = " ".join(tokens[1:])
    return config


def as_float(value: str, key: str = "", path: Optional[Path] = None) -> float:
    """Numeric part of a config value: first whitespace token only ("5 MHz" -> 5.0)."""
    tokens = (value or "").split()
    if not tokens:
        raise NumericParseError(f"config {key or 'value'} is empty, expected a number", path=path, line_no=1)
    try:
        return float(tokens[0])
    except ValueError:
        raise NumericParseError(
            f"config {key or 'value'}={value!r} is not numeric", path=path, line_no=1
        ) from None


def as_int(value: str, key: str = "", path: Optional[Path] = None) -> int:
    """Integer config value; accepts integral floats such as "11.0"."""
    f = as_float(value, key=key, path=path)
    if not f.is_integer():
        raise NumericParseError(f"config {key or 'value'}={value!r} is not an integer", path=path, line_no=1)
    return int(f)


def unit_of(value: str) -> str:
    """Unit suffix of a config value ("5 MHz" -> "MHz"), empty if absent."""
    tokens = (value or "").split()
    return tokens[1] if len(tokens) > 1 else ""
