from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from satrace.errors import InvalidRange, OptionsError

SUBCOMMANDS: Tuple[str, ...] = ("table", "elen", "peak")
SHOW_COLUMNS: Tuple[str, ...] = ("date", "center", "noise")

DEFAULT_FORMAT = "%f"
DEFAULT_SHOW = "date,center,noise"


def parse_field_range(token: str) -> Tuple[int, int]:
    """``"50-100"`` -> ``(50, 100)``.

    Raises InvalidRange if the separator is missing, a bound is not an integer,
    or the lower bound exceeds the upper one.
    """
    s = str(token).strip()
    if "-" not in s:
        raise InvalidRange(f'field {s!r} does not contain range "-", use int-int')
    lo, _, hi = s.partition("-")
    try:
        m = int(lo)
        n = int(hi)
    except ValueError:
        raise InvalidRange(f"field {s!r}: bounds must be non-negative integers") from None
    if m > n:
        raise InvalidRange(f"field {s!r}: lower bound {m} must not exceed upper bound {n}")
    return m, n


def check_format(fmt: str) -> str:
    """Validate a printf-style number format (``%f``, ``%.3f``, ``%e``...).

    Samples may be ``nan`` or ``inf``, so the format must render those too
    (``%d`` does not).
    """
    for value in (0.0, math.nan, math.inf):
        try:
            fmt % value
        except (TypeError, ValueError, OverflowError) as e:
            raise OptionsError(f"invalid number format {fmt!r}: {e}") from None
    return fmt


@dataclass(frozen=True)
class RunOptions:
    """
    Everything a worker needs to turn one file into one row.

    Built once, validated before any file is opened, and passed by value to each
    task (it must stay picklable).

    command:
      'table', 'elen' or 'peak'.
    fields:
      raw range tokens ("50-100"), kept for the header row.
    ranges:
      parsed (m, n) pairs, same order as fields.
    value_column:
      0-based data column holding the level.
    number_format:
      printf-style format for every number in the row.
    show:
      comma-separated leading columns among date, center, noise.
    delta:
      peak threshold above the noise floor (dB).
    """
    command: str
    fields: Tuple[str, ...] = ()
    ranges: Tuple[Tuple[int, int], ...] = ()
    value_column: int = 1
    number_format: str = DEFAULT_FORMAT
    show: str = DEFAULT_SHOW
    delta: float = 1.0
    in_db: bool = False
    with_values: bool = False
    debug: bool = False
    jobs: int = 0

    @property
    def show_columns(self) -> Tuple[str, ...]:
        return tuple(s.strip() for s in self.show.split(",") if s.strip())

    @classmethod
    def build(
        cls,
        command: str,
        *,
        fields=(),
        value_column: int = 1,
        number_format: str = DEFAULT_FORMAT,
        show: str = DEFAULT_SHOW,
        delta: float = 1.0,
        in_db: bool = False,
        with_values: bool = False,
        debug: bool = False,
        jobs: int = 0,
    ) -> "RunOptions":
        """Validate raw values and return options; raises OptionsError / InvalidRange."""
        if command not in SUBCOMMANDS:
            raise OptionsError(f"unknown subcommand {command!r}; expected one of {list(SUBCOMMANDS)}")
        fields = tuple(str(f).strip() for f in (fields or ()))
        ranges = tuple(parse_field_range(f) for f in fields)
        if command == "peak" and ranges:
            raise OptionsError("peak does not take field ranges")
        try:
            value_column = int(value_column)
            delta = float(delta)
            jobs = int(jobs)
        except (TypeError, ValueError) as e:
            raise OptionsError(str(e)) from None
        if value_column < 0:
            raise OptionsError(f"column must be >= 0, got {value_column}")
        if delta < 0:
            raise OptionsError(f"delta must be >= 0, got {delta}")
        if jobs < 0:
            raise OptionsError(f"jobs must be >= 0, got {jobs}")
        return cls(
            command=command,
            fields=fields,
            ranges=ranges,
            value_column=value_column,
            number_format=check_format(number_format),
            show=str(show),
            delta=delta,
            in_db=bool(in_db),
            with_values=bool(with_values),
            debug=bool(debug),
            jobs=jobs,
        )
