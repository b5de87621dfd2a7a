"""Per-file row builders for the three subcommands.

Each builder reads one trace and returns an :class:`~satrace.models.results.OutRow`.
They raise on failure; isolation between files is the batch runner's job.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Callable, Dict, List, Tuple

from satrace.analysis.noise import noise_floor
from satrace.analysis.peaks import peak_search
from satrace.analysis.power import check_band, linear_to_db, signal_band
from satrace.errors import EmptyTraceStatistic
from satrace.ingest.header import as_int
from satrace.ingest.reader import TraceReader, TraceReaderConfig
from satrace.models.results import OutRow
from satrace.models.trace import POINTS_KEY, Trace
from satrace.options import RunOptions
from satrace.output.rows import parse_datetime

log = logging.getLogger(__name__)


def _safe_noise_floor(trace: Trace) -> float:
    try:
        return noise_floor(trace)
    except EmptyTraceStatistic as e:
        log.error("%s: %s", trace.source_path, e)
        return math.nan


def _table_fields(trace: Trace, options: RunOptions) -> List[float]:
    if not options.ranges:
        return trace.content.tolist()
    out: List[float] = []
    for m, n in options.ranges:
        check_band(trace, m, n)
        out.extend(trace.content[m : n + 1].tolist())
    return out


def _elen_fields(trace: Trace, options: RunOptions) -> List[float]:
    if options.ranges:
        sums = [signal_band(trace, m, n) for m, n in options.ranges]
    else:
        end = as_int(trace.config[POINTS_KEY], key=POINTS_KEY, path=trace.source_path)
        sums = [signal_band(trace, 0, end - 1)]
    if options.in_db:
        return [float(linear_to_db(s)) for s in sums]
    return sums


def _peak_fields(trace: Trace, options: RunOptions) -> List[float]:
    peaks = peak_search(trace, options.delta)
    if log.isEnabledFor(logging.DEBUG):
        log.debug("%s: peak index %s", trace.source_path, peaks.frequencies.tolist())
        log.debug("%s: peak value %s", trace.source_path, peaks.values.tolist())
    out = peaks.frequencies.tolist()
    if options.with_values:
        out.extend(peaks.values.tolist())
    return out


FIELD_BUILDERS: Dict[str, Callable[[Trace, RunOptions], List[float]]] = {
    "table": _table_fields,
    "elen": _elen_fields,
    "peak": _peak_fields,
}


def build_row(trace: Trace, filename: str, options: RunOptions) -> OutRow:
    """Assemble the output row of an already-read trace."""
    show = options.show_columns
    stamp = parse_datetime(filename) if "date" in show else ""
    fields = FIELD_BUILDERS[options.command](trace, options)
    return OutRow(
        filename=filename,
        datetime=stamp,
        center=trace.center,
        noise_floor=_safe_noise_floor(trace),
        fields=tuple(fields),
    )


def process_file(filename: str, options: RunOptions) -> Tuple[OutRow, Tuple[str, ...]]:
    """Read ``filename`` and build its row. Returns ``(row, reader warnings)``."""
    trace = TraceReader(TraceReaderConfig(value_column=options.value_column)).read(Path(filename))
    if log.isEnabledFor(logging.DEBUG):
        log.debug("[ CONFIG ] %s: %s", filename, dict(trace.config))
        log.debug("[ CONTENT ] %s:\n%s", filename, trace.to_frame().to_string())
        log.debug("[ FIELD ] %s: %s", filename, list(options.fields))
    row = build_row(trace, filename, options)
    log.debug("[ OUTROW ] %s", row)
    return row, trace.warnings
