from __future__ import annotations

import csv
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from satrace.models.results import FileResult
from satrace.options import RunOptions
from satrace.output.rows import format_row, header_cells, row_cells

log = logging.getLogger(__name__)


def write_stdout(results: Iterable[FileResult], options: RunOptions, stream: Optional[TextIO] = None) -> int:
    """Print the header line and one line per successful file. Returns rows written."""
    out = stream if stream is not None else sys.stdout
    out.write(",".join(header_cells(options.show_columns, options.fields)) + "\n")
    n = 0
    for r in results:
        if r.row is None:
            continue
        out.write(format_row(r.row, options.show_columns, options.number_format) + "\n")
        n += 1
    out.flush()
    return n


def write_csv(results: Iterable[FileResult], options: RunOptions, out_path: Path) -> Path:
    """Write header + rows with the csv module. Rows may have different lengths."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    n = 0
    with out_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header_cells(options.show_columns, options.fields))
        for r in results:
            if r.row is None:
                continue
            writer.writerow(row_cells(r.row, options.show_columns, options.number_format))
            n += 1

    log.info("CSV written: %s rows=%d", out_path, n)
    return out_path
