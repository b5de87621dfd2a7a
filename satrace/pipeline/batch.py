from __future__ import annotations

import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Dict, List, Sequence

from satrace.errors import SatraceError
from satrace.models.results import FileResult
from satrace.options import RunOptions
from satrace.pipeline.commands import process_file

log = logging.getLogger(__name__)


def _failed(filename: str, e: BaseException) -> FileResult:
    return FileResult(filename=filename, error=f"{type(e).__name__}: {e}")


def _worker(filename: str, options: RunOptions) -> FileResult:
    """Process one file; any parse/analysis failure becomes ``FileResult.error``."""
    try:
        row, warnings = process_file(filename, options)
    except (SatraceError, ValueError, OSError) as e:
        return _failed(filename, e)
    return FileResult(filename=filename, row=row, warnings=tuple(warnings))


def _resolve_jobs(jobs: int, n_files: int) -> int:
    if jobs <= 0:
        jobs = os.cpu_count() or 1
    return max(1, min(jobs, n_files))


def run_batch(filenames: Sequence[str], options: RunOptions) -> List[FileResult]:
    """
    Fork-join over files: one task per file, results in input order.

    A failing file yields a FileResult with ``error`` set and does not affect the
    others, whether it failed while parsing or its task itself died (unexpected
    exception, broken pool). Nothing is returned before every task has finished.
    Reader warnings travel back on the results and are logged here, once per file.
    """
    filenames = list(filenames)
    if not filenames:
        return []

    max_workers = _resolve_jobs(options.jobs, len(filenames))
    log.info("processing %d file(s) with %d worker(s)", len(filenames), max_workers)

    by_pos: Dict[int, FileResult] = {}
    if max_workers == 1:
        for pos, fn in enumerate(filenames):
            try:
                by_pos[pos] = _worker(fn, options)
            except Exception as e:
                by_pos[pos] = _failed(fn, e)
    else:
        with ProcessPoolExecutor(max_workers=max_workers) as ex:
            futures = {ex.submit(_worker, fn, options): pos for pos, fn in enumerate(filenames)}
            for fut in as_completed(futures):
                pos = futures[fut]
                try:
                    by_pos[pos] = fut.result()
                except Exception as e:
                    by_pos[pos] = _failed(filenames[pos], e)

    results = [by_pos[i] for i in range(len(filenames))]
    for r in results:
        for w in r.warnings:
            log.warning("%s: %s", r.filename, w)
        if r.error:
            log.error("%s: skipped (%s)", r.filename, r.error)
    return results
