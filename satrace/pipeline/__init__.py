"""File-to-row pipeline: per-file builders and the parallel batch runner."""

from .batch import run_batch
from .commands import build_row, process_file

__all__ = [
    "build_row",
    "process_file",
    "run_batch",
]
