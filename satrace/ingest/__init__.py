"""Ingest package - trace dump readers and file discovery.

This package handles:
- Parsing the ';'-separated header line into a config map
- Rebuilding the frequency axis from center / span / point count
- Reading the data rows of one column up to the '#' terminator
- Expanding file patterns for shells that do not glob

Key classes:
- TraceReader: reads one dump into a Trace

Design principle:
- Readers produce validated, immutable Trace objects or raise; nothing partial
  is ever returned.
"""

from .discovery import expand_filenames
from .frequency import build_frequency_index
from .header import as_float, as_int, parse_config_line
from .reader import TraceReader, TraceReaderConfig, read_trace

__all__ = [
    "TraceReader",
    "TraceReaderConfig",
    "as_float",
    "as_int",
    "build_frequency_index",
    "expand_filenames",
    "parse_config_line",
    "read_trace",
]
