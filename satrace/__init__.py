"""satrace -- summary rows from spectrum-analyzer trace dumps.

A trace dump is one ';'-separated configuration line written by the analyzer
followed by whitespace-separated numeric rows and a '#' terminator line.

This package provides tools for:
- Reading dumps into immutable Trace objects (config, dB levels, frequency axis)
- Converting dB levels to linear power and integrating it over sample bands
- Estimating the noise floor (first quartile) and searching peaks above it
- Building one comma-separated row per file, in parallel across files

Key principles:
- Power is only ever summed in the linear domain
- A file is either fully parsed or rejected; one bad file never stops the others

Main subpackages:
- ingest: header parser, frequency axis, trace reader, file discovery
- analysis: power conversion, band sums, noise floor, peak search
- models: Trace, OutRow, FileResult
- pipeline: per-file row builders and the batch runner
- output: row formatting, stdout and CSV writers
- config: YAML configuration
"""

__version__ = "0.2.0"

__all__ = ["__version__"]
