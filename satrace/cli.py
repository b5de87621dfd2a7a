"""
satrace command line.

Subcommands:

  table   extract the level column as a row (dB), optionally per field range
            satrace table -f 100-200 -c 1 data/*.txt
  elen    electric energy: linear power (mW) summed per field range
            satrace elen -f 425-575 --format %e data/*.txt
  peak    frequencies whose level exceeds the noise floor (first quartile) by delta
            satrace peak -d 10 --format %.3f data/*.txt
  init    write a starting config.yml

Without arguments the run is described by ./config.yml.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from satrace import __version__
from satrace.config.loader import LOCAL_CONFIG_PATH, load_config, write_default_config
from satrace.errors import ConfigError, InvalidRange, OptionsError
from satrace.ingest.discovery import expand_filenames
from satrace.log_setup import setup_logging
from satrace.options import RunOptions
from satrace.output.writers import write_csv, write_stdout
from satrace.pipeline.batch import run_batch

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FILE_FAILED = 1
EXIT_USAGE = 2


def _common_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("files", nargs="*", help="trace files or glob patterns")
    p.add_argument("-c", dest="c", type=int, default=None, help="0-based column used for calculation (default 1)")
    p.add_argument("--format", dest="format", default=None, help="number format: %%f, %%.3f, %%e, %%E ... (default %%f)")
    p.add_argument("--show", dest="show", default=None, help="leading columns, comma separated (default date,center,noise)")
    p.add_argument("--debug", dest="debug", action="store_true", default=None, help="dump traces to the log")
    p.add_argument("-o", "--output", dest="output", default=None, help="write CSV to this file instead of stdout")
    p.add_argument("-j", "--jobs", dest="jobs", type=int, default=None, help="worker processes (0 = one per CPU)")
    p.add_argument("--log-level", dest="log_level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    p.add_argument("--log-file", dest="log_file", default=None, help="also log to this rotating file")
    return p


def build_parser() -> argparse.ArgumentParser:
    common = _common_parser()
    field_help = "field range such as -f 50-100 (repeatable)"

    p = argparse.ArgumentParser(
        prog="satrace",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=__doc__,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", dest="config", default=None, help="YAML config file (flags override it)")
    sub = p.add_subparsers(dest="command")

    t = sub.add_parser("table", parents=[common], help="extract data column to row (dB)")
    t.add_argument("-f", dest="field", action="append", default=None, help=field_help)

    e = sub.add_parser("elen", parents=[common], help="electric energy: sum of mW per field range")
    e.add_argument("-f", dest="field", action="append", default=None, help=field_help)
    e.add_argument("--db", dest="db", action="store_true", default=None, help="print sums in dB instead of mW")

    k = sub.add_parser("peak", parents=[common], help="frequencies of levels above noise floor + delta")
    k.add_argument("-d", dest="d", type=float, default=None, help="threshold above the noise floor in dB (default 1)")
    k.add_argument("--values", dest="values", action="store_true", default=None, help="append peak levels")

    i = sub.add_parser("init", help="write a starting config file")
    i.add_argument("path", nargs="?", default=str(LOCAL_CONFIG_PATH))
    i.add_argument("--force", action="store_true", help="overwrite an existing file")
    return p


def _merge_args(cfg: Dict[str, Any], ns: argparse.Namespace) -> Dict[str, Any]:
    """Flags given on the command line win over the config file."""
    opts = dict(cfg.get("options") or {})
    for key in ("field", "c", "format", "show", "d", "debug", "db", "values", "jobs"):
        v = getattr(ns, key, None)
        if v is not None:
            opts[key] = v
    merged = dict(cfg)
    merged["options"] = opts
    if getattr(ns, "command", None):
        merged["subcommand"] = ns.command
    for key in ("output", "log_level", "log_file"):
        v = getattr(ns, key, None)
        if v is not None:
            merged[key] = v
    files = getattr(ns, "files", None)
    if files:
        merged["files"] = list(files)
    return merged


def options_from_config(cfg: Dict[str, Any]) -> RunOptions:
    opts = cfg.get("options") or {}
    command = str(cfg.get("subcommand") or "")
    fields = opts.get("field") or ()
    if isinstance(fields, str):
        fields = [fields]
    if command == "peak":
        # peak searches the whole trace; ranges left in a shared config file are ignored
        fields = ()
    return RunOptions.build(
        command,
        fields=fields,
        value_column=opts.get("c", 1),
        number_format=opts.get("format", "%f"),
        show=opts.get("show", "date,center,noise"),
        delta=opts.get("d", 1.0),
        in_db=opts.get("db", False),
        with_values=opts.get("values", False),
        debug=opts.get("debug", False),
        jobs=opts.get("jobs", 0),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args: List[str] = list(argv) if argv is not None else sys.argv[1:]
    parser = build_parser()
    ns = parser.parse_args(args)

    if ns.command == "init":
        setup_logging("INFO")
        created = write_default_config(Path(ns.path), overwrite=ns.force)
        return EXIT_OK if created else EXIT_USAGE

    config_path = ns.config
    if config_path is None and not args:
        config_path = LOCAL_CONFIG_PATH

    try:
        cfg = _merge_args(load_config(Path(config_path) if config_path else None), ns)
        options = options_from_config(cfg)
    except (ConfigError, OptionsError, InvalidRange) as e:
        setup_logging("INFO")
        log.error("%s", e)
        return EXIT_USAGE

    level = "DEBUG" if options.debug else str(cfg.get("log_level") or "INFO")
    setup_logging(level, log_file=Path(cfg["log_file"]) if cfg.get("log_file") else None)

    filenames = expand_filenames(str(f) for f in (cfg.get("files") or ()))
    results = run_batch(filenames, options)

    output = cfg.get("output")
    if output:
        write_csv(results, options, Path(output))
    else:
        write_stdout(results, options)

    failed = [r for r in results if not r.ok]
    if failed:
        log.error("%d of %d file(s) failed", len(failed), len(results))
        return EXIT_FILE_FAILED
    return EXIT_OK
