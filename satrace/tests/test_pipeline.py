"""Row builders and the batch runner on real files."""

from __future__ import annotations

import csv
import io
import math
from pathlib import Path

import numpy as np
import pytest

from satrace.analysis.power import db_to_linear
from satrace.errors import MISSING_TERMINATOR, FilenameDatetimeError, InvalidRange
from satrace.models.trace import Trace
from satrace.options import RunOptions
from satrace.output.writers import write_csv, write_stdout
from satrace.pipeline import batch
from satrace.pipeline.batch import run_batch
from satrace.pipeline.commands import process_file

from conftest import make_trace_text, write_trace_file

LEVELS = np.arange(10.0, 21.0)


class TestProcessFile:
    def test_table_whole_trace(self, sample_trace: Path):
        row, warnings = process_file(str(sample_trace), RunOptions.build("table"))
        assert row.datetime == "2020-06-27 18:05:05"
        assert row.center == "5 MHz"
        assert row.fields == tuple(LEVELS.tolist())
        assert row.noise_floor == pytest.approx(11.75)
        assert warnings == ()

    def test_table_ranges_concatenate(self, sample_trace: Path):
        row, _ = process_file(str(sample_trace), RunOptions.build("table", fields=["0-1", "9-10"]))
        assert row.fields == (10.0, 11.0, 19.0, 20.0)

    def test_table_range_outside_trace(self, sample_trace: Path):
        with pytest.raises(InvalidRange):
            process_file(str(sample_trace), RunOptions.build("table", fields=["5-11"]))

    def test_elen_whole_equals_full_band(self, sample_trace: Path):
        whole, _ = process_file(str(sample_trace), RunOptions.build("elen"))
        band, _ = process_file(str(sample_trace), RunOptions.build("elen", fields=["0-10"]))
        assert len(whole.fields) == 1
        assert whole.fields[0] == pytest.approx(band.fields[0])
        assert whole.fields[0] == pytest.approx(float(np.sum(db_to_linear(LEVELS))))

    def test_elen_bands_and_db(self, sample_trace: Path):
        row, _ = process_file(str(sample_trace), RunOptions.build("elen", fields=["0-0", "10-10"], in_db=True))
        assert row.fields == pytest.approx((10.0, 20.0))

    def test_peak(self, tmp_path: Path):
        levels = [-70.0] * 11
        levels[3] = -40.0
        levels[8] = -45.0
        p = write_trace_file(tmp_path / "20200101_000000.txt", levels=levels)
        row, _ = process_file(str(p), RunOptions.build("peak", delta=10.0, with_values=True))
        assert row.fields == pytest.approx((4.8, 5.3, -40.0, -45.0))
        assert row.noise_floor == -70.0

    def test_date_not_required_when_hidden(self, tmp_path: Path):
        p = write_trace_file(tmp_path / "trace.txt")
        row, _ = process_file(str(p), RunOptions.build("table", show="center"))
        assert row.datetime == ""
        with pytest.raises(FilenameDatetimeError):
            process_file(str(p), RunOptions.build("table"))

    def test_missing_terminator_reported(self, sample_trace: Path):
        sample_trace.write_text(make_trace_text(terminator=None), encoding="utf-8")
        row, warnings = process_file(str(sample_trace), RunOptions.build("elen"))
        assert len(warnings) == 1
        assert row.fields

    def test_debug_dump_follows_logger_level(self, sample_trace: Path, caplog, monkeypatch):
        options = RunOptions.build("table")
        with caplog.at_level("DEBUG", logger="satrace.pipeline.commands"):
            process_file(str(sample_trace), options)
        assert "[ CONTENT ]" in caplog.text
        assert "[ OUTROW ]" in caplog.text

        caplog.clear()

        def no_frame(self):
            raise AssertionError("frame built with DEBUG disabled")

        monkeypatch.setattr(Trace, "to_frame", no_frame)
        with caplog.at_level("INFO", logger="satrace.pipeline.commands"):
            process_file(str(sample_trace), RunOptions.build("table", debug=True))
        assert "[ CONTENT ]" not in caplog.text

    def test_zero_point_sweep_rejected(self, tmp_path: Path):
        header = "stamp;*CLS;:FREQ:CENT 5 MHz;:FREQ:SPAN 1 MHz;:SWE:POIN 0;\n"
        p = tmp_path / "20200101_000000.txt"
        p.write_text(header + "# <eof>\n", encoding="utf-8")
        with pytest.raises(ValueError):
            process_file(str(p), RunOptions.build("table"))


class TestRunBatch:
    def _files(self, tmp_path: Path):
        good1 = write_trace_file(tmp_path / "20200627_180505.txt")
        bad = tmp_path / "20200627_180506.txt"
        bad.write_text(make_trace_text().replace("3\t13 \t-99.0\n", "3\n"), encoding="utf-8")
        good2 = write_trace_file(tmp_path / "20200627_180507.txt", levels=LEVELS + 1.0)
        return [str(good1), str(bad), str(good2)]

    @pytest.mark.parametrize("jobs", [1, 2])
    def test_bad_file_isolated(self, tmp_path: Path, jobs: int):
        files = self._files(tmp_path)
        results = run_batch(files, RunOptions.build("elen", jobs=jobs))
        assert [r.filename for r in results] == files
        assert [r.ok for r in results] == [True, False, True]
        assert "ShortDataLine" in results[1].error
        assert results[2].row.fields[0] == pytest.approx(10 ** 0.1 * results[0].row.fields[0])

    def test_empty(self):
        assert run_batch([], RunOptions.build("table")) == []

    def test_write_stdout_and_csv(self, tmp_path: Path):
        files = self._files(tmp_path)
        options = RunOptions.build("elen", fields=["0-1", "2-3"], number_format="%.3f", show="date,center", jobs=1)
        results = run_batch(files, options)

        buf = io.StringIO()
        n = write_stdout(results, options, stream=buf)
        lines = buf.getvalue().splitlines()
        assert n == 2
        assert lines[0] == "date,center,0-1,2-3"
        assert lines[1].startswith("2020-06-27 18:05:05,5 MHz,")
        assert len(lines) == 3

        out = write_csv(results, options, tmp_path / "out" / "rows.csv")
        with out.open(newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["date", "center", "0-1", "2-3"]
        assert rows[2][0] == "2020-06-27 18:05:07"
        expected = 10 ** 1.0 + 10 ** 1.1
        assert float(rows[1][2]) == pytest.approx(expected, abs=1e-3)
        assert not math.isnan(float(rows[1][3]))

    def test_unexpected_task_failure_isolated(self, tmp_path: Path, monkeypatch):
        files = self._files(tmp_path)
        real = batch.process_file

        def flaky(filename, options):
            if filename == files[0]:
                raise RuntimeError("worker died")
            return real(filename, options)

        monkeypatch.setattr(batch, "process_file", flaky)
        results = run_batch(files, RunOptions.build("elen", jobs=1))
        assert [r.filename for r in results] == files
        assert [r.ok for r in results] == [False, False, True]
        assert results[0].error == "RuntimeError: worker died"

    def test_warnings_carried_on_results(self, tmp_path: Path, caplog):
        p = tmp_path / "20200627_180505.txt"
        p.write_text(make_trace_text(terminator=None), encoding="utf-8")
        with caplog.at_level("WARNING", logger="satrace"):
            results = run_batch([str(p)], RunOptions.build("table", jobs=1))
        assert results[0].warnings == (MISSING_TERMINATOR,)
        assert [rec.name for rec in caplog.records] == ["satrace.pipeline.batch"]
