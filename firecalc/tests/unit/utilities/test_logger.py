"""Tests for trace sinks and trace entry formatting."""

import json
import os

import pandas as pd
import pytest

from firecalc.utilities.logger import MemoryTraceSink, TraceLogger, TraceSink
from firecalc.utilities.logger_schemas import ContainStepEntry, TraceEntry


def _entry(pass_id=1, function="fA", direction="o", name="vB", value=2.5):
    return TraceEntry(pass_id=pass_id, function=function, direction=direction, name=name,
                      value=value, decimals=2, units="ft")


class TestTraceEntry:
    """Tests for trace entry serialization."""

    def test_to_dict_stringifies_values(self):
        """Values are stored as strings so parquet columns have one type."""
        assert _entry(value=2.5).to_dict()["value"] == "2.5"
        assert _entry(value="Yes").to_dict()["value"] == "Yes"

    def test_format(self):
        """Continuous values are formatted to the cell's decimals."""
        assert _entry(value=2.456).format() == "  o vB 2.46 ft"
        assert _entry(value="FM1").format() == "  o vB FM1 ft"


class TestTraceSink:
    """Tests for the sink interface."""

    def test_pass_counter(self):
        sink = MemoryTraceSink()
        assert sink.pass_id == 0
        assert sink.start_pass() == 1
        assert sink.start_pass() == 2

    def test_base_is_abstract(self):
        """The base sink does not store entries."""
        with pytest.raises(NotImplementedError):
            TraceSink().record(_entry())


class TestMemoryTraceSink:
    """Tests for the in-memory sink."""

    def test_functions_run(self):
        """Consecutive entries of one function collapse to one name."""
        sink = MemoryTraceSink()
        sink.start_pass()
        for func, name in (("fA", "vA"), ("fA", "vB"), ("fB", "vB"), ("fB", "vC")):
            sink.record(_entry(function=func, name=name))
        assert sink.functions_run() == ["fA", "fB"]
        assert sink.functions_run(pass_id=2) == []

    def test_to_dataframe(self):
        sink = MemoryTraceSink()
        sink.record(_entry())
        df = sink.to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["pass_id", "function", "direction", "name", "value",
                                    "decimals", "units"]
        assert df.iloc[0]["name"] == "vB"

    def test_empty_dataframe_has_columns(self):
        assert len(MemoryTraceSink().to_dataframe().columns) == 7

    def test_clear(self):
        sink = MemoryTraceSink()
        sink.record(_entry())
        sink.record_contain_step(ContainStepEntry(1, 0, 0., 1.))
        sink.log_message("hello")
        sink.clear()
        assert (sink.entries, sink.contain_steps, sink.messages) == ([], [], [])


class TestTraceLogger:
    """Tests for the parquet-backed sink."""

    def test_finish_writes_files(self, tmp_path):
        """finish() merges the parquet parts and writes the status log."""
        logger = TraceLogger(str(tmp_path))
        logger.start_pass()
        logger.record(_entry())
        logger.record(_entry(direction="i", name="vA", value=1.))
        logger.record_contain_step(ContainStepEntry(1, 0, 0.5, 1.5))
        logger.log_message("done")
        logger.finish()

        folder = logger.session_folder
        trace = pd.read_parquet(os.path.join(folder, "trace_logs.parquet"))
        assert len(trace) == 2
        assert set(trace["name"]) == {"vA", "vB"}

        steps = pd.read_parquet(os.path.join(folder, "contain_logs.parquet"))
        assert list(steps["x"]) == [0.5]

        with open(os.path.join(folder, "status_log.json")) as f:
            status = json.load(f)
        assert status["passes"] == 1
        assert status["messages"][0].endswith("done")

    def test_finish_without_entries(self, tmp_path):
        """An empty session notes that nothing was recorded."""
        logger = TraceLogger(str(tmp_path))
        logger.finish()

        with open(os.path.join(logger.session_folder, "status_log.json")) as f:
            status = json.load(f)
        assert any("No trace entries" in m for m in status["messages"])
