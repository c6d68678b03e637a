"""Structured trace sinks for recalculation passes.

A sink is attached to an :class:`~firecalc.calculator.eq_calc.EqCalc` and
receives one :class:`TraceEntry` per declared input and output cell of every
function invocation, plus one :class:`ContainStepEntry` per containment
simulation step. :class:`TraceLogger` persists them as parquet files the same
way simulation logs are written; :class:`MemoryTraceSink` keeps them in a list
for tests and interactive debugging.
"""

import datetime
import json
import os
from typing import List

import pandas as pd

from firecalc.utilities.logger_schemas import TraceEntry, ContainStepEntry
from firecalc.utilities.parquet_writer import TraceParquetWriter


class TraceSink:
    """Interface shared by every trace sink."""

    def __init__(self):
        self._pass_ctr = 0

    @property
    def pass_id(self) -> int:
        return self._pass_ctr

    def start_pass(self) -> int:
        self._pass_ctr += 1
        return self._pass_ctr

    def record(self, entry: TraceEntry):
        raise NotImplementedError

    def record_contain_step(self, entry: ContainStepEntry):
        raise NotImplementedError

    def log_message(self, msg: str):
        raise NotImplementedError


class MemoryTraceSink(TraceSink):
    def __init__(self):
        super().__init__()
        self.entries: List[TraceEntry] = []
        self.contain_steps: List[ContainStepEntry] = []
        self.messages: List[str] = []

    def record(self, entry: TraceEntry):
        self.entries.append(entry)

    def record_contain_step(self, entry: ContainStepEntry):
        self.contain_steps.append(entry)

    def log_message(self, msg: str):
        self.messages.append(msg)

    def for_function(self, name: str) -> List[TraceEntry]:
        return [e for e in self.entries if e.function == name]

    def functions_run(self, pass_id: int = None) -> List[str]:
        """Function names in execution order, without repeats."""
        pass_id = self.pass_id if pass_id is None else pass_id
        seen = []
        for e in self.entries:
            if e.pass_id == pass_id and (not seen or seen[-1] != e.function):
                seen.append(e.function)
        return seen

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([e.to_dict() for e in self.entries],
                            columns=["pass_id", "function", "direction", "name",
                                     "value", "decimals", "units"])

    def clear(self):
        self.entries.clear()
        self.contain_steps.clear()
        self.messages.clear()


class TraceLogger(TraceSink):
    def __init__(self, log_folder: str):
        super().__init__()

        self.log_folder = log_folder
        os.makedirs(self.log_folder, exist_ok=True)

        self._session_folder = self.generate_session_folder()

        self.trace_writer = TraceParquetWriter(
            os.path.join(self._session_folder, "trace_logs"), schema=TraceEntry
        )

        self.contain_writer = TraceParquetWriter(
            os.path.join(self._session_folder, "contain_logs"), schema=ContainStepEntry
        )

        self._trace_cache = []
        self._contain_cache = []

        self._status_log = {
            "session_start": datetime.datetime.now().isoformat(),
            "messages": [],
            "latest_flush": None,
            "passes": 0
        }

    @property
    def session_folder(self) -> str:
        return self._session_folder

    def record(self, entry: TraceEntry):
        self._trace_cache.append(entry)

    def record_contain_step(self, entry: ContainStepEntry):
        self._contain_cache.append(entry)

    def log_message(self, msg: str):
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        self._status_log["messages"].append(f"[{timestamp}]:{msg}")

    def flush(self):
        self.trace_writer.write_batch(self._trace_cache)
        self._trace_cache.clear()

        self.contain_writer.write_batch(self._contain_cache)
        self._contain_cache.clear()

        self._status_log["latest_flush"] = datetime.datetime.now().isoformat()
        self._status_log["passes"] = self.pass_id
        self._write_status_log()

    def finish(self):
        self.flush()

        trace_merged = self.trace_writer.merge(
            os.path.join(self._session_folder, "trace_logs.parquet")
        )
        if not trace_merged:
            self.log_message("No trace entries recorded")

        contain_merged = self.contain_writer.merge(
            os.path.join(self._session_folder, "contain_logs.parquet")
        )
        if not contain_merged:
            self.log_message("No containment steps recorded")

        self._write_status_log()

    def generate_session_folder(self) -> str:
        """Generates the path for this session's log files based on current datetime

        :return: Session folder path string
        :rtype: str
        """
        date_time_str = datetime.datetime.now().strftime('%d-%b-%Y-%H-%M-%S-%f')
        return os.path.join(self.log_folder, f"trace_{date_time_str}")

    def _write_status_log(self):
        os.makedirs(self._session_folder, exist_ok=True)
        path = os.path.join(self._session_folder, "status_log.json")
        with open(path, "w") as f:
            json.dump(self._status_log, f, indent=4)
