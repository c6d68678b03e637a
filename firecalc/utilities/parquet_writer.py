import glob
import os
import shutil
from dataclasses import fields
from typing import List

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq


class TraceParquetWriter:
    """Writes batches of trace dataclass entries as numbered parquet parts.

    Args:
        folder (str): directory receiving ``part-NNNNN.parquet`` files
        schema (type): dataclass type of the entries; its field order fixes
            the column order of every part
    """
    def __init__(self, folder: str, schema):
        self.folder = folder
        self.schema = schema
        self.columns = [f.name for f in fields(schema)]
        self.counter = 0
        os.makedirs(folder, exist_ok=True)

    def write_batch(self, entries: List):
        if not entries:
            return

        for entry in entries:
            if not isinstance(entry, self.schema):
                raise TypeError(
                    f"{type(entry).__name__} written to a {self.schema.__name__} log"
                )

        os.makedirs(self.folder, exist_ok=True)

        df = pd.DataFrame([entry.to_dict() for entry in entries], columns=self.columns)
        file_path = os.path.join(self.folder, f"part-{self.counter:05d}.parquet")
        self.counter += 1

        table = pa.Table.from_pandas(df, preserve_index=False)
        pq.write_table(table, file_path, compression='brotli')

    def merge(self, output_file: str, remove_parts: bool = True) -> bool:
        """Concatenates every part file into one parquet file.

        Returns:
            bool: False if there was nothing to merge
        """
        part_files = sorted(glob.glob(os.path.join(self.folder, "part-*.parquet")))

        if not part_files:
            return False

        combined = pd.concat([pd.read_parquet(f) for f in part_files], ignore_index=True)
        pq.write_table(pa.Table.from_pandas(combined, preserve_index=False),
                       output_file, compression='snappy')

        if remove_parts:
            shutil.rmtree(self.folder)

        return True
