"""Fixed-width text tables for query results."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

COL_WIDTH = 16


class RecordPrinter:
    """Writes rows of a table with num_cols columns to a text stream."""

    def __init__(self, num_cols: int) -> None:
        if num_cols <= 0:
            raise ValueError(f"a table needs at least one column, got {num_cols}")
        self.num_cols = num_cols

    def print_separator(self, out: TextIO) -> None:
        out.write(("+" + "-" * (COL_WIDTH + 2)) * self.num_cols + "+\n")

    def print_record(self, rec_str: Sequence[str], out: TextIO) -> None:
        """Write one row; values longer than the column width are cut short with '...'."""
        if len(rec_str) != self.num_cols:
            raise ValueError(f"expected {self.num_cols} values, got {len(rec_str)}")
        cells = []
        for col in rec_str:
            if len(col) > COL_WIDTH:
                col = col[: COL_WIDTH - 3] + "..."
            cells.append(f"| {col:>{COL_WIDTH}} ")
        out.write("".join(cells) + "|\n")


def print_record_count(num_rec: int, out: TextIO) -> None:
    out.write(f"Total record(s): {num_rec}\n")