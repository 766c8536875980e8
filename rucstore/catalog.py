"""Metadata of a database, its tables and their columns."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TextIO

from . import errors
from .defs import ColType

DB_META_NAME = "db.meta"


@dataclass
class ColMeta:
    """A column: its table, name, type, byte length, offset in the record and index flag."""

    tab_name: str
    name: str
    type: ColType
    len: int
    offset: int
    index: bool = False

    def _dump(self, stream: TextIO) -> None:
        stream.write(
            f"{self.tab_name} {self.name} {int(self.type)} {self.len} {self.offset} {int(self.index)}"
        )

    @classmethod
    def _load(cls, tokens: Iterator[str]) -> ColMeta:
        return cls(
            tab_name=next(tokens),
            name=next(tokens),
            type=ColType(int(next(tokens))),
            len=int(next(tokens)),
            offset=int(next(tokens)),
            index=int(next(tokens)) != 0,
        )


@dataclass
class TabMeta:
    """A table: its name and its columns in order."""

    name: str
    cols: list[ColMeta] = field(default_factory=list)

    def is_col(self, col_name: str) -> bool:
        return any(col.name == col_name for col in self.cols)

    def get_col(self, col_name: str) -> ColMeta:
        """Return the column named col_name; raise ColumnNotFoundError if there is none."""
        for col in self.cols:
            if col.name == col_name:
                return col
        raise errors.ColumnNotFoundError(col_name)

    def _dump(self, stream: TextIO) -> None:
        stream.write(f"{self.name}\n{len(self.cols)}\n")
        for col in self.cols:
            col._dump(stream)
            stream.write("\n")

    @classmethod
    def _load(cls, tokens: Iterator[str]) -> TabMeta:
        name = next(tokens)
        count = int(next(tokens))
        return cls(name=name, cols=[ColMeta._load(tokens) for _ in range(count)])


@dataclass
class DbMeta:
    """A database: its name and its tables by name."""

    name: str = ""
    tabs: dict[str, TabMeta] = field(default_factory=dict)

    def is_table(self, tab_name: str) -> bool:
        return tab_name in self.tabs

    def get_table(self, tab_name: str) -> TabMeta:
        """Return the table named tab_name; raise TableNotFoundError if there is none."""
        try:
            return self.tabs[tab_name]
        except KeyError:
            raise errors.TableNotFoundError(tab_name) from None

    def dump(self, stream: TextIO) -> None:
        """Write the metadata as whitespace-separated text, tables in name order."""
        stream.write(f"{self.name}\n{len(self.tabs)}\n")
        for tab_name in sorted(self.tabs):
            self.tabs[tab_name]._dump(stream)
            stream.write("\n")

    @classmethod
    def load(cls, stream: TextIO) -> DbMeta:
        """Read metadata written by dump; raise ValueError if it is malformed."""
        tokens = iter(stream.read().split())
        try:
            name = next(tokens)
            count = int(next(tokens))
            db = cls(name=name)
            for _ in range(count):
                tab = TabMeta._load(tokens)
                db.tabs[tab.name] = tab
        except StopIteration:
            raise ValueError("truncated database metadata") from None
        return db