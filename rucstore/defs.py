"""Basic types shared by the storage layers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum


@dataclass(frozen=True)
class Rid:
    """Location of a record: page number and slot number."""

    page_no: int
    slot_no: int


class ColType(IntEnum):
    INT = 0
    FLOAT = 1
    STRING = 2


def coltype2str(col_type: ColType | int) -> str:
    """Return the display name of a column type; raise ValueError if unknown."""
    return ColType(col_type).name


class RecScan(ABC):
    """A cursor over record ids."""

    @abstractmethod
    def next(self) -> None:
        """Advance to the next record."""

    @abstractmethod
    def is_end(self) -> bool:
        """Return True once the scan is exhausted."""

    @abstractmethod
    def rid(self) -> Rid:
        """Return the id of the current record."""

    def __iter__(self) -> Iterator[Rid]:
        while not self.is_end():
            yield self.rid()
            self.next()