"""Pages: the unit of storage moved between disk and the buffer pool."""

from __future__ import annotations

import struct
from dataclasses import dataclass

PAGE_SIZE = 4096
INVALID_PAGE_ID = -1

OFFSET_PAGE_START = 0
OFFSET_LSN = 0
OFFSET_PAGE_HDR = 4

_LSN = struct.Struct("<i")


@dataclass(frozen=True)
class PageId:
    """Identifies a page by the descriptor of its file and its number in it."""

    fd: int
    page_no: int = INVALID_PAGE_ID


class Page:
    """A page-sized block of bytes with its buffer-pool bookkeeping."""

    def __init__(self) -> None:
        self.id = PageId(fd=-1)
        self.data = bytearray(PAGE_SIZE)
        self.is_dirty = False
        self.pin_count = 0

    def reset_memory(self) -> None:
        """Zero the page contents in place."""
        self.data[:] = bytes(PAGE_SIZE)

    @property
    def page_lsn(self) -> int:
        return _LSN.unpack_from(self.data, OFFSET_LSN)[0]

    @page_lsn.setter
    def page_lsn(self, lsn: int) -> None:
        _LSN.pack_into(self.data, OFFSET_LSN, lsn)

    def __repr__(self) -> str:
        return f"Page(id={self.id!r}, dirty={self.is_dirty}, pins={self.pin_count})"