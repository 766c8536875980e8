"""Transactions, their write records, lock identifiers and abort errors."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from .defs import Rid
from .page import Page

INVALID_LSN = -1

_INT64_BITS = 64
_INT64_MASK = (1 << _INT64_BITS) - 1
_INT64_SIGN = 1 << (_INT64_BITS - 1)
_NO_RID = Rid(-1, -1)


class TransactionState(Enum):
    DEFAULT = 0
    GROWING = 1
    SHRINKING = 2
    COMMITTED = 3
    ABORTED = 4


class IsolationLevel(Enum):
    READ_UNCOMMITTED = 0
    REPEATABLE_READ = 1
    READ_COMMITTED = 2
    SERIALIZABLE = 3


class WType(IntEnum):
    INSERT_TUPLE = 0
    DELETE_TUPLE = 1
    UPDATE_TUPLE = 2


@dataclass
class WriteRecord:
    """One write made by a transaction, kept so that it can be undone.

    Inserts carry the rid, deletes the removed record, updates both the rid
    and the old record.
    """

    wtype: WType
    tab_name: str
    rid: Rid | None = None
    record: Any = None


class LockDataType(IntEnum):
    TABLE = 0
    RECORD = 1


@dataclass(frozen=True)
class LockDataId:
    """Names the object a lock is taken on: a whole table or one record in it."""

    fd: int
    type: LockDataType
    rid: Rid | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", LockDataType(self.type))
        if self.type is LockDataType.TABLE:
            if self.rid is not None and self.rid != _NO_RID:
                raise ValueError("a table lock does not name a record")
            object.__setattr__(self, "rid", _NO_RID)
        elif self.rid is None:
            raise ValueError("a record lock needs the rid of the record")

    @classmethod
    def table(cls, fd: int) -> LockDataId:
        return cls(fd, LockDataType.TABLE)

    @classmethod
    def record(cls, fd: int, rid: Rid) -> LockDataId:
        return cls(fd, LockDataType.RECORD, rid)

    def key(self) -> int:
        """Pack the identifier into a signed 64-bit integer."""
        if self.type is LockDataType.TABLE:
            return self.fd
        assert self.rid is not None
        packed = (
            (int(self.type) << 63)
            | (self.fd << 31)
            | (self.rid.page_no << 16)
            | self.rid.slot_no
        ) & _INT64_MASK
        return packed - (1 << _INT64_BITS) if packed & _INT64_SIGN else packed

    def __hash__(self) -> int:
        return hash(self.key())


class AbortReason(Enum):
    LOCK_ON_SHIRINKING = 0
    UPGRADE_CONFLICT = 1
    DEADLOCK_PREVENTION = 2


class TransactionAbortException(Exception):
    """Raised when a transaction must be aborted to keep locking correct."""

    def __init__(self, txn_id: int, abort_reason: AbortReason) -> None:
        self.txn_id = txn_id
        self.abort_reason = abort_reason
        super().__init__(self.info())

    def info(self) -> str:
        if self.abort_reason is AbortReason.LOCK_ON_SHIRINKING:
            return (
                f"Transaction {self.txn_id} aborted because it cannot request locks "
                "on SHRINKING phase\n"
            )
        if self.abort_reason is AbortReason.UPGRADE_CONFLICT:
            return (
                f"Transaction {self.txn_id} aborted because another transaction "
                "is waiting for upgrading\n"
            )
        if self.abort_reason is AbortReason.DEADLOCK_PREVENTION:
            return f"Transaction {self.txn_id} aborted for deadlock prevention\n"
        return "Transaction aborted\n"


@dataclass(eq=False)
class Transaction:
    """State of one transaction: its phase, writes, locks and latched pages."""

    txn_id: int
    isolation_level: IsolationLevel = IsolationLevel.SERIALIZABLE
    state: TransactionState = field(default=TransactionState.DEFAULT, init=False)
    txn_mode: bool = field(default=False, init=False)
    start_ts: int = field(default=0, init=False)
    prev_lsn: int = field(default=INVALID_LSN, init=False)
    thread_id: int = field(default_factory=threading.get_ident, init=False)
    write_set: deque[WriteRecord] = field(default_factory=deque, init=False)
    lock_set: set[LockDataId] = field(default_factory=set, init=False)
    page_set: deque[Page] = field(default_factory=deque, init=False)
    deleted_page_set: deque[Page] = field(default_factory=deque, init=False)

    def append_write_record(self, write_record: WriteRecord) -> None:
        self.write_set.append(write_record)

    def add_into_page_set(self, page: Page) -> None:
        self.page_set.append(page)

    def add_into_deleted_page_set(self, page: Page) -> None:
        self.deleted_page_set.append(page)