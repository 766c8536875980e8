"""Exception hierarchy for the storage engine."""

from __future__ import annotations


class RedBaseError(Exception):
    """Base class of every error raised by the engine."""

    def __init__(self, msg: str) -> None:
        super().__init__("Error: " + msg)
        self.msg = msg


class InternalError(RedBaseError):
    """An invariant of the engine itself was broken."""


class UnixError(RedBaseError):
    """An operating-system call failed."""

    def __init__(self, cause: OSError | str | None = None) -> None:
        if isinstance(cause, OSError):
            reason = cause.strerror or str(cause)
            self.errno = cause.errno
        else:
            reason = cause or "Unknown error"
            self.errno = None
        super().__init__(reason)


class FileNotOpenError(RedBaseError):
    def __init__(self, fd: int) -> None:
        super().__init__(f"Invalid file descriptor: {fd}")
        self.fd = fd


class FileNotClosedError(RedBaseError):
    def __init__(self, filename: str) -> None:
        super().__init__(f"File is opened: {filename}")
        self.filename = filename


class FileExistsError(RedBaseError):  # noqa: A001
    def __init__(self, filename: str) -> None:
        super().__init__(f"File already exists: {filename}")
        self.filename = filename


class FileNotFoundError(RedBaseError):  # noqa: A001
    def __init__(self, filename: str) -> None:
        super().__init__(f"File not found: {filename}")
        self.filename = filename


class RecordNotFoundError(RedBaseError):
    def __init__(self, page_no: int, slot_no: int) -> None:
        super().__init__(f"Record not found: ({page_no},{slot_no})")
        self.page_no = page_no
        self.slot_no = slot_no


class InvalidRecordSizeError(RedBaseError):
    def __init__(self, record_size: int) -> None:
        super().__init__(f"Invalid record size: {record_size}")
        self.record_size = record_size


class InvalidColLengthError(RedBaseError):
    def __init__(self, col_len: int) -> None:
        super().__init__(f"Invalid column length: {col_len}")
        self.col_len = col_len


class IndexEntryNotFoundError(RedBaseError):
    def __init__(self) -> None:
        super().__init__("Index entry not found")


class DatabaseNotFoundError(RedBaseError):
    def __init__(self, db_name: str) -> None:
        super().__init__(f"Database not found: {db_name}")
        self.db_name = db_name


class DatabaseExistsError(RedBaseError):
    def __init__(self, db_name: str) -> None:
        super().__init__(f"Database already exists: {db_name}")
        self.db_name = db_name


class TableNotFoundError(RedBaseError):
    def __init__(self, tab_name: str) -> None:
        super().__init__(f"Table not found: {tab_name}")
        self.tab_name = tab_name


class TableExistsError(RedBaseError):
    def __init__(self, tab_name: str) -> None:
        super().__init__(f"Table already exists: {tab_name}")
        self.tab_name = tab_name


class ColumnNotFoundError(RedBaseError):
    def __init__(self, col_name: str) -> None:
        super().__init__(f"Column not found: {col_name}")
        self.col_name = col_name


class IndexNotFoundError(RedBaseError):
    def __init__(self, tab_name: str, col_name: str) -> None:
        super().__init__(f"Index not found: {tab_name}.{col_name}")
        self.tab_name = tab_name
        self.col_name = col_name


class IndexExistsError(RedBaseError):
    def __init__(self, tab_name: str, col_name: str) -> None:
        super().__init__(f"Index already exists: {tab_name}.{col_name}")
        self.tab_name = tab_name
        self.col_name = col_name


class InvalidValueCountError(RedBaseError):
    def __init__(self) -> None:
        super().__init__("Invalid value count")


class StringOverflowError(RedBaseError):
    def __init__(self) -> None:
        super().__init__("String is too long")


class IncompatibleTypeError(RedBaseError):
    def __init__(self, lhs: str, rhs: str) -> None:
        super().__init__(f"Incompatible type error: lhs {lhs}, rhs {rhs}")
        self.lhs = lhs
        self.rhs = rhs


class AmbiguousColumnError(RedBaseError):
    def __init__(self, col_name: str) -> None:
        super().__init__(f"Ambiguous column: {col_name}")
        self.col_name = col_name


class PageNotExistError(RedBaseError):
    def __init__(self, table_name: str, page_no: int) -> None:
        super().__init__(f"Page {page_no} in table {table_name}not exits")
        self.table_name = table_name
        self.page_no = page_no