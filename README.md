# rucstore

The storage layer of a small relational database engine, written in Python
with no dependencies outside the standard library.

## What it provides

- `rucstore.disk_manager.DiskManager` creates, opens, closes and removes
  files and directories, reads and writes 4096-byte pages (`write_page`,
  `read_page`), hands out increasing page numbers per open file
  (`allocate_page`, `set_next_page_no`, `next_page_no`), and appends to and
  reads from a log file (`write_log`, `read_log`; the log file is `db.log`
  unless another name is given). Opening a file that is already open returns
  the same descriptor. Removing a file that is still open raises
  `FileNotClosedError`. `read_page` fills any bytes past the end of the file
  with zeros. A `DiskManager` is a context manager; `close()` closes every
  file it still has open.
- `rucstore.buffer_pool.BufferPoolManager` is a fixed number of in-memory
  page frames with pin counts, dirty flags and least-recently-used eviction.
  `new_page(fd)` and `fetch_page(page_id)` return a pinned `Page`, or `None`
  when every frame is pinned. `unpin_page`, `flush_page` and `delete_page`
  return `True` or `False` as described in their docstrings.
  `flush_all_pages(fd)` writes every cached page of a file to disk. Dirty
  pages are written back when their frame is reused.
- `rucstore.page` holds `PageId` (a file descriptor and a page number),
  `Page` (a `bytearray` of `PAGE_SIZE` bytes with its id, dirty flag, pin
  count and a `page_lsn` property stored in the first four bytes), and the
  constants `PAGE_SIZE` and `INVALID_PAGE_ID`.
- `rucstore.catalog` holds `ColMeta`, `TabMeta` and `DbMeta`, the metadata of
  a database, its tables and their columns. `TabMeta.get_col` and
  `DbMeta.get_table` raise `ColumnNotFoundError` and `TableNotFoundError`.
  `DbMeta.dump` writes the catalog as whitespace-separated text, with tables
  in name order, and `DbMeta.load` reads it back.
- `rucstore.record_printer` holds `RecordPrinter` and `print_record_count`,
  which write result tables to a text stream as 16-character right-aligned
  columns. Values that are too long are cut short with `...`.
- `rucstore.transaction` holds `Transaction` (state, isolation level, write
  set, lock set and page sets), `WriteRecord`, `LockDataId` (a table or record
  lock target, packed into a 64-bit key by `key()`), the enums
  `TransactionState`, `IsolationLevel`, `WType`, `LockDataType` and
  `AbortReason`, and `TransactionAbortException`.
- `rucstore.defs` holds `Rid`, `ColType`, `coltype2str` and the abstract
  record cursor `RecScan`, which can be iterated for its record ids.
- `rucstore.errors` holds the exception hierarchy rooted at `RedBaseError`.
  Every message starts with `Error: `. Its `FileExistsError` and
  `FileNotFoundError` are the package's own classes, not the built-in
  exceptions of the same names.

## Installation

```
pip install .
```

## Example

```python
from rucstore.disk_manager import DiskManager
from rucstore.buffer_pool import BufferPoolManager
from rucstore.page import PageId

with DiskManager() as disk:
    disk.create_file("table.dat")
    fd = disk.open_file("table.dat")

    pool = BufferPoolManager(10, disk)
    page = pool.new_page(fd)
    page.data[:5] = b"Hello"
    pool.unpin_page(page.id, True)
    pool.flush_all_pages(fd)

    again = pool.fetch_page(PageId(fd, page.id.page_no))
    assert bytes(again.data[:5]) == b"Hello"
    pool.unpin_page(again.id, False)
```

The catalog round-trips through a text stream:

```python
import io
from rucstore.catalog import ColMeta, DbMeta, TabMeta
from rucstore.defs import ColType

db = DbMeta(name="shop")
db.tabs["items"] = TabMeta(
    name="items",
    cols=[ColMeta(tab_name="items", name="id", type=ColType.INT, len=4, offset=0)],
)

buf = io.StringIO()
db.dump(buf)
buf.seek(0)
assert DbMeta.load(buf) == db
```

## What it does not do

This package is only the lower layers of a database. It has no SQL parser,
no query execution, no record files or slot management inside pages, and no
indexes. It also has no lock manager and no transaction manager: the
`Transaction`, `WriteRecord` and `LockDataId` objects record state, but
nothing here grants locks, commits or rolls back. There is no command-line
program and no server.

## Running the tests

```
pip install .[test]
pytest
```