"""Storage layer of a small relational database: disk pages, buffer pool, catalog, result printing and transaction records."""

__version__ = "0.1.0"

__all__ = [
    "buffer_pool",
    "catalog",
    "defs",
    "disk_manager",
    "errors",
    "page",
    "record_printer",
    "transaction",
]