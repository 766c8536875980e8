"""Files, pages and the log on disk."""

from __future__ import annotations

import os
import shutil
import threading
from collections import defaultdict

from . import errors
from .page import PAGE_SIZE

LOG_FILE_NAME = "db.log"


class DiskManager:
    """Creates, opens and removes files and moves page-sized blocks to and from them."""

    def __init__(self, log_file_name: str = LOG_FILE_NAME) -> None:
        self.log_file_name = log_file_name
        self.log_fd = -1
        self._path2fd: dict[str, int] = {}
        self._fd2path: dict[int, str] = {}
        self._next_page_no: defaultdict[int, int] = defaultdict(int)
        self._lock = threading.RLock()

    # Context management

    def __enter__(self) -> DiskManager:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close every file still open."""
        with self._lock:
            for fd in list(self._fd2path):
                self.close_file(fd)
            self.log_fd = -1

    # Page operations

    def write_page(self, fd: int, page_no: int, data: bytes | bytearray | memoryview) -> None:
        """Write data at the start of page page_no of the file fd."""
        view = memoryview(data)
        with self._lock:
            try:
                os.lseek(fd, page_no * PAGE_SIZE, os.SEEK_SET)
                while view:
                    written = os.write(fd, view)
                    view = view[written:]
            except OSError as exc:
                raise errors.UnixError(exc) from exc

    def read_page(self, fd: int, page_no: int, num_bytes: int = PAGE_SIZE) -> bytes:
        """Read num_bytes of page page_no; bytes past the end of the file read as zero."""
        with self._lock:
            try:
                os.lseek(fd, page_no * PAGE_SIZE, os.SEEK_SET)
                chunks = []
                remaining = num_bytes
                while remaining > 0:
                    chunk = os.read(fd, remaining)
                    if not chunk:
                        break
                    chunks.append(chunk)
                    remaining -= len(chunk)
            except OSError as exc:
                raise errors.UnixError(exc) from exc
        data = b"".join(chunks)
        return data + bytes(num_bytes - len(data))

    def allocate_page(self, fd: int) -> int:
        """Hand out the next page number of fd."""
        with self._lock:
            page_no = self._next_page_no[fd]
            self._next_page_no[fd] = page_no + 1
            return page_no

    def deallocate_page(self, page_no: int) -> None:
        """Release a page number; pages are not reused, so nothing is done."""

    def set_next_page_no(self, fd: int, start_page_no: int) -> None:
        with self._lock:
            self._next_page_no[fd] = start_page_no

    def next_page_no(self, fd: int) -> int:
        with self._lock:
            return self._next_page_no[fd]

    # Directory operations

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def create_dir(self, path: str) -> None:
        try:
            os.mkdir(path)
        except OSError as exc:
            raise errors.UnixError(exc) from exc

    def destroy_dir(self, path: str) -> None:
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise errors.UnixError(exc) from exc

    # File operations

    def is_file(self, path: str) -> bool:
        return os.path.exists(path)

    def create_file(self, path: str) -> None:
        if self.is_file(path):
            raise errors.FileExistsError(path)
        try:
            fd = os.open(path, os.O_CREAT | os.O_WRONLY, 0o777)
        except OSError as exc:
            raise errors.UnixError(exc) from exc
        os.close(fd)

    def destroy_file(self, path: str) -> None:
        if not self.is_file(path):
            raise errors.FileNotFoundError(path)
        with self._lock:
            if path in self._path2fd:
                raise errors.FileNotClosedError(path)
        try:
            os.unlink(path)
        except OSError as exc:
            raise errors.UnixError(exc) from exc

    def open_file(self, path: str) -> int:
        """Open path for reading and writing; an already open file keeps its descriptor."""
        if not self.is_file(path):
            raise errors.FileNotFoundError(path)
        with self._lock:
            if path in self._path2fd:
                return self._path2fd[path]
            try:
                fd = os.open(path, os.O_RDWR)
            except OSError as exc:
                raise errors.UnixError(exc) from exc
            self._path2fd[path] = fd
            self._fd2path[fd] = path
            return fd

    def close_file(self, fd: int) -> None:
        with self._lock:
            if fd not in self._fd2path:
                raise errors.FileNotOpenError(fd)
            try:
                os.close(fd)
            except OSError as exc:
                raise errors.UnixError(exc) from exc
            path = self._fd2path.pop(fd)
            del self._path2fd[path]
            if fd == self.log_fd:
                self.log_fd = -1

    def get_file_size(self, path: str) -> int:
        """Return the size of path in bytes, or -1 if it cannot be examined."""
        try:
            return os.stat(path).st_size
        except OSError:
            return -1

    def get_file_name(self, fd: int) -> str:
        with self._lock:
            if fd not in self._fd2path:
                raise errors.FileNotOpenError(fd)
            return self._fd2path[fd]

    def get_file_fd(self, path: str) -> int:
        with self._lock:
            if path in self._path2fd:
                return self._path2fd[path]
        return self.open_file(path)

    # Log operations

    def _ensure_log_open(self) -> int:
        if self.log_fd == -1:
            self.log_fd = self.open_file(self.log_file_name)
        return self.log_fd

    def read_log(self, size: int, offset: int, prev_log_end: int) -> bytes:
        """Read up to size bytes of the log from prev_log_end + offset; empty at the end."""
        with self._lock:
            fd = self._ensure_log_open()
            offset += prev_log_end
            file_size = self.get_file_size(self.log_file_name)
            if offset >= file_size:
                return b""
            size = min(size, file_size - offset)
            try:
                os.lseek(fd, offset, os.SEEK_SET)
                data = os.read(fd, size)
            except OSError as exc:
                raise errors.UnixError(exc) from exc
            if len(data) != size:
                raise errors.UnixError("short read from log file")
            return data

    def write_log(self, data: bytes | bytearray) -> None:
        """Append data to the end of the log."""
        with self._lock:
            fd = self._ensure_log_open()
            try:
                os.lseek(fd, 0, os.SEEK_END)
                written = os.write(fd, data)
            except OSError as exc:
                raise errors.UnixError(exc) from exc
            if written != len(data):
                raise errors.UnixError("short write to log file")