"""A fixed-size cache of pages with least-recently-used replacement."""

from __future__ import annotations

import threading
from collections import OrderedDict, deque

from .disk_manager import DiskManager
from .page import INVALID_PAGE_ID, PAGE_SIZE, Page, PageId


class _LRUReplacer:
    """Tracks unpinned frames and picks the one unpinned longest ago."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._frames: OrderedDict[int, None] = OrderedDict()

    def victim(self) -> int | None:
        if not self._frames:
            return None
        frame_id, _ = self._frames.popitem(last=False)
        return frame_id

    def pin(self, frame_id: int) -> None:
        self._frames.pop(frame_id, None)

    def unpin(self, frame_id: int) -> None:
        if frame_id in self._frames or len(self._frames) >= self._capacity:
            return
        self._frames[frame_id] = None

    def __len__(self) -> int:
        return len(self._frames)


class BufferPoolManager:
    """Keeps up to pool_size pages in memory and writes them back to disk as needed.

    Methods that need a free frame return None when every frame is pinned.
    """

    def __init__(self, pool_size: int, disk_manager: DiskManager) -> None:
        self.pool_size = pool_size
        self.disk_manager = disk_manager
        self.pages = [Page() for _ in range(pool_size)]
        self._page_table: dict[PageId, int] = {}
        self._free_list: deque[int] = deque(range(pool_size))
        self._replacer = _LRUReplacer(pool_size)
        self._latch = threading.Lock()

    def _find_victim(self) -> int | None:
        if self._free_list:
            return self._free_list.popleft()
        return self._replacer.victim()

    def _update_page(self, page: Page, new_page_id: PageId, frame_id: int) -> None:
        if page.is_dirty:
            page.is_dirty = False
            self.disk_manager.write_page(page.id.fd, page.id.page_no, page.data)
        self._page_table.pop(page.id, None)
        if new_page_id.page_no != INVALID_PAGE_ID:
            self._page_table[new_page_id] = frame_id
        page.reset_memory()
        page.id = new_page_id

    def fetch_page(self, page_id: PageId) -> Page | None:
        """Return the page pinned, reading it from disk if it is not cached."""
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is not None:
                self._replacer.pin(frame_id)
                page = self.pages[frame_id]
                page.pin_count += 1
                return page
            frame_id = self._find_victim()
            if frame_id is None:
                return None
            page = self.pages[frame_id]
            self._update_page(page, page_id, frame_id)
            page.data[:] = self.disk_manager.read_page(page_id.fd, page_id.page_no, PAGE_SIZE)
            self._replacer.pin(frame_id)
            page.pin_count = 1
            return page

    def unpin_page(self, page_id: PageId, is_dirty: bool) -> bool:
        """Drop one pin; False if the page is not cached or not pinned."""
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return False
            page = self.pages[frame_id]
            if page.pin_count == 0:
                return False
            page.pin_count -= 1
            if page.pin_count == 0:
                self._replacer.unpin(frame_id)
            if is_dirty:
                page.is_dirty = True
            return True

    def flush_page(self, page_id: PageId) -> bool:
        """Write a cached page to disk whatever its pin count; False if not cached."""
        with self._latch:
            if page_id.page_no == INVALID_PAGE_ID:
                return False
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return False
            page = self.pages[frame_id]
            self.disk_manager.write_page(page_id.fd, page_id.page_no, page.data)
            page.is_dirty = False
            return True

    def new_page(self, fd: int) -> Page | None:
        """Allocate a new zeroed page in file fd and return it pinned."""
        with self._latch:
            frame_id = self._find_victim()
            if frame_id is None:
                return None
            page_id = PageId(fd, self.disk_manager.allocate_page(fd))
            page = self.pages[frame_id]
            self._update_page(page, page_id, frame_id)
            self._replacer.pin(frame_id)
            page.pin_count = 1
            return page

    def delete_page(self, page_id: PageId) -> bool:
        """Drop a page from the pool; False only if it is cached and still pinned."""
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return True
            page = self.pages[frame_id]
            if page.pin_count > 0:
                return False
            self.disk_manager.deallocate_page(page_id.page_no)
            self._replacer.pin(frame_id)
            self._update_page(page, PageId(page_id.fd, INVALID_PAGE_ID), frame_id)
            self._free_list.append(frame_id)
            return True

    def flush_all_pages(self, fd: int) -> None:
        """Write every cached page of file fd to disk."""
        with self._latch:
            for page in self.pages:
                if page.id.fd == fd and page.id.page_no != INVALID_PAGE_ID:
                    self.disk_manager.write_page(page.id.fd, page.id.page_no, page.data)
                    page.is_dirty = False