import random

import pytest

from rucstore import errors
from rucstore.disk_manager import DiskManager
from rucstore.page import PAGE_SIZE

MAX_FILES = 32
MAX_PAGES = 128
TEST_DB_NAME = "DiskManagerTest_db"


@pytest.fixture
def disk(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    manager = DiskManager()
    if not manager.is_dir(TEST_DB_NAME):
        manager.create_dir(TEST_DB_NAME)
    assert manager.is_dir(TEST_DB_NAME)
    monkeypatch.chdir(tmp_path / TEST_DB_NAME)
    with manager:
        yield manager


def test_file_operation(disk):
    fd2name = {}
    for i in range(MAX_FILES):
        filename = f"FileOperationTestFile{i}"
        if disk.is_file(filename):
            disk.destroy_file(filename)
        with pytest.raises(errors.FileNotFoundError):
            disk.open_file(filename)
        disk.create_file(filename)
        assert disk.is_file(filename) is True
        with pytest.raises(errors.FileExistsError):
            disk.create_file(filename)
        fd = disk.open_file(filename)
        if i % 5 == 0:
            disk.close_file(fd)
            fd = disk.open_file(filename)
        fd2name[fd] = filename

    assert len(fd2name) == MAX_FILES
    for fd, filename in fd2name.items():
        disk.close_file(fd)
        disk.destroy_file(filename)
        assert disk.is_file(filename) is False
        with pytest.raises(errors.FileNotFoundError):
            disk.destroy_file(filename)


def test_page_operation(disk):
    filename = "PageOperationTestFile"
    disk.create_file(filename)
    assert disk.is_file(filename) is True
    fd = disk.open_file(filename)
    disk.set_next_page_no(fd, 0)

    rng = random.Random(0)
    for page_no in range(MAX_PAGES):
        assert disk.allocate_page(fd) == page_no
        data = rng.randbytes(PAGE_SIZE)
        disk.write_page(fd, page_no, data)
        assert disk.read_page(fd, page_no, PAGE_SIZE) == data

    assert disk.next_page_no(fd) == MAX_PAGES
    disk.close_file(fd)
    disk.destroy_file(filename)
    assert disk.is_file(filename) is False


def test_open_twice_returns_same_fd(disk):
    disk.create_file("f")
    fd = disk.open_file("f")
    assert disk.open_file("f") == fd
    assert disk.get_file_fd("f") == fd
    assert disk.get_file_name(fd) == "f"


def test_get_file_fd_opens_file(disk):
    disk.create_file("g")
    fd = disk.get_file_fd("g")
    assert disk.get_file_name(fd) == "g"


def test_close_unopened_raises(disk):
    with pytest.raises(errors.FileNotOpenError):
        disk.close_file(99999)
    with pytest.raises(errors.FileNotOpenError):
        disk.get_file_name(99999)


def test_destroy_open_file_raises(disk):
    disk.create_file("busy")
    fd = disk.open_file("busy")
    with pytest.raises(errors.FileNotClosedError):
        disk.destroy_file("busy")
    assert disk.is_file("busy")
    disk.close_file(fd)
    disk.destroy_file("busy")
    assert not disk.is_file("busy")


def test_read_past_end_is_zero(disk):
    disk.create_file("short")
    fd = disk.open_file("short")
    disk.write_page(fd, 0, b"abc")
    assert disk.read_page(fd, 0, 8) == b"abc" + bytes(5)
    assert disk.read_page(fd, 3, 16) == bytes(16)


def test_file_size(disk):
    disk.create_file("sized")
    fd = disk.open_file("sized")
    disk.write_page(fd, 1, b"xy")
    assert disk.get_file_size("sized") == PAGE_SIZE + 2
    assert disk.get_file_size("missing") == -1


def test_allocate_pages_per_fd(disk):
    assert disk.allocate_page(5) == 0
    assert disk.allocate_page(5) == 1
    assert disk.allocate_page(6) == 0
    disk.set_next_page_no(5, 10)
    assert disk.allocate_page(5) == 10


def test_log_roundtrip(disk):
    disk.create_file(disk.log_file_name)
    disk.write_log(b"hello ")
    disk.write_log(b"world")
    assert disk.read_log(100, 0, 0) == b"hello world"
    assert disk.read_log(5, 0, 6) == b"world"
    assert disk.read_log(3, 2, 6) == b"rld"
    assert disk.read_log(10, 11, 0) == b""


def test_log_missing_file_raises(disk):
    with pytest.raises(errors.FileNotFoundError):
        disk.write_log(b"x")


def test_dir_operations(disk):
    disk.create_dir("sub")
    assert disk.is_dir("sub")
    disk.create_file("sub/inner")
    disk.destroy_dir("sub")
    assert not disk.is_dir("sub")
    with pytest.raises(errors.UnixError):
        disk.destroy_dir("sub")


def test_close_all_files(disk):
    disk.create_file("a")
    fd = disk.open_file("a")
    disk.close()
    with pytest.raises(errors.FileNotOpenError):
        disk.get_file_name(fd)
    disk.destroy_file("a")
    assert not disk.is_file("a")