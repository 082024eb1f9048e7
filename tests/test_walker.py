"""Tests for directory walking"""

from typing import List

import pytest

from mtpfs.core.device_fs import FileInfo, WalkControl
from mtpfs.core.errors import InvalidPathError, ListDirectoryError
from mtpfs.core.types import ROOT_HANDLE, ROOT_PARENT_ID


MOCK_DIR1_PREORDER = [
    "/mtp-test-files/mock_dir1/1",
    "/mtp-test-files/mock_dir1/1/a.txt",
    "/mtp-test-files/mock_dir1/a.txt",
    "/mtp-test-files/mock_dir1/3",
    "/mtp-test-files/mock_dir1/3/b.txt",
    "/mtp-test-files/mock_dir1/3/2",
    "/mtp-test-files/mock_dir1/3/2/b.txt",
    "/mtp-test-files/mock_dir1/2",
    "/mtp-test-files/mock_dir1/2/b.txt",
]


class Collector:
    """Visitor recording every entry"""

    def __init__(self):
        self.entries: List[FileInfo] = []

    def __call__(self, info: FileInfo):
        self.entries.append(info)

    @property
    def paths(self) -> List[str]:
        return [e.full_path for e in self.entries]


class TestWalk:
    """Test walking by path and by handle"""

    def test_non_recursive(self, fs, handles):
        visitor = Collector()

        object_id, total = fs.walk(visitor, full_path="/mtp-test-files/mock_dir1")

        assert object_id == handles["/mtp-test-files/mock_dir1"]
        assert visitor.paths == [
            "/mtp-test-files/mock_dir1/1",
            "/mtp-test-files/mock_dir1/a.txt",
            "/mtp-test-files/mock_dir1/3",
            "/mtp-test-files/mock_dir1/2",
        ]
        assert total == len(visitor.entries)

    def test_recursive_preorder(self, fs):
        """Test directories are reported before their children"""
        visitor = Collector()

        _, total = fs.walk(visitor, full_path="/mtp-test-files/mock_dir1", recursive=True)

        assert visitor.paths == MOCK_DIR1_PREORDER
        assert total == len(MOCK_DIR1_PREORDER)

    @pytest.mark.parametrize("recursive", [False, True])
    def test_count_matches_visitor_calls(self, fs, recursive):
        visitor = Collector()

        _, total = fs.walk(visitor, object_id=ROOT_HANDLE, recursive=recursive)

        assert total == len(visitor.entries)

    def test_start_directory_is_not_visited(self, fs):
        visitor = Collector()

        fs.walk(visitor, full_path="/mtp-test-files", recursive=True)

        assert "/mtp-test-files" not in visitor.paths
        assert all(p.startswith("/mtp-test-files/") for p in visitor.paths)

    def test_handle_takes_precedence_over_path(self, fs, handles):
        """Test the handle locates the start, the path names the children"""
        visitor = Collector()

        object_id, total = fs.walk(
            visitor,
            object_id=handles["/mtp-test-files/mock_dir1/2"],
            full_path="/fake",
        )

        assert object_id == handles["/mtp-test-files/mock_dir1/2"]
        assert total == 1
        assert visitor.paths == ["/fake/b.txt"]

    def test_root_handle(self, fs):
        visitor = Collector()

        object_id, total = fs.walk(visitor, object_id=ROOT_HANDLE, full_path="")

        assert object_id == ROOT_HANDLE
        assert total == 1
        assert visitor.entries[0].parent_id == ROOT_PARENT_ID
        assert visitor.paths == ["/mtp-test-files"]

    def test_handle_without_path(self, fs, handles):
        visitor = Collector()

        fs.walk(visitor, object_id=handles["/mtp-test-files/mock_dir1/3"], recursive=True)

        assert visitor.paths == [
            "/mtp-test-files/mock_dir1/3/b.txt",
            "/mtp-test-files/mock_dir1/3/2",
            "/mtp-test-files/mock_dir1/3/2/b.txt",
        ]

    def test_visitor_can_stop(self, fs):
        calls = []

        def visitor(info):
            calls.append(info.full_path)
            if info.full_path == "/mtp-test-files/mock_dir1/3":
                return WalkControl.STOP
            return WalkControl.CONTINUE

        _, total = fs.walk(visitor, full_path="/mtp-test-files/mock_dir1", recursive=True)

        assert calls == MOCK_DIR1_PREORDER[:4]
        assert total == 4


class TestWalkErrors:
    """Test walk failure modes"""

    @pytest.mark.parametrize("path", [
        "/fake",
        "/mtp-test-files/fake",
        "/mtp-test-files/a.txt",
        "",
    ])
    @pytest.mark.parametrize("recursive", [False, True])
    def test_invalid_start(self, fs, path, recursive):
        """Test unresolvable starts raise before any visit"""
        visitor = Collector()

        with pytest.raises(InvalidPathError):
            fs.walk(visitor, full_path=path, recursive=recursive)

        assert visitor.entries == []

    def test_subdirectory_failure_aborts_walk(self, fs, transport, handles):
        transport.inject_failure("list_children", handles["/mtp-test-files/mock_dir1/3"])
        visitor = Collector()

        with pytest.raises(ListDirectoryError):
            fs.walk(visitor, full_path="/mtp-test-files/mock_dir1", recursive=True)

        assert visitor.paths == MOCK_DIR1_PREORDER[:4]

    def test_subdirectory_failure_ignored_when_not_recursive(self, fs, transport, handles):
        transport.inject_failure("list_children", handles["/mtp-test-files/mock_dir1/3"])
        visitor = Collector()

        _, total = fs.walk(visitor, full_path="/mtp-test-files/mock_dir1")

        assert total == 4

    def test_entry_metadata_failure_is_skipped(self, fs, transport, handles):
        transport.inject_failure("get_metadata", handles["/mtp-test-files/mock_dir1/3/b.txt"])
        visitor = Collector()

        _, total = fs.walk(visitor, full_path="/mtp-test-files/mock_dir1", recursive=True)

        assert "/mtp-test-files/mock_dir1/3/b.txt" not in visitor.paths
        assert total == len(MOCK_DIR1_PREORDER) - 1

    def test_parent_cycle_terminates(self, fs, transport, handles):
        """Test a directory reachable from itself is entered once"""
        outer = handles["/mtp-test-files/mock_dir1/3"]
        inner = handles["/mtp-test-files/mock_dir1/3/2"]
        transport.reparent(outer, inner)
        visitor = Collector()

        _, total = fs.walk(visitor, object_id=outer, full_path="/loop", recursive=True)

        assert total == 4
        assert visitor.paths == [
            "/loop/b.txt",
            "/loop/2",
            "/loop/2/3",
            "/loop/2/b.txt",
        ]


class TestIterWalk:
    """Test the lazy walk form"""

    def test_same_order_as_walk(self, fs):
        _, entries = fs.iter_walk(full_path="/mtp-test-files/mock_dir1", recursive=True)

        assert [e.full_path for e in entries] == MOCK_DIR1_PREORDER

    def test_invalid_start_raises_immediately(self, fs):
        with pytest.raises(InvalidPathError):
            fs.iter_walk(full_path="/fake")

    def test_lazy(self, fs, transport):
        """Test subdirectories are only enumerated as iteration reaches them"""
        _, entries = fs.iter_walk(full_path="/mtp-test-files/mock_dir1", recursive=True)
        before = transport.count("list_children")

        next(entries)

        assert transport.count("list_children") == before + 1
