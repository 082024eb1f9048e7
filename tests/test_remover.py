"""Tests for object deletion"""

import pytest

from mtpfs.core.errors import InvalidPathError, MutationError
from mtpfs.core.types import ROOT_HANDLE


class TestDeleteFile:
    """Test idempotent-by-absence deletion"""

    def test_delete_by_handle(self, fs, transport):
        object_id = fs.make_directory_recursive("/mtp-test-files/temp_dir/test-DeleteFile/x1")

        fs.delete_file(object_id=object_id)

        assert not transport.exists(object_id)

    def test_delete_by_path(self, fs, transport):
        path = "/mtp-test-files/temp_dir/test-DeleteFile/x2"
        object_id = fs.make_directory_recursive(path)

        fs.delete_file(full_path=path)

        assert not transport.exists(object_id)
        with pytest.raises(InvalidPathError):
            fs.resolve(path)

    def test_delete_file_object(self, fs, handles):
        fs.delete_file(full_path="/mtp-test-files/a.txt")

        assert fs.file_exists(path="/mtp-test-files/a.txt") == (False, None)

    def test_delete_directory_removes_subtree(self, fs, transport, handles):
        fs.delete_file(full_path="/mtp-test-files/mock_dir1/3")

        assert not transport.exists(handles["/mtp-test-files/mock_dir1/3/2/b.txt"])
        assert transport.exists(handles["/mtp-test-files/mock_dir1/2/b.txt"])

    def test_missing_handle_is_success(self, fs):
        assert fs.delete_file(object_id=1234567) is None

    def test_missing_path_is_success(self, fs, transport):
        fs.delete_file(full_path="/mtp-test-files/temp_dir/test-DeleteFile/absent")

        assert transport.count("delete_object") == 0

    def test_delete_twice(self, fs):
        """Test the second delete of the same target also succeeds"""
        path = "/mtp-test-files/temp_dir/twice"
        object_id = fs.make_directory_recursive(path)

        fs.delete_file(full_path=path)
        fs.delete_file(full_path=path)
        fs.delete_file(object_id=object_id)

    @pytest.mark.parametrize("kwargs", [
        {"object_id": ROOT_HANDLE},
        {"full_path": "/"},
    ])
    def test_root_is_rejected(self, fs, kwargs):
        with pytest.raises(InvalidPathError):
            fs.delete_file(**kwargs)

    def test_device_rejects_delete(self, fs, transport, handles):
        target = handles["/mtp-test-files/a.txt"]
        transport.inject_failure("delete_object", target)

        with pytest.raises(MutationError) as exc_info:
            fs.delete_file(object_id=target)

        assert exc_info.value.object_id == target
