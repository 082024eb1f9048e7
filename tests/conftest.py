"""Pytest configuration and fixtures"""

from typing import Dict

import pytest

from mtpfs.core.config import reset_settings
from mtpfs.core.device_fs import DeviceFilesystem
from mtpfs.core.types import ROOT_HANDLE
from mtpfs.infrastructure.transport import DEFAULT_STORAGE_ID, MemoryTransport


# Seed order is device order: children come back in insertion order
FIXTURE_FILES = [
    "/mtp-test-files/mock_dir1/1/a.txt",
    "/mtp-test-files/mock_dir1/a.txt",
    "/mtp-test-files/mock_dir1/3/b.txt",
    "/mtp-test-files/mock_dir1/3/2/b.txt",
    "/mtp-test-files/mock_dir1/2/b.txt",
    "/mtp-test-files/a.txt",
]

FIXTURE_DIRECTORIES = [
    "/mtp-test-files/temp_dir",
]


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate settings from the host environment"""
    for name in ("MTPFS_ENVIRONMENT", "MTPFS_LOG_LEVEL", "MTPFS_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def storage_id() -> int:
    return DEFAULT_STORAGE_ID


@pytest.fixture
def transport() -> MemoryTransport:
    """Create an in-memory device seeded with the fixture tree"""
    device = MemoryTransport()

    for path in FIXTURE_FILES:
        device.add_file(path, size=len(path))
    for path in FIXTURE_DIRECTORIES:
        device.add_directory(path)

    device.add_file("/mtp-test-files/archive.tar.gz", size=4096, inline_size=False)
    return device


@pytest.fixture
def handles(transport: MemoryTransport) -> Dict[str, int]:
    """Map every seeded path to its handle"""
    result: Dict[str, int] = {}
    pending = [(transport.list_children(DEFAULT_STORAGE_ID, ROOT_HANDLE), "")]

    while pending:
        children, parent_path = pending.pop()
        for handle in children:
            metadata = transport.get_metadata(handle)
            path = f"{parent_path}/{metadata.name}"
            result[path] = handle
            if metadata.is_dir:
                pending.append((transport.list_children(DEFAULT_STORAGE_ID, handle), path))

    transport.calls.clear()
    return result


@pytest.fixture
def fs(transport: MemoryTransport, storage_id: int) -> DeviceFilesystem:
    """Create a device filesystem bound to the seeded storage"""
    return DeviceFilesystem(transport, storage_id)
