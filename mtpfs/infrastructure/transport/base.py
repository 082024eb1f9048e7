"""Transport contract consumed by the device filesystem core."""
from abc import ABC, abstractmethod
from typing import List

from mtpfs.core.device_fs.fs_types import ObjectMetadata, StorageInfo


class Transport(ABC):
    """Handle-level primitives of one device session.

    Every method blocks until the device answers. Failures are raised as
    ``TransportError`` carrying the device response code. Implementations
    are not expected to be thread-safe.
    """

    @abstractmethod
    def list_storages(self) -> List[StorageInfo]:
        """Return the storage containers exposed by the device."""

    @abstractmethod
    def list_children(self, storage_id: int, parent_id: int) -> List[int]:
        """Return direct child handles of ``parent_id``, files and directories, in device order."""

    @abstractmethod
    def get_metadata(self, object_id: int) -> ObjectMetadata:
        """Return the raw metadata of one handle."""

    @abstractmethod
    def get_size(self, object_id: int) -> int:
        """Secondary size query for objects whose inline size is the sentinel."""

    @abstractmethod
    def create_directory(self, storage_id: int, parent_id: int, name: str) -> int:
        """Create a directory and return its new handle."""

    @abstractmethod
    def delete_object(self, object_id: int) -> None:
        """Delete one object (directories with their contents)."""

    @abstractmethod
    def rename_object(self, object_id: int, new_name: str) -> None:
        """Change the name of one object in place."""
