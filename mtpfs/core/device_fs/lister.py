"""One-level directory listing only"""
from typing import List

from mtpfs.core.errors import ListDirectoryError, ObjectMetadataError
from mtpfs.core.types import PATH_SEP, ROOT_HANDLE, UNSPECIFIED_HANDLE
from mtpfs.infrastructure.exceptions import TransportError
from mtpfs.infrastructure.logging import get_logger

from .fs_types import FileInfo
from .path_normalizer import normalize
from .resolver import ObjectResolver

logger = get_logger(__name__)


class DirectoryLister:
    """Handles listing the direct children of one directory only"""

    def __init__(self, resolver: ObjectResolver):
        self.resolver = resolver
        self.transport = resolver.transport

    def list_directory(self, storage_id: int, object_id: int, parent_path: str) -> List[FileInfo]:
        """
        List the direct children of a directory

        Args:
            storage_id: Storage container
            object_id: Directory handle, or 0 to resolve it from parent_path
            parent_path: Path of the directory, used as the base of child paths

        Returns:
            FileInfo per child in device order; children whose metadata
            cannot be fetched are left out

        Raises:
            InvalidPathError: If object_id is 0 and parent_path does not resolve
            ListDirectoryError: If the device fails to enumerate children
        """
        if object_id == UNSPECIFIED_HANDLE:
            object_id = self.resolver.resolve(storage_id, parent_path)
            base_path = normalize(parent_path)
        else:
            base_path = self.base_path_for(object_id, parent_path)

        return self.list_handle(storage_id, object_id, base_path)

    def list_handle(self, storage_id: int, object_id: int, base_path: str) -> List[FileInfo]:
        """List children of an already-resolved handle under base_path"""
        try:
            children = self.transport.list_children(storage_id, object_id)
        except TransportError as e:
            raise ListDirectoryError(object_id, e.message) from e

        return self._collect_best_effort(children, base_path)

    def base_path_for(self, object_id: int, parent_path: str) -> str:
        """Path reported for a handle: the caller's path if given, else rebuilt from the device"""
        if parent_path:
            return normalize(parent_path)
        if object_id == ROOT_HANDLE:
            return PATH_SEP
        return self.resolver.path_of(object_id)

    def _collect_best_effort(self, children: List[int], base_path: str) -> List[FileInfo]:
        entries: List[FileInfo] = []

        for child_id in children:
            try:
                entries.append(self.resolver.fetch_file(child_id, base_path))
            except ObjectMetadataError as e:
                logger.warning(
                    "list_entry_skipped",
                    object_id=child_id,
                    parent_path=base_path,
                    reason=e.reason,
                )

        return entries
