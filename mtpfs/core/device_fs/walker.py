"""Depth-first subtree traversal only"""
from typing import Callable, Iterator, Optional, Set, Tuple

from mtpfs.core.errors import InvalidPathError
from mtpfs.core.types import ROOT_HANDLE, UNSPECIFIED_HANDLE
from mtpfs.infrastructure.logging import get_logger

from .fs_types import FileInfo, WalkControl
from .lister import DirectoryLister
from .path_normalizer import normalize

logger = get_logger(__name__)

Visitor = Callable[[FileInfo], Optional[WalkControl]]


class DirectoryWalker:
    """Handles walking a directory subtree only

    Entries are produced depth-first, pre-order: a directory is reported
    before its own children, and its children before its later siblings.
    Each directory costs one enumeration round-trip. A failure to
    enumerate any directory aborts the walk; metadata failures of single
    entries are skipped as in DirectoryLister.
    """

    def __init__(self, lister: DirectoryLister):
        self.lister = lister
        self.resolver = lister.resolver

    def walk(
        self,
        storage_id: int,
        object_id: int,
        full_path: str,
        recursive: bool,
        visitor: Visitor,
    ) -> Tuple[int, int]:
        """
        Walk a directory and call visitor once per entry

        Args:
            storage_id: Storage container
            object_id: Start directory handle; takes precedence over full_path when non-zero
            full_path: Start directory path, also the base of reported child paths
            recursive: Descend into subdirectories
            visitor: Called with each FileInfo; returning WalkControl.STOP ends the walk

        Returns:
            Tuple of (start handle, number of visitor calls)

        Raises:
            InvalidPathError: If the start directory cannot be resolved
            ListDirectoryError: If enumerating any directory fails
        """
        start_id, entries = self.iter_walk(storage_id, object_id, full_path, recursive)
        total = 0

        for info in entries:
            total += 1
            if visitor(info) is WalkControl.STOP:
                logger.debug("walk_stopped", storage_id=storage_id, object_id=info.object_id)
                break

        logger.debug("walk_finished", storage_id=storage_id, object_id=start_id, total=total)
        return start_id, total

    def iter_walk(
        self,
        storage_id: int,
        object_id: int,
        full_path: str,
        recursive: bool,
    ) -> Tuple[int, Iterator[FileInfo]]:
        """
        Locate the start directory now and return a lazy entry iterator

        Returns:
            Tuple of (start handle, iterator of FileInfo)
        """
        start_id, base_path = self._locate(storage_id, object_id, full_path)
        return start_id, self._abort_on_first_error(storage_id, start_id, base_path, recursive, set())

    def _locate(self, storage_id: int, object_id: int, full_path: str) -> Tuple[int, str]:
        if object_id != UNSPECIFIED_HANDLE:
            return object_id, self.lister.base_path_for(object_id, full_path)

        if not full_path.strip():
            raise InvalidPathError(full_path, "empty path")

        start_id = self.resolver.resolve(storage_id, full_path)
        if start_id != ROOT_HANDLE and not self.resolver.fetch_metadata(start_id).is_dir:
            raise InvalidPathError(full_path, "not a directory")

        return start_id, normalize(full_path)

    def _abort_on_first_error(
        self,
        storage_id: int,
        directory_id: int,
        directory_path: str,
        recursive: bool,
        visited: Set[int],
    ) -> Iterator[FileInfo]:
        visited.add(directory_id)

        for info in self.lister.list_handle(storage_id, directory_id, directory_path):
            yield info

            if recursive and info.is_dir and info.object_id not in visited:
                yield from self._abort_on_first_error(
                    storage_id, info.object_id, info.full_path, recursive, visited
                )
