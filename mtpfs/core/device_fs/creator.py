"""Directory creation only"""
from mtpfs.core.errors import InvalidPathError, MutationError, ObjectNotFoundError
from mtpfs.core.types import PATH_SEP, ROOT_HANDLE, UNSPECIFIED_HANDLE
from mtpfs.infrastructure.exceptions import TransportError
from mtpfs.infrastructure.logging import get_logger

from .path_normalizer import join, split_segments
from .resolver import ObjectResolver

logger = get_logger(__name__)


class DirectoryCreator:
    """Handles create-or-get of directories only"""

    def __init__(self, resolver: ObjectResolver):
        self.resolver = resolver
        self.transport = resolver.transport

    def make_directory(self, storage_id: int, parent_id: int, parent_path: str, name: str) -> int:
        """
        Create a directory, or return the existing one with the same name

        Args:
            storage_id: Storage container
            parent_id: Parent handle; takes precedence over parent_path when non-zero
            parent_path: Parent path, used when parent_id is 0
            name: Directory name (a single path segment)

        Returns:
            Handle of the new or already existing directory

        Raises:
            InvalidPathError: If name is empty, the parent does not resolve,
                the parent is a file, or a file called name already exists
            ObjectMetadataError: If an explicit parent_id is rejected by the device
            MutationError: If the device refuses to create the directory
        """
        target = self._describe(parent_id, parent_path, name)

        if not name:
            raise InvalidPathError(target, "empty directory name")
        if PATH_SEP in name:
            raise InvalidPathError(target, "directory name contains a separator")

        if parent_id == UNSPECIFIED_HANDLE:
            parent_id = self.resolver.resolve(storage_id, parent_path)

        if parent_id != ROOT_HANDLE and not self.resolver.fetch_metadata(parent_id).is_dir:
            raise InvalidPathError(target, "parent is a file")

        try:
            existing_id, is_dir = self.resolver.find_child(storage_id, parent_id, name)
        except ObjectNotFoundError:
            pass
        else:
            if not is_dir:
                raise InvalidPathError(target, "a file with this name already exists")
            logger.debug("directory_exists", storage_id=storage_id, object_id=existing_id, path=target)
            return existing_id

        try:
            object_id = self.transport.create_directory(storage_id, parent_id, name)
        except TransportError as e:
            raise MutationError("create_directory", parent_id, e.message) from e

        logger.info("directory_created", storage_id=storage_id, object_id=object_id, path=target)
        return object_id

    def make_directory_recursive(self, storage_id: int, full_path: str) -> int:
        """
        Create every missing directory along full_path

        Args:
            storage_id: Storage container
            full_path: Directory path; '' and '/' are a no-op

        Returns:
            Handle of the last directory (ROOT_HANDLE for the root)

        Raises:
            InvalidPathError: If any segment exists as a file
            MutationError: If the device refuses to create a directory
        """
        parent_id = ROOT_HANDLE
        parent_path = PATH_SEP

        for segment in split_segments(full_path):
            parent_id = self.make_directory(storage_id, parent_id, parent_path, segment)
            parent_path = join(parent_path, segment)

        return parent_id

    @staticmethod
    def _describe(parent_id: int, parent_path: str, name: str) -> str:
        if parent_id in (UNSPECIFIED_HANDLE, ROOT_HANDLE) or parent_path:
            return join(parent_path, name)
        return f"<handle {parent_id}>/{name}"
