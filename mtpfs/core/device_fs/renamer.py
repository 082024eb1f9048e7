"""Object renaming only"""
from mtpfs.core.errors import InvalidPathError, MutationError
from mtpfs.core.types import PATH_SEP, ROOT_HANDLE, UNSPECIFIED_HANDLE
from mtpfs.infrastructure.exceptions import TransportError
from mtpfs.infrastructure.logging import get_logger

from .resolver import ObjectResolver

logger = get_logger(__name__)


class ObjectRenamer:
    """Handles renaming objects in place only"""

    def __init__(self, resolver: ObjectResolver):
        self.resolver = resolver
        self.transport = resolver.transport

    def rename_file(self, storage_id: int, object_id: int, full_path: str, new_name: str) -> int:
        """
        Rename a file or directory

        Args:
            storage_id: Storage container
            object_id: Object handle, or 0 to resolve it from full_path
            full_path: Object path, used when object_id is 0
            new_name: New base name (not a path)

        Returns:
            Handle of the renamed object (unchanged by the rename)

        Raises:
            InvalidPathError: If the target does not exist or new_name is not a base name
            MutationError: If the device refuses the rename
        """
        target = full_path or f"<handle {object_id}>"

        if not new_name or PATH_SEP in new_name:
            raise InvalidPathError(target, f"invalid new name '{new_name}'")

        if object_id == UNSPECIFIED_HANDLE:
            object_id = self.resolver.resolve(storage_id, full_path)

        if object_id == ROOT_HANDLE:
            raise InvalidPathError(target, "the storage root cannot be renamed")

        try:
            self.transport.rename_object(object_id, new_name)
        except TransportError as e:
            if e.is_invalid_handle:
                raise InvalidPathError(target, "object not found") from e
            raise MutationError("rename_object", object_id, e.message) from e

        logger.info("object_renamed", storage_id=storage_id, object_id=object_id, new_name=new_name)
        return object_id
