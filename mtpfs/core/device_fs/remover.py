"""Object removal only"""
from mtpfs.core.errors import InvalidPathError, MutationError
from mtpfs.core.types import ROOT_HANDLE, UNSPECIFIED_HANDLE
from mtpfs.infrastructure.exceptions import TransportError
from mtpfs.infrastructure.logging import get_logger

from .resolver import ObjectResolver

logger = get_logger(__name__)


class ObjectRemover:
    """Handles object deletion only"""

    def __init__(self, resolver: ObjectResolver):
        self.resolver = resolver
        self.transport = resolver.transport

    def delete_file(self, storage_id: int, object_id: int, full_path: str) -> None:
        """
        Delete a file or directory; an absent target counts as deleted

        Args:
            storage_id: Storage container
            object_id: Object handle, or 0 to resolve it from full_path
            full_path: Object path, used when object_id is 0

        Raises:
            InvalidPathError: If the target is the storage root
            MutationError: If the device refuses the delete
        """
        if object_id == UNSPECIFIED_HANDLE:
            try:
                object_id = self.resolver.resolve(storage_id, full_path)
            except InvalidPathError:
                logger.debug("delete_target_absent", storage_id=storage_id, path=full_path)
                return

        if object_id == ROOT_HANDLE:
            raise InvalidPathError(full_path or "/", "the storage root cannot be deleted")

        try:
            self.transport.delete_object(object_id)
        except TransportError as e:
            if e.is_invalid_handle:
                logger.debug("delete_target_absent", storage_id=storage_id, object_id=object_id)
                return
            raise MutationError("delete_object", object_id, e.message) from e

        logger.info("object_deleted", storage_id=storage_id, object_id=object_id, path=full_path)
