"""Path to handle resolution and back"""
from typing import TYPE_CHECKING, List, Optional, Set, Tuple

from mtpfs.core.errors import InvalidPathError, ObjectMetadataError, ObjectNotFoundError
from mtpfs.core.types import PATH_SEP, ROOT_HANDLE, ROOT_PARENT_ID, UNSPECIFIED_HANDLE
from mtpfs.infrastructure.exceptions import TransportError
from mtpfs.infrastructure.logging import get_logger

from .fs_types import FileInfo, ObjectMetadata
from .name_classifier import extension_of
from .path_normalizer import join, normalize, parent_of, split_segments

if TYPE_CHECKING:  # avoid import cycle
    from mtpfs.infrastructure.transport.base import Transport  # pragma: no cover

logger = get_logger(__name__)


def metadata_error(object_id: int, exc: TransportError) -> ObjectMetadataError:
    return ObjectMetadataError(object_id, exc.message, response_code=exc.code)


class ObjectResolver:
    """Handles path <-> handle translation only"""

    def __init__(self, transport: "Transport"):
        self.transport = transport

    def fetch_metadata(self, object_id: int) -> ObjectMetadata:
        """
        Fetch raw metadata for one handle

        Raises:
            ObjectMetadataError: If the device rejects the handle
        """
        try:
            return self.transport.get_metadata(object_id)
        except TransportError as e:
            raise metadata_error(object_id, e) from e

    def fetch_size(self, object_id: int, metadata: ObjectMetadata) -> int:
        """
        Return the object size, querying the device when it is not inline

        Raises:
            ObjectMetadataError: If the size query fails
        """
        if metadata.is_dir:
            return 0

        if not metadata.needs_size_query:
            return metadata.compressed_size

        try:
            return self.transport.get_size(object_id)
        except TransportError as e:
            raise metadata_error(object_id, e) from e

    def fetch_file(self, object_id: int, parent_path: str) -> FileInfo:
        """
        Build a FileInfo for a known handle

        Args:
            object_id: Device handle
            parent_path: Path of the directory holding the object

        Returns:
            FileInfo with the full path derived from parent_path

        Raises:
            ObjectMetadataError: If metadata cannot be fetched; a failed size
                query reports size 0 instead
        """
        metadata = self.fetch_metadata(object_id)
        try:
            size = self.fetch_size(object_id, metadata)
        except ObjectMetadataError as e:
            logger.warning("size_query_failed", object_id=object_id, reason=e.reason)
            size = 0
        normalized_parent = normalize(parent_path)

        return FileInfo(
            object_id=object_id,
            parent_id=metadata.parent_id,
            full_path=join(normalized_parent, metadata.name),
            parent_path=normalized_parent,
            name=metadata.name,
            extension=extension_of(metadata.name, metadata.is_dir),
            size=size,
            is_dir=metadata.is_dir,
            mod_time=metadata.mod_time,
            metadata=metadata,
        )

    def find_child(self, storage_id: int, parent_id: int, name: str) -> Tuple[int, bool]:
        """
        Look up one direct child by exact name

        Args:
            storage_id: Storage container
            parent_id: Handle of the directory to search
            name: Child name (case-sensitive)

        Returns:
            Tuple of (handle, is_dir) of the first match in device order

        Raises:
            ObjectNotFoundError: If no child has that name
            ObjectMetadataError: If enumeration or a metadata fetch fails
        """
        try:
            children = self.transport.list_children(storage_id, parent_id)
        except TransportError as e:
            raise metadata_error(parent_id, e) from e

        for object_id in children:
            metadata = self.fetch_metadata(object_id)
            if metadata.name == name:
                return object_id, metadata.is_dir

        raise ObjectNotFoundError(parent_id, name)

    def resolve(self, storage_id: int, path: str) -> int:
        """
        Resolve a path to a handle by walking it from the storage root

        Args:
            storage_id: Storage container
            path: Slash-delimited path

        Returns:
            Handle of the object at path (ROOT_HANDLE for '/')

        Raises:
            InvalidPathError: If a segment is missing or a file is used as a directory
            ObjectMetadataError: If the device fails while walking
        """
        normalized = normalize(path)
        if normalized == PATH_SEP:
            return ROOT_HANDLE

        segments = split_segments(normalized)
        current = ROOT_HANDLE

        for index, segment in enumerate(segments):
            try:
                object_id, is_dir = self.find_child(storage_id, current, segment)
            except ObjectNotFoundError as e:
                logger.debug("path_not_found", storage_id=storage_id, path=path, segment=segment)
                raise InvalidPathError(path, f"'{segment}' not found") from e

            if not is_dir and index < len(segments) - 1:
                raise InvalidPathError(path, f"'{segment}' is a file")

            current = object_id

        return current

    def resolve_to_info(self, storage_id: int, path: str) -> FileInfo:
        """Resolve a path and fetch the FileInfo of its terminal object"""
        normalized = normalize(path)
        if normalized == PATH_SEP:
            return root_info()

        object_id = self.resolve(storage_id, normalized)
        return self.fetch_file(object_id, parent_of(normalized))

    def path_of(self, object_id: int) -> str:
        """
        Rebuild the absolute path of a handle by climbing its parents

        Raises:
            InvalidPathError: If the parent chain loops back on itself
            ObjectMetadataError: If any handle on the chain is rejected
        """
        names: List[str] = []
        seen: Set[int] = set()
        current = object_id

        while current not in (ROOT_HANDLE, ROOT_PARENT_ID):
            if current in seen:
                raise InvalidPathError(f"<handle {object_id}>", "parent chain contains a cycle")
            seen.add(current)

            metadata = self.fetch_metadata(current)
            names.append(metadata.name)
            current = metadata.parent_id

        return normalize(PATH_SEP.join(reversed(names)))

    def file_exists(
        self,
        storage_id: int,
        object_id: int,
        path: str,
    ) -> Tuple[bool, Optional[FileInfo]]:
        """
        Check whether an object exists; the handle wins over the path when non-zero

        Returns:
            Tuple of (exists, FileInfo or None)
        """
        try:
            if object_id != UNSPECIFIED_HANDLE:
                if object_id == ROOT_HANDLE:
                    return True, root_info()
                return True, self.fetch_file(object_id, parent_of(self.path_of(object_id)))

            return True, self.resolve_to_info(storage_id, path)
        except InvalidPathError:
            return False, None
        except ObjectMetadataError as e:
            if e.is_invalid_handle:
                return False, None
            raise


def root_info() -> FileInfo:
    """Synthetic FileInfo for the storage root, which has no device metadata"""
    return FileInfo(
        object_id=ROOT_HANDLE,
        parent_id=ROOT_PARENT_ID,
        full_path=PATH_SEP,
        parent_path=PATH_SEP,
        name="",
        extension="",
        size=0,
        is_dir=True,
        mod_time=None,
    )
