"""Path-addressable view of one device storage"""
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from mtpfs.core.errors import MtpfsError, NoStorageError
from mtpfs.infrastructure.exceptions import TransportError
from mtpfs.infrastructure.logging import get_logger

from .creator import DirectoryCreator
from .fs_types import FileInfo, StorageInfo
from .lister import DirectoryLister
from .remover import ObjectRemover
from .renamer import ObjectRenamer
from .resolver import ObjectResolver
from .walker import DirectoryWalker, Visitor

if TYPE_CHECKING:  # avoid import cycle
    from mtpfs.infrastructure.transport.base import Transport  # pragma: no cover

logger = get_logger(__name__)


def fetch_storages(transport: "Transport") -> List[StorageInfo]:
    """
    List the storage containers of a device

    Raises:
        NoStorageError: If the device reports no storage
        MtpfsError: If the device fails to answer
    """
    try:
        storages = transport.list_storages()
    except TransportError as e:
        raise MtpfsError(f"Failed to fetch storages: {e.message}") from e

    if not storages:
        raise NoStorageError("no storage found")

    return storages


class DeviceFilesystem:
    """Filesystem operations bound to one transport and one storage container.

    Nothing is cached between calls: every path is resolved again from the
    storage root. Calls must not run concurrently against the same
    transport.
    """

    def __init__(self, transport: "Transport", storage_id: int):
        self.transport = transport
        self.storage_id = storage_id

        self.resolver = ObjectResolver(transport)
        self.lister = DirectoryLister(self.resolver)
        self.walker = DirectoryWalker(self.lister)
        self.creator = DirectoryCreator(self.resolver)
        self.remover = ObjectRemover(self.resolver)
        self.renamer = ObjectRenamer(self.resolver)

    @classmethod
    def open_first_storage(cls, transport: "Transport") -> "DeviceFilesystem":
        """Bind to the first storage container the device reports"""
        storage = fetch_storages(transport)[0]
        logger.debug("storage_selected", storage_id=storage.storage_id, description=storage.description)
        return cls(transport, storage.storage_id)

    # Resolution

    def resolve(self, path: str) -> int:
        return self.resolver.resolve(self.storage_id, path)

    def resolve_to_info(self, path: str) -> FileInfo:
        return self.resolver.resolve_to_info(self.storage_id, path)

    def path_of(self, object_id: int) -> str:
        return self.resolver.path_of(object_id)

    def fetch_file(self, object_id: int, parent_path: str) -> FileInfo:
        return self.resolver.fetch_file(object_id, parent_path)

    def file_exists(self, object_id: int = 0, path: str = "") -> Tuple[bool, Optional[FileInfo]]:
        return self.resolver.file_exists(self.storage_id, object_id, path)

    # Listing and walking

    def list_directory(self, object_id: int = 0, parent_path: str = "") -> List[FileInfo]:
        return self.lister.list_directory(self.storage_id, object_id, parent_path)

    def walk(
        self,
        visitor: Visitor,
        object_id: int = 0,
        full_path: str = "",
        recursive: bool = False,
    ) -> Tuple[int, int]:
        return self.walker.walk(self.storage_id, object_id, full_path, recursive, visitor)

    def iter_walk(
        self,
        object_id: int = 0,
        full_path: str = "",
        recursive: bool = False,
    ) -> Tuple[int, Iterator[FileInfo]]:
        return self.walker.iter_walk(self.storage_id, object_id, full_path, recursive)

    # Mutations

    def make_directory(self, name: str, parent_id: int = 0, parent_path: str = "") -> int:
        return self.creator.make_directory(self.storage_id, parent_id, parent_path, name)

    def make_directory_recursive(self, full_path: str) -> int:
        return self.creator.make_directory_recursive(self.storage_id, full_path)

    def delete_file(self, object_id: int = 0, full_path: str = "") -> None:
        self.remover.delete_file(self.storage_id, object_id, full_path)

    def rename_file(self, new_name: str, object_id: int = 0, full_path: str = "") -> int:
        return self.renamer.rename_file(self.storage_id, object_id, full_path, new_name)
