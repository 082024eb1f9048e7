"""In-memory device transport."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from mtpfs.core.device_fs.fs_types import ObjectMetadata, StorageInfo
from mtpfs.core.types import PATH_SEP, ROOT_HANDLE, ROOT_PARENT_ID, SIZE_QUERY_SENTINEL
from mtpfs.infrastructure.exceptions import ResponseCode, TransportError
from mtpfs.infrastructure.logging import get_logger
from .base import Transport

logger = get_logger(__name__)

DEFAULT_STORAGE_ID = 0x00010001


@dataclass
class _DeviceObject:
    storage_id: int
    name: str
    is_dir: bool
    size: int = 0
    inline_size: bool = True
    mod_time: Optional[datetime] = None


class MemoryTransport(Transport):
    """Device arena kept in two maps: handle -> object, handle -> parent.

    Behaves like a handle-only device: children come back in insertion
    order, duplicate names are allowed, and objects directly under the
    storage root report parent ``0``.
    """

    def __init__(self, storages: Optional[List[StorageInfo]] = None):
        if storages is None:
            storages = [StorageInfo(storage_id=DEFAULT_STORAGE_ID, description="Internal storage")]
        self._storages: Dict[int, StorageInfo] = {s.storage_id: s for s in storages}
        self._objects: Dict[int, _DeviceObject] = {}
        self._parent_map: Dict[int, int] = {}
        self._next_handle = 1
        self._failures: Dict[Tuple[str, int], ResponseCode] = {}
        self.calls: List[Tuple[str, int]] = []

    # Transport contract

    def list_storages(self) -> List[StorageInfo]:
        self._record("list_storages", 0)
        return list(self._storages.values())

    def list_children(self, storage_id: int, parent_id: int) -> List[int]:
        self._record("list_children", parent_id)
        self._check_storage(storage_id)

        if parent_id == ROOT_HANDLE:
            wanted_parent = ROOT_PARENT_ID
        else:
            parent = self._get(parent_id)
            if not parent.is_dir or parent.storage_id != storage_id:
                raise TransportError(ResponseCode.INVALID_PARENT_OBJECT, f"handle {parent_id}")
            wanted_parent = parent_id

        return [
            handle for handle, parent in self._parent_map.items()
            if parent == wanted_parent and self._objects[handle].storage_id == storage_id
        ]

    def get_metadata(self, object_id: int) -> ObjectMetadata:
        self._record("get_metadata", object_id)
        obj = self._get(object_id)
        return ObjectMetadata(
            name=obj.name,
            parent_id=self._parent_map[object_id],
            is_dir=obj.is_dir,
            mod_time=obj.mod_time,
            compressed_size=obj.size if obj.inline_size else SIZE_QUERY_SENTINEL,
        )

    def get_size(self, object_id: int) -> int:
        self._record("get_size", object_id)
        return self._get(object_id).size

    def create_directory(self, storage_id: int, parent_id: int, name: str) -> int:
        self._record("create_directory", parent_id)
        self._check_storage(storage_id)
        if not name:
            raise TransportError(ResponseCode.INVALID_PARAMETER, "empty name")

        if parent_id == ROOT_HANDLE:
            stored_parent = ROOT_PARENT_ID
        else:
            parent = self._get(parent_id)
            if not parent.is_dir:
                raise TransportError(ResponseCode.INVALID_PARENT_OBJECT, f"handle {parent_id}")
            stored_parent = parent_id

        return self._insert(_DeviceObject(
            storage_id=storage_id,
            name=name,
            is_dir=True,
            mod_time=datetime.now(timezone.utc),
        ), stored_parent)

    def delete_object(self, object_id: int) -> None:
        self._record("delete_object", object_id)
        self._get(object_id)

        pending = [object_id]
        while pending:
            handle = pending.pop()
            pending.extend(h for h, p in self._parent_map.items() if p == handle)
            del self._objects[handle]
            del self._parent_map[handle]

    def rename_object(self, object_id: int, new_name: str) -> None:
        self._record("rename_object", object_id)
        obj = self._get(object_id)
        if not new_name:
            raise TransportError(ResponseCode.INVALID_PARAMETER, "empty name")
        obj.name = new_name

    # Seeding helpers

    def add_directory(self, path: str, storage_id: int = DEFAULT_STORAGE_ID) -> int:
        """Create every missing directory along ``path`` and return the last handle."""
        parent_id = ROOT_PARENT_ID
        handle = ROOT_HANDLE
        for segment in self._segments(path):
            handle = self._find(storage_id, parent_id, segment)
            if handle is None:
                handle = self._insert(_DeviceObject(
                    storage_id=storage_id,
                    name=segment,
                    is_dir=True,
                ), parent_id)
            elif not self._objects[handle].is_dir:
                raise ValueError(f"'{segment}' in '{path}' is a file")
            parent_id = handle
        return handle

    def add_file(
        self,
        path: str,
        size: int = 0,
        storage_id: int = DEFAULT_STORAGE_ID,
        inline_size: bool = True,
        mod_time: Optional[datetime] = None,
    ) -> int:
        """Create a file at ``path``, creating parent directories as needed."""
        segments = self._segments(path)
        if not segments:
            raise ValueError("file path must name a file")

        parent_path = PATH_SEP + PATH_SEP.join(segments[:-1])
        parent_handle = self.add_directory(parent_path, storage_id)
        parent_id = ROOT_PARENT_ID if parent_handle == ROOT_HANDLE else parent_handle

        return self._insert(_DeviceObject(
            storage_id=storage_id,
            name=segments[-1],
            is_dir=False,
            size=size,
            inline_size=inline_size,
            mod_time=mod_time,
        ), parent_id)

    def reparent(self, object_id: int, parent_id: int) -> None:
        """Move an object under another handle without any consistency checks."""
        self._get(object_id)
        self._parent_map[object_id] = parent_id

    def inject_failure(
        self,
        operation: str,
        object_id: int,
        code: ResponseCode = ResponseCode.GENERAL_ERROR,
    ) -> None:
        """Make ``operation`` on ``object_id`` fail with ``code`` until cleared."""
        self._failures[(operation, object_id)] = code

    def clear_failures(self) -> None:
        self._failures.clear()

    def exists(self, object_id: int) -> bool:
        return object_id in self._objects

    def count(self, operation: str) -> int:
        return sum(1 for name, _ in self.calls if name == operation)

    @property
    def object_count(self) -> int:
        return len(self._objects)

    # Internal helpers

    def _record(self, operation: str, object_id: int) -> None:
        self.calls.append((operation, object_id))
        logger.debug("transport_command", operation=operation, object_id=object_id)

        code = self._failures.get((operation, object_id))
        if code is not None:
            raise TransportError(code, f"injected failure for {operation}")

    def _check_storage(self, storage_id: int) -> None:
        if storage_id not in self._storages:
            raise TransportError(ResponseCode.INVALID_STORAGE_ID, f"storage {storage_id}")

    def _get(self, object_id: int) -> _DeviceObject:
        obj = self._objects.get(object_id)
        if obj is None:
            raise TransportError(ResponseCode.INVALID_OBJECT_HANDLE, f"handle {object_id}")
        return obj

    def _insert(self, obj: _DeviceObject, parent_id: int) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._objects[handle] = obj
        self._parent_map[handle] = parent_id
        return handle

    def _find(self, storage_id: int, parent_id: int, name: str) -> Optional[int]:
        for handle, parent in self._parent_map.items():
            obj = self._objects[handle]
            if parent == parent_id and obj.storage_id == storage_id and obj.name == name:
                return handle
        return None

    @staticmethod
    def _segments(path: str) -> List[str]:
        return [part for part in path.split(PATH_SEP) if part]
