"""Device filesystem type definitions"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ..types import SIZE_QUERY_SENTINEL


@dataclass(frozen=True)
class ObjectMetadata:
    """Raw object attributes as reported by the device"""
    name: str
    parent_id: int
    is_dir: bool
    mod_time: Optional[datetime] = None
    compressed_size: int = 0

    @property
    def needs_size_query(self) -> bool:
        return not self.is_dir and self.compressed_size == SIZE_QUERY_SENTINEL


@dataclass(frozen=True)
class FileInfo:
    """Path-aware view of one device object"""
    object_id: int
    parent_id: int
    full_path: str
    parent_path: str
    name: str
    extension: str
    size: int
    is_dir: bool
    mod_time: Optional[datetime]
    metadata: Optional[ObjectMetadata] = None


@dataclass(frozen=True)
class StorageInfo:
    """Storage container as reported by the device"""
    storage_id: int
    description: str = ""
    volume_label: str = ""
    max_capacity: int = 0
    free_space: int = 0


class WalkControl(Enum):
    """Visitor return values understood by the walker"""
    CONTINUE = "continue"
    STOP = "stop"
