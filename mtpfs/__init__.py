"""mtpfs - path-addressable filesystem view over handle-based devices"""

from mtpfs.core.device_fs import DeviceFilesystem, FileInfo, WalkControl, fetch_storages
from mtpfs.core.errors import (
    MtpfsError,
    InvalidPathError,
    ObjectMetadataError,
    ListDirectoryError,
    MutationError,
    NoStorageError
)
from mtpfs.core.types import ROOT_HANDLE, UNSPECIFIED_HANDLE

__version__ = "0.1.0"

__all__ = [
    "DeviceFilesystem",
    "FileInfo",
    "WalkControl",
    "fetch_storages",
    "MtpfsError",
    "InvalidPathError",
    "ObjectMetadataError",
    "ListDirectoryError",
    "MutationError",
    "NoStorageError",
    "ROOT_HANDLE",
    "UNSPECIFIED_HANDLE",
]
