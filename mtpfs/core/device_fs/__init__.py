"""Device filesystem core module"""
from .fs_types import ObjectMetadata, FileInfo, StorageInfo, WalkControl
from .path_normalizer import normalize, join, split_segments, parent_of, common_parent_path
from .name_classifier import (
    COMPOUND_EXTENSION_HEADS,
    extension_of,
    is_hidden_name,
    sanitize_dos_name
)
from .resolver import ObjectResolver
from .lister import DirectoryLister
from .walker import DirectoryWalker
from .creator import DirectoryCreator
from .remover import ObjectRemover
from .renamer import ObjectRenamer
from .facade import DeviceFilesystem, fetch_storages

__all__ = [
    'ObjectMetadata',
    'FileInfo',
    'StorageInfo',
    'WalkControl',
    'normalize',
    'join',
    'split_segments',
    'parent_of',
    'common_parent_path',
    'COMPOUND_EXTENSION_HEADS',
    'extension_of',
    'is_hidden_name',
    'sanitize_dos_name',
    'ObjectResolver',
    'DirectoryLister',
    'DirectoryWalker',
    'DirectoryCreator',
    'ObjectRemover',
    'ObjectRenamer',
    'DeviceFilesystem',
    'fetch_storages'
]
