"""File name classification only"""
import posixpath
from typing import FrozenSet

# Heads of double extensions that form one unit, e.g. "tar.gz"
COMPOUND_EXTENSION_HEADS: FrozenSet[str] = frozenset({
    "tar",
    "7z",
    "rar",
    "zip",
    "gz",
    "bz2",
    "xz",
    "zst",
    "cpio",
    "ps",
    "pdf",
    "svg",
    "min",
    "d",
    "user",
})

# Characters not allowed in FAT/DOS file names
DISALLOWED_DOS_CHARS = ':*?"<>|\\'


def extension_of(name: str, is_dir: bool) -> str:
    """
    Derive the extension of an object name

    Args:
        name: Object name (a full path is reduced to its base name)
        is_dir: Whether the object is a directory

    Returns:
        '' for directories and extensionless names, 'a.b' for
        allow-listed double extensions, otherwise the last segment
    """
    if is_dir:
        return ""

    parts = posixpath.basename(name).split(".")

    if len(parts) > 2 and parts[-2] in COMPOUND_EXTENSION_HEADS:
        return ".".join(parts[-2:])

    if len(parts) > 1:
        return parts[-1]

    return ""


def is_hidden_name(name: str) -> bool:
    return name.startswith(".")


def sanitize_dos_name(name: str) -> str:
    """Replace characters FAT/DOS storage rejects with underscores"""
    if not any(ch in DISALLOWED_DOS_CHARS for ch in name):
        return name

    return "".join("_" if ch in DISALLOWED_DOS_CHARS else ch for ch in name)
