"""Lexical path normalization only"""
import posixpath
from typing import List

from ..types import PATH_SEP


def normalize(path: str) -> str:
    """
    Canonicalize a slash-delimited device path

    Args:
        path: Path with or without leading/trailing separators

    Returns:
        Path with a single leading separator, no trailing separator
        (except root), and no '.', '..' or empty segments
    """
    return posixpath.normpath(PATH_SEP + path.lstrip(PATH_SEP))


def join(parent: str, name: str) -> str:
    """Join a parent path and a name, then normalize"""
    return normalize(f"{parent}{PATH_SEP}{name}")


def split_segments(path: str) -> List[str]:
    """Return the non-empty segments of the normalized path"""
    return [segment for segment in normalize(path).split(PATH_SEP) if segment]


def parent_of(path: str) -> str:
    """Return the normalized parent directory of a path"""
    return posixpath.dirname(normalize(path))


def is_root(path: str) -> bool:
    return normalize(path) == PATH_SEP


def common_parent_path(*paths: str) -> str:
    """
    Longest common directory of a set of paths

    Args:
        paths: Paths to compare

    Returns:
        Normalized common directory, or an empty string when no paths are given
    """
    if not paths:
        return ""

    return posixpath.commonpath([normalize(p) for p in paths])
