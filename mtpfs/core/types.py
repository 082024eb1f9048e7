"""Common type definitions for mtpfs"""

from typing import NewType

# Type alias
Handle = NewType("Handle", int)

# Handle 0 asks the caller-facing operations to resolve from a path
UNSPECIFIED_HANDLE = Handle(0)

# Top of a storage container; never returned by child enumeration
ROOT_HANDLE = Handle(0xFFFFFFFF)

# Objects directly under the root report this as their parent
ROOT_PARENT_ID = Handle(0)

# Inline size value meaning "ask the device with a separate size query"
SIZE_QUERY_SENTINEL = 0xFFFFFFFF

PATH_SEP = "/"
