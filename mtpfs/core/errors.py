"""Base exception classes for mtpfs"""

from typing import Optional, Dict, Any

from mtpfs.infrastructure.exceptions import ResponseCode


class MtpfsError(Exception):
    """Base exception for all mtpfs errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidPathError(MtpfsError):
    """Raised when a path cannot be resolved or a file sits where a directory is required"""

    def __init__(self, path: str, reason: str = "path not found"):
        self.path = path
        self.reason = reason
        super().__init__(
            f"Invalid path '{path}': {reason}",
            {
                "path": path,
                "reason": reason
            }
        )


class ObjectMetadataError(MtpfsError):
    """Raised when metadata, size or children of a handle cannot be fetched"""

    def __init__(self, object_id: int, reason: str, response_code: Optional[int] = None):
        self.object_id = object_id
        self.reason = reason
        self.response_code = response_code
        super().__init__(
            f"Failed to fetch object {object_id}: {reason}",
            {
                "object_id": object_id,
                "reason": reason,
                "response_code": response_code
            }
        )

    @property
    def is_invalid_handle(self) -> bool:
        """Whether the device rejected the handle as unknown"""
        return self.response_code == ResponseCode.INVALID_OBJECT_HANDLE


class ListDirectoryError(MtpfsError):
    """Raised when child enumeration fails at the transport layer"""

    def __init__(self, object_id: int, reason: str):
        self.object_id = object_id
        self.reason = reason
        super().__init__(
            f"Failed to list directory {object_id}: {reason}",
            {
                "object_id": object_id,
                "reason": reason
            }
        )


class MutationError(MtpfsError):
    """Raised when the device rejects a create, delete or rename"""

    def __init__(self, operation: str, object_id: int, reason: str):
        self.operation = operation
        self.object_id = object_id
        self.reason = reason
        super().__init__(
            f"Operation '{operation}' on object {object_id} failed: {reason}",
            {
                "operation": operation,
                "object_id": object_id,
                "reason": reason
            }
        )


class ObjectNotFoundError(MtpfsError):
    """Raised when no child with the given name exists under a parent"""

    def __init__(self, parent_id: int, name: str):
        self.parent_id = parent_id
        self.name = name
        super().__init__(
            f"Object not found: {name}",
            {
                "parent_id": parent_id,
                "name": name
            }
        )


class NoStorageError(MtpfsError):
    """Raised when the device reports no storage"""
    pass
