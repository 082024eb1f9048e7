"""Infrastructure layer exceptions."""
from enum import IntEnum


class ResponseCode(IntEnum):
    """Device response codes surfaced by transports."""
    OK = 0x2001
    GENERAL_ERROR = 0x2002
    SESSION_NOT_OPEN = 0x2003
    OPERATION_NOT_SUPPORTED = 0x2005
    INVALID_STORAGE_ID = 0x2008
    INVALID_OBJECT_HANDLE = 0x2009
    STORE_FULL = 0x200C
    OBJECT_WRITE_PROTECTED = 0x200D
    ACCESS_DENIED = 0x200F
    INVALID_PARENT_OBJECT = 0x201A
    INVALID_PARAMETER = 0x201D


class InfrastructureError(Exception):
    """Base infrastructure error."""
    pass


class TransportError(InfrastructureError):
    """Device command rejected or failed at the transport layer."""

    def __init__(self, code: ResponseCode, message: str = ""):
        self.code = ResponseCode(code)
        self.message = message or self.code.name
        super().__init__(f"{self.code.name} (0x{int(self.code):04x}): {self.message}")

    @property
    def is_invalid_handle(self) -> bool:
        return self.code == ResponseCode.INVALID_OBJECT_HANDLE
