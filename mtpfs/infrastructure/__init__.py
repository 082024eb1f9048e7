"""Infrastructure layer for mtpfs."""
from .exceptions import (
    InfrastructureError,
    TransportError,
    ResponseCode
)

__all__ = [
    'InfrastructureError',
    'TransportError',
    'ResponseCode'
]
