"""Device transport implementations."""
from .base import Transport
from .memory import MemoryTransport, DEFAULT_STORAGE_ID

__all__ = [
    'Transport',
    'MemoryTransport',
    'DEFAULT_STORAGE_ID'
]
