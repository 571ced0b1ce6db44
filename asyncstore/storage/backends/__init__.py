"""Pluggable storage backends.

- **Storage**: the contract every backend implements
- **MemoryBackend**: in-memory storage with no persistence
"""

from .base import Storage
from .memory import MemoryBackend

__all__ = [
    "MemoryBackend",
    "Storage",
]
