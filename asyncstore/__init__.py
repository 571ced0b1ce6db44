"""Asynchronous key-value storage with change notification."""

__version__ = "0.1.0"

from asyncstore.config import ConfigError, StorageConfig, load_config, setup_logging
from asyncstore.storage import (
    ChangeEvent,
    ChangeRecord,
    MemoryBackend,
    Storage,
    StorageError,
    create_storage,
)

__all__ = [
    "ChangeEvent",
    "ChangeRecord",
    "ConfigError",
    "MemoryBackend",
    "Storage",
    "StorageConfig",
    "StorageError",
    "__version__",
    "create_storage",
    "load_config",
    "setup_logging",
]
