"""Key-value storage layer.

Provides one asynchronous interface over interchangeable backends:

- **Storage**: abstract contract with callback and awaitable operations
- **MemoryBackend**: in-process storage of JSON-serialized values
- **Change events**: per-key old/new records delivered to observers
- **Factory**: backend registry driven by configuration

Mutations apply synchronously; completion callbacks and change events are
delivered on a later turn of the asyncio event loop.
"""

from asyncstore.storage.backends.base import Storage
from asyncstore.storage.backends.memory import MemoryBackend
from asyncstore.storage.events import ChangeEvent, ChangeRecord, ObserverSet
from asyncstore.storage.exceptions import (
    SchedulingError,
    SerializationError,
    StorageError,
    UnknownBackendError,
)
from asyncstore.storage.factory import (
    available_backends,
    create_storage,
    register_backend,
)

__all__ = [
    "ChangeEvent",
    "ChangeRecord",
    "MemoryBackend",
    "ObserverSet",
    "SchedulingError",
    "SerializationError",
    "Storage",
    "StorageError",
    "UnknownBackendError",
    "available_backends",
    "create_storage",
    "register_backend",
]
