"""Exception classes for the storage layer."""


class StorageError(Exception):
    """Base exception for storage errors."""

    pass


class SerializationError(StorageError, TypeError):
    """Raised when a value cannot be serialized to JSON."""

    def __init__(self, key: str, reason: str):
        """Initialize with the offending key and the encoder's reason."""
        self.key = key
        self.reason = reason
        super().__init__(f"Cannot serialize value for {key!r}: {reason}")


class SchedulingError(StorageError, RuntimeError):
    """Raised when no event loop is available for deferred delivery."""

    pass


class UnknownBackendError(StorageError, LookupError):
    """Raised when a backend name is not registered."""

    def __init__(self, name: str, available: list[str]):
        """Initialize with the requested name and the registered names."""
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown storage backend: {name!r} (available: {', '.join(available)})"
        )
