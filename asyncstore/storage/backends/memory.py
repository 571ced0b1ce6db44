"""In-memory storage backend."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import msgspec

from ..events import ChangeEvent, ChangeRecord, Observer, ObserverSet
from ..serialization import decode_lenient, encode
from .base import Callback, ItemsCallback, Storage, ValueCallback

logger = logging.getLogger(__name__)


class MemoryBackend(Storage):
    """Storage backend that keeps serialized values in process memory.

    Values are stored as JSON text and decoded on every read, so the backend
    behaves like the persistent ones for callers that rely on implicit
    serialization. Nothing survives the instance.
    """

    def __init__(
        self,
        data: Mapping[str, str] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        """Initialize the backend.

        Args:
            data: Initial contents as already-serialized strings. Copied.
            loop: Event loop for deferred delivery; defaults to the running loop.
        """
        super().__init__(loop)
        self._observers = ObserverSet()
        self._data: dict[str, str] = dict(data) if data else {}

    def add_observer(self, callback: Observer) -> None:
        """Register a function to observe storage changes."""
        self._observers.add(callback)

    def remove_observer(self, callback: Observer) -> None:
        """Unregister a change observer."""
        self._observers.remove(callback)

    def clear(self, callback: Callback | None = None) -> None:
        """Delete everything, reporting every removed key to observers."""
        loop = self._event_loop()
        event = {
            key: ChangeRecord(old_value=decode_lenient(raw))
            for key, raw in self._data.items()
        }
        self._data = {}
        logger.debug("Cleared %d keys", len(event))

        self._dispatch(loop, event)
        if callback is not None:
            loop.call_soon(callback)

    def get_item(self, key: str, callback: ValueCallback) -> None:
        """Deliver the value of ``key``, the raw text if it does not parse."""
        loop = self._event_loop()
        loop.call_soon(callback, decode_lenient(self._data.get(key)))

    def get_items(self, keys: list[str] | None, callback: ItemsCallback) -> None:
        """Deliver the values of the present keys among ``keys``.

        Absent keys are left out of the result. When ``keys`` is a list they
        are also removed from it in place, so after the call it names exactly
        the keys that were found.
        """
        loop = self._event_loop()
        if keys is None:
            keys = list(self._data)

        present = [key for key in keys if key in self._data]
        if isinstance(keys, list):
            keys[:] = present

        items = {key: decode_lenient(self._data[key]) for key in present}
        loop.call_soon(callback, items)

    def set_item(self, key: str, value: Any, callback: Callback | None = None) -> None:
        """Set a value in storage.

        The local map is updated synchronously, so there is no need to wait
        for ``callback`` before reading the value back.

        Raises:
            SerializationError: If ``value`` is not JSON-serializable. Nothing
                is stored in that case.
        """
        loop = self._event_loop()
        serialized = encode(key, value)

        event = {key: self._store(key, serialized)}
        logger.debug("Set key %r", key)

        self._dispatch(loop, event)
        if callback is not None:
            loop.call_soon(callback)

    def set_items(
        self, items: Mapping[str, Any], callback: Callback | None = None
    ) -> None:
        """Set multiple values, emitting one change event for the whole batch.

        Raises:
            SerializationError: If any value is not JSON-serializable. The
                batch is encoded up front, so nothing is stored in that case.
        """
        loop = self._event_loop()
        serialized = {key: encode(key, value) for key, value in items.items()}

        event = {key: self._store(key, text) for key, text in serialized.items()}
        logger.debug("Set %d keys", len(event))

        self._dispatch(loop, event)
        if callback is not None:
            loop.call_soon(callback)

    def remove_item(self, key: str, callback: Callback | None = None) -> None:
        """Remove an item from storage.

        Observers are not notified of removals.
        """
        loop = self._event_loop()
        self._data.pop(key, None)

        if callback is not None:
            loop.call_soon(callback)

    def remove_items(self, keys: list[str], callback: Callback | None = None) -> None:
        """Remove multiple items from storage without notifying observers."""
        loop = self._event_loop()
        for key in keys:
            self._data.pop(key, None)

        if callback is not None:
            loop.call_soon(callback)

    def keys(self) -> list[str]:
        """Get all keys."""
        return list(self._data)

    def get_size(self) -> int:
        """Get the number of stored items."""
        return len(self._data)

    def _store(self, key: str, serialized: str) -> ChangeRecord:
        """Replace the stored text for ``key`` and describe the change."""
        if key in self._data:
            old_value = decode_lenient(self._data[key])
        else:
            old_value = msgspec.UNSET
        self._data[key] = serialized
        return ChangeRecord(old_value=old_value, new_value=decode_lenient(serialized))

    def _dispatch(self, loop: asyncio.AbstractEventLoop, event: ChangeEvent) -> None:
        # Observers registered after this point do not receive the event.
        loop.call_soon(self._observers.notify, event, self._observers.snapshot())
