"""Base storage interface shared by all backends."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any

from ..events import Observer
from ..exceptions import SchedulingError

Callback = Callable[[], Any]
ValueCallback = Callable[[Any], Any]
ItemsCallback = Callable[[dict[str, Any]], Any]


def _resolver(future: asyncio.Future) -> Callable[..., None]:
    """Build a completion callback that resolves ``future``."""

    def resolve(*args: Any) -> None:
        if not future.done():
            future.set_result(args[0] if args else None)

    return resolve


class Storage(ABC):
    """Abstract asynchronous key-value storage with change notification.

    Mutations take effect synchronously, so a read issued before the
    completion callback fires already sees the new state. Completion callbacks
    and observer notifications are always deferred to a later turn of the
    event loop, never run inline.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def _event_loop(self) -> asyncio.AbstractEventLoop:
        """Get the loop used for deferred delivery."""
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError as e:
            raise SchedulingError(
                "Storage operations need a running event loop or an explicit loop"
            ) from e

    def _new_future(self) -> asyncio.Future:
        """Create a future for the awaitable wrappers.

        The wrappers must be awaited on the loop that delivers this backend's
        callbacks; awaiting them from any other loop would never complete.
        """
        running = asyncio.get_running_loop()
        if self._loop is not None and self._loop is not running:
            raise SchedulingError(
                "Awaitable storage operations must run on the backend's own loop"
            )
        return running.create_future()

    @abstractmethod
    def add_observer(self, callback: Observer) -> None:
        """Register a function to be called with every future change event."""
        pass

    @abstractmethod
    def remove_observer(self, callback: Observer) -> None:
        """Unregister a previously registered observer."""
        pass

    @abstractmethod
    def clear(self, callback: Callback | None = None) -> None:
        """Delete everything in this storage."""
        pass

    @abstractmethod
    def get_item(self, key: str, callback: ValueCallback) -> None:
        """Deliver the current value of ``key`` to ``callback``."""
        pass

    @abstractmethod
    def get_items(self, keys: list[str] | None, callback: ItemsCallback) -> None:
        """Deliver a mapping of the present keys among ``keys`` to ``callback``.

        Pass ``None`` for all keys.
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: Any, callback: Callback | None = None) -> None:
        """Store a JSON-serializable value under ``key``."""
        pass

    @abstractmethod
    def set_items(
        self, items: Mapping[str, Any], callback: Callback | None = None
    ) -> None:
        """Store several values, emitting a single change event."""
        pass

    @abstractmethod
    def remove_item(self, key: str, callback: Callback | None = None) -> None:
        """Remove ``key`` from storage."""
        pass

    @abstractmethod
    def remove_items(self, keys: list[str], callback: Callback | None = None) -> None:
        """Remove several keys from storage."""
        pass

    # Awaitable wrappers over the callback interface

    async def get(self, key: str, default: Any = None) -> Any:
        """Get the value of ``key``, or ``default`` if it is not set."""
        future = self._new_future()
        self.get_items([key], _resolver(future))
        items = await future
        return items.get(key, default)

    async def get_many(self, keys: list[str] | None = None) -> dict[str, Any]:
        """Get the present values among ``keys`` (all keys if ``None``)."""
        future = self._new_future()
        self.get_items(list(keys) if keys is not None else None, _resolver(future))
        return await future

    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` and wait for the write to complete."""
        future = self._new_future()
        self.set_item(key, value, _resolver(future))
        await future

    async def set_many(self, items: Mapping[str, Any]) -> None:
        """Store several values and wait for the write to complete."""
        future = self._new_future()
        self.set_items(items, _resolver(future))
        await future

    async def delete(self, key: str) -> None:
        """Remove ``key`` and wait for the removal to complete."""
        future = self._new_future()
        self.remove_item(key, _resolver(future))
        await future

    async def delete_many(self, keys: list[str]) -> None:
        """Remove several keys and wait for the removal to complete."""
        future = self._new_future()
        self.remove_items(keys, _resolver(future))
        await future

    async def clear_all(self) -> None:
        """Clear storage and wait for it to complete."""
        future = self._new_future()
        self.clear(_resolver(future))
        await future
