"""Change notification types and observer bookkeeping."""

import logging
from collections.abc import Callable
from typing import Any

import msgspec

logger = logging.getLogger(__name__)


class ChangeRecord(msgspec.Struct, frozen=True):
    """Old and new value of a single key.

    Either side may be ``msgspec.UNSET``: an unset ``new_value`` means the key
    was removed, an unset ``old_value`` means the key did not exist before.
    ``None`` is an ordinary stored JSON ``null``.
    """

    old_value: Any = msgspec.UNSET
    new_value: Any = msgspec.UNSET

    @property
    def is_deletion(self) -> bool:
        """Check if this record describes a removed key."""
        return self.new_value is msgspec.UNSET

    @property
    def is_creation(self) -> bool:
        """Check if this record describes a previously unset key."""
        return self.old_value is msgspec.UNSET

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict, omitting absent sides."""
        result = {}
        if self.old_value is not msgspec.UNSET:
            result["old_value"] = self.old_value
        if self.new_value is not msgspec.UNSET:
            result["new_value"] = self.new_value
        return result


ChangeEvent = dict[str, ChangeRecord]
Observer = Callable[[ChangeEvent], Any]


class ObserverSet:
    """Ordered collection of change observers owned by one storage instance."""

    def __init__(self):
        self._observers: list[Observer] = []

    def add(self, observer: Observer) -> None:
        """Register an observer. Duplicates are kept and notified twice."""
        self._observers.append(observer)

    def remove(self, observer: Observer) -> None:
        """Remove the first registration equal to ``observer``, if any."""
        for i, registered in enumerate(self._observers):
            if registered == observer:
                del self._observers[i]
                return

    def snapshot(self) -> list[Observer]:
        """Get a copy of the registered observers in registration order."""
        return list(self._observers)

    def notify(
        self, event: ChangeEvent, observers: list[Observer] | None = None
    ) -> None:
        """Deliver ``event`` to observers.

        Args:
            event: The change event.
            observers: Observers captured when the event was emitted. Defaults
                to a snapshot of the observers registered right now.

        An observer that raises is logged and skipped; the rest still run.
        """
        if observers is None:
            observers = self.snapshot()
        for observer in observers:
            try:
                observer(event)
            except Exception:
                logger.exception("Storage observer %r failed", observer)

    def __len__(self) -> int:
        return len(self._observers)

    def __contains__(self, observer: object) -> bool:
        return observer in self._observers
