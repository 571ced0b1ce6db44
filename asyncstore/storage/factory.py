"""Backend registry and construction from configuration."""

import asyncio
import logging
from collections.abc import Callable

from ..config import StorageConfig
from .backends.base import Storage
from .backends.memory import MemoryBackend
from .exceptions import UnknownBackendError

logger = logging.getLogger(__name__)

BackendFactory = Callable[..., Storage]

_registry: dict[str, BackendFactory] = {
    "memory": MemoryBackend,
}


def register_backend(name: str, factory: BackendFactory) -> None:
    """Register a backend under ``name``, replacing any previous one."""
    _registry[name] = factory


def available_backends() -> list[str]:
    """Get the registered backend names, sorted."""
    return sorted(_registry)


def create_storage(
    config: StorageConfig | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> Storage:
    """Build the storage backend named by ``config``.

    Raises:
        UnknownBackendError: If no backend is registered under that name.
    """
    config = config or StorageConfig()
    try:
        factory = _registry[config.backend]
    except KeyError:
        raise UnknownBackendError(config.backend, available_backends()) from None

    logger.debug("Creating %s storage backend", config.backend)
    return factory(loop=loop)
