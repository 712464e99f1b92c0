"""Factory for creating queue stores based on configuration."""

from typing import Optional

from offline_resilience.configuration import settings
from offline_resilience.logging import get_module_logger
from offline_resilience.resilience.queue.store import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    KeyValueStore,
)

logger = get_module_logger()


def create_key_value_store(
    backend: Optional[str] = None, store_path: Optional[str] = None
) -> KeyValueStore:
    """Factory to create the store backing the offline queue.

    Args:
        backend: Optional backend override (memory, file).
                If None, uses settings.queue.backend
        store_path: Optional directory override for the file backend.
                If None, uses settings.queue.store_path

    Returns:
        Appropriate KeyValueStore implementation

    Raises:
        ValueError: If unknown backend specified

    Examples:
        >>> store = create_key_value_store()  # Uses settings.queue.backend
        >>> store = create_key_value_store(backend="memory")  # Force memory
        >>> store = create_key_value_store(backend="file", store_path="/tmp/q")
    """
    backend = backend or settings.queue.backend

    if backend == "memory":
        logger.info("creating_in_memory_queue_store")
        return InMemoryKeyValueStore()

    elif backend == "file":
        directory = store_path or settings.queue.store_path
        logger.info("creating_file_queue_store", directory=directory)
        return FileKeyValueStore(directory)

    else:
        raise ValueError(f"Unknown queue store backend: {backend}. Supported: memory, file")
