"""Offline action queue settings."""

from pydantic import Field

from offline_resilience.configuration.base import InfrastructureSettings


class OfflineQueueSettings(InfrastructureSettings):
    """Persistence configuration for the offline action queue.

    Environment Variables:
        OFFLINE_QUEUE_BACKEND: Store backend - 'memory' or 'file' (default: memory)
        OFFLINE_QUEUE_STORE_PATH: Directory for the file backend
        OFFLINE_QUEUE_STORAGE_KEY: Key the queue document is stored under
        OFFLINE_QUEUE_STORAGE_LIMIT_BYTES: Reported storage budget (default: 5 MiB)

    Store Backends:
        - memory: Process-local dict (testing, ephemeral clients)
        - file: One file per key under OFFLINE_QUEUE_STORE_PATH, survives restarts
    """

    backend: str = Field(
        default="memory",
        alias="OFFLINE_QUEUE_BACKEND",
        description="Queue store backend: 'memory' or 'file'",
    )
    store_path: str = Field(
        default=".offline-resilience",
        alias="OFFLINE_QUEUE_STORE_PATH",
        description="Directory used by the file backend",
    )
    storage_key: str = Field(
        default="offline-queue",
        alias="OFFLINE_QUEUE_STORAGE_KEY",
        description="Key under which the serialized queue is stored",
    )
    storage_limit_bytes: int = Field(
        default=5 * 1024 * 1024,
        alias="OFFLINE_QUEUE_STORAGE_LIMIT_BYTES",
        description="Storage budget reported in the offline status",
    )
