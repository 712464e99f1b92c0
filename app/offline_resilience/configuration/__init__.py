"""Configuration module - public API.

Centralized configuration for the resilience layer using Pydantic
BaseSettings with one section per concern.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    RetrySettings, OfflineQueueSettings, SupportSettings: Section classes

Example:
    ```python
    from offline_resilience.configuration import settings

    max_attempts = settings.retry.max_attempts
    backend = settings.queue.backend
    ```
"""

from offline_resilience.configuration.queue import OfflineQueueSettings
from offline_resilience.configuration.retry import RetrySettings
from offline_resilience.configuration.settings import Settings, settings
from offline_resilience.configuration.support import SupportSettings

__all__ = [
    "settings",
    "Settings",
    "RetrySettings",
    "OfflineQueueSettings",
    "SupportSettings",
]
