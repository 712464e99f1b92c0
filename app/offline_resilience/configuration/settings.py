"""Resilience layer configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from offline_resilience.configuration.queue import OfflineQueueSettings
from offline_resilience.configuration.retry import RetrySettings
from offline_resilience.configuration.support import SupportSettings


class Settings(BaseSettings):
    """Resilience layer configuration settings - main aggregator.

    Aggregates the domain-specific settings sections into a single
    configuration object:

    - **retry**: Default retry policy for the retry engine
    - **queue**: Offline action queue persistence
    - **support**: Support contact links shown for connection issues

    Environment Variables:
        ENVIRONMENT: Deployment environment name (production, staging, dev)
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from offline_resilience.configuration import settings

        if settings.queue.backend == "file":
            path = settings.queue.store_path
        ```
    """

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    retry: RetrySettings
    queue: OfflineQueueSettings
    support: SupportSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if ENVIRONMENT is 'production', False otherwise.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "retry": RetrySettings,
            "queue": OfflineQueueSettings,
            "support": SupportSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
