"""Resilience service: the application context for offline handling.

Constructs and owns one monitor, retry engine, capability gate, and offline
queue, and wires them together. Create it once at client startup (or use
get_resilience_service) and pass it to the code that talks to the network.
"""

from datetime import datetime
from functools import lru_cache
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from offline_resilience.configuration import Settings, settings as default_settings
from offline_resilience.connectivity.capabilities import (
    Capability,
    CapabilityGate,
    CapabilityState,
)
from offline_resilience.connectivity.classifiers import (
    classify_exception,
    classify_status_code,
)
from offline_resilience.connectivity.models import ConnectionIssue, IssueCode
from offline_resilience.connectivity.monitor import ConnectivityMonitor
from offline_resilience.exceptions import CapabilityUnavailableError, RetryExhaustedError
from offline_resilience.logging import get_module_logger
from offline_resilience.resilience.queue import (
    DEFAULT_PRIORITY,
    ActionHandlerRegistry,
    KeyValueStore,
    OfflineActionQueue,
    OfflineStatus,
    ReplayStats,
    create_key_value_store,
)
from offline_resilience.resilience.retry import RetryEngine, get_retry_policy

logger = get_module_logger()

T = TypeVar("T")


class ResilienceService:
    """Facade over the resilience components.

    Attributes:
        settings: Settings the components were built from
        monitor: ConnectivityMonitor, also the connectivity signal
        retry_engine: RetryEngine for in-flight operations
        capabilities: CapabilityGate over the monitor
        handlers: ActionHandlerRegistry used to replay queued actions
        queue: OfflineActionQueue for deferred actions

    Example:
        service = ResilienceService(settings)

        @service.handlers.register("send_message")
        async def send_message(action):
            await api.send(action.payload)

        profile = await service.execute(lambda: api.get_profile(), "profile")
        await service.handle_connectivity_change(is_online=True)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[KeyValueStore] = None,
        *,
        monitor: Optional[ConnectivityMonitor] = None,
        retry_engine: Optional[RetryEngine] = None,
        handlers: Optional[ActionHandlerRegistry] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.settings = settings or default_settings
        self.monitor = monitor or ConnectivityMonitor(clock=clock)
        self.retry_engine = retry_engine or RetryEngine(
            get_retry_policy("default", self.settings.retry)
        )
        self.capabilities = CapabilityGate(self.monitor)
        self.handlers = handlers if handlers is not None else ActionHandlerRegistry()
        self.queue = OfflineActionQueue(
            store
            or create_key_value_store(
                self.settings.queue.backend, self.settings.queue.store_path
            ),
            self.monitor,
            handlers=self.handlers,
            storage_key=self.settings.queue.storage_key,
            storage_limit=self.settings.queue.storage_limit_bytes,
            clock=clock,
        )
        logger.info(
            "resilience_service_initialized",
            queue_backend=self.settings.queue.backend,
            queued_actions=len(self.queue),
        )

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        operation_id: str,
        policy_name: str = "api",
    ) -> T:
        """Run a network operation under a named retry policy.

        When the final attempt fails, the failure is classified and raised
        as a connection issue before the original exception propagates.

        Raises:
            RetryExhaustedError: If the operation's retry budget is already spent
            KeyError: If the policy name is unknown
            Exception: The operation's own exception after the last attempt
        """
        policy = get_retry_policy(policy_name, self.settings.retry)
        try:
            return await self.retry_engine.execute_with_retry(operation, operation_id, policy)
        except RetryExhaustedError:
            raise
        except Exception as e:
            self.report_failure(e)
            raise

    def report_failure(
        self,
        error_or_status: Union[BaseException, int],
        technical_details: Optional[str] = None,
    ) -> Optional[ConnectionIssue]:
        """Classify a failure and raise the matching connection issue.

        Args:
            error_or_status: Exception from a network call, or an HTTP status
            technical_details: Diagnostic text; defaults to the exception text

        Returns:
            The issue raised, or None for a non-error status
        """
        if isinstance(error_or_status, int) and not isinstance(error_or_status, bool):
            code = classify_status_code(error_or_status)
            if code is None:
                return None
            details = technical_details or f"HTTP {error_or_status}"
        else:
            code = classify_exception(error_or_status)
            details = technical_details or (
                f"{type(error_or_status).__name__}: {error_or_status}"
            )

        logger.warning("failure_reported", code=code.value, details=details)
        return self.monitor.raise_issue(code, technical_details=details)

    def resolve_issue(self, code: Union[IssueCode, str]) -> bool:
        return self.monitor.remove_issue(code)

    async def handle_connectivity_change(self, is_online: bool) -> Optional[ReplayStats]:
        """Apply a connectivity change reported by the runtime.

        Going online records the time and replays the offline queue. Going
        offline records the last moment the runtime was known online.

        Returns:
            ReplayStats when a replay pass ran, otherwise None
        """
        was_online = self.monitor.is_online
        self.monitor.set_online(is_online)

        if not is_online:
            if was_online:
                self.queue.record_last_online()
            self.queue.notify_status_changed()
            return None

        self.queue.record_last_online()
        stats = await self.queue.process_queued_actions()
        if stats.dropped:
            logger.warning(
                "queued_actions_lost",
                dropped=[action.id for action in stats.dropped],
            )
        return stats

    def confirm_recovery(self) -> None:
        """Clear every active issue and all retry bookkeeping."""
        self.monitor.clear_all_issues()
        self.retry_engine.reset()
        logger.info("connection_recovery_confirmed")

    def defer_action(
        self,
        capability: Capability,
        action_type: str,
        payload: Any,
        priority: int = DEFAULT_PRIORITY,
    ) -> Optional[str]:
        """Queue an action if its capability only works deferred.

        Returns:
            The queued action's id, or None when the capability can be
            used right now and the caller should run the action directly

        Raises:
            CapabilityUnavailableError: If the capability cannot be used or queued
        """
        status = self.capabilities.status_of(capability)
        if status.status in (CapabilityState.AVAILABLE, CapabilityState.LIMITED):
            return None
        if status.status == CapabilityState.QUEUED:
            return self.queue.enqueue(action_type, payload, priority)

        logger.info("capability_unavailable", capability=capability.value)
        raise CapabilityUnavailableError(capability.value, status.alternative_action)

    def get_offline_status(self) -> OfflineStatus:
        return self.queue.get_offline_status()


@lru_cache
def get_resilience_service() -> ResilienceService:
    """Get the process-wide resilience service.

    The @lru_cache decorator ensures only ONE instance is created per
    process. Tests should construct ResilienceService directly instead.
    """
    return ResilienceService(default_settings)
