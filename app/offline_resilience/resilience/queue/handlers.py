"""Routing of queued actions to their handlers by action type."""

import inspect
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from offline_resilience.exceptions import UnknownActionTypeError
from offline_resilience.logging import get_module_logger
from offline_resilience.resilience.queue.models import QueuedAction

logger = get_module_logger()

ActionHandler = Callable[[QueuedAction], Union[Any, Awaitable[Any]]]


class ActionHandlerRegistry:
    """Maps action types to handlers and acts as the replay executor.

    Handlers may be sync or async. A handler signals failure by raising;
    the return value is ignored.

    Example:
        handlers = ActionHandlerRegistry()

        @handlers.register("send_message")
        async def send_message(action):
            await client.post_message(**action.payload)

        stats = await queue.process_queued_actions(handlers)
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, ActionHandler] = {}

    def register(self, action_type: str) -> Callable[[ActionHandler], ActionHandler]:
        """Decorator registering a handler for an action type.

        Registering a type twice replaces the earlier handler.
        """
        if not action_type:
            raise ValueError("action_type is required")

        def decorator(handler: ActionHandler) -> ActionHandler:
            if action_type in self._handlers:
                logger.warning("action_handler_replaced", action_type=action_type)
            self._handlers[action_type] = handler
            logger.debug(
                "action_handler_registered",
                action_type=action_type,
                handler=getattr(handler, "__name__", "unknown"),
            )
            return handler

        return decorator

    def get_handler(self, action_type: str) -> Optional[ActionHandler]:
        return self._handlers.get(action_type)

    def registered_types(self) -> List[str]:
        return sorted(self._handlers)

    async def __call__(self, action: QueuedAction) -> Any:
        """Run the handler registered for the action's type.

        Raises:
            UnknownActionTypeError: If no handler is registered for the type
        """
        handler = self._handlers.get(action.type)
        if handler is None:
            raise UnknownActionTypeError(action.type)
        result = handler(action)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __contains__(self, action_type: str) -> bool:
        return action_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
