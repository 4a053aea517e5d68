"""
chatlink.events

Deep-link delivery channel.

A `DeepLinkChannel` is created by the application and passed to every consumer
that needs it; there is no module-level emitter. Handlers may be plain callables
or coroutine functions. Coroutine handlers are scheduled on the running loop and
`publish` returns the created tasks so callers can await them.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import BaseModel, Field

from chatlink.logger import get_logger

logger = get_logger(__name__)

DeepLinkHandler = Callable[["DeepLinkEvent"], Union[None, Awaitable[Any]]]


class DeepLinkEvent(BaseModel):
    """A remote signal carrying a server address."""

    server: Optional[str] = Field(None, description="Server address to connect to")


class DeepLinkChannel:
    def __init__(self) -> None:
        self._handlers: list[DeepLinkHandler] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: DeepLinkHandler) -> Callable[[], None]:
        """Register a handler. Returns a callable that unsubscribes it."""
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def publish(self, event: Union[DeepLinkEvent, dict]) -> list[asyncio.Task]:
        if not isinstance(event, DeepLinkEvent):
            event = DeepLinkEvent.model_validate(event)

        tasks: list[asyncio.Task] = []
        for handler in list(self._handlers):
            try:
                result = handler(event)
            except Exception:
                logger.exception("Deep link handler %r failed", handler)
                continue
            if inspect.isawaitable(result):
                tasks.append(asyncio.ensure_future(result))
        return tasks


__all__ = ["DeepLinkChannel", "DeepLinkEvent", "DeepLinkHandler"]
