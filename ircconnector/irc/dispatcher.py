"""Trigger and numeric dispatch through explicit registration tables."""

from __future__ import annotations

import logging
from collections import defaultdict

from ..logs.logger import logger
from .models import (
    EventHandler,
    ListenerHandle,
    NumericEvent,
    NumericHandler,
    Trigger,
    TriggerEvent,
)


class EventDispatcher:
    """Routes inbound events of one connection to registered handlers.

    Handlers run one after another in registration order; a failing handler
    is logged and does not prevent the remaining ones from running.
    """

    def __init__(self) -> None:
        self._event_handlers: dict[Trigger, list[ListenerHandle]] = defaultdict(list)
        self._numeric_handlers: dict[int, list[ListenerHandle]] = defaultdict(list)

    def add_event_listener(
        self, trigger: Trigger, handler: EventHandler
    ) -> ListenerHandle:
        handle = ListenerHandle(key=trigger, handler=handler)
        self._event_handlers[trigger].append(handle)
        return handle

    def add_response_listener(
        self, code: int, handler: NumericHandler
    ) -> ListenerHandle:
        handle = ListenerHandle(key=code, handler=handler)
        self._numeric_handlers[code].append(handle)
        return handle

    def remove_listener(self, handle: ListenerHandle) -> bool:
        table = (
            self._event_handlers
            if isinstance(handle.key, Trigger)
            else self._numeric_handlers
        )
        handles = table.get(handle.key, [])  # type: ignore[call-overload]
        for i, existing in enumerate(handles):
            if existing is handle:
                del handles[i]
                return True
        return False

    def listener_count(self, key: Trigger | int) -> int:
        if isinstance(key, Trigger):
            return len(self._event_handlers.get(key, []))
        return len(self._numeric_handlers.get(key, []))

    async def dispatch(self, event: TriggerEvent) -> int:
        """Deliver ``event`` to its trigger's handlers; return how many ran."""
        handles = list(self._event_handlers.get(event.trigger, []))
        for handle in handles:
            await self._invoke(handle, event, event.trigger.name)
        return len(handles)

    async def dispatch_numeric(self, event: NumericEvent) -> int:
        # Snapshot: handlers commonly remove themselves (and siblings) when fired
        handles = list(self._numeric_handlers.get(event.code, []))
        ran = 0
        for handle in handles:
            current = self._numeric_handlers.get(event.code, [])
            if not any(h is handle for h in current):
                continue
            await self._invoke(handle, event, str(event.code))
            ran += 1
        return ran

    @staticmethod
    async def _invoke(handle: ListenerHandle, event: object, label: str) -> None:
        try:
            await handle.handler(event)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "connection",
                "handler_error",
                level=logging.ERROR,
                trigger=label,
                error=str(e),
                error_type=type(e).__name__,
            )
