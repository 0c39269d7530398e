# SPDX-License-Identifier: Apache-2.0
"""Event publisher implementations for SodaMachine infrastructure.

This module contains concrete implementations of event publishers
that handle the technical aspects of event distribution and delivery.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Dict, List, Optional

from sodamachine.domain.events import DomainEvent, IEventBus, IEventPublisher

logger = logging.getLogger(__name__)

Handler = Callable[[DomainEvent], Any]


class InMemoryEventPublisher(IEventPublisher):
    """
    Simple in-memory event publisher.

    Published events are kept in memory, passed to handlers registered by
    event type name and forwarded to the event bus when one is given.
    A failing handler or subscriber is logged and does not stop delivery
    to the others.
    """

    def __init__(self, event_bus: Optional[IEventBus] = None):
        self._event_bus = event_bus
        self._events: List[DomainEvent] = []
        self._handlers: Dict[str, List[Handler]] = {}

    async def publish(self, event: DomainEvent) -> None:
        """Publish a single domain event."""
        self._events.append(event)

        event_type = event.event_type
        for handler in self._handlers.get(event_type, []):
            try:
                if inspect.iscoroutinefunction(handler):
                    await handler(event)
                else:
                    handler(event)
            except Exception as e:
                logger.warning(f"Event handler error for {event_type}: {e}")

        if self._event_bus is not None:
            try:
                self._event_bus.publish(event)
            except Exception as e:
                logger.warning(f"Event bus delivery failed for {event_type}: {e}")

    async def publish_many(self, events: List[DomainEvent]) -> None:
        """Publish multiple domain events in order."""
        for event in events:
            await self.publish(event)

    def register_handler(self, event_type: str, handler: Handler) -> None:
        """Register an event handler for a specific event type name."""
        self._handlers.setdefault(event_type, []).append(handler)

    def get_published_events(self) -> List[DomainEvent]:
        """Get all published events (useful for testing)."""
        return self._events.copy()

    def clear_events(self) -> None:
        """Clear all stored events (useful for testing)."""
        self._events.clear()
