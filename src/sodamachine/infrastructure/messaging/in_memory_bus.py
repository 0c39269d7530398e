# SPDX-License-Identifier: Apache-2.0
"""In-memory event bus implementation.

This module provides a concrete implementation of the IEventBus protocol
using an in-memory message bus with simple synchronous delivery.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Dict, List, Type

from sodamachine.domain.events import DomainEvent, IEventBus

Subscriber = Callable[[DomainEvent], None]


class InMemoryEventBus(IEventBus):
    """Simple in-memory event bus for domain events.

    Subscriptions belong to the bus instance. Subscribers run synchronously
    in subscription order; subscribing to ``DomainEvent`` receives every event.
    """

    def __init__(self):
        self._subs: Dict[Type[DomainEvent], List[Subscriber]] = defaultdict(list)

    def subscribe(self, etype: Type[DomainEvent], fn: Subscriber) -> None:
        """Subscribe a function to handle events of a specific type.

        Args:
            etype: The type of domain event to subscribe to
            fn: Function that will handle events of this type
        """
        self._subs[etype].append(fn)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers.

        Args:
            event: The domain event to publish
        """
        for fn in list(self._subs.get(type(event), ())):
            fn(event)
        if type(event) is not DomainEvent:
            for fn in list(self._subs.get(DomainEvent, ())):
                fn(event)

    def subscriber_count(self, etype: Type[DomainEvent]) -> int:
        return len(self._subs.get(etype, ()))

    def clear_subscriptions(self) -> None:
        """Clear all subscriptions (useful for testing)."""
        self._subs.clear()


__all__ = ["InMemoryEventBus"]
