# SPDX-License-Identifier: Apache-2.0
"""Fake event publisher implementation for testing."""

from __future__ import annotations

from typing import List, Type

from sodamachine.domain.events import DomainEvent, IEventPublisher


class FakeEventPublisher(IEventPublisher):
    """Fake event publisher that captures events for testing."""

    def __init__(self):
        self._published_events: List[DomainEvent] = []
        self._publish_many_calls: List[List[DomainEvent]] = []

    async def publish(self, event: DomainEvent) -> None:
        self._published_events.append(event)

    async def publish_many(self, events: List[DomainEvent]) -> None:
        self._publish_many_calls.append(list(events))
        for event in events:
            await self.publish(event)

    # Test helpers
    def get_published_events(self) -> List[DomainEvent]:
        return self._published_events.copy()

    def get_events_of_type(self, event_type: Type[DomainEvent]) -> List[DomainEvent]:
        return [event for event in self._published_events if isinstance(event, event_type)]

    def get_event_types(self) -> List[str]:
        return [event.event_type for event in self._published_events]

    def get_event_count(self) -> int:
        return len(self._published_events)

    @property
    def publish_many_calls(self) -> List[List[DomainEvent]]:
        return self._publish_many_calls

    def clear_events(self) -> None:
        self._published_events.clear()
        self._publish_many_calls.clear()

    def assert_event_published(self, event_type: Type[DomainEvent]) -> None:
        """Assert that an event of the specified type was published."""
        if not self.get_events_of_type(event_type):
            raise AssertionError(
                f"Expected event of type {event_type.__name__} to be published. "
                f"Published events: {self.get_event_types()}"
            )
