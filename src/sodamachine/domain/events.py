# SPDX-License-Identifier: Apache-2.0
"""Domain events for SodaMachine.

Domain events represent completed state changes of a soda machine. They are
produced as in-memory values; the caller decides where to route them (event
bus, metrics, console output).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Protocol
from uuid import UUID, uuid4

from .value_objects import Money, Soda

if TYPE_CHECKING:
    from .aggregates import SodaMachineId
    from .entities import SlotId


class IEventBus(Protocol):
    """Protocol for event bus implementations.

    This interface defines the contract that any event bus implementation
    must follow, enabling dependency inversion in the domain layer.
    """

    def subscribe(self, etype: type[DomainEvent], fn: Callable[[DomainEvent], None]) -> None:
        """Subscribe a function to handle events of a specific type.

        Args:
            etype: The type of domain event to subscribe to
            fn: Function that will handle events of this type
        """
        ...

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers.

        Args:
            event: The domain event to publish
        """
        ...


class DomainEvent(ABC):
    """Base class for all domain events.

    Concrete events are frozen dataclasses that declare ``machine_id``, their
    payload, and the ``event_id``/``occurred_at``/``version`` metadata fields.
    """

    @property
    @abstractmethod
    def event_type(self) -> str:
        """Unique identifier for the event type."""
        pass

    @property
    def aggregate_id(self) -> str:
        """Identifier of the machine that generated this event."""
        return str(self.machine_id)

    @abstractmethod
    def _get_event_data(self) -> dict[str, Any]:
        """Get event-specific data for serialization."""
        pass

    def to_dict(self) -> dict[str, Any]:
        """Serializable representation including event metadata."""
        return {
            "event_type": self.event_type,
            "event_id": str(self.event_id),
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
            "version": self.version,
            "data": self._get_event_data(),
        }

    def __str__(self) -> str:
        return f"{self.event_type}(id={self.event_id}, aggregate={self.aggregate_id})"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MoneyInserted(DomainEvent):
    """Event raised when a customer inserts money."""

    machine_id: SodaMachineId
    amount: Money
    total_inserted: Money
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "money_inserted"

    def _get_event_data(self) -> dict[str, Any]:
        return {"amount": str(self.amount), "total_inserted": str(self.total_inserted)}


@dataclass(frozen=True)
class MoneyReturned(DomainEvent):
    """Event raised when inserted money is handed back on request."""

    machine_id: SodaMachineId
    amount: Money
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "money_returned"

    def _get_event_data(self) -> dict[str, Any]:
        return {"amount": str(self.amount)}


@dataclass(frozen=True)
class SodaDispensed(DomainEvent):
    """Event raised when a soda is sold.

    ``change`` is the amount handed back with the soda; when it is positive a
    separate ChangeReturned event is raised as well.
    """

    machine_id: SodaMachineId
    slot_id: SlotId
    soda: Soda
    change: Money = field(default_factory=Money.zero)
    remaining_quantity: int = 0
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "soda_dispensed"

    def _get_event_data(self) -> dict[str, Any]:
        return {
            "slot_id": self.slot_id.value,
            "soda": self.soda.name,
            "price": str(self.soda.price),
            "change": str(self.change),
            "remaining_quantity": self.remaining_quantity,
        }


@dataclass(frozen=True)
class ChangeReturned(DomainEvent):
    """Event raised when change is returned after a sale."""

    machine_id: SodaMachineId
    amount: Money
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "change_returned"

    def _get_event_data(self) -> dict[str, Any]:
        return {"amount": str(self.amount)}


@dataclass(frozen=True)
class SlotAdded(DomainEvent):
    machine_id: SodaMachineId
    slot_id: SlotId
    capacity: int
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "slot_added"

    def _get_event_data(self) -> dict[str, Any]:
        return {"slot_id": self.slot_id.value, "capacity": self.capacity}


@dataclass(frozen=True)
class SlotRemoved(DomainEvent):
    machine_id: SodaMachineId
    slot_id: SlotId
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "slot_removed"

    def _get_event_data(self) -> dict[str, Any]:
        return {"slot_id": self.slot_id.value}


@dataclass(frozen=True)
class SlotConfigured(DomainEvent):
    """Event raised when a slot is (re)configured for a soda type."""

    machine_id: SodaMachineId
    slot_id: SlotId
    soda: Soda
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "slot_configured"

    def _get_event_data(self) -> dict[str, Any]:
        return {
            "slot_id": self.slot_id.value,
            "soda": self.soda.description(),
            "price": str(self.soda.price),
        }


@dataclass(frozen=True)
class SlotRefilled(DomainEvent):
    """Event raised when sodas are added to a slot."""

    machine_id: SodaMachineId
    slot_id: SlotId
    quantity_added: int
    quantity: int
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "slot_refilled"

    def _get_event_data(self) -> dict[str, Any]:
        return {
            "slot_id": self.slot_id.value,
            "quantity_added": self.quantity_added,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class SlotEnabled(DomainEvent):
    machine_id: SodaMachineId
    slot_id: SlotId
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "slot_enabled"

    def _get_event_data(self) -> dict[str, Any]:
        return {"slot_id": self.slot_id.value}


@dataclass(frozen=True)
class SlotDisabled(DomainEvent):
    machine_id: SodaMachineId
    slot_id: SlotId
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "slot_disabled"

    def _get_event_data(self) -> dict[str, Any]:
        return {"slot_id": self.slot_id.value}


@dataclass(frozen=True)
class MachineEnabled(DomainEvent):
    machine_id: SodaMachineId
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "machine_enabled"

    def _get_event_data(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class MachineDisabled(DomainEvent):
    machine_id: SodaMachineId
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
    version: int = 1

    @property
    def event_type(self) -> str:
        return "machine_disabled"

    def _get_event_data(self) -> dict[str, Any]:
        return {}


class IEventPublisher(ABC):
    """Interface for publishing domain events."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        pass

    @abstractmethod
    async def publish_many(self, events: list[DomainEvent]) -> None:
        """
        Publish multiple domain events.

        Args:
            events: List of domain events to publish
        """
        pass
