# SPDX-License-Identifier: Apache-2.0
"""Domain aggregates for SodaMachine.

Aggregates are consistency boundaries that group related entities and value objects.
They ensure business invariants are maintained and provide a clear interface
for operations that span multiple domain objects.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .entities import Slot, SlotError, SlotId
from .events import (
    ChangeReturned,
    DomainEvent,
    MachineDisabled,
    MachineEnabled,
    MoneyInserted,
    MoneyReturned,
    SlotAdded,
    SlotConfigured,
    SlotDisabled,
    SlotEnabled,
    SlotRefilled,
    SlotRemoved,
    SodaDispensed,
)
from .value_objects import Money, MoneyError, Soda

logger = logging.getLogger(__name__)

SlotIdLike = Union[SlotId, int]


@dataclass(frozen=True, order=True)
class SodaMachineId:
    """Identifier of a soda machine."""

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 0:
            raise ValueError(f"Machine id must be a non-negative integer, got {self.value!r}")

    def __str__(self) -> str:
        return str(self.value)


class SodaMachineError(Exception):
    """Base exception for soda machine operations."""


class SlotNotFoundError(SodaMachineError):
    def __init__(self, slot_id: SlotId):
        super().__init__(f"Slot {slot_id} not found")
        self.slot_id = slot_id


class SlotAlreadyExistsError(SodaMachineError):
    def __init__(self, slot_id: SlotId):
        super().__init__(f"Slot {slot_id} already exists")
        self.slot_id = slot_id


class TooManySlotsError(SodaMachineError):
    def __init__(self, max_slots: int):
        super().__init__(f"Too many slots: machine holds at most {max_slots}")
        self.max_slots = max_slots


class InsufficientFundsError(SodaMachineError):
    def __init__(self, required: Money, available: Money):
        super().__init__(f"Insufficient funds: need {required}, have {available}")
        self.required = required
        self.available = available


class MachineNotOperationalError(SodaMachineError):
    def __init__(self, machine_id: SodaMachineId):
        super().__init__(f"Machine {machine_id} is not operational")
        self.machine_id = machine_id


class InvalidAmountError(SodaMachineError):
    def __init__(self, message: str = "Invalid amount"):
        super().__init__(message)


class SlotOperationError(SodaMachineError):
    """A slot rejected an operation; ``cause`` holds the slot's own error."""

    def __init__(self, slot_id: SlotId, cause: SlotError):
        super().__init__(f"Slot error: {cause}")
        self.slot_id = slot_id
        self.cause = cause


class MoneyOperationError(SodaMachineError):
    """Money arithmetic failed; ``cause`` holds the money error."""

    def __init__(self, cause: MoneyError):
        super().__init__(f"Money error: {cause}")
        self.cause = cause


def _as_slot_id(slot_id: SlotIdLike) -> SlotId:
    return slot_id if isinstance(slot_id, SlotId) else SlotId(slot_id)


@dataclass(frozen=True)
class MachineStatus:
    """Read-only snapshot of a machine's state."""

    machine_id: SodaMachineId
    slot_count: int
    max_slots: int
    available_sodas: int
    total_sodas: int
    inventory_value: Money
    inserted_money: Money
    total_collected: Money
    is_operational: bool

    def summary(self) -> str:
        state = "Operational" if self.is_operational else "Out of Service"
        return (
            f"Machine {self.machine_id}: {self.slot_count} slots, "
            f"{self.available_sodas} available sodas ({self.total_sodas} total), "
            f"{self.inventory_value} inventory value, {self.inserted_money} inserted, "
            f"{self.total_collected} collected - {state}"
        )


class AvailableSodas:
    """Lazy view over the sodas a machine can dispense right now.

    Iterating re-reads the machine, so the view can be iterated any number
    of times and always reflects the current state.
    """

    def __init__(self, slots: Dict[SlotId, Slot]):
        self._slots = slots

    def __iter__(self) -> Iterator[Tuple[SlotId, Soda]]:
        for slot_id in sorted(self._slots):
            # Slots may be removed while the view is being iterated
            slot = self._slots.get(slot_id)
            if slot is not None and slot.can_dispense():
                yield slot_id, slot.soda

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)


class SodaMachine:
    """Aggregate root for one physical soda machine.

    Owns the slots, the customer's inserted balance and the collected revenue.
    Every failed operation leaves the machine unchanged; every successful
    mutation records a domain event and returns it.
    """

    def __init__(self, id: SodaMachineId, max_slots: int):
        if isinstance(max_slots, bool) or not isinstance(max_slots, int) or max_slots <= 0:
            raise InvalidAmountError(f"max_slots must be greater than 0, got {max_slots!r}")

        self._id = id
        self._max_slots = max_slots
        self._slots: Dict[SlotId, Slot] = {}
        self._inserted_money = Money.zero()
        self._total_collected = Money.zero()
        self._is_operational = True
        self._events: List[DomainEvent] = []
        self._version = 1

    @property
    def id(self) -> SodaMachineId:
        return self._id

    @property
    def max_slots(self) -> int:
        return self._max_slots

    @property
    def slot_count(self) -> int:
        return len(self._slots)

    @property
    def inserted_money(self) -> Money:
        """Money inserted by the current customer."""
        return self._inserted_money

    @property
    def total_collected(self) -> Money:
        """Revenue collected from all sales."""
        return self._total_collected

    @property
    def is_operational(self) -> bool:
        return self._is_operational

    @property
    def version(self) -> int:
        """Get the aggregate version, incremented on every change."""
        return self._version

    @property
    def slot_ids(self) -> List[SlotId]:
        return sorted(self._slots)

    @property
    def slots(self) -> Tuple[Slot, ...]:
        """Snapshots of all slots in slot-id order."""
        return tuple(copy.copy(self._slots[slot_id]) for slot_id in sorted(self._slots))

    def get_slot(self, slot_id: SlotIdLike) -> Optional[Slot]:
        """Look up a slot.

        Returns a snapshot; changes to it do not affect the machine.
        """
        slot = self._slots.get(_as_slot_id(slot_id))
        return copy.copy(slot) if slot is not None else None

    def _require_slot(self, slot_id: SlotId) -> Slot:
        slot = self._slots.get(slot_id)
        if slot is None:
            raise SlotNotFoundError(slot_id)
        return slot

    def _require_operational(self) -> None:
        if not self._is_operational:
            raise MachineNotOperationalError(self._id)

    def _record(self, event: DomainEvent) -> None:
        self._events.append(event)
        self._version += 1
        logger.debug(f"Machine {self._id}: {event.event_type} {event._get_event_data()}")

    # ------------------------------------------------------------------
    # Administrative operations
    # ------------------------------------------------------------------
    def add_slot(self, slot_id: SlotIdLike, capacity: int) -> SlotAdded:
        """Add an empty slot to the machine.

        Raises:
            SlotAlreadyExistsError: If the id is already in use
            TooManySlotsError: If the machine is at its slot limit
            SlotOperationError: If the capacity is not valid
        """
        slot_id = _as_slot_id(slot_id)
        if slot_id in self._slots:
            raise SlotAlreadyExistsError(slot_id)
        if len(self._slots) >= self._max_slots:
            raise TooManySlotsError(self._max_slots)

        try:
            slot = Slot(slot_id, capacity)
        except SlotError as e:
            raise SlotOperationError(slot_id, e) from e

        self._slots[slot_id] = slot
        event = SlotAdded(machine_id=self._id, slot_id=slot_id, capacity=capacity)
        self._record(event)
        return event

    def remove_slot(self, slot_id: SlotIdLike) -> SlotRemoved:
        """Remove a slot together with its stock."""
        slot_id = _as_slot_id(slot_id)
        self._require_slot(slot_id)

        del self._slots[slot_id]
        event = SlotRemoved(machine_id=self._id, slot_id=slot_id)
        self._record(event)
        return event

    def configure_slot(self, slot_id: SlotIdLike, soda: Soda) -> SlotConfigured:
        """Configure the soda type of a slot, discarding its current stock."""
        slot_id = _as_slot_id(slot_id)
        slot = self._require_slot(slot_id)

        slot.configure_soda_type(soda)
        event = SlotConfigured(machine_id=self._id, slot_id=slot_id, soda=soda)
        self._record(event)
        return event

    def refill_slot(self, slot_id: SlotIdLike, quantity: int) -> SlotRefilled:
        """Add sodas to a slot.

        Raises:
            SlotNotFoundError: If the slot does not exist
            SlotOperationError: If the slot rejects the refill
        """
        slot_id = _as_slot_id(slot_id)
        slot = self._require_slot(slot_id)

        try:
            new_quantity = slot.add_sodas(quantity)
        except SlotError as e:
            raise SlotOperationError(slot_id, e) from e

        event = SlotRefilled(
            machine_id=self._id,
            slot_id=slot_id,
            quantity_added=quantity,
            quantity=new_quantity,
        )
        self._record(event)
        return event

    def enable_slot(self, slot_id: SlotIdLike) -> SlotEnabled:
        slot_id = _as_slot_id(slot_id)
        self._require_slot(slot_id).enable()
        event = SlotEnabled(machine_id=self._id, slot_id=slot_id)
        self._record(event)
        return event

    def disable_slot(self, slot_id: SlotIdLike) -> SlotDisabled:
        slot_id = _as_slot_id(slot_id)
        self._require_slot(slot_id).disable()
        event = SlotDisabled(machine_id=self._id, slot_id=slot_id)
        self._record(event)
        return event

    def enable(self) -> MachineEnabled:
        """Put the machine into service. Idempotent."""
        self._is_operational = True
        event = MachineEnabled(machine_id=self._id)
        self._record(event)
        return event

    def disable(self) -> MachineDisabled:
        """Take the machine out of service. Idempotent."""
        self._is_operational = False
        event = MachineDisabled(machine_id=self._id)
        self._record(event)
        return event

    # ------------------------------------------------------------------
    # Customer operations
    # ------------------------------------------------------------------
    def insert_money(self, amount: Money) -> MoneyInserted:
        """Add money to the customer's balance.

        Raises:
            MachineNotOperationalError: If the machine is out of service
            InvalidAmountError: If the amount is not positive
            MoneyOperationError: If the balance would overflow
        """
        self._require_operational()
        if not isinstance(amount, Money) or not amount.is_positive:
            raise InvalidAmountError(f"Inserted amount must be positive, got {amount}")

        try:
            total = self._inserted_money + amount
        except MoneyError as e:
            raise MoneyOperationError(e) from e

        self._inserted_money = total
        event = MoneyInserted(machine_id=self._id, amount=amount, total_inserted=total)
        self._record(event)
        return event

    def dispense_soda(self, slot_id: SlotIdLike) -> SodaDispensed:
        """Sell one soda from a slot and hand back any change.

        All checks run before any state changes, so a failure leaves the
        slot, the inserted balance and the collected revenue untouched.

        Returns:
            SodaDispensed event carrying the soda and the change amount. When
            change is due, a ChangeReturned event is recorded as well.

        Raises:
            MachineNotOperationalError: If the machine is out of service
            SlotNotFoundError: If the slot does not exist
            SlotOperationError: If the slot is disabled, unconfigured or empty
            InsufficientFundsError: If the inserted money does not cover the price
        """
        self._require_operational()
        slot_id = _as_slot_id(slot_id)
        slot = self._require_slot(slot_id)

        try:
            soda = slot.check_dispensable()
        except SlotError as e:
            raise SlotOperationError(slot_id, e) from e

        price = soda.price
        if self._inserted_money < price:
            raise InsufficientFundsError(required=price, available=self._inserted_money)

        try:
            change = self._inserted_money - price
            total_collected = self._total_collected + price
        except MoneyError as e:
            raise MoneyOperationError(e) from e

        dispensed = slot.dispense_soda()
        self._total_collected = total_collected
        self._inserted_money = Money.zero()

        event = SodaDispensed(
            machine_id=self._id,
            slot_id=slot_id,
            soda=dispensed,
            change=change,
            remaining_quantity=slot.quantity,
        )
        self._record(event)
        if change.is_positive:
            self._record(ChangeReturned(machine_id=self._id, amount=change))

        logger.info(f"Machine {self._id}: dispensed {dispensed.name} from slot {slot_id}, change {change}")
        return event

    def return_money(self) -> MoneyReturned:
        """Hand back all inserted money.

        Allowed while the machine is out of service.

        Raises:
            InvalidAmountError: If no money is inserted
        """
        if self._inserted_money.is_zero:
            raise InvalidAmountError("No money to return")

        amount = self._inserted_money
        self._inserted_money = Money.zero()
        event = MoneyReturned(machine_id=self._id, amount=amount)
        self._record(event)
        return event

    def return_change(self, amount: Money) -> ChangeReturned:
        """Hand back part of the inserted balance as change.

        Raises:
            MachineNotOperationalError: If the machine is out of service
            InvalidAmountError: If the amount is not positive
            InsufficientFundsError: If the amount exceeds the inserted balance
        """
        self._require_operational()
        if not isinstance(amount, Money) or not amount.is_positive:
            raise InvalidAmountError(f"Change amount must be positive, got {amount}")
        if amount > self._inserted_money:
            raise InsufficientFundsError(required=amount, available=self._inserted_money)

        self._inserted_money = self._inserted_money - amount
        event = ChangeReturned(machine_id=self._id, amount=amount)
        self._record(event)
        return event

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_available_sodas(self) -> AvailableSodas:
        """Sodas that can be dispensed now, as ``(slot_id, soda)`` pairs in slot order."""
        return AvailableSodas(self._slots)

    def find_available_soda(self, soda: Soda) -> Optional[SlotId]:
        """Find a slot able to dispense the same soda type."""
        for slot_id in sorted(self._slots):
            if self._slots[slot_id].can_dispense(soda):
                return slot_id
        return None

    def total_soda_count(self) -> int:
        return sum(slot.quantity for slot in self._slots.values())

    def total_inventory_value(self) -> Money:
        total = Money.zero()
        for slot in self._slots.values():
            total = total + slot.inventory_value
        return total

    def status(self) -> MachineStatus:
        return MachineStatus(
            machine_id=self._id,
            slot_count=self.slot_count,
            max_slots=self._max_slots,
            available_sodas=len(self.get_available_sodas()),
            total_sodas=self.total_soda_count(),
            inventory_value=self.total_inventory_value(),
            inserted_money=self._inserted_money,
            total_collected=self._total_collected,
            is_operational=self._is_operational,
        )

    def status_summary(self) -> str:
        """One-line description of the machine's current state."""
        return self.status().summary()

    def get_uncommitted_events(self) -> List[DomainEvent]:
        """Get domain events that haven't been published.

        Returns:
            List of unpublished domain events
        """
        return self._events.copy()

    def mark_events_committed(self) -> None:
        """Mark all events as committed (published).

        This should be called after events have been handed to a publisher.
        """
        self._events.clear()

    def __str__(self) -> str:
        return self.status_summary()

    def __repr__(self) -> str:
        return (
            f"SodaMachine(id={self._id}, slot_count={self.slot_count}, "
            f"max_slots={self._max_slots}, is_operational={self._is_operational}, "
            f"version={self._version})"
        )
