# SPDX-License-Identifier: Apache-2.0
"""Domain entities for SodaMachine.

Entities are objects that have identity and lifecycle. They are distinguished
by their identity rather than their attributes and can change over time while
maintaining their identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional

from .value_objects import Money, Soda


@dataclass(frozen=True, order=True)
class SlotId:
    """Identifier of a slot, unique within one machine."""

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 0:
            raise ValueError(f"Slot id must be a non-negative integer, got {self.value!r}")

    def __str__(self) -> str:
        return str(self.value)


class Entity:
    """Base class for all domain entities.

    Entities are objects that have identity and can change over time.
    They are distinguished by their identity rather than their attributes.
    """

    def __init__(self, id: Hashable):
        self._id = id
        self._version = 1

    @property
    def id(self):
        """Get the entity's unique identifier."""
        return self._id

    @property
    def version(self) -> int:
        """Get the entity's version, incremented on every change."""
        return self._version

    def _increment_version(self) -> None:
        """Increment the entity version after changes."""
        self._version += 1

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same type and ID."""
        return type(other) is type(self) and self._id == other._id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        return hash(self._id)


class SlotError(ValueError):
    """Base exception for slot operations."""


class InvalidCapacityError(SlotError):
    """Raised when a slot capacity is not valid."""


class InvalidQuantityError(SlotError):
    """Raised when a quantity argument is not valid."""


class SlotNotConfiguredError(SlotError):
    def __init__(self, slot_id: SlotId):
        super().__init__(f"Slot {slot_id} has no soda type configured")
        self.slot_id = slot_id


class SlotEmptyError(SlotError):
    def __init__(self, slot_id: SlotId):
        super().__init__(f"Slot {slot_id} is empty")
        self.slot_id = slot_id


class SlotDisabledError(SlotError):
    def __init__(self, slot_id: SlotId):
        super().__init__(f"Slot {slot_id} is disabled")
        self.slot_id = slot_id


class SlotCapacityExceededError(SlotError):
    """Raised when a refill would exceed the slot capacity."""

    def __init__(self, slot_id: SlotId, requested: int, remaining: int):
        super().__init__(
            f"Cannot add {requested} sodas to slot {slot_id}: only {remaining} spaces left"
        )
        self.slot_id = slot_id
        self.requested = requested
        self.remaining = remaining


class InsufficientQuantityError(SlotError):
    """Raised when removing more sodas than the slot holds."""

    def __init__(self, slot_id: SlotId, requested: int, available: int):
        super().__init__(
            f"Cannot remove {requested} sodas from slot {slot_id}: only {available} available"
        )
        self.slot_id = slot_id
        self.requested = requested
        self.available = available


def _require_positive_int(value: int, error_cls: type, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise error_cls(f"{what} must be greater than 0, got {value!r}")


class Slot(Entity):
    """A capacity-bounded container holding units of one soda type.

    Business rules:
        - 0 <= quantity <= capacity at all times
        - a slot dispenses only when enabled, configured and non-empty
        - changing the soda type discards the current stock
        - disabled slots can still be configured and refilled
    """

    def __init__(self, id: SlotId, capacity: int):
        super().__init__(id)
        _require_positive_int(capacity, InvalidCapacityError, "Capacity")
        self._capacity = capacity
        self._quantity = 0
        self._soda: Optional[Soda] = None
        self._is_enabled = True

    @property
    def id(self) -> SlotId:
        return self._id

    @property
    def soda(self) -> Optional[Soda]:
        """The soda type configured for this slot, if any."""
        return self._soda

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_enabled(self) -> bool:
        return self._is_enabled

    @property
    def is_configured(self) -> bool:
        return self._soda is not None

    @property
    def is_empty(self) -> bool:
        return self._quantity == 0

    @property
    def is_full(self) -> bool:
        return self._quantity >= self._capacity

    @property
    def remaining_capacity(self) -> int:
        return self._capacity - self._quantity

    @property
    def fill_percentage(self) -> float:
        """Fill ratio between 0.0 and 1.0."""
        if self._capacity == 0:
            return 0.0
        return self._quantity / self._capacity

    @property
    def inventory_value(self) -> Money:
        """Value of the stock in the slot (zero when unconfigured)."""
        if self._soda is None:
            return Money.zero()
        return self._soda.price * self._quantity

    def configure_soda_type(self, soda: Soda) -> None:
        """Configure the soda type held by this slot.

        A slot holds exactly one soda type, so existing stock is discarded.
        """
        self._soda = soda
        self._quantity = 0
        self._increment_version()

    def add_sodas(self, count: int) -> int:
        """Add sodas to the slot.

        Args:
            count: Number of sodas to add

        Returns:
            New quantity

        Raises:
            SlotNotConfiguredError: If no soda type is configured
            InvalidQuantityError: If count is not positive
            SlotCapacityExceededError: If the slot cannot take all sodas
        """
        if self._soda is None:
            raise SlotNotConfiguredError(self._id)
        _require_positive_int(count, InvalidQuantityError, "Quantity to add")
        if count > self.remaining_capacity:
            raise SlotCapacityExceededError(self._id, count, self.remaining_capacity)

        self._quantity += count
        self._increment_version()
        return self._quantity

    def remove_sodas(self, count: int) -> int:
        """Remove sodas from the slot and return the new quantity."""
        _require_positive_int(count, InvalidQuantityError, "Quantity to remove")
        if count > self._quantity:
            raise InsufficientQuantityError(self._id, count, self._quantity)

        self._quantity -= count
        self._increment_version()
        return self._quantity

    def check_dispensable(self) -> Soda:
        """Return the configured soda if the slot can dispense right now.

        Raises:
            SlotDisabledError: If the slot is disabled
            SlotNotConfiguredError: If no soda type is configured
            SlotEmptyError: If the slot has no stock
        """
        if not self._is_enabled:
            raise SlotDisabledError(self._id)
        if self._soda is None:
            raise SlotNotConfiguredError(self._id)
        if self._quantity == 0:
            raise SlotEmptyError(self._id)
        return self._soda

    def can_dispense(self, soda: Optional[Soda] = None) -> bool:
        """Check whether the slot can dispense, optionally a specific soda type."""
        try:
            current = self.check_dispensable()
        except SlotError:
            return False
        return soda is None or current.is_same_type(soda)

    def dispense_soda(self) -> Soda:
        """Dispense a single soda from the slot."""
        soda = self.check_dispensable()
        self._quantity -= 1
        self._increment_version()
        return soda

    def enable(self) -> None:
        self._is_enabled = True
        self._increment_version()

    def disable(self) -> None:
        self._is_enabled = False
        self._increment_version()

    def set_capacity(self, new_capacity: int) -> None:
        """Change the slot capacity.

        Raises:
            InvalidCapacityError: If the capacity is not positive or below
                the current quantity
        """
        _require_positive_int(new_capacity, InvalidCapacityError, "Capacity")
        if new_capacity < self._quantity:
            raise InvalidCapacityError("Cannot reduce capacity below current quantity")

        self._capacity = new_capacity
        self._increment_version()

    def __str__(self) -> str:
        status = "Enabled" if self._is_enabled else "Disabled"
        if self._soda is None:
            return f"Slot {self._id}: Empty (0 of {self._capacity}) - {status}"
        return f"Slot {self._id}: {self._soda.name} ({self._quantity} of {self._capacity}) - {status}"

    def __repr__(self) -> str:
        return (
            f"Slot(id={self._id}, soda={self._soda!r}, quantity={self._quantity}, "
            f"capacity={self._capacity}, is_enabled={self._is_enabled})"
        )
