# SPDX-License-Identifier: Apache-2.0
"""SodaMachine application commands."""

from __future__ import annotations

from dataclasses import dataclass

from sodamachine.domain.aggregates import SodaMachineId
from sodamachine.domain.entities import SlotId
from sodamachine.domain.value_objects import Money, Soda


def _positive_int(value: int, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{what} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class CreateMachineCommand:
    """Command to create a new soda machine."""

    machine_id: SodaMachineId
    max_slots: int

    def __post_init__(self):
        """Validate command data."""
        _positive_int(self.max_slots, "max_slots")


@dataclass(frozen=True)
class ConfigureSlotCommand:
    """Command to configure a slot, adding it first when it does not exist."""

    machine_id: SodaMachineId
    slot_id: SlotId
    capacity: int
    soda: Soda

    def __post_init__(self):
        _positive_int(self.capacity, "capacity")


@dataclass(frozen=True)
class RefillSlotCommand:
    """Command to add sodas to a slot."""

    machine_id: SodaMachineId
    slot_id: SlotId
    quantity: int

    def __post_init__(self):
        _positive_int(self.quantity, "quantity")


@dataclass(frozen=True)
class InsertMoneyCommand:
    """Command to insert money into a machine."""

    machine_id: SodaMachineId
    amount: Money


@dataclass(frozen=True)
class BuySodaCommand:
    """Command to buy a soda from a slot."""

    machine_id: SodaMachineId
    slot_id: SlotId
