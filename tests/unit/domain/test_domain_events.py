# SPDX-License-Identifier: Apache-2.0
"""Unit tests for domain events."""

from __future__ import annotations

from datetime import timezone
from uuid import UUID

import pytest

from sodamachine.domain.aggregates import SodaMachineId
from sodamachine.domain.entities import SlotId
from sodamachine.domain.events import MachineDisabled, MoneyInserted, SodaDispensed
from sodamachine.domain.value_objects import Money


class TestDomainEvents:
    def test_event_metadata(self):
        event = MachineDisabled(machine_id=SodaMachineId(3))

        assert isinstance(event.event_id, UUID)
        assert event.occurred_at.tzinfo is timezone.utc
        assert event.version == 1
        assert event.event_type == "machine_disabled"
        assert event.aggregate_id == "3"

    def test_events_are_immutable(self):
        event = MachineDisabled(machine_id=SodaMachineId(3))

        with pytest.raises(AttributeError):
            event.machine_id = SodaMachineId(4)

    def test_each_event_gets_unique_id(self):
        first = MachineDisabled(machine_id=SodaMachineId(1))
        second = MachineDisabled(machine_id=SodaMachineId(1))

        assert first.event_id != second.event_id

    def test_to_dict(self):
        event = MoneyInserted(
            machine_id=SodaMachineId(1),
            amount=Money.from_cents(100),
            total_inserted=Money.from_cents(250),
        )

        data = event.to_dict()

        assert data["event_type"] == "money_inserted"
        assert data["aggregate_id"] == "1"
        assert data["data"] == {"amount": "$1.00", "total_inserted": "$2.50"}
        assert data["event_id"] == str(event.event_id)

    def test_soda_dispensed_defaults_to_no_change(self, cola):
        event = SodaDispensed(machine_id=SodaMachineId(1), slot_id=SlotId(2), soda=cola)

        assert event.change == Money.zero()
        assert event._get_event_data() == {
            "slot_id": 2,
            "soda": "Cola",
            "price": "$1.50",
            "change": "$0.00",
            "remaining_quantity": 0,
        }
