# SPDX-License-Identifier: Apache-2.0
"""Tests for event-driven metrics collection."""

from __future__ import annotations

from prometheus_client import REGISTRY

from sodamachine.domain.aggregates import SodaMachineId
from sodamachine.domain.entities import SlotId
from sodamachine.domain.events import (
    ChangeReturned,
    MachineDisabled,
    MachineEnabled,
    MoneyInserted,
    SlotConfigured,
    SlotRefilled,
    SodaDispensed,
)
from sodamachine.domain.value_objects import Money
from sodamachine.infrastructure.messaging.in_memory_bus import InMemoryEventBus
from sodamachine.infrastructure.monitoring.event_handlers import register
from sodamachine.metrics import metrics_text

# Unique machine id so counters from other tests do not interfere
MACHINE = SodaMachineId(9101)


def _sample(name: str, **labels) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def _bus() -> InMemoryEventBus:
    bus = InMemoryEventBus()
    register(bus)
    return bus


def test_sale_updates_sales_and_revenue(cola):
    bus = _bus()
    sold_before = _sample(
        "sm_sodas_dispensed_total", machine=str(MACHINE), slot="1", soda="Cola"
    )
    revenue_before = _sample("sm_revenue_cents_total", machine=str(MACHINE))

    bus.publish(SodaDispensed(machine_id=MACHINE, slot_id=SlotId(1), soda=cola))

    assert _sample(
        "sm_sodas_dispensed_total", machine=str(MACHINE), slot="1", soda="Cola"
    ) == sold_before + 1
    assert _sample("sm_revenue_cents_total", machine=str(MACHINE)) == revenue_before + 150


def test_money_movements_are_counted_in_cents():
    bus = _bus()
    inserted_before = _sample("sm_money_inserted_cents_total", machine=str(MACHINE))
    change_before = _sample("sm_change_returned_cents_total", machine=str(MACHINE))

    bus.publish(
        MoneyInserted(
            machine_id=MACHINE, amount=Money.from_cents(200), total_inserted=Money.from_cents(200)
        )
    )
    bus.publish(ChangeReturned(machine_id=MACHINE, amount=Money.from_cents(50)))

    assert _sample("sm_money_inserted_cents_total", machine=str(MACHINE)) == inserted_before + 200
    assert _sample("sm_change_returned_cents_total", machine=str(MACHINE)) == change_before + 50


def test_refill_updates_units_and_quantity_gauge():
    bus = _bus()
    before = _sample("sm_units_refilled_total", machine=str(MACHINE), slot="2")

    bus.publish(SlotRefilled(machine_id=MACHINE, slot_id=SlotId(2), quantity_added=4, quantity=6))

    assert _sample("sm_units_refilled_total", machine=str(MACHINE), slot="2") == before + 4
    assert _sample("sm_slot_quantity", machine=str(MACHINE), slot="2") == 6


def test_quantity_gauge_follows_sales_and_reconfiguration(cola):
    bus = _bus()
    bus.publish(SlotRefilled(machine_id=MACHINE, slot_id=SlotId(3), quantity_added=5, quantity=5))

    bus.publish(
        SodaDispensed(machine_id=MACHINE, slot_id=SlotId(3), soda=cola, remaining_quantity=4)
    )
    assert _sample("sm_slot_quantity", machine=str(MACHINE), slot="3") == 4

    bus.publish(SlotConfigured(machine_id=MACHINE, slot_id=SlotId(3), soda=cola))
    assert _sample("sm_slot_quantity", machine=str(MACHINE), slot="3") == 0


def test_operational_gauge_follows_machine_state():
    bus = _bus()

    bus.publish(MachineDisabled(machine_id=MACHINE))
    assert _sample("sm_machine_operational", machine=str(MACHINE)) == 0

    bus.publish(MachineEnabled(machine_id=MACHINE))
    assert _sample("sm_machine_operational", machine=str(MACHINE)) == 1


def test_metrics_text_exposes_soda_metrics():
    assert "sm_sodas_dispensed_total" in metrics_text()
