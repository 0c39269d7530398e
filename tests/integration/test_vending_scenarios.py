# SPDX-License-Identifier: Apache-2.0
"""End-to-end vending scenarios through the bootstrapped services."""

from __future__ import annotations

import pytest
from prometheus_client import REGISTRY

from sodamachine.application.commands import (
    BuySodaCommand,
    ConfigureSlotCommand,
    CreateMachineCommand,
    InsertMoneyCommand,
    RefillSlotCommand,
)
from sodamachine.bootstrap import (
    bootstrap,
    build_application,
    get_event_bus,
    is_bootstrapped,
    seed_machine,
)
from sodamachine.config import default_config
from sodamachine.domain.aggregates import (
    MachineNotOperationalError,
    SodaMachineId,
    TooManySlotsError,
)
from sodamachine.domain.entities import SlotId
from sodamachine.domain.events import DomainEvent
from sodamachine.domain.value_objects import Money

pytestmark = pytest.mark.integration


@pytest.fixture
def application(reset_bootstrap):
    bootstrap()
    return build_application()


@pytest.fixture
def recorded_events(application):
    events = []
    get_event_bus().subscribe(DomainEvent, events.append)
    return events


class TestBootstrap:
    def test_bootstrap_is_idempotent(self, reset_bootstrap):
        assert not is_bootstrapped()

        bootstrap()
        bootstrap()

        assert is_bootstrapped()

    def test_event_bus_is_a_singleton(self, reset_bootstrap):
        assert get_event_bus() is get_event_bus()


class TestVendingScenarios:
    @pytest.mark.asyncio
    async def test_purchase_with_change(self, application, recorded_events, cola):
        operator = application.operator
        customer = application.customer
        machine_id = SodaMachineId(21)

        await operator.create_new_machine(CreateMachineCommand(machine_id, 5))
        await operator.configure_slot(ConfigureSlotCommand(machine_id, SlotId(1), 10, cola))
        await operator.refill_slot(RefillSlotCommand(machine_id, SlotId(1), 10))
        await customer.insert_money(InsertMoneyCommand(machine_id, Money.from_dollars_cents(2, 0)))

        sold = await customer.buy_soda(BuySodaCommand(machine_id, SlotId(1)))

        assert sold.soda == cola
        assert sold.change == Money.from_cents(50)
        machine = await application.repository.get_by_id(machine_id)
        assert machine.get_slot(1).quantity == 9
        assert machine.total_collected == Money.from_cents(150)
        assert machine.inserted_money == Money.zero()
        assert [e.event_type for e in recorded_events] == [
            "slot_added",
            "slot_configured",
            "slot_refilled",
            "money_inserted",
            "soda_dispensed",
            "change_returned",
        ]

    @pytest.mark.asyncio
    async def test_sale_updates_metrics(self, application, cola):
        operator = application.operator
        machine_id = SodaMachineId(22)
        labels = {"machine": "22"}
        before = REGISTRY.get_sample_value("sm_revenue_cents_total", labels) or 0.0

        await operator.create_new_machine(CreateMachineCommand(machine_id, 5))
        await operator.configure_slot(ConfigureSlotCommand(machine_id, SlotId(1), 10, cola))
        await operator.refill_slot(RefillSlotCommand(machine_id, SlotId(1), 1))
        await application.customer.insert_money(InsertMoneyCommand(machine_id, Money.from_cents(150)))
        await application.customer.buy_soda(BuySodaCommand(machine_id, SlotId(1)))

        assert REGISTRY.get_sample_value("sm_revenue_cents_total", labels) == before + 150

    @pytest.mark.asyncio
    async def test_machine_with_one_slot_rejects_second(self, application, cola):
        operator = application.operator
        machine_id = SodaMachineId(23)
        await operator.create_new_machine(CreateMachineCommand(machine_id, 1))
        await operator.configure_slot(ConfigureSlotCommand(machine_id, SlotId(1), 10, cola))

        with pytest.raises(TooManySlotsError):
            await operator.configure_slot(ConfigureSlotCommand(machine_id, SlotId(2), 10, cola))

    @pytest.mark.asyncio
    async def test_disabled_machine_refuses_money(self, application):
        machine_id = await seed_machine(application, default_config())
        await application.operator.set_machine_enabled(machine_id, False)

        with pytest.raises(MachineNotOperationalError):
            await application.customer.insert_money(
                InsertMoneyCommand(machine_id, Money.from_dollars_cents(1, 0))
            )

        machine = await application.repository.get_by_id(machine_id)
        assert machine.inserted_money == Money.zero()

    @pytest.mark.asyncio
    async def test_seeded_demo_machine(self, application):
        machine_id = await seed_machine(application, default_config())

        sodas = await application.customer.list_available_sodas(machine_id)
        status = await application.operator.get_machine_status(machine_id)

        assert [(s.slot_id, s.soda_name, s.price) for s in sodas] == [(1, "Cola", "1.25")]
        assert status.startswith("Machine 1: 1 slots, 1 available sodas (3 total)")
