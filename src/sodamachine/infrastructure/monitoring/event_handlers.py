# SPDX-License-Identifier: Apache-2.0
"""Event handlers for automatic metrics collection.

This module subscribes to domain events and records Prometheus metrics
for sales, money movements, refills and machine availability.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from sodamachine.domain.events import (
    ChangeReturned,
    MachineDisabled,
    MachineEnabled,
    MoneyInserted,
    MoneyReturned,
    SlotConfigured,
    SlotRefilled,
    SodaDispensed,
)
from sodamachine.metrics import (
    CHANGE_RETURNED_CENTS,
    MACHINE_OPERATIONAL,
    MONEY_INSERTED_CENTS,
    MONEY_RETURNED_CENTS,
    REVENUE_CENTS,
    SLOT_QUANTITY,
    SODAS_DISPENSED,
    UNITS_REFILLED,
)

if TYPE_CHECKING:
    from sodamachine.domain.events import IEventBus

logger = logging.getLogger(__name__)


def _handle_soda_dispensed(event: SodaDispensed) -> None:
    """Handle soda sales."""
    try:
        machine = event.aggregate_id
        SODAS_DISPENSED.labels(
            machine=machine, slot=str(event.slot_id), soda=event.soda.name
        ).inc()
        REVENUE_CENTS.labels(machine=machine).inc(event.soda.price.cents)
        SLOT_QUANTITY.labels(machine=machine, slot=str(event.slot_id)).set(event.remaining_quantity)
        logger.debug(f"Recorded sale metrics for machine {machine}, slot {event.slot_id}")
    except Exception as e:
        logger.error(f"Failed to record sale metrics: {e}")


def _handle_money_inserted(event: MoneyInserted) -> None:
    try:
        MONEY_INSERTED_CENTS.labels(machine=event.aggregate_id).inc(event.amount.cents)
    except Exception as e:
        logger.error(f"Failed to record money inserted metrics: {e}")


def _handle_money_returned(event: MoneyReturned) -> None:
    try:
        MONEY_RETURNED_CENTS.labels(machine=event.aggregate_id).inc(event.amount.cents)
    except Exception as e:
        logger.error(f"Failed to record money returned metrics: {e}")


def _handle_change_returned(event: ChangeReturned) -> None:
    try:
        CHANGE_RETURNED_CENTS.labels(machine=event.aggregate_id).inc(event.amount.cents)
    except Exception as e:
        logger.error(f"Failed to record change metrics: {e}")


def _handle_slot_refilled(event: SlotRefilled) -> None:
    try:
        labels = {"machine": event.aggregate_id, "slot": str(event.slot_id)}
        UNITS_REFILLED.labels(**labels).inc(event.quantity_added)
        SLOT_QUANTITY.labels(**labels).set(event.quantity)
        logger.debug(f"Recorded refill metrics for slot {event.slot_id}: +{event.quantity_added}")
    except Exception as e:
        logger.error(f"Failed to record refill metrics: {e}")


def _handle_slot_configured(event: SlotConfigured) -> None:
    """Configuring a slot discards its stock."""
    try:
        SLOT_QUANTITY.labels(machine=event.aggregate_id, slot=str(event.slot_id)).set(0)
    except Exception as e:
        logger.error(f"Failed to record slot configuration metrics: {e}")


def _handle_machine_enabled(event: MachineEnabled) -> None:
    MACHINE_OPERATIONAL.labels(machine=event.aggregate_id).set(1)


def _handle_machine_disabled(event: MachineDisabled) -> None:
    MACHINE_OPERATIONAL.labels(machine=event.aggregate_id).set(0)


def register(event_bus: Optional["IEventBus"] = None) -> None:
    """Register all event handlers for metrics collection.

    Subscribes the handlers to ``event_bus``, or to the global bus from
    ``sodamachine.bootstrap`` when none is given. Call it once per bus.
    """
    try:
        if event_bus is None:
            from sodamachine.bootstrap import get_event_bus

            event_bus = get_event_bus()

        event_bus.subscribe(SodaDispensed, _handle_soda_dispensed)
        event_bus.subscribe(MoneyInserted, _handle_money_inserted)
        event_bus.subscribe(MoneyReturned, _handle_money_returned)
        event_bus.subscribe(ChangeReturned, _handle_change_returned)
        event_bus.subscribe(SlotRefilled, _handle_slot_refilled)
        event_bus.subscribe(SlotConfigured, _handle_slot_configured)
        event_bus.subscribe(MachineEnabled, _handle_machine_enabled)
        event_bus.subscribe(MachineDisabled, _handle_machine_disabled)

        logger.info("Monitoring event handlers registered successfully")

    except Exception as e:
        logger.warning(f"Failed to setup monitoring event handlers: {e}")


__all__ = [
    "register",
]
