# SPDX-License-Identifier: Apache-2.0
"""SodaMachine application services."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, TypeVar, Union

from sodamachine.domain.aggregates import SodaMachine, SodaMachineId
from sodamachine.domain.entities import SlotId
from sodamachine.domain.events import (
    IEventPublisher,
    MachineDisabled,
    MachineEnabled,
    MoneyInserted,
    SlotConfigured,
    SlotDisabled,
    SlotEnabled,
    SlotRefilled,
    SlotRemoved,
    SodaDispensed,
)
from sodamachine.domain.repositories import ISodaMachineRepository, SodaMachineNotFoundError
from sodamachine.domain.value_objects import Money

from .commands import (
    BuySodaCommand,
    ConfigureSlotCommand,
    CreateMachineCommand,
    InsertMoneyCommand,
    RefillSlotCommand,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
MachineIdLike = Union[SodaMachineId, int]
SlotIdLike = Union[SlotId, int]


def _as_machine_id(machine_id: MachineIdLike) -> SodaMachineId:
    return machine_id if isinstance(machine_id, SodaMachineId) else SodaMachineId(machine_id)


def _as_slot_id(slot_id: SlotIdLike) -> SlotId:
    return slot_id if isinstance(slot_id, SlotId) else SlotId(slot_id)


@dataclass(frozen=True)
class AvailableSodaDTO:
    """A soda offered to customers, with the price formatted as ``"1.25"``."""

    slot_id: int
    soda_name: str
    price: str


class MachineLocks:
    """Per-machine asyncio locks shared by the services of one process.

    Every operation on a machine runs its whole load-mutate-save cycle under
    the machine's lock, so concurrent requests for the same machine are
    applied one after another.
    """

    def __init__(self):
        self._locks: Dict[SodaMachineId, asyncio.Lock] = {}

    def lock(self, machine_id: SodaMachineId) -> asyncio.Lock:
        lock = self._locks.get(machine_id)
        if lock is None:
            lock = self._locks[machine_id] = asyncio.Lock()
        return lock


class _MachineService:
    def __init__(
        self,
        repository: ISodaMachineRepository,
        event_publisher: IEventPublisher,
        locks: MachineLocks | None = None,
    ):
        self._repository = repository
        self._event_publisher = event_publisher
        self._locks = locks or MachineLocks()

    async def _load(self, machine_id: SodaMachineId) -> SodaMachine:
        machine = await self._repository.get_by_id(machine_id)
        if machine is None:
            raise SodaMachineNotFoundError(machine_id)
        return machine

    async def _execute(
        self, machine_id: SodaMachineId, operation: Callable[[SodaMachine], T]
    ) -> T:
        """Run a domain operation on a stored machine.

        The machine is saved and its events are published only when the
        operation succeeds.
        """
        async with self._locks.lock(machine_id):
            machine = await self._load(machine_id)
            result = operation(machine)

            events = machine.get_uncommitted_events()
            machine.mark_events_committed()

            await self._repository.save(machine)
            await self._event_publisher.publish_many(events)
            return result

    async def _query(
        self, machine_id: SodaMachineId, query: Callable[[SodaMachine], T]
    ) -> T:
        async with self._locks.lock(machine_id):
            machine = await self._load(machine_id)
            return query(machine)


class CustomerService(_MachineService):
    """Application service for customer use cases."""

    async def list_available_sodas(self, machine_id: MachineIdLike) -> List[AvailableSodaDTO]:
        """List the sodas that can be bought right now, in slot order."""
        return await self._query(
            _as_machine_id(machine_id),
            lambda machine: [
                AvailableSodaDTO(
                    slot_id=slot_id.value,
                    soda_name=soda.name,
                    price=f"{soda.price.as_decimal():.2f}",
                )
                for slot_id, soda in machine.get_available_sodas()
            ],
        )

    async def insert_money(self, command: InsertMoneyCommand) -> MoneyInserted:
        return await self._execute(
            _as_machine_id(command.machine_id),
            lambda machine: machine.insert_money(command.amount),
        )

    async def buy_soda(self, command: BuySodaCommand) -> SodaDispensed:
        """Buy a soda with the money inserted so far.

        Raises:
            SodaMachineNotFoundError: If the machine does not exist
            SodaMachineError: If the machine refuses the sale
        """
        event = await self._execute(
            _as_machine_id(command.machine_id),
            lambda machine: machine.dispense_soda(command.slot_id),
        )
        logger.info(
            f"Machine {event.machine_id} sold {event.soda.name} for {event.soda.price}"
        )
        return event

    async def request_money_back(self, machine_id: MachineIdLike) -> Money:
        """Return all inserted money and report the amount returned."""
        event = await self._execute(
            _as_machine_id(machine_id), lambda machine: machine.return_money()
        )
        return event.amount


class OperatorService(_MachineService):
    """Application service for operator (maintenance) use cases."""

    async def create_new_machine(self, command: CreateMachineCommand) -> SodaMachineId:
        """Create and store an empty machine.

        Raises:
            DuplicateKeyError: If a machine with the same id exists
        """
        machine_id = _as_machine_id(command.machine_id)
        async with self._locks.lock(machine_id):
            machine = SodaMachine(machine_id, command.max_slots)
            await self._repository.create(machine)

        logger.info(f"Created soda machine {machine_id} with {command.max_slots} slots")
        return machine_id

    async def configure_slot(self, command: ConfigureSlotCommand) -> SlotConfigured:
        """Configure a slot's soda type, adding the slot when it is missing."""
        slot_id = _as_slot_id(command.slot_id)

        def configure(machine: SodaMachine) -> SlotConfigured:
            if machine.get_slot(slot_id) is None:
                machine.add_slot(slot_id, command.capacity)
            return machine.configure_slot(slot_id, command.soda)

        return await self._execute(_as_machine_id(command.machine_id), configure)

    async def refill_slot(self, command: RefillSlotCommand) -> SlotRefilled:
        return await self._execute(
            _as_machine_id(command.machine_id),
            lambda machine: machine.refill_slot(command.slot_id, command.quantity),
        )

    async def set_machine_enabled(
        self, machine_id: MachineIdLike, enabled: bool
    ) -> MachineEnabled | MachineDisabled:
        return await self._execute(
            _as_machine_id(machine_id),
            lambda machine: machine.enable() if enabled else machine.disable(),
        )

    async def set_slot_enabled(
        self, machine_id: MachineIdLike, slot_id: SlotIdLike, enabled: bool
    ) -> SlotEnabled | SlotDisabled:
        slot_id = _as_slot_id(slot_id)
        return await self._execute(
            _as_machine_id(machine_id),
            lambda machine: (
                machine.enable_slot(slot_id) if enabled else machine.disable_slot(slot_id)
            ),
        )

    async def remove_slot(self, machine_id: MachineIdLike, slot_id: SlotIdLike) -> SlotRemoved:
        return await self._execute(
            _as_machine_id(machine_id), lambda machine: machine.remove_slot(slot_id)
        )

    async def get_machine_status(self, machine_id: MachineIdLike) -> str:
        """Get the one-line status summary of a machine."""
        return await self._query(
            _as_machine_id(machine_id), lambda machine: machine.status_summary()
        )
