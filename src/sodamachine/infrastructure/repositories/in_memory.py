# SPDX-License-Identifier: Apache-2.0
"""In-memory soda machine repository."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Dict, List, Optional

from sodamachine.domain.aggregates import SodaMachine, SodaMachineId
from sodamachine.domain.repositories import (
    DuplicateKeyError,
    ISodaMachineRepository,
    SodaMachineNotFoundError,
)

logger = logging.getLogger(__name__)


class InMemorySodaMachineRepository(ISodaMachineRepository):
    """Dictionary-backed repository.

    Machines are deep-copied on the way in and on the way out, so a loaded
    machine can be changed freely and the store only sees the change once
    it is saved.
    """

    def __init__(self):
        self._machines: Dict[SodaMachineId, SodaMachine] = {}
        self._lock = asyncio.Lock()

    async def get_by_id(self, machine_id: SodaMachineId) -> Optional[SodaMachine]:
        async with self._lock:
            machine = self._machines.get(machine_id)
            return copy.deepcopy(machine) if machine is not None else None

    async def save(self, machine: SodaMachine) -> None:
        async with self._lock:
            if machine.id not in self._machines:
                raise SodaMachineNotFoundError(machine.id)
            self._machines[machine.id] = copy.deepcopy(machine)
            logger.debug(f"Saved soda machine {machine.id} (version {machine.version})")

    async def create(self, machine: SodaMachine) -> None:
        async with self._lock:
            if machine.id in self._machines:
                raise DuplicateKeyError(f"Soda machine {machine.id} already exists")
            self._machines[machine.id] = copy.deepcopy(machine)
            logger.debug(f"Created soda machine {machine.id}")

    async def delete(self, machine_id: SodaMachineId) -> bool:
        async with self._lock:
            return self._machines.pop(machine_id, None) is not None

    async def list_ids(self) -> List[SodaMachineId]:
        async with self._lock:
            return sorted(self._machines)

    def count(self) -> int:
        return len(self._machines)
