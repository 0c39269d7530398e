# SPDX-License-Identifier: Apache-2.0
"""Repository interfaces for SodaMachine domain.

Repositories provide a domain-focused interface for data access,
abstracting the underlying persistence mechanism. They are defined
in the domain layer as interfaces and implemented in infrastructure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from .aggregates import SodaMachine, SodaMachineId


class ISodaMachineRepository(ABC):
    """Repository interface for soda machine aggregates."""

    @abstractmethod
    async def get_by_id(self, machine_id: SodaMachineId) -> Optional[SodaMachine]:
        """Load a machine by id.

        Args:
            machine_id: The machine identifier

        Returns:
            SodaMachine if found, None otherwise
        """
        ...

    @abstractmethod
    async def save(self, machine: SodaMachine) -> None:
        """Save an existing machine, replacing the stored state.

        Raises:
            SodaMachineNotFoundError: If the machine was never created
        """
        ...

    @abstractmethod
    async def create(self, machine: SodaMachine) -> None:
        """Store a new machine.

        Raises:
            DuplicateKeyError: If a machine with the same id already exists
        """
        ...

    @abstractmethod
    async def delete(self, machine_id: SodaMachineId) -> bool:
        """Delete a machine.

        Returns:
            True if the machine existed and was deleted
        """
        ...

    @abstractmethod
    async def list_ids(self) -> List[SodaMachineId]:
        """List the ids of all stored machines in ascending order."""
        ...


class RepositoryError(Exception):
    """Base exception for repository operations."""

    ...


class DuplicateKeyError(RepositoryError):
    """Raised when attempting to create data with a duplicate key."""

    ...


class SodaMachineNotFoundError(RepositoryError):
    """Raised when a soda machine is not found."""

    def __init__(self, machine_id: SodaMachineId):
        super().__init__(f"Soda machine {machine_id} not found")
        self.machine_id = machine_id
