# SPDX-License-Identifier: Apache-2.0
"""Bootstrap module for SodaMachine initialization.

Wires the in-memory infrastructure to the application services and registers
the monitoring event handlers. Bootstrap is invoked lazily by CLI commands to
avoid side-effects when importing the CLI module for help text or testing.
"""

from __future__ import annotations

__all__ = [
    "Application",
    "bootstrap",
    "build_application",
    "get_event_bus",
    "is_bootstrapped",
    "reset_bootstrap_state",
    "seed_machine",
]

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from sodamachine.application.services import CustomerService, MachineLocks, OperatorService
from sodamachine.infrastructure.events.publishers import InMemoryEventPublisher
from sodamachine.infrastructure.repositories.in_memory import InMemorySodaMachineRepository

if TYPE_CHECKING:
    from sodamachine.config.machine import MachineConfig
    from sodamachine.domain.aggregates import SodaMachineId
    from sodamachine.domain.events import IEventBus

# Global flag to ensure bootstrap only runs once per process
_BOOTSTRAPPED = False
_BOOTSTRAP_LOCK = threading.Lock()

# Global event bus instance
_EVENT_BUS: Optional["IEventBus"] = None

logger = logging.getLogger(__name__)


def bootstrap() -> None:
    """Initialize SodaMachine service registration.

    This function is idempotent and safe to call multiple times. It will only
    perform initialization once per process.
    """
    global _BOOTSTRAPPED

    with _BOOTSTRAP_LOCK:
        if _BOOTSTRAPPED:
            logger.debug("Bootstrap already completed, skipping")
            return

        logger.info("Starting SodaMachine bootstrap initialization...")

        logger.debug("Registering monitoring event handlers")
        from sodamachine.infrastructure.monitoring.event_handlers import register

        register(get_event_bus())

        _BOOTSTRAPPED = True
        logger.info("SodaMachine bootstrap completed successfully")


def is_bootstrapped() -> bool:
    """Check if bootstrap has been completed."""
    return _BOOTSTRAPPED


def reset_bootstrap_state() -> None:
    """Reset bootstrap state and the global event bus.

    This should only be used in tests to reset the global state.
    """
    global _BOOTSTRAPPED, _EVENT_BUS
    with _BOOTSTRAP_LOCK:
        _BOOTSTRAPPED = False
        _EVENT_BUS = None
    logger.debug("Bootstrap state reset for testing")


def get_event_bus() -> "IEventBus":
    """Get the global event bus instance.

    Returns a singleton instance of the event bus that can be used throughout
    the application. The event bus is created lazily on first access.
    """
    global _EVENT_BUS
    if _EVENT_BUS is None:
        from sodamachine.infrastructure.messaging.in_memory_bus import InMemoryEventBus

        _EVENT_BUS = InMemoryEventBus()
    return _EVENT_BUS


@dataclass
class Application:
    """The services of one running process and the infrastructure they share."""

    repository: InMemorySodaMachineRepository
    publisher: InMemoryEventPublisher
    locks: MachineLocks = field(default_factory=MachineLocks)

    @property
    def customer(self) -> CustomerService:
        return CustomerService(self.repository, self.publisher, self.locks)

    @property
    def operator(self) -> OperatorService:
        return OperatorService(self.repository, self.publisher, self.locks)


def build_application(event_bus: Optional["IEventBus"] = None) -> Application:
    """Create services backed by a fresh in-memory repository.

    Events are forwarded to ``event_bus``, or to the global bus when none is
    given.
    """
    bus = event_bus if event_bus is not None else get_event_bus()
    return Application(
        repository=InMemorySodaMachineRepository(),
        publisher=InMemoryEventPublisher(bus),
    )


async def seed_machine(app: Application, config: "MachineConfig") -> "SodaMachineId":
    """Store the machine described by ``config`` and return its id."""
    machine = config.build_machine()
    await app.repository.create(machine)
    logger.info(f"Seeded soda machine {machine.id} with {machine.slot_count} slots")
    return machine.id
