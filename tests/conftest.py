# SPDX-License-Identifier: Apache-2.0
"""Shared test fixtures for the SodaMachine test suite.

FIXTURES PROVIDED:
- cola, orange_soda: Ready-made soda value objects
- machine: An empty operational machine with five slots
- stocked_machine: Machine with slot 1 holding ten $1.50 Colas
- repository, event_publisher, locks: Application infrastructure fakes
- customer_service, operator_service: Services sharing the fakes above
- reset_bootstrap: Clean global bootstrap/event bus state around a test
"""

from __future__ import annotations

import pytest

from sodamachine.application.services import CustomerService, MachineLocks, OperatorService
from sodamachine.domain.aggregates import SodaMachine, SodaMachineId
from sodamachine.domain.value_objects import Money, Soda, SodaFlavor, SodaSize
from tests.fakes.events import FakeEventPublisher
from tests.fakes.repositories import FakeSodaMachineRepository

MACHINE_ID = SodaMachineId(1)


def make_soda(
    name: str = "Cola",
    flavor: SodaFlavor = SodaFlavor.COLA,
    size: SodaSize = SodaSize.MEDIUM,
    cents: int = 150,
    **kwargs,
) -> Soda:
    """Create a valid soda with reasonable defaults."""
    return Soda(name, flavor, size, Money.from_cents(cents), **kwargs)


@pytest.fixture
def cola() -> Soda:
    return make_soda()


@pytest.fixture
def orange_soda() -> Soda:
    return make_soda(name="Fanta", flavor=SodaFlavor.ORANGE, size=SodaSize.SMALL, cents=100)


@pytest.fixture
def machine() -> SodaMachine:
    return SodaMachine(MACHINE_ID, max_slots=5)


@pytest.fixture
def stocked_machine(machine, cola) -> SodaMachine:
    """Machine with ten $1.50 Colas in slot 1 and no pending events."""
    machine.add_slot(1, capacity=10)
    machine.configure_slot(1, cola)
    machine.refill_slot(1, 10)
    machine.mark_events_committed()
    return machine


@pytest.fixture
def repository() -> FakeSodaMachineRepository:
    return FakeSodaMachineRepository()


@pytest.fixture
def event_publisher() -> FakeEventPublisher:
    return FakeEventPublisher()


@pytest.fixture
def locks() -> MachineLocks:
    return MachineLocks()


@pytest.fixture
def customer_service(repository, event_publisher, locks) -> CustomerService:
    return CustomerService(repository, event_publisher, locks)


@pytest.fixture
def operator_service(repository, event_publisher, locks) -> OperatorService:
    return OperatorService(repository, event_publisher, locks)


@pytest.fixture
def reset_bootstrap():
    """Reset the global bootstrap state and event bus before and after a test."""
    from sodamachine.bootstrap import reset_bootstrap_state

    reset_bootstrap_state()
    yield
    reset_bootstrap_state()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as an integration test")
