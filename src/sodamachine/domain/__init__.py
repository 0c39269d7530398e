# SPDX-License-Identifier: Apache-2.0
"""Domain model package for SodaMachine.

This package contains the core domain models following Domain-Driven Design principles:
- Value Objects: Money, Soda and its flavor/size enums
- Entities: Slots holding stock of one soda type
- Aggregates: The SodaMachine consistency boundary
- Domain Events: Records of completed machine state changes

The domain layer is the heart of the application and should remain
independent of infrastructure concerns.
"""

from .aggregates import (
    AvailableSodas,
    InsufficientFundsError,
    InvalidAmountError,
    MachineNotOperationalError,
    MachineStatus,
    MoneyOperationError,
    SlotAlreadyExistsError,
    SlotNotFoundError,
    SlotOperationError,
    SodaMachine,
    SodaMachineError,
    SodaMachineId,
    TooManySlotsError,
)
from .entities import (
    Entity,
    InsufficientQuantityError,
    InvalidCapacityError,
    InvalidQuantityError,
    Slot,
    SlotCapacityExceededError,
    SlotDisabledError,
    SlotEmptyError,
    SlotError,
    SlotId,
    SlotNotConfiguredError,
)
from .events import (
    ChangeReturned,
    DomainEvent,
    IEventBus,
    IEventPublisher,
    MachineDisabled,
    MachineEnabled,
    MoneyInserted,
    MoneyReturned,
    SlotAdded,
    SlotConfigured,
    SlotDisabled,
    SlotEnabled,
    SlotRefilled,
    SlotRemoved,
    SodaDispensed,
)
from .value_objects import (
    InvalidMoneyAmountError,
    InvalidSodaNameError,
    InvalidSodaPriceError,
    Money,
    MoneyDivisionByZeroError,
    MoneyError,
    MoneyOverflowError,
    MoneyUnderflowError,
    Soda,
    SodaError,
    SodaFlavor,
    SodaSize,
)

__all__ = [
    # Base classes
    "Entity",
    "DomainEvent",
    "IEventBus",
    "IEventPublisher",
    # Value Objects
    "Money",
    "Soda",
    "SodaFlavor",
    "SodaSize",
    # Entities
    "Slot",
    "SlotId",
    # Aggregates
    "SodaMachine",
    "SodaMachineId",
    "MachineStatus",
    "AvailableSodas",
    # Events
    "MoneyInserted",
    "MoneyReturned",
    "SodaDispensed",
    "ChangeReturned",
    "SlotAdded",
    "SlotRemoved",
    "SlotConfigured",
    "SlotRefilled",
    "SlotEnabled",
    "SlotDisabled",
    "MachineEnabled",
    "MachineDisabled",
    # Errors
    "MoneyError",
    "InvalidMoneyAmountError",
    "MoneyOverflowError",
    "MoneyUnderflowError",
    "MoneyDivisionByZeroError",
    "SodaError",
    "InvalidSodaNameError",
    "InvalidSodaPriceError",
    "SlotError",
    "InvalidCapacityError",
    "InvalidQuantityError",
    "SlotNotConfiguredError",
    "SlotEmptyError",
    "SlotDisabledError",
    "SlotCapacityExceededError",
    "InsufficientQuantityError",
    "SodaMachineError",
    "SlotNotFoundError",
    "SlotAlreadyExistsError",
    "TooManySlotsError",
    "InsufficientFundsError",
    "MachineNotOperationalError",
    "InvalidAmountError",
    "SlotOperationError",
    "MoneyOperationError",
]
