# SPDX-License-Identifier: Apache-2.0
"""Application layer for SodaMachine.

Application services coordinate the domain model, the repository and the
event publisher for customer and operator use cases.
"""

from .commands import (
    BuySodaCommand,
    ConfigureSlotCommand,
    CreateMachineCommand,
    InsertMoneyCommand,
    RefillSlotCommand,
)
from .services import AvailableSodaDTO, CustomerService, MachineLocks, OperatorService

__all__ = [
    "AvailableSodaDTO",
    "BuySodaCommand",
    "ConfigureSlotCommand",
    "CreateMachineCommand",
    "CustomerService",
    "InsertMoneyCommand",
    "MachineLocks",
    "OperatorService",
    "RefillSlotCommand",
]
