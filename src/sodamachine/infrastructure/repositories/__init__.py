# SPDX-License-Identifier: Apache-2.0
"""Repository implementations for SodaMachine."""

from .in_memory import InMemorySodaMachineRepository

__all__ = ["InMemorySodaMachineRepository"]
