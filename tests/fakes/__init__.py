# SPDX-License-Identifier: Apache-2.0
"""Fake implementations for testing Domain-Driven Design patterns."""

from __future__ import annotations

from .events import FakeEventPublisher
from .repositories import FakeSodaMachineRepository

__all__ = [
    "FakeEventPublisher",
    "FakeSodaMachineRepository",
]
