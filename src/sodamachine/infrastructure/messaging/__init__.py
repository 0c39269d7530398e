# SPDX-License-Identifier: Apache-2.0
"""Infrastructure layer for messaging and event bus implementations.

This package contains concrete implementations for event buses and messaging
infrastructure, keeping these concerns separate from the domain layer.
"""

from __future__ import annotations

from .in_memory_bus import InMemoryEventBus

__all__ = ["InMemoryEventBus"]
