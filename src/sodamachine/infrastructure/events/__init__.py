# SPDX-License-Identifier: Apache-2.0
"""Infrastructure events module for SodaMachine.

This module contains concrete implementations of event handling infrastructure.
"""

from .publishers import InMemoryEventPublisher

__all__ = [
    "InMemoryEventPublisher",
]
