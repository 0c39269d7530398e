# SPDX-License-Identifier: Apache-2.0
"""Monitoring infrastructure for SodaMachine."""

from .event_handlers import register

__all__ = ["register"]
