# SPDX-License-Identifier: Apache-2.0
"""Configuration management for SodaMachine."""

from .loader import ConfigVersionError, load_config
from .machine import (
    CURRENT_CONFIG_VERSION,
    MIN_SUPPORTED_VERSION,
    MachineConfig,
    SlotConfig,
    SodaConfig,
    default_config,
)

__all__ = [
    "MachineConfig",
    "SlotConfig",
    "SodaConfig",
    "CURRENT_CONFIG_VERSION",
    "MIN_SUPPORTED_VERSION",
    "default_config",
    "load_config",
    "ConfigVersionError",
]
