# SPDX-License-Identifier: Apache-2.0
"""SodaMachine package initialization."""

__version__ = "0.1.0"

__all__ = [
    "application",
    "cli",
    "config",
    "domain",
    "metrics",
    "__version__",
]
