# SPDX-License-Identifier: Apache-2.0
"""Infrastructure package for SodaMachine.

Contains concrete implementations of domain interfaces including
repositories, event distribution and monitoring.
"""

from __future__ import annotations
