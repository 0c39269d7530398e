# SPDX-License-Identifier: Apache-2.0
"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import typer

from sodamachine.bootstrap import Application, bootstrap, build_application, seed_machine
from sodamachine.config import default_config, load_config
from sodamachine.domain.aggregates import SodaMachineId
from sodamachine.domain.value_objects import Money

CONFIG_OPTION_HELP = "YAML machine configuration (defaults to the built-in demo machine)"


def config_option() -> Optional[Path]:
    return typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP)


async def start_machine(config_path: Optional[Path]) -> Tuple[Application, SodaMachineId]:
    """Bootstrap the process and seed a fresh in-memory machine.

    Raises:
        FileNotFoundError: If the configuration file does not exist
        ValueError: If the configuration is invalid
    """
    config = load_config(config_path) if config_path is not None else default_config()
    bootstrap()
    application = build_application()
    machine_id = await seed_machine(application, config)
    return application, machine_id


def parse_amount(text: str) -> Money:
    """Parse a dollar amount such as ``2``, ``2.5`` or ``$2.50``."""
    return Money.from_decimal(text.strip().lstrip("$"))
