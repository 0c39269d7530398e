# SPDX-License-Identifier: Apache-2.0
"""One-shot machine commands: status, list and buy."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer

from sodamachine.application.commands import BuySodaCommand, InsertMoneyCommand
from sodamachine.domain.aggregates import SodaMachineError
from sodamachine.domain.entities import SlotId

from .common import config_option, parse_amount, start_machine


def status(config: Optional[Path] = config_option()):
    """Show the machine status and every slot."""
    try:
        asyncio.run(_status(config))
    except Exception as e:
        print(f"❌ {e}")
        raise typer.Exit(1) from e


async def _status(config: Optional[Path]) -> None:
    app, machine_id = await start_machine(config)
    print(await app.operator.get_machine_status(machine_id))

    machine = await app.repository.get_by_id(machine_id)
    for slot in machine.slots:
        print(f"  {slot}")


def list_sodas(config: Optional[Path] = config_option()):
    """List the sodas that can be bought right now."""
    try:
        asyncio.run(_list_sodas(config))
    except Exception as e:
        print(f"❌ {e}")
        raise typer.Exit(1) from e


async def _list_sodas(config: Optional[Path]) -> None:
    app, machine_id = await start_machine(config)
    sodas = await app.customer.list_available_sodas(machine_id)
    if not sodas:
        print("No sodas available in this machine.")
        return

    print("Available Sodas:")
    for soda in sodas:
        print(f"  Slot {soda.slot_id}: {soda.soda_name} - ${soda.price}")


def buy(
    slot: int = typer.Argument(..., help="Slot to buy from"),
    insert: List[str] = typer.Option(
        ..., "--insert", "-i", help="Amount to insert, e.g. 2.00 (repeatable)"
    ),
    config: Optional[Path] = config_option(),
):
    """Insert money and buy a soda.

    Examples:
        sodamachine buy 1 --insert 1.00 --insert 0.25
        sodamachine buy 1 -i 2 --config machine.yaml
    """
    try:
        asyncio.run(_buy(config, slot, insert))
    except Exception as e:
        print(f"❌ {e}")
        raise typer.Exit(1) from e


async def _buy(config: Optional[Path], slot: int, insert: List[str]) -> None:
    amounts = [parse_amount(text) for text in insert]
    slot_id = SlotId(slot)

    app, machine_id = await start_machine(config)
    customer = app.customer

    inserted = False
    try:
        for amount in amounts:
            event = await customer.insert_money(InsertMoneyCommand(machine_id, amount))
            inserted = True
            print(f"💵 Inserted {amount} (balance {event.total_inserted})")

        dispensed = await customer.buy_soda(BuySodaCommand(machine_id, slot_id))
    except SodaMachineError:
        if inserted:
            returned = await customer.request_money_back(machine_id)
            print(f"💰 Returned {returned}")
        raise

    print(f"🥤 Dispensed {dispensed.soda.description()} from slot {dispensed.slot_id}")
    if dispensed.change.is_positive:
        print(f"💰 Change: {dispensed.change}")
