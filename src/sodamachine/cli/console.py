# SPDX-License-Identifier: Apache-2.0
"""Interactive console for customers and operators."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer

from sodamachine.application.commands import (
    BuySodaCommand,
    ConfigureSlotCommand,
    CreateMachineCommand,
    InsertMoneyCommand,
    RefillSlotCommand,
)
from sodamachine.bootstrap import Application
from sodamachine.domain.aggregates import SodaMachineError, SodaMachineId
from sodamachine.domain.entities import SlotId
from sodamachine.domain.repositories import RepositoryError
from sodamachine.domain.value_objects import Soda, SodaFlavor, SodaSize

from .common import config_option, parse_amount, start_machine

DEFAULT_NEW_MACHINE_SLOTS = 10


def console(config: Optional[Path] = config_option()):
    """Run the interactive soda console."""
    asyncio.run(_console(config))


async def _console(config: Optional[Path]) -> None:
    try:
        app, machine_id = await start_machine(config)
    except Exception as e:
        print(f"❌ {e}")
        raise typer.Exit(1) from e

    await _main_menu(app, machine_id)


async def _main_menu(app: Application, machine_id: SodaMachineId) -> None:
    while True:
        print("\nWelcome to Soda Console!")
        print("1. Soda Consumer")
        print("2. Soda Operator")
        print("3. Exit")
        choice = typer.prompt("Select your role").strip()

        if choice == "1":
            await _run_action(_customer_menu, app, machine_id)
        elif choice == "2":
            await _run_action(_operator_menu, app, machine_id)
        elif choice == "3":
            print("Goodbye!")
            return
        else:
            print("Invalid option. Please try again.")


async def _run_action(menu, app: Application, machine_id: SodaMachineId) -> None:
    try:
        await menu(app, machine_id)
    except (SodaMachineError, RepositoryError, ValueError) as e:
        print(f"❌ {e}")


def _prompt_machine_id(default: SodaMachineId) -> SodaMachineId:
    return SodaMachineId(typer.prompt("Soda machine id", default=default.value, type=int))


def _prompt_slot_id() -> SlotId:
    return SlotId(typer.prompt("Slot id", type=int))


async def _customer_menu(app: Application, machine_id: SodaMachineId) -> None:
    print("\n--- Soda Consumer ---")
    print("1. Available Sodas")
    print("2. Insert Money")
    print("3. Buy Soda")
    print("4. Request Money Back")
    choice = typer.prompt("Select an option").strip()
    customer = app.customer

    if choice == "1":
        sodas = await customer.list_available_sodas(_prompt_machine_id(machine_id))
        if not sodas:
            print("No sodas available in this machine.")
        for soda in sodas:
            print(f"Slot {soda.slot_id}: {soda.soda_name} - ${soda.price}")
    elif choice == "2":
        target = _prompt_machine_id(machine_id)
        amount = parse_amount(typer.prompt("Amount to insert (e.g. 2.50)"))
        event = await customer.insert_money(InsertMoneyCommand(target, amount))
        print(f"💵 Inserted {amount} (balance {event.total_inserted})")
    elif choice == "3":
        target = _prompt_machine_id(machine_id)
        event = await customer.buy_soda(BuySodaCommand(target, _prompt_slot_id()))
        print(f"🥤 Enjoy your {event.soda.name}!")
        if event.change.is_positive:
            print(f"💰 Change: {event.change}")
    elif choice == "4":
        returned = await customer.request_money_back(_prompt_machine_id(machine_id))
        print(f"💰 Returned {returned}")
    else:
        print("Invalid option. Please try again.")


async def _operator_menu(app: Application, machine_id: SodaMachineId) -> None:
    print("\n--- Soda Operator ---")
    print("1. Create Soda Machine")
    print("2. View Soda Machine")
    print("3. Configure Slot")
    print("4. Refill Slot")
    print("5. Enable/Disable Soda Machine")
    choice = typer.prompt("Select an option").strip()
    operator = app.operator

    if choice == "1":
        new_id = SodaMachineId(typer.prompt("New soda machine id", type=int))
        max_slots = typer.prompt("Maximum slots", default=DEFAULT_NEW_MACHINE_SLOTS, type=int)
        await operator.create_new_machine(CreateMachineCommand(new_id, max_slots))
        print(f"✅ Soda machine {new_id} created")
    elif choice == "2":
        print(await operator.get_machine_status(_prompt_machine_id(machine_id)))
    elif choice == "3":
        target = _prompt_machine_id(machine_id)
        slot_id = _prompt_slot_id()
        capacity = typer.prompt("Slot capacity", type=int)
        soda = _prompt_soda()
        await operator.configure_slot(ConfigureSlotCommand(target, slot_id, capacity, soda))
        print(f"✅ Slot {slot_id} configured with {soda.description()}")
    elif choice == "4":
        target = _prompt_machine_id(machine_id)
        slot_id = _prompt_slot_id()
        quantity = typer.prompt("Quantity to add", type=int)
        event = await operator.refill_slot(RefillSlotCommand(target, slot_id, quantity))
        print(f"✅ Slot {slot_id} now holds {event.quantity} sodas")
    elif choice == "5":
        target = _prompt_machine_id(machine_id)
        enabled = typer.confirm("Put the machine in service?", default=True)
        await operator.set_machine_enabled(target, enabled)
        print(f"✅ Machine {target} {'enabled' if enabled else 'disabled'}")
    else:
        print("Invalid option. Please try again.")


def _prompt_soda() -> Soda:
    name = typer.prompt("Soda name")

    flavor_text = typer.prompt("Soda flavor (e.g. Cola, Orange, Lemon-Lime)")
    flavor = SodaFlavor.from_string(flavor_text)
    if flavor is None:
        raise ValueError(f"Unknown flavor: {flavor_text}")

    size_text = typer.prompt("Soda size (Small, Medium, Large, XLarge)", default="Medium")
    size = SodaSize.from_string(size_text)
    if size is None:
        raise ValueError(f"Unknown size: {size_text}")

    price = parse_amount(typer.prompt("Soda price (e.g. 1.25)"))
    is_diet = typer.confirm("Diet?", default=False)
    is_caffeinated = typer.confirm("Caffeinated?", default=False)
    return Soda(name, flavor, size, price, is_diet, is_caffeinated)
