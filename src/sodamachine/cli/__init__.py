# SPDX-License-Identifier: Apache-2.0
"""SodaMachine CLI package with modular command structure."""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    add_completion=False,
    help="Soda vending machine commands: check stock, buy sodas and run the interactive console.",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Soda vending machine commands."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


from .console import console  # noqa: E402
from .machine import buy, list_sodas, status  # noqa: E402

app.command()(status)
app.command(name="list")(list_sodas)
app.command()(buy)
app.command()(console)


if __name__ == "__main__":
    app()
