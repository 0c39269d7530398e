# SPDX-License-Identifier: Apache-2.0
"""Prometheus metrics for SodaMachine.

Metrics are updated by the monitoring event handlers, never by the domain.
Money amounts are recorded in cents.
"""

from __future__ import annotations

from prometheus_client import REGISTRY, Counter, Gauge, generate_latest

SODAS_DISPENSED = Counter(
    "sm_sodas_dispensed_total", "Sodas dispensed", ["machine", "slot", "soda"]
)
REVENUE_CENTS = Counter("sm_revenue_cents_total", "Revenue collected in cents", ["machine"])
MONEY_INSERTED_CENTS = Counter(
    "sm_money_inserted_cents_total", "Money inserted by customers in cents", ["machine"]
)
MONEY_RETURNED_CENTS = Counter(
    "sm_money_returned_cents_total", "Inserted money handed back on request in cents", ["machine"]
)
CHANGE_RETURNED_CENTS = Counter(
    "sm_change_returned_cents_total", "Change handed back after sales in cents", ["machine"]
)
UNITS_REFILLED = Counter("sm_units_refilled_total", "Sodas loaded into slots", ["machine", "slot"])
SLOT_QUANTITY = Gauge("sm_slot_quantity", "Sodas currently in a slot", ["machine", "slot"])
MACHINE_OPERATIONAL = Gauge(
    "sm_machine_operational", "1 when the machine is in service, 0 otherwise", ["machine"]
)


def metrics_text() -> str:
    """Render all registered metrics in the Prometheus text format."""
    return generate_latest(REGISTRY).decode("utf-8")


__all__ = [
    "SODAS_DISPENSED",
    "REVENUE_CENTS",
    "MONEY_INSERTED_CENTS",
    "MONEY_RETURNED_CENTS",
    "CHANGE_RETURNED_CENTS",
    "UNITS_REFILLED",
    "SLOT_QUANTITY",
    "MACHINE_OPERATIONAL",
    "metrics_text",
]
