# SPDX-License-Identifier: Apache-2.0
"""Pydantic configuration model for seeding a soda machine."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from sodamachine.domain.aggregates import SodaMachine, SodaMachineId
from sodamachine.domain.entities import SlotId
from sodamachine.domain.value_objects import (
    MAX_SODA_NAME_LENGTH,
    Money,
    Soda,
    SodaFlavor,
    SodaSize,
)

# Configuration versioning constants
CURRENT_CONFIG_VERSION = "1"
MIN_SUPPORTED_VERSION = "1"


class SodaConfig(BaseModel):
    """A soda type loaded into a slot."""

    name: str = Field(..., min_length=1, max_length=MAX_SODA_NAME_LENGTH)
    flavor: SodaFlavor = Field(..., description="Flavor name, e.g. 'cola' or 'root beer'")
    size: SodaSize = Field(default=SodaSize.MEDIUM, description="small, medium, large or x-large")
    price: Decimal = Field(..., gt=0, decimal_places=2, description="Price in dollars")
    diet: bool = False
    caffeinated: bool = False

    class Config:
        extra = "forbid"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("soda name cannot be blank")
        return v

    @field_validator("flavor", mode="before")
    @classmethod
    def parse_flavor(cls, v: Any) -> Any:
        if isinstance(v, str):
            flavor = SodaFlavor.from_string(v)
            if flavor is None:
                valid = ", ".join(f.value for f in SodaFlavor)
                raise ValueError(f"unknown flavor {v!r}, expected one of: {valid}")
            return flavor
        return v

    @field_validator("size", mode="before")
    @classmethod
    def parse_size(cls, v: Any) -> Any:
        if isinstance(v, str):
            size = SodaSize.from_string(v)
            if size is None:
                raise ValueError(f"unknown size {v!r}, expected small, medium, large or x-large")
            return size
        return v

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> Any:
        # YAML reads 1.25 as a float
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    def to_soda(self) -> Soda:
        return Soda(
            name=self.name,
            flavor=self.flavor,
            size=self.size,
            price=Money.from_decimal(self.price),
            is_diet=self.diet,
            is_caffeinated=self.caffeinated,
        )


class SlotConfig(BaseModel):
    """Initial state of one slot."""

    id: int = Field(..., ge=0, description="Slot identifier")
    capacity: int = Field(..., ge=1, description="Maximum number of sodas")
    quantity: int = Field(default=0, ge=0, description="Sodas loaded at start-up")
    enabled: bool = True
    soda: Optional[SodaConfig] = None

    class Config:
        extra = "forbid"

    @model_validator(mode="after")
    def validate_quantity(self) -> "SlotConfig":
        if self.quantity > self.capacity:
            raise ValueError(
                f"slot {self.id}: quantity {self.quantity} exceeds capacity {self.capacity}"
            )
        if self.quantity > 0 and self.soda is None:
            raise ValueError(f"slot {self.id}: quantity given but no soda configured")
        return self


class MachineConfig(BaseModel):
    """Pydantic model for soda machine configuration.

    Loaded from YAML with snake_case or kebab-case field names, see
    ``sodamachine.config.load_config``.
    """

    config_version: str = Field(
        default=CURRENT_CONFIG_VERSION, description="Configuration schema version"
    )
    machine_id: int = Field(default=1, ge=0, description="Machine identifier")
    max_slots: int = Field(default=5, ge=1, description="Maximum number of slots")
    operational: bool = Field(default=True, description="Start in service")
    slots: List[SlotConfig] = Field(default_factory=list)

    class Config:
        extra = "forbid"

    @model_validator(mode="after")
    def validate_slots(self) -> "MachineConfig":
        if len(self.slots) > self.max_slots:
            raise ValueError(
                f"{len(self.slots)} slots configured but max_slots is {self.max_slots}"
            )
        seen = set()
        for slot in self.slots:
            if slot.id in seen:
                raise ValueError(f"duplicate slot id {slot.id}")
            seen.add(slot.id)
        return self

    def build_machine(self) -> SodaMachine:
        """Create a machine in the configured state.

        Seeding is not a business event, so the returned machine carries no
        uncommitted events.
        """
        machine = SodaMachine(SodaMachineId(self.machine_id), self.max_slots)
        for slot in self.slots:
            slot_id = SlotId(slot.id)
            machine.add_slot(slot_id, slot.capacity)
            if slot.soda is not None:
                machine.configure_slot(slot_id, slot.soda.to_soda())
            if slot.quantity:
                machine.refill_slot(slot_id, slot.quantity)
            if not slot.enabled:
                machine.disable_slot(slot_id)
        if not self.operational:
            machine.disable()

        machine.mark_events_committed()
        return machine


def default_config() -> MachineConfig:
    """Machine 1 with five slots and three Colas in slot 1."""
    return MachineConfig(
        machine_id=1,
        max_slots=5,
        slots=[
            SlotConfig(
                id=1,
                capacity=10,
                quantity=3,
                soda=SodaConfig(name="Cola", flavor="cola", size="medium", price="1.25"),
            )
        ],
    )
