# SPDX-License-Identifier: Apache-2.0
"""Tests for the machine configuration model and YAML loader."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from sodamachine.config import (
    ConfigVersionError,
    MachineConfig,
    SlotConfig,
    SodaConfig,
    default_config,
    load_config,
)
from sodamachine.domain.value_objects import Money, SodaFlavor, SodaSize

VALID_YAML = """
config_version: "1"
machine-id: 2
max-slots: 3
slots:
  - id: 1
    capacity: 10
    quantity: 4
    soda:
      name: Root Beer Float
      flavor: root beer
      size: large
      price: 1.75
      caffeinated: true
  - id: 2
    capacity: 5
    enabled: false
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "machine.yaml"
    path.write_text(content)
    return path


class TestSodaConfig:
    def test_parses_flavor_size_and_price(self):
        config = SodaConfig(name="Sprite", flavor="lemon-lime", size="s", price="1.00")

        assert config.flavor is SodaFlavor.LEMON_LIME
        assert config.size is SodaSize.SMALL
        assert config.price == Decimal("1.00")

    def test_to_soda(self):
        soda = SodaConfig(name=" Cola ", flavor="cola", price="1.25", diet=True).to_soda()

        assert soda.name == "Cola"
        assert soda.price == Money.from_cents(125)
        assert soda.is_diet

    @pytest.mark.parametrize(
        "overrides",
        [
            {"flavor": "kiwi"},
            {"size": "huge"},
            {"price": "0"},
            {"price": "1.255"},
            {"name": "   "},
            {"name": "x" * 51},
            {"sugar": True},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        data = {"name": "Cola", "flavor": "cola", "price": "1.25", **overrides}

        with pytest.raises(ValidationError):
            SodaConfig(**data)


class TestMachineConfig:
    def test_defaults(self):
        config = MachineConfig()

        assert config.machine_id == 1
        assert config.max_slots == 5
        assert config.slots == []

    def test_quantity_cannot_exceed_capacity(self):
        with pytest.raises(ValidationError, match="exceeds capacity"):
            SlotConfig(id=1, capacity=2, quantity=3, soda={"name": "Cola", "flavor": "cola", "price": "1"})

    def test_quantity_requires_soda(self):
        with pytest.raises(ValidationError, match="no soda configured"):
            SlotConfig(id=1, capacity=2, quantity=1)

    def test_duplicate_slot_ids_rejected(self):
        with pytest.raises(ValidationError, match="duplicate slot id"):
            MachineConfig(slots=[SlotConfig(id=1, capacity=1), SlotConfig(id=1, capacity=2)])

    def test_more_slots_than_max_rejected(self):
        with pytest.raises(ValidationError, match="max_slots"):
            MachineConfig(max_slots=1, slots=[SlotConfig(id=1, capacity=1), SlotConfig(id=2, capacity=1)])

    def test_default_config_builds_demo_machine(self):
        machine = default_config().build_machine()

        assert machine.slot_count == 1
        assert machine.max_slots == 5
        slot = machine.get_slot(1)
        assert slot.capacity == 10
        assert slot.quantity == 3
        assert slot.soda.price == Money.from_cents(125)
        assert machine.get_uncommitted_events() == []

    def test_build_machine_applies_disabled_flags(self):
        config = MachineConfig(operational=False, slots=[SlotConfig(id=4, capacity=3, enabled=False)])

        machine = config.build_machine()

        assert not machine.is_operational
        assert not machine.get_slot(4).is_enabled


class TestLoadConfig:
    def test_load_valid_yaml(self, tmp_path):
        config = load_config(_write(tmp_path, VALID_YAML))

        assert config.machine_id == 2
        assert config.max_slots == 3
        assert config.slots[0].soda.flavor is SodaFlavor.ROOT_BEER
        assert config.slots[0].soda.price == Decimal("1.75")
        assert config.slots[1].enabled is False

    def test_environment_variables_are_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SODA_MAX_SLOTS", "4")
        content = 'config_version: "1"\nmax_slots: ${SODA_MAX_SLOTS}\n'

        assert load_config(_write(tmp_path, content)).max_slots == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_missing_version(self, tmp_path):
        with pytest.raises(ConfigVersionError, match="config_version missing"):
            load_config(_write(tmp_path, "machine_id: 1\n"))

    def test_too_old_version(self, tmp_path):
        with pytest.raises(ConfigVersionError, match="too old"):
            load_config(_write(tmp_path, 'config_version: "0"\n'))

    def test_newer_version_warns(self, tmp_path):
        with pytest.warns(UserWarning, match="config_version"):
            config = load_config(_write(tmp_path, 'config_version: "2"\n'))

        assert config.config_version == "2"

    def test_non_mapping_root(self, tmp_path):
        with pytest.raises(ValueError, match="dictionary at the root"):
            load_config(_write(tmp_path, "- 1\n- 2\n"))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(_write(tmp_path, "config_version: [\n"))

    def test_unknown_key_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid configuration"):
            load_config(_write(tmp_path, 'config_version: "1"\ncolour: red\n'))

    def test_numeric_version_accepted(self, tmp_path):
        assert load_config(_write(tmp_path, "config_version: 1\n")).config_version == "1"
