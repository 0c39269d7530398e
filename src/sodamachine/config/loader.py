# SPDX-License-Identifier: Apache-2.0
"""Centralized configuration loader with version validation."""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError

from .machine import CURRENT_CONFIG_VERSION, MIN_SUPPORTED_VERSION, MachineConfig

PathLike = Union[str, Path]


class ConfigVersionError(RuntimeError):
    """Error when configuration version is incompatible."""
    pass


def load_config(path: PathLike) -> MachineConfig:
    """Load and validate configuration from YAML file with version checking.

    Args:
        path: Path to YAML configuration file

    Returns:
        MachineConfig instance

    Raises:
        ConfigVersionError: If config version is missing, too old, or incompatible
        FileNotFoundError: If the YAML file doesn't exist
        ValueError: If the YAML is invalid or contains invalid configuration
    """
    yaml_path = Path(path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(yaml_path, "r") as f:
            yaml_content = f.read()

        # Expand environment variables
        expanded_content = os.path.expandvars(yaml_content)

        cfg_dict = yaml.safe_load(expanded_content)
        if not isinstance(cfg_dict, dict):
            raise ValueError("YAML file must contain a dictionary at the root level")

        normalized_data = _normalize_yaml_keys(cfg_dict)

        ver = str(normalized_data.get("config_version", ""))
        if not ver:
            raise ConfigVersionError(
                "config_version missing. Add `config_version: \"1\"` to your YAML."
            )

        if ver < MIN_SUPPORTED_VERSION:
            raise ConfigVersionError(
                f"Config version {ver} is too old. "
                f"Minimum supported is {MIN_SUPPORTED_VERSION}. "
                "Please upgrade your configuration."
            )

        if ver > CURRENT_CONFIG_VERSION:
            warnings.warn(
                f"This binary understands config_version {CURRENT_CONFIG_VERSION}, "
                f"but file is {ver}. Attempting best-effort parse.",
                UserWarning,
                stacklevel=2,
            )
        normalized_data["config_version"] = ver

        return MachineConfig(**normalized_data)

    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in configuration file: {e}") from e
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {path}: {e}") from e


def _normalize_yaml_keys(data: Any) -> Any:
    """Normalize YAML keys from kebab-case to snake_case, recursively.

    Args:
        data: Raw YAML data

    Returns:
        The same structure with normalized dictionary keys
    """
    if isinstance(data, dict):
        return {
            (key.replace("-", "_") if isinstance(key, str) else key): _normalize_yaml_keys(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [_normalize_yaml_keys(item) for item in data]
    return data
