"""
=======================
Configuration Utilities
=======================

A set of functions for building the layered configuration that controls how
streams are seeded and how much is logged.

"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from layered_config_tree import ConfigurationError, LayeredConfigTree

from mwcrandom.engine.manager import StreamManager

CONFIGURATION_LAYERS = ["base", "user_configs", "override"]

DEFAULT_CONFIGURATION: dict[str, Any] = {
    **StreamManager.CONFIGURATION_DEFAULTS,
    "logging": {
        "verbosity": 0,
        "long_format": True,
    },
}


def build_configuration(
    overrides: dict[str, Any] | str | Path | None = None,
) -> LayeredConfigTree:
    """Builds the configuration tree.

    Defaults go in the ``base`` layer, ``~/mwcrandom.yaml`` (if it exists) in
    the ``user_configs`` layer, and ``overrides`` in the ``override`` layer.

    Parameters
    ----------
    overrides
        A dictionary of overrides or the path to a yaml file containing them.

    Returns
    -------
        The configuration.
    """
    configuration = LayeredConfigTree(layers=CONFIGURATION_LAYERS)
    configuration.update(DEFAULT_CONFIGURATION, layer="base", source="mwcrandom_defaults")

    user_config_path = Path("~/mwcrandom.yaml").expanduser()
    if user_config_path.exists():
        configuration.update(
            load_configuration_file(user_config_path),
            layer="user_configs",
            source=str(user_config_path),
        )

    if isinstance(overrides, (str, Path)):
        configuration.update(
            load_configuration_file(overrides), layer="override", source=str(overrides)
        )
    elif overrides:
        configuration.update(overrides, layer="override", source="user_supplied_args")

    return configuration


def load_configuration_file(file_path: str | Path) -> dict[str, Any]:
    """Validates and loads a yaml configuration file."""
    validate_configuration_file(file_path)
    with Path(file_path).open() as f:
        return yaml.safe_load(f) or {}


def validate_configuration_file(file_path: str | Path) -> None:
    """Ensures the provided file is a yaml file with known top level keys."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise ConfigurationError(
            "If you provide a configuration file, it must be a file. "
            f"You provided {str(file_path)}",
            value_name=None,
        )

    if file_path.suffix not in [".yaml", ".yml"]:
        raise ConfigurationError(
            f"Configuration files must be in a yaml format. You provided {file_path.suffix}",
            value_name=None,
        )

    with file_path.open() as f:
        raw_config = yaml.safe_load(f) or {}
    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            f"Configuration file {str(file_path)} must contain a mapping.", value_name=None
        )
    top_keys = set(raw_config.keys())
    valid_keys = set(DEFAULT_CONFIGURATION.keys())
    if not top_keys <= valid_keys:
        raise ConfigurationError(
            f"Configuration contains additional top level "
            f"keys {top_keys.difference(valid_keys)}.",
            value_name=None,
        )
