"""
YAML configuration loading.

The config file is a flat mapping read with yaml.safe_load; consumers pull
keys with config.get(key, default) so every key is optional.
"""

from __future__ import annotations

import pathlib
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = pathlib.Path("config/autotetris.yaml")


def load_config(config_path: str | pathlib.Path = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs. An empty file gives {}.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the document is not a mapping.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        config = yaml.safe_load(f)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return config
