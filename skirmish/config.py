# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Configuration loading.

Settings come from a YAML file shaped like configs/game_config.yaml.
Keys missing from the file fall back to DEFAULT_CONFIG.
"""

import copy
import logging
from typing import Dict, Optional

import yaml

DEFAULT_CONFIG: Dict = {
    "game": {
        "computer_delay": 1.0,
        "seed": None,
    },
    "logging": {
        "level": "INFO",
    },
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def load_config(config_path: Optional[str] = None) -> Dict:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to the YAML file. Defaults only if None.

    Returns:
        Configuration dictionary with every DEFAULT_CONFIG key present.

    Raises:
        ValueError: If the file does not hold a mapping.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is None:
        return config

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f)

    if loaded is None:
        return config
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    for section, defaults in config.items():
        overrides = loaded.get(section) or {}
        if not isinstance(overrides, dict):
            raise ValueError(f"Config section '{section}' must be a mapping")
        for key in defaults:
            if key in overrides:
                defaults[key] = overrides[key]
    return config


def setup_logging(config: Dict) -> None:
    """Configure root logging from the 'logging' section."""
    logging.basicConfig(
        level=getattr(logging, str(config['logging']['level']).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
