"""Layered configuration for the completion client.

Loads and merges configuration from:
1. Default settings (built-in)
2. Optional YAML config file
3. Explicit overrides passed by the caller

Credentials are never read from configuration; they are passed per call.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Optional, Union

import yaml

from .prompt import DEFAULT_PROMPT_TEMPLATE

DEFAULT_CONFIG: dict = {
    "completion": {
        "endpoint": "https://api.openai.com/v1/completions",
        "model": "text-davinci-003",
        "prompt_template": DEFAULT_PROMPT_TEMPLATE,
        "timeout_seconds": None,
        "parameters": {
            "temperature": 0.9,
            "top_p": 1,
            "frequency_penalty": 0.0,
            "presence_penalty": 0.6,
            "stop": ["\n"],
        },
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = {}
    for key in base:
        result[key] = base[key]
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def load_config_file(config_path: Union[str, Path]) -> dict:
    """Load a YAML config file. Missing or unreadable files yield ``{}``."""
    path = Path(config_path)
    if not path.exists():
        return {}
    try:
        content = path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
        loaded = yaml.safe_load(content)
    except (OSError, yaml.YAMLError):
        return {}
    return loaded if isinstance(loaded, dict) else {}


def get_effective_config(
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[dict] = None,
) -> dict:
    """Get the fully resolved configuration."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        file_config = load_config_file(config_path)
        if file_config:
            config = deep_merge(config, file_config)

    if overrides:
        config = deep_merge(config, overrides)

    return config


def completion_settings(section: Optional[dict] = None) -> dict:
    """Resolve the ``completion`` section, filling gaps from the defaults."""
    defaults = copy.deepcopy(DEFAULT_CONFIG["completion"])
    if not section:
        return defaults
    return deep_merge(defaults, section)
