"""Config discovery, defaults, validation and environment building."""

from __future__ import annotations

import copy
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pipeforge.environment import Environment
from pipeforge.utils import deep_merge, is_identifier, load_json, save_json

logger = logging.getLogger(__name__)

CONFIG_DIR = ".pipeforge"
CONFIG_FILE = "config.json"
OUTPUT_FORMATS = ("table", "json")

DEFAULT_CONFIG: dict = {
    "version": 1,
    "variables": {},
    "inherit_environment": False,
    "output": "table",
    "cases_file": None,
}


def get_config_path(start_dir: Path | None = None) -> Path:
    """Find .pipeforge/config.json by walking up from start_dir."""
    search = start_dir or Path.cwd()
    for d in [search, *search.parents]:
        candidate = d / CONFIG_DIR / CONFIG_FILE
        if candidate.exists():
            return candidate
    return search / CONFIG_DIR / CONFIG_FILE


def load_config(start_dir: Path | None = None) -> dict:
    """Load the nearest config, merged over the defaults."""
    config_path = get_config_path(start_dir)
    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)
    user_config = load_json(config_path)
    if not user_config:
        logger.warning("Config file %s is empty or unreadable, using defaults.", config_path)
    return deep_merge(copy.deepcopy(DEFAULT_CONFIG), user_config)


def save_config(config: dict, target_dir: Path | None = None) -> Path:
    config_path = (target_dir or Path.cwd()) / CONFIG_DIR / CONFIG_FILE
    save_json(config_path, config)
    return config_path


def validate_config(config: dict) -> list[str]:
    """Validate config, returning a list of error messages (empty if valid)."""
    errors: list[str] = []
    variables = config.get("variables", {})
    if not isinstance(variables, dict):
        errors.append("'variables' must be an object")
    else:
        for name, value in variables.items():
            if not is_identifier(name):
                errors.append(f"Variable name '{name}' is not a valid identifier")
            if not isinstance(value, str):
                errors.append(f"Variable '{name}' must be a string")
    if config.get("output", "table") not in OUTPUT_FORMATS:
        errors.append(
            f"Invalid output '{config.get('output')}', expected one of: {', '.join(OUTPUT_FORMATS)}"
        )
    if not isinstance(config.get("inherit_environment", False), bool):
        errors.append("'inherit_environment' must be true or false")
    return errors


def build_environment(config: dict, overrides: Mapping[str, str] | None = None) -> Environment:
    """Create the Environment used for expansion.

    Precedence, lowest first: the process environment (only when
    ``inherit_environment`` is set), config ``variables``, then overrides.
    """
    variables: dict[str, str] = {}
    if config.get("inherit_environment"):
        variables.update(os.environ)
    variables.update(config.get("variables") or {})
    variables.update(overrides or {})
    return Environment(variables)
