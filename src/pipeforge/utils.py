"""JSON file helpers and NAME=VALUE parsing."""

from __future__ import annotations

import json
import re
from pathlib import Path

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_identifier(name: str) -> bool:
    """True if ``name`` is a valid variable name."""
    return bool(IDENTIFIER_RE.match(name))


def parse_assignment(text: str) -> tuple[str, str] | None:
    """Split ``NAME=VALUE`` into its parts.

    Returns None when there is no ``=`` or the name is not an identifier.
    The value may be empty and may itself contain ``=``.
    """
    name, sep, value = text.partition("=")
    if not sep or not is_identifier(name):
        return None
    return name, value


def load_json(path: Path) -> dict:
    """Load a JSON object from file, returning empty dict if missing or malformed."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def save_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
