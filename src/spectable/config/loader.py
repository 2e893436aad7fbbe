"""
spectable.config.loader - Locate, parse and merge configuration.

Configuration comes from three layers, later ones winning:
built-in defaults, an optional ``.spectable.toml`` file, and
``SPECTABLE_<SECTION>_<KEY>`` environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Optional

import tomlkit
from tomlkit.exceptions import ParseError

from spectable.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, ENV_PREFIX
from spectable.exceptions import ConfigError


def parse_toml_document(content: str) -> tomlkit.TOMLDocument:
    """Parse TOML text into a format-preserving tomlkit document.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        return tomlkit.parse(content)
    except ParseError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python dicts and lists."""
    return parse_toml_document(content).unwrap()


def find_config_file(start_path: Path) -> Optional[Path]:
    """
    Find the nearest config file, walking up from start_path.

    Args:
        start_path: Directory (or file) to start from

    Returns:
        Path to ``.spectable.toml``, or None if no ancestor has one
    """
    current = start_path.resolve()
    if current.is_file():
        current = current.parent

    for directory in [current, *current.parents]:
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two config dicts without mutating either.

    Nested tables are merged key by key; any other value in override
    replaces the one in base.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _try_parse_env_value(raw: str) -> Any:
    """Interpret an environment variable value.

    JSON arrays and objects, booleans (any case) and integers are
    converted; anything else, including malformed JSON, stays a string.
    """
    text = raw.strip()
    if text[:1] in ("[", "{"):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return raw
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return int(text)
    except ValueError:
        return raw


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply ``SPECTABLE_<SECTION>_<KEY>`` variables onto config (in place)."""
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        remainder = name[len(ENV_PREFIX) :].lower()
        if "_" not in remainder:
            continue
        section, key = remainder.split("_", 1)
        if not section or not key:
            continue
        table = config.setdefault(section, {})
        if not isinstance(table, dict):
            continue
        table[key] = _try_parse_env_value(raw)
    return config


def load_config(config_path: Optional[Path] = None, start_path: Optional[Path] = None) -> dict[str, Any]:
    """
    Load the effective configuration.

    Args:
        config_path: Explicit config file. When None, the nearest
            ``.spectable.toml`` above start_path (default: cwd) is used.
        start_path: Directory to search from when config_path is None

    Returns:
        Merged configuration dict

    Raises:
        ConfigError: If the config file cannot be read or parsed.
    """
    if config_path is None:
        config_path = find_config_file(start_path or Path.cwd())

    user: dict[str, Any] = {}
    if config_path is not None:
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e
        user = parse_toml(content)

    config = merge_configs(DEFAULT_CONFIG, user)
    return _apply_env_overrides(config)
