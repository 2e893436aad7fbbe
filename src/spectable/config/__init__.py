"""
spectable.config - Configuration loading and defaults
"""

from spectable.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from spectable.config.loader import (
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    load_config,
    merge_configs,
    parse_toml,
    parse_toml_document,
)
from spectable.config.sections import ResultsConfig, ScannerConfig

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "ResultsConfig",
    "ScannerConfig",
    "find_config_file",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
]
