"""
spectable.exceptions - Error types.

Scanning and reconciliation never raise; these are only used by the
configuration layer and surfaced by the CLI.
"""


class SpectableError(Exception):
    """Base class for spectable errors."""


class ConfigError(SpectableError):
    """Configuration file or override could not be parsed."""
