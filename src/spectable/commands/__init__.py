"""
spectable.commands - CLI command implementations
"""

__all__ = [
    "results_cmd",
    "scan_cmd",
]
