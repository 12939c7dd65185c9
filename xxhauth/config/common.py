"""Parsing helpers and defaults for xxhauth configuration."""

from __future__ import annotations

from typing import Final

from ..const import (
    DEFAULT_DATA_FILE,
    DEFAULT_DEBUG_LOGGING,
    DEFAULT_FIXTURES_DIR,
    DEFAULT_KEY_FILE,
    DEFAULT_LOG_TO_SYSLOG,
    DEFAULT_SEED32,
    DEFAULT_SEED64,
)

_TRUE_STRINGS: Final[frozenset[str]] = frozenset(
    {"1", "yes", "on", "true", "enable", "enabled"}
)


def parse_bool(value: object) -> bool:
    """Parse a boolean value safely from various types."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if value is None:
        return False
    s = str(value).lower().strip()
    return s in _TRUE_STRINGS


def parse_int(value: object, default: int) -> int:
    """Parse an integer, accepting ``0x``-prefixed strings.

    Seeds are full 64-bit values, so strings are never routed through
    ``float``.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip().replace("_", ""), 0)
        except ValueError:
            return default
    return default


def get_default_config() -> dict[str, str]:
    """Provide default xxhauth configuration values."""
    return {
        "fixtures_dir": DEFAULT_FIXTURES_DIR,
        "data_file": DEFAULT_DATA_FILE,
        "key_file": DEFAULT_KEY_FILE,
        "seed32": f"0x{DEFAULT_SEED32:08x}",
        "seed64": f"0x{DEFAULT_SEED64:016x}",
        "debug": "1" if DEFAULT_DEBUG_LOGGING else "0",
        "log_to_syslog": "1" if DEFAULT_LOG_TO_SYSLOG else "0",
    }


__all__ = ["get_default_config", "parse_bool", "parse_int"]
