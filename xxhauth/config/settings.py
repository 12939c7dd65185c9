"""Settings loader for the xxhauth fixture tooling.

Configuration comes from an optional TOML file (table ``[xxhauth]``)
merged over built-in defaults. Environment variables are not consulted.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import msgspec

from ..const import (
    CONFIG_TABLE,
    DEFAULT_DATA_FILE,
    DEFAULT_DEBUG_LOGGING,
    DEFAULT_FIXTURES_DIR,
    DEFAULT_KEY_FILE,
    DEFAULT_LOG_TO_SYSLOG,
    DEFAULT_SEED32,
    DEFAULT_SEED64,
    UINT32_MASK,
    UINT64_MASK,
)
from .common import get_default_config, parse_bool, parse_int

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RuntimeConfig:
    """Strongly typed configuration for the fixture tooling."""

    fixtures_dir: str = DEFAULT_FIXTURES_DIR
    data_file: str = DEFAULT_DATA_FILE
    key_file: str = DEFAULT_KEY_FILE
    seed32: int = DEFAULT_SEED32
    seed64: int = DEFAULT_SEED64
    debug_logging: bool = DEFAULT_DEBUG_LOGGING
    log_to_syslog: bool = DEFAULT_LOG_TO_SYSLOG

    def __post_init__(self) -> None:
        self.seed32 = self._require_range("seed32", self.seed32, UINT32_MASK)
        self.seed64 = self._require_range("seed64", self.seed64, UINT64_MASK)
        self.fixtures_dir = self._normalize_path(self.fixtures_dir, field_name="fixtures_dir")
        for field_name in ("data_file", "key_file"):
            value = (getattr(self, field_name) or "").strip()
            if not value or os.sep in value:
                raise ValueError(f"{field_name} must be a bare file name")
            setattr(self, field_name, value)

    @property
    def fixtures_path(self) -> Path:
        return Path(self.fixtures_dir)

    @property
    def data_path(self) -> Path:
        return self.fixtures_path / self.data_file

    @property
    def key_path(self) -> Path:
        return self.fixtures_path / self.key_file

    @staticmethod
    def _require_range(name: str, value: int, mask: int) -> int:
        if not 0 <= value <= mask:
            raise ValueError(f"{name} must fit in {mask.bit_length()} bits")
        return value

    @staticmethod
    def _normalize_path(value: str, *, field_name: str) -> str:
        candidate = (value or "").strip()
        if not candidate:
            raise ValueError(f"{field_name} must be a non-empty path")
        return os.path.abspath(os.path.expanduser(candidate))


_CONFIG_SOURCE = "defaults"


def get_config_source() -> str:
    """Describe where the last loaded configuration came from."""
    return _CONFIG_SOURCE


def _load_raw_config(path: Path | None = None) -> tuple[dict[str, Any], str]:
    raw: dict[str, Any] = dict(get_default_config())
    if path is None:
        return raw, "defaults"
    try:
        document = tomllib.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"cannot read config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"invalid TOML in {path}: {exc}") from exc
    table = document.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ValueError(f"[{CONFIG_TABLE}] in {path} must be a table")
    raw.update(table)
    return raw, str(path)


def load_runtime_config(path: Path | None = None) -> RuntimeConfig:
    """Load configuration from an optional TOML file and defaults."""
    global _CONFIG_SOURCE

    raw, source = _load_raw_config(path)
    _CONFIG_SOURCE = source

    values = {
        "fixtures_dir": str(raw.get("fixtures_dir", DEFAULT_FIXTURES_DIR)),
        "data_file": str(raw.get("data_file", DEFAULT_DATA_FILE)),
        "key_file": str(raw.get("key_file", DEFAULT_KEY_FILE)),
        "seed32": parse_int(raw.get("seed32"), DEFAULT_SEED32),
        "seed64": parse_int(raw.get("seed64"), DEFAULT_SEED64),
        "debug_logging": parse_bool(raw.get("debug_logging", raw.get("debug"))),
        "log_to_syslog": parse_bool(raw.get("log_to_syslog")),
    }
    # __post_init__ failures surface as msgspec.ValidationError.
    config = msgspec.convert(values, RuntimeConfig, strict=True)
    logger.debug("Loaded configuration from %s", source)
    return config


__all__ = [
    "RuntimeConfig",
    "get_config_source",
    "load_runtime_config",
]
