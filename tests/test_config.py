"""Tests for configuration loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import msgspec
import pytest

from xxhauth.config import get_default_config, parse_bool, parse_int
from xxhauth.config import settings
from xxhauth.config.settings import (
    RuntimeConfig,
    get_config_source,
    load_runtime_config,
)
from xxhauth.const import DEFAULT_SEED32, DEFAULT_SEED64


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "xxhauth.toml"
    path.write_text(body, encoding="utf-8")
    return path


@pytest.mark.parametrize("value", [True, 1, "yes", " ON ", "enabled", "True"])
def test_parse_bool_truthy(value: Any) -> None:
    assert parse_bool(value) is True


@pytest.mark.parametrize("value", [False, 0, None, "", "no", "off", "maybe"])
def test_parse_bool_falsy(value: Any) -> None:
    assert parse_bool(value) is False


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, 5),
        (5.9, 5),
        ("42", 42),
        ("0x06cd630df7649871", DEFAULT_SEED64),
        ("0xF764_9871", DEFAULT_SEED32),
        ("garbage", 7),
        (None, 7),
        (True, 7),
    ],
)
def test_parse_int(value: Any, expected: int) -> None:
    assert parse_int(value, 7) == expected


def test_default_config_is_all_strings() -> None:
    defaults = get_default_config()
    assert all(isinstance(value, str) for value in defaults.values())
    assert parse_int(defaults["seed64"], 0) == DEFAULT_SEED64


def test_load_runtime_config_defaults() -> None:
    config = load_runtime_config()
    assert config.seed32 == DEFAULT_SEED32
    assert config.seed64 == DEFAULT_SEED64
    assert config.debug_logging is False
    assert os.path.isabs(config.fixtures_dir)
    assert config.data_path.name == "data"
    assert config.key_path.name == "secret"
    assert get_config_source() == "defaults"


def test_load_runtime_config_toml_overrides(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        f"""
[xxhauth]
fixtures_dir = "{(tmp_path / 'golden').as_posix()}"
data_file = "payload.bin"
seed32 = 0x12345678
seed64 = "0x0123456789abcdef"
debug = true
""",
    )
    config = load_runtime_config(path)
    assert config.fixtures_path == tmp_path / "golden"
    assert config.data_path == tmp_path / "golden" / "payload.bin"
    assert config.key_file == "secret"
    assert config.seed32 == 0x12345678
    assert config.seed64 == 0x0123456789ABCDEF
    assert config.debug_logging is True
    assert get_config_source() == str(path)


def test_load_runtime_config_accepts_debug_logging_key(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "[xxhauth]\ndebug_logging = \"yes\"\n")
    assert load_runtime_config(path).debug_logging is True


def test_load_runtime_config_ignores_other_tables(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "[other]\nseed64 = 1\n")
    assert load_runtime_config(path).seed64 == DEFAULT_SEED64


def test_load_runtime_config_uses_raw_loader(monkeypatch: pytest.MonkeyPatch) -> None:
    raw = dict(get_default_config(), seed32="0x1", log_to_syslog="on")
    monkeypatch.setattr(settings, "_load_raw_config", lambda path=None: (raw, "test"))

    config = load_runtime_config()

    assert config.seed32 == 1
    assert config.log_to_syslog is True
    assert get_config_source() == "test"


@pytest.mark.parametrize(
    "body",
    [
        "[xxhauth]\nseed64 = -1\n",
        "[xxhauth]\nseed32 = 0x1_0000_0000\n",
        "[xxhauth]\ndata_file = \"nested/data\"\n",
        "[xxhauth]\nkey_file = \"  \"\n",
        "[xxhauth]\nfixtures_dir = \"\"\n",
    ],
)
def test_load_runtime_config_rejects_invalid_values(tmp_path: Path, body: str) -> None:
    path = _write_config(tmp_path, body)
    with pytest.raises((ValueError, msgspec.ValidationError)):
        load_runtime_config(path)


def test_load_runtime_config_rejects_malformed_toml(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "[xxhauth\n")
    with pytest.raises(ValueError, match="invalid TOML"):
        load_runtime_config(path)


def test_load_runtime_config_requires_a_table(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "xxhauth = 5\n")
    with pytest.raises(ValueError, match="must be a table"):
        load_runtime_config(path)


def test_load_runtime_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="cannot read"):
        load_runtime_config(tmp_path / "absent.toml")


def test_runtime_config_direct_construction_validates() -> None:
    with pytest.raises(ValueError):
        RuntimeConfig(seed64=1 << 64)


def test_runtime_config_expands_user_in_fixtures_dir() -> None:
    config = RuntimeConfig(fixtures_dir="~/xxhauth-fixtures")
    assert not config.fixtures_dir.startswith("~")
    assert os.path.isabs(config.fixtures_dir)
