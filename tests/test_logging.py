"""Tests for structured logging."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import msgspec
import pytest

from xxhauth.config.logging import StructuredLogFormatter, configure_logging
from xxhauth.config.settings import RuntimeConfig
from xxhauth.hkdf import hkdf128
from xxhauth.structures import Hash64, Hash128


def _record(name: str, message: str, **extra: Any) -> logging.LogRecord:
    record = logging.LogRecord(name, logging.INFO, __file__, 1, message, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def _payload(record: logging.LogRecord) -> dict[str, Any]:
    return msgspec.json.decode(StructuredLogFormatter().format(record))


def test_formatter_emits_json_and_trims_prefix() -> None:
    payload = _payload(_record("xxhauth.hmac", "hello"))
    assert payload["logger"] == "hmac"
    assert payload["level"] == "INFO"
    assert payload["message"] == "hello"
    assert payload["ts"].endswith("Z")
    assert "extra" not in payload


def test_formatter_keeps_foreign_logger_names() -> None:
    assert _payload(_record("other.module", "x"))["logger"] == "other.module"


def test_formatter_renders_digests_as_hex() -> None:
    record = _record(
        "xxhauth.fixtures",
        "x",
        computed=Hash128(high=1, low=2),
        key=Hash64(value=0x06CD630DF7649871),
        count=3,
    )
    extra = _payload(record)["extra"]
    assert extra["computed"] == "0x00000000000000010000000000000002"
    assert extra["key"] == "0x06cd630df7649871"
    assert extra["count"] == 3


def test_formatter_reduces_byte_strings_to_length() -> None:
    secret = b"\xde\xad" * 96
    record = _record("xxhauth.entropy", "x", seed=secret, view=memoryview(secret[:5]))
    extra = _payload(record)["extra"]
    assert extra["seed"] == "<192 bytes>"
    assert extra["view"] == "<5 bytes>"


def test_formatter_stringifies_other_values() -> None:
    record = _record("xxhauth.fixtures", "x", path=Path("/tmp/fixtures"))
    assert _payload(record)["extra"]["path"] == "/tmp/fixtures"


def test_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord(
            "xxhauth", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
        )
    assert "RuntimeError: boom" in _payload(record)["exception"]


def test_seed_material_is_not_logged(caplog: pytest.LogCaptureFixture) -> None:
    seed = b"very secret seed material"
    with caplog.at_level(logging.DEBUG, logger="xxhauth.hkdf"):
        hkdf128(seed)
    records = [r for r in caplog.records if r.name == "xxhauth.hkdf"]
    assert records
    rendered = StructuredLogFormatter().format(records[-1])
    assert "secret seed" not in rendered
    assert f"<{len(seed)} bytes>" in rendered


def test_configure_logging_sets_level(tmp_path: Path) -> None:
    configure_logging(RuntimeConfig(fixtures_dir=str(tmp_path), debug_logging=True))
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h.formatter, StructuredLogFormatter) for h in root.handlers)

    configure_logging(RuntimeConfig(fixtures_dir=str(tmp_path)))
    assert logging.getLogger().level == logging.INFO
