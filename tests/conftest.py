"""Pytest configuration for xxhauth tests."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

from xxhauth.config.settings import RuntimeConfig  # noqa: E402

# Deterministic fixture inputs; values are arbitrary but fixed.
FIXTURE_DATA = bytes((i * 131 + 7) & 0xFF for i in range(1024))
FIXTURE_KEY = b"xxhauth fixture key: deterministic"


@pytest.fixture(autouse=True)
def reset_logging_handlers():
    """Close and remove all logging handlers after each test to prevent ResourceWarnings."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        try:
            handler.close()
        except (OSError, RuntimeError):
            pass
        root.removeHandler(handler)


@pytest.fixture()
def runtime_config(tmp_path: Path) -> RuntimeConfig:
    return RuntimeConfig(fixtures_dir=str(tmp_path / "fixtures"))


@pytest.fixture()
def fixture_dir(runtime_config: RuntimeConfig) -> Path:
    """A fixture directory holding the deterministic data and key files."""
    runtime_config.fixtures_path.mkdir(parents=True)
    runtime_config.data_path.write_bytes(FIXTURE_DATA)
    runtime_config.key_path.write_bytes(FIXTURE_KEY)
    return runtime_config.fixtures_path


@pytest.fixture()
def fixture_data() -> bytes:
    return FIXTURE_DATA


@pytest.fixture()
def fixture_key() -> bytes:
    return FIXTURE_KEY
