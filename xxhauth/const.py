"""Constants shared across the xxhauth package."""

from __future__ import annotations

from typing import Final

# Hash primitive limits (XXH3).
SECRET_SIZE: Final[int] = 192
SECRET_SIZE_MIN: Final[int] = 136
MIDSIZE_MAX: Final[int] = 240

# HMAC pad bytes, widened to the primitive's native 64-bit word.
IPAD_BYTE: Final[int] = 0x36
OPAD_BYTE: Final[int] = 0x5C
IPAD_WORD: Final[int] = int.from_bytes(bytes([IPAD_BYTE]) * 8, "little")
OPAD_WORD: Final[int] = int.from_bytes(bytes([OPAD_BYTE]) * 8, "little")

UINT32_MASK: Final[int] = 0xFFFFFFFF
UINT64_MASK: Final[int] = 0xFFFFFFFFFFFFFFFF
UINT128_MASK: Final[int] = (1 << 128) - 1

# Fixture defaults.
DEFAULT_SEED32: Final[int] = 0xF7649871
DEFAULT_SEED64: Final[int] = 0x06CD630DF7649871
DEFAULT_FIXTURES_DIR: Final[str] = "fixtures"
DEFAULT_DATA_FILE: Final[str] = "data"
DEFAULT_KEY_FILE: Final[str] = "secret"
DEFAULT_DEBUG_LOGGING: Final[bool] = False
DEFAULT_LOG_TO_SYSLOG: Final[bool] = False
SECRET_ENTROPY_FILE: Final[str] = "secret_entropy"
GOLDEN_FILE: Final[str] = "golden.json"
CONFIG_TABLE: Final[str] = "xxhauth"

__all__ = [
    "CONFIG_TABLE",
    "DEFAULT_DATA_FILE",
    "DEFAULT_DEBUG_LOGGING",
    "DEFAULT_FIXTURES_DIR",
    "DEFAULT_KEY_FILE",
    "DEFAULT_LOG_TO_SYSLOG",
    "DEFAULT_SEED32",
    "DEFAULT_SEED64",
    "GOLDEN_FILE",
    "IPAD_BYTE",
    "IPAD_WORD",
    "MIDSIZE_MAX",
    "OPAD_BYTE",
    "OPAD_WORD",
    "SECRET_ENTROPY_FILE",
    "SECRET_SIZE",
    "SECRET_SIZE_MIN",
    "UINT128_MASK",
    "UINT32_MASK",
    "UINT64_MASK",
]
