"""Exception hierarchy for xxhauth."""

from __future__ import annotations


class XxhAuthError(RuntimeError):
    """Base class for xxhauth failures."""


class HmacStateError(XxhAuthError):
    """Raised when a streaming HMAC state is used outside its lifecycle."""


class FixtureError(XxhAuthError):
    """Raised when a fixture directory or golden table is missing or malformed."""


class PrimitiveIntegrityError(XxhAuthError):
    """Raised when the hash primitive fails its known-answer self test."""


__all__ = [
    "FixtureError",
    "HmacStateError",
    "PrimitiveIntegrityError",
    "XxhAuthError",
]
