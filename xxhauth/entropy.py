"""Secret buffers ("entropy pools") for the XXH3 primitive.

XXH3 can be keyed with a large secret table instead of a 64-bit seed.
That keyed mode has not been vetted as a message authentication code: not
every byte of the secret is guaranteed to be used and pathological secrets
are handled poorly. The pool is therefore named for what it is, a block of
entropy, rather than a key.

A pool is either derived from a variable-length key with
:func:`xxhauth.hkdf.hkdf128` or drawn from the OS random source.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from pathlib import Path

from .const import SECRET_SIZE
from .hkdf import hkdf128
from .primitive import Buffer, require_buffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EntropyPool:
    """Immutable ``SECRET_SIZE``-byte secret table."""

    entropy: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.entropy, bytes):
            raise TypeError("entropy must be bytes")
        if len(self.entropy) != SECRET_SIZE:
            raise ValueError(
                f"entropy pool must be exactly {SECRET_SIZE} bytes, got {len(self.entropy)}"
            )

    @classmethod
    def with_key(cls, key: Buffer) -> EntropyPool:
        """Derive a pool from a variable-length key."""
        return cls(hkdf128(require_buffer(key, name="key")))

    @classmethod
    def randomize(cls) -> EntropyPool:
        """Draw a pool from the OS CSPRNG."""
        logger.debug("Drawing %d-byte random entropy pool", SECRET_SIZE)
        return cls(secrets.token_bytes(SECRET_SIZE))

    @classmethod
    def read(cls, path: Path) -> EntropyPool:
        """Load a flat binary pool file."""
        return cls(Path(path).read_bytes())

    def write(self, path: Path) -> None:
        """Write the pool as a flat binary file of ``SECRET_SIZE`` bytes."""
        Path(path).write_bytes(self.entropy)
        logger.info("Wrote entropy pool to %s", path)

    def __bytes__(self) -> bytes:
        return self.entropy


__all__ = ["EntropyPool"]
