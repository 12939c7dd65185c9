"""Secret expansion (HKDF-style) built on the XXH3 HMAC.

Stretches a seed of any length, including an empty one, into a
``SECRET_SIZE`` buffer suitable as the primitive's secret table:

1. extract: ``prk = HMAC(seed, key=0)``;
2. expand: a 2-slot rolling buffer ``dat`` starts zeroed. Every segment
   has its own index ``idx``. Before each MAC the low 64 bits of slot 1
   are overwritten with ``idx`` (little endian); even segments then replace
   slot 0 and odd segments slot 1 with ``HMAC(dat, prk)``. After each odd
   segment both slots are appended to the output.

Every iteration consumes the previous one's output, so segments are
produced strictly in index order.
"""

from __future__ import annotations

import logging
from typing import Any

from .const import SECRET_SIZE
from .hmac import Hmac64, Hmac128, HmacState
from .primitive import Buffer, require_buffer
from .structures import INDEX_WORD

logger = logging.getLogger(__name__)


def _expand(mac: type[HmacState[Any]], custom_seed: Buffer, size: int) -> bytes:
    seed = require_buffer(custom_seed, name="custom_seed")
    segment_size = mac.KEY_TYPE.SIZE
    pair_size = 2 * segment_size
    if size % pair_size:
        raise ValueError(f"secret size {size} is not a multiple of {pair_size}")

    prk = mac.hash(seed, mac.KEY_TYPE.zero())

    dat = bytearray(pair_size)
    out = bytearray(size)
    index_at = slice(segment_size, segment_size + INDEX_WORD.sizeof())
    for idx in range(size // segment_size):
        dat[index_at] = INDEX_WORD.build(idx)
        slot = idx % 2
        dat[slot * segment_size : (slot + 1) * segment_size] = mac.hash(dat, prk).encode()
        if slot:
            offset = (idx - 1) * segment_size
            out[offset : offset + pair_size] = dat

    logger.debug(
        "Expanded seed into %d-byte secret (%s)",
        size,
        mac.__name__,
        extra={"seed": seed},
    )
    return bytes(out)


def hkdf128(custom_seed: Buffer) -> bytes:
    """Derive a ``SECRET_SIZE`` secret using the 128-bit HMAC."""
    return _expand(Hmac128, custom_seed, SECRET_SIZE)


def hkdf64(custom_seed: Buffer) -> bytes:
    """64-bit analogue of :func:`hkdf128`; the index fills all of slot 1."""
    return _expand(Hmac64, custom_seed, SECRET_SIZE)


__all__ = ["hkdf128", "hkdf64"]
