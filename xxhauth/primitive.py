"""Thin adapters over the ``xxhash`` binding.

Each adapter exposes the same surface for every digest width:

* one-shot hashing: ``hash(data)`` and ``hash_with_seed(seed, data)``;
* streaming hashing: ``new()`` / ``with_seed(seed)`` followed by
  ``update(data)`` calls and a non-destructive ``finish()``.

Digests are returned as the fixed-width value types from
:mod:`xxhauth.structures`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, ClassVar, Final, Generic, TypeVar

import xxhash

from .const import UINT32_MASK, UINT64_MASK
from .errors import PrimitiveIntegrityError
from .structures import FixedWidthHash, Hash32, Hash64, Hash128

logger = logging.getLogger(__name__)

Buffer = bytes | bytearray | memoryview
D = TypeVar("D", bound=FixedWidthHash)
S = TypeVar("S", bound="StreamingHash[Any]")


def require_buffer(data: Any, *, name: str = "data") -> memoryview:
    """Return a read-only view over ``data`` or fail loudly.

    ``None`` and objects without the buffer protocol (including ``str``) are
    rejected with :class:`TypeError`.
    """
    if data is None:
        raise TypeError(f"{name} is required; got None")
    try:
        return memoryview(data).cast("B")
    except TypeError:
        raise TypeError(
            f"{name} must be a bytes-like object, got {type(data).__name__}"
        ) from None


class StreamingHash(Generic[D]):
    """Common implementation shared by the width-specific adapters."""

    DIGEST_TYPE: ClassVar[type[FixedWidthHash]]
    SEED_MASK: ClassVar[int] = UINT64_MASK
    _FACTORY: ClassVar[Callable[..., Any]]
    _ONESHOT: ClassVar[Callable[..., int]]

    __slots__ = ("_state",)

    def __init__(self, seed: int = 0) -> None:
        self._state = type(self)._FACTORY(seed=self._check_seed(seed))

    @classmethod
    def _check_seed(cls, seed: int) -> int:
        if not 0 <= seed <= cls.SEED_MASK:
            raise ValueError(
                f"{cls.__name__} seed must fit in {cls.SEED_MASK.bit_length()} bits"
            )
        return seed

    @classmethod
    def hash(cls, data: Buffer) -> D:
        """One-shot hashing."""
        return cls.hash_with_seed(0, data)

    @classmethod
    def hash_with_seed(cls, seed: int, data: Buffer) -> D:
        """One-shot hashing with seed."""
        view = require_buffer(data)
        digest = cls._ONESHOT(view, seed=cls._check_seed(seed))
        return cls.DIGEST_TYPE.from_int(digest)  # type: ignore[return-value]

    @classmethod
    def new(cls: type[S]) -> S:
        """Streaming hashing."""
        return cls()

    @classmethod
    def with_seed(cls: type[S], seed: int) -> S:
        """Streaming hashing with seed."""
        return cls(seed)

    def update(self, data: Buffer) -> None:
        self._state.update(require_buffer(data))

    def finish(self) -> D:
        """Digest of everything written so far; the state is left untouched."""
        return self.DIGEST_TYPE.from_int(self._state.intdigest())  # type: ignore[return-value]

    def reset(self) -> None:
        """Return to the freshly seeded state."""
        self._state.reset()

    def copy(self: S) -> S:
        clone = object.__new__(type(self))
        clone._state = self._state.copy()
        return clone


class XXH32(StreamingHash[Hash32]):
    """xxHash 32-bit."""

    DIGEST_TYPE = Hash32
    SEED_MASK = UINT32_MASK
    _FACTORY = xxhash.xxh32
    _ONESHOT = xxhash.xxh32_intdigest

    __slots__ = ()


class XXH64(StreamingHash[Hash64]):
    """xxHash 64-bit."""

    DIGEST_TYPE = Hash64
    _FACTORY = xxhash.xxh64
    _ONESHOT = xxhash.xxh64_intdigest

    __slots__ = ()


class XXH3_64(StreamingHash[Hash64]):
    """XXH3 64-bit."""

    DIGEST_TYPE = Hash64
    _FACTORY = xxhash.xxh3_64
    _ONESHOT = xxhash.xxh3_64_intdigest

    __slots__ = ()


class XXH3_128(StreamingHash[Hash128]):
    """XXH3 128-bit.

    ``finish`` and ``hash`` return a :class:`Hash128`; its integer form
    matches ``xxhash.xxh3_128_intdigest``.
    """

    DIGEST_TYPE = Hash128
    _FACTORY = xxhash.xxh3_128
    _ONESHOT = xxhash.xxh3_128_intdigest

    __slots__ = ()


# Published digests of the empty input with seed 0.
_EMPTY_INPUT_VECTORS: Final[tuple[tuple[type[StreamingHash[Any]], int], ...]] = (
    (XXH32, 0x02CC5D05),
    (XXH64, 0xEF46DB3751D8E999),
    (XXH3_64, 0x2D06800538D394C2),
    (XXH3_128, 0x99AA06D3014798D86001C324468D497F),
)


def verify_primitive_integrity() -> bool:
    """Perform Known Answer Tests (KAT) against the xxhash binding.

    Both the one-shot and the streaming path must reproduce the published
    empty-input digests.
    """
    for adapter, expected in _EMPTY_INPUT_VECTORS:
        if adapter.hash(b"").to_int() != expected:
            logger.critical("%s one-shot KAT failed", adapter.__name__)
            return False
        if adapter.new().finish().to_int() != expected:
            logger.critical("%s streaming KAT failed", adapter.__name__)
            return False
    return True


def require_primitive_integrity() -> None:
    if not verify_primitive_integrity():
        raise PrimitiveIntegrityError(
            f"xxhash {getattr(xxhash, 'VERSION', '?')} failed its known-answer tests"
        )


__all__ = [
    "Buffer",
    "StreamingHash",
    "XXH32",
    "XXH3_128",
    "XXH3_64",
    "XXH64",
    "require_buffer",
    "require_primitive_integrity",
    "verify_primitive_integrity",
]
