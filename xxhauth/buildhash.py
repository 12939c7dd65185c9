"""Randomly seeded hasher builders.

A builder draws one seed from the OS random source when it is created and
hands out copies of a prototype hasher, so every hasher built by the same
builder agrees while different builders (and processes) do not.
"""

from __future__ import annotations

import secrets
from typing import Any, ClassVar, Generic, TypeVar

from .primitive import XXH32, XXH3_128, XXH3_64, XXH64, StreamingHash

S = TypeVar("S", bound=StreamingHash[Any])


class RandomState(Generic[S]):
    HASHER: ClassVar[type[StreamingHash[Any]]]

    __slots__ = ("proto",)

    def __init__(self) -> None:
        hasher = self.HASHER
        seed = secrets.randbits(hasher.SEED_MASK.bit_length())
        self.proto: S = hasher.with_seed(seed)  # type: ignore[assignment]

    def build_hasher(self) -> S:
        return self.proto.copy()


class RandomStateXXH32(RandomState[XXH32]):
    HASHER = XXH32
    __slots__ = ()


class RandomStateXXH64(RandomState[XXH64]):
    HASHER = XXH64
    __slots__ = ()


class RandomStateXXH3_64(RandomState[XXH3_64]):
    HASHER = XXH3_64
    __slots__ = ()


class RandomStateXXH3_128(RandomState[XXH3_128]):
    HASHER = XXH3_128
    __slots__ = ()


__all__ = [
    "RandomState",
    "RandomStateXXH32",
    "RandomStateXXH3_128",
    "RandomStateXXH3_64",
    "RandomStateXXH64",
]
