"""Fixed-width key and digest types.

Keys and digests are modelled as explicit value types instead of raw
integers or byte strings so that a 64-bit key can never be handed to the
128-bit construction by accident. Each type pairs a frozen msgspec struct
with a construct schema describing its little-endian wire layout.
"""

from __future__ import annotations

from typing import Any, ClassVar, Type, TypeVar

import msgspec
from construct import (  # type: ignore
    Construct,
    Int32ul,
    Int64ul,
    Struct as BinStruct,
)

from .const import UINT32_MASK, UINT64_MASK, UINT128_MASK

T = TypeVar("T", bound="BaseStruct")
H = TypeVar("H", bound="FixedWidthHash")

# Little-endian 64-bit word used for the expander's segment index.
INDEX_WORD: Construct[Any] = Int64ul


class BaseStruct(msgspec.Struct, frozen=True):
    """Base class for hybrid Msgspec/Construct structures."""

    # Subclasses must define this schema (a construct.Construct)
    _SCHEMA: ClassVar[Any]
    SIZE: ClassVar[int]

    @classmethod
    def decode(cls: Type[T], data: bytes | bytearray | memoryview) -> T:
        """Decode exactly ``SIZE`` bytes into a typed struct."""
        if len(data) != cls.SIZE:
            raise ValueError(
                f"{cls.__name__} expects {cls.SIZE} bytes, got {len(data)}"
            )
        container: Any = cls._SCHEMA.parse(bytes(data))
        return cls(**{k: v for k, v in container.items() if not k.startswith("_")})

    def encode(self) -> bytes:
        """Encode the struct into its little-endian binary layout."""
        return self._SCHEMA.build(msgspec.structs.asdict(self))


class FixedWidthHash(BaseStruct, frozen=True):
    """Common behaviour of the fixed-width value types.

    Subclasses must define ``BITS``, ``from_int``, ``to_int`` and
    ``xor_word``; the remaining helpers are built on those three.
    """

    BITS: ClassVar[int]

    @classmethod
    def from_int(cls: Type[H], value: int) -> H:
        raise NotImplementedError(f"{cls.__name__} must define from_int")

    def to_int(self) -> int:
        raise NotImplementedError(f"{type(self).__name__} must define to_int")

    @classmethod
    def zero(cls: Type[H]) -> H:
        return cls.from_int(0)

    @classmethod
    def coerce(cls: Type[H], value: FixedWidthHash | int) -> H:
        """Accept an instance of this width or a plain integer.

        Raises:
            TypeError: ``value`` is a value type of another width.
            ValueError: ``value`` is an integer that does not fit.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, FixedWidthHash):
            raise TypeError(
                f"expected a {cls.BITS}-bit key, got {type(value).__name__}"
            )
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected {cls.__name__} or int, got {type(value).__name__}")
        return cls.from_int(value)

    def xor_word(self: H, word: int) -> H:
        """Return a copy with every 64-bit word XORed with ``word``."""
        raise NotImplementedError(f"{type(self).__name__} must define xor_word")

    def canonical(self) -> bytes:
        """Big-endian representation, as printed by the xxHash tools."""
        return self.to_int().to_bytes(self.SIZE, "big")

    def hex(self) -> str:
        return f"{self.to_int():0{self.SIZE * 2}x}"


class Hash32(FixedWidthHash, frozen=True):
    value: int

    SIZE = 4
    BITS = 32
    _SCHEMA = BinStruct("value" / Int32ul)

    def __post_init__(self) -> None:
        if not 0 <= self.value <= UINT32_MASK:
            raise ValueError(f"Hash32 value out of range: {self.value:#x}")

    @classmethod
    def from_int(cls, value: int) -> Hash32:
        return cls(value=value)

    def to_int(self) -> int:
        return self.value

    def xor_word(self, word: int) -> Hash32:
        return Hash32(value=self.value ^ (word & UINT32_MASK))


class Hash64(FixedWidthHash, frozen=True):
    value: int

    SIZE = 8
    BITS = 64
    _SCHEMA = BinStruct("value" / Int64ul)

    def __post_init__(self) -> None:
        if not 0 <= self.value <= UINT64_MASK:
            raise ValueError(f"Hash64 value out of range: {self.value:#x}")

    @classmethod
    def from_int(cls, value: int) -> Hash64:
        return cls(value=value)

    def to_int(self) -> int:
        return self.value

    def xor_word(self, word: int) -> Hash64:
        return Hash64(value=self.value ^ word)


class Hash128(FixedWidthHash, frozen=True):
    """128-bit value stored as two 64-bit halves.

    The binary layout is ``low`` then ``high`` (both little endian), which is
    how the primitive lays out its 128-bit result in memory. The integer form
    is ``(high << 64) | low``.
    """

    high: int
    low: int

    SIZE = 16
    BITS = 128
    _SCHEMA = BinStruct("low" / Int64ul, "high" / Int64ul)

    def __post_init__(self) -> None:
        if not 0 <= self.high <= UINT64_MASK or not 0 <= self.low <= UINT64_MASK:
            raise ValueError("Hash128 halves must be unsigned 64-bit integers")

    @classmethod
    def from_int(cls, value: int) -> Hash128:
        if not 0 <= value <= UINT128_MASK:
            raise ValueError(f"Hash128 value out of range: {value:#x}")
        return cls(high=value >> 64, low=value & UINT64_MASK)

    def to_int(self) -> int:
        return (self.high << 64) | self.low

    def xor_word(self, word: int) -> Hash128:
        return Hash128(high=self.high ^ word, low=self.low ^ word)


__all__ = [
    "BaseStruct",
    "FixedWidthHash",
    "Hash128",
    "Hash32",
    "Hash64",
    "INDEX_WORD",
]
