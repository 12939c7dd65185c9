"""HMAC-style keyed hashing on top of XXH3.

The construction is the classic nested ipad/opad scheme with the pads
widened to the primitive's native digest width::

    inner = key ^ ipad          outer = key ^ opad
    mid   = H(inner || message)
    mac   = H(outer || mid)

XXH3 is not a cryptographic hash. The keyed output resists forgery only as
far as the primitive's practical properties allow; do not use it where a
real MAC is required.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, Generic, NamedTuple, TypeVar

from transitions import Machine, MachineError

from .const import IPAD_WORD, MIDSIZE_MAX, OPAD_WORD
from .errors import HmacStateError
from .primitive import XXH3_64, XXH3_128, Buffer, StreamingHash, require_buffer
from .structures import FixedWidthHash, Hash64, Hash128

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=FixedWidthHash)


class PaddedKeyPair(NamedTuple, Generic[K]):
    inner: K
    outer: K


def derive_padded_keys(key: K) -> PaddedKeyPair[K]:
    """Derive the inner and outer keys for ``key``."""
    return PaddedKeyPair(key.xor_word(IPAD_WORD), key.xor_word(OPAD_WORD))


def _outer_hash(
    primitive: type[StreamingHash[Any]], outer: FixedWidthHash, mid: FixedWidthHash
) -> Any:
    return primitive.hash(outer.encode() + mid.encode())


def _hmac_oneshot(
    primitive: type[StreamingHash[Any]],
    message: Buffer,
    key: FixedWidthHash,
    *,
    midsize_max: int = MIDSIZE_MAX,
) -> Any:
    """Compute the MAC of a complete message.

    Short messages are hashed from a single ``inner || message`` buffer;
    messages of ``midsize_max`` bytes or more are streamed so the message is
    never copied. Both branches produce the same digest.
    """
    view = require_buffer(message, name="message")
    inner, outer = derive_padded_keys(key)
    if len(view) < midsize_max:
        mid = primitive.hash(inner.encode() + view.tobytes())
    else:
        engine = primitive.new()
        engine.update(inner.encode())
        engine.update(view)
        mid = engine.finish()
    return _outer_hash(primitive, outer, mid)


class HmacState(Generic[K]):
    """Incremental HMAC over the XXH3 streaming engine.

    A state is always constructed from a key, so it can never be digested
    before it was reset. Lifecycle::

        fresh --update--> accumulating --digest--> finalized

    ``digest`` may be repeated; ``update`` after ``digest`` raises
    :class:`HmacStateError` until the state is ``reset`` with a key again.
    """

    if TYPE_CHECKING:
        # FSM generated methods and attributes for static analysis
        fsm_state: str
        prime: Callable[[], bool]
        absorb: Callable[[], bool]
        seal: Callable[[], bool]

    PRIMITIVE: ClassVar[type[StreamingHash[Any]]]
    KEY_TYPE: ClassVar[type[FixedWidthHash]]

    # FSM States
    STATE_FRESH = "fresh"
    STATE_ACCUMULATING = "accumulating"
    STATE_FINALIZED = "finalized"

    def __init__(self, key: K | int) -> None:
        self._init_machine(self.STATE_FRESH)
        self.reset(key)

    def _init_machine(self, initial: str) -> None:
        self.state_machine = Machine(
            model=self,
            states=[
                self.STATE_FRESH,
                self.STATE_ACCUMULATING,
                self.STATE_FINALIZED,
            ],
            initial=initial,
            model_attribute="fsm_state",
            auto_transitions=False,
            ignore_invalid_triggers=False,
        )
        self.state_machine.add_transition("prime", "*", self.STATE_FRESH)
        self.state_machine.add_transition(
            "absorb",
            [self.STATE_FRESH, self.STATE_ACCUMULATING],
            self.STATE_ACCUMULATING,
        )
        self.state_machine.add_transition(
            "seal",
            [self.STATE_FRESH, self.STATE_ACCUMULATING, self.STATE_FINALIZED],
            self.STATE_FINALIZED,
        )

    @classmethod
    def hash(cls, message: Buffer, key: K | int) -> K:
        """One-shot MAC of a complete message."""
        return _hmac_oneshot(cls.PRIMITIVE, message, cls.KEY_TYPE.coerce(key))

    def reset(self, key: K | int) -> None:
        """Start a new message under ``key``."""
        inner, outer = derive_padded_keys(self.KEY_TYPE.coerce(key))
        engine = self.PRIMITIVE.new()
        engine.update(inner.encode())
        self._engine = engine
        self._outer = outer
        self.prime()

    def update(self, chunk: Buffer) -> HmacState[K]:
        """Append ``chunk`` to the message; returns ``self`` for chaining."""
        view = require_buffer(chunk, name="chunk")
        try:
            self.absorb()
        except MachineError as exc:
            logger.error("update() on a %s HMAC state", self.fsm_state)
            raise HmacStateError(
                "update() after digest(); call reset() with a key first"
            ) from exc
        self._engine.update(view)
        return self

    def digest(self) -> K:
        """MAC of everything written since the last reset."""
        self.seal()
        return _outer_hash(self.PRIMITIVE, self._outer, self._engine.finish())

    def copy(self) -> HmacState[K]:
        """Independent state with the same key, input and lifecycle state."""
        clone = object.__new__(type(self))
        clone._init_machine(self.fsm_state)
        clone._engine = self._engine.copy()
        clone._outer = self._outer
        return clone

    def __repr__(self) -> str:
        return f"<{type(self).__name__} state={self.fsm_state}>"


class Hmac64(HmacState[Hash64]):
    """HMAC over XXH3 64-bit; keys and digests are :class:`Hash64`."""

    PRIMITIVE = XXH3_64
    KEY_TYPE = Hash64


class Hmac128(HmacState[Hash128]):
    """HMAC over XXH3 128-bit; keys and digests are :class:`Hash128`."""

    PRIMITIVE = XXH3_128
    KEY_TYPE = Hash128


def hmac64(message: Buffer, key: Hash64 | int) -> Hash64:
    return Hmac64.hash(message, key)


def hmac128(message: Buffer, key: Hash128 | int) -> Hash128:
    return Hmac128.hash(message, key)


__all__ = [
    "Hmac128",
    "Hmac64",
    "HmacState",
    "PaddedKeyPair",
    "derive_padded_keys",
    "hmac128",
    "hmac64",
]
