"""Keyed hashing and secret derivation on top of xxHash."""

__version__ = "1.0.0"

import logging

logger = logging.getLogger(__name__)


def _check_dependencies():
    """Verify the xxhash binding exposes the XXH3 family."""
    import xxhash

    # XXH3 (xxh3_64 / xxh3_128) arrived in python-xxhash 2.0.
    if not hasattr(xxhash, "xxh3_128_intdigest"):
        logger.critical(
            "FATAL: Incompatible xxhash version %s detected. "
            "xxhauth requires xxhash >= 2.0 with XXH3 support.",
            getattr(xxhash, "VERSION", "unknown"),
        )
        raise ImportError("xxhauth requires xxhash >= 2.0 (XXH3 support)")


# Run checks on import to ensure fail-fast behavior
_check_dependencies()

from .buildhash import (  # noqa: E402
    RandomStateXXH32,
    RandomStateXXH3_128,
    RandomStateXXH3_64,
    RandomStateXXH64,
)
from .const import MIDSIZE_MAX, SECRET_SIZE, SECRET_SIZE_MIN  # noqa: E402
from .entropy import EntropyPool  # noqa: E402
from .errors import (  # noqa: E402
    FixtureError,
    HmacStateError,
    PrimitiveIntegrityError,
    XxhAuthError,
)
from .hkdf import hkdf64, hkdf128  # noqa: E402
from .hmac import Hmac64, Hmac128, derive_padded_keys, hmac64, hmac128  # noqa: E402
from .primitive import XXH32, XXH3_128, XXH3_64, XXH64, verify_primitive_integrity  # noqa: E402
from .structures import Hash32, Hash64, Hash128  # noqa: E402

__all__ = [
    "EntropyPool",
    "FixtureError",
    "Hash128",
    "Hash32",
    "Hash64",
    "Hmac128",
    "Hmac64",
    "HmacStateError",
    "MIDSIZE_MAX",
    "PrimitiveIntegrityError",
    "RandomStateXXH32",
    "RandomStateXXH3_128",
    "RandomStateXXH3_64",
    "RandomStateXXH64",
    "SECRET_SIZE",
    "SECRET_SIZE_MIN",
    "XXH32",
    "XXH3_128",
    "XXH3_64",
    "XXH64",
    "XxhAuthError",
    "derive_padded_keys",
    "hkdf128",
    "hkdf64",
    "hmac128",
    "hmac64",
    "verify_primitive_integrity",
]
