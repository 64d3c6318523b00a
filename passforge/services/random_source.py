"""
Module: random_source.py
Project: Passforge (Open Source)
License: MIT
Description:
    Cryptographically Secure Uniform Random Source.

    This module adapts the operating system's secure random byte stream into the
    two primitives the rest of the generator needs:
    1. `next_u64()`: 64 uniformly distributed bits.
    2. `next_f64()`: a uniformly distributed float in [0, 1).

    It utilizes Python's `secrets` module (PEP 506), the same entropy source used
    for credential generation elsewhere in the project. The source is self-seeding
    and keeps no state between draws, so one instance may be shared freely.
"""

import logging
import secrets
from typing import Protocol

# --- Logging Configuration ---
logger = logging.getLogger(__name__)

# Number of mantissa bits in an IEEE-754 double (52 stored + 1 implicit).
_FLOAT_BITS = 53
_FLOAT_SCALE = 1.0 / (1 << _FLOAT_BITS)


class EntropySourceError(RuntimeError):
    """
    The platform's secure random source failed to produce bytes.

    This is a fatal condition. Callers must never catch it to substitute a
    weaker source, as that would silently produce predictable passwords.
    """


class RandomSource(Protocol):
    """Interface of a uniform random source consumed by the weighted sampler."""

    def next_u64(self) -> int:
        ...

    def next_f64(self) -> float:
        ...

    def seed(self, value) -> None:
        ...


class CryptoRandomSource:
    """
    Uniform random source backed by the operating system CSPRNG.

    Example:
        >>> source = CryptoRandomSource()
        >>> 0.0 <= source.next_f64() < 1.0
        True
    """

    def seed(self, value) -> None:
        """Seeding is ignored: the operating system seeds its own source."""

    def next_u64(self) -> int:
        """
        Reads eight bytes from the secure random source.

        Returns:
            int: An unsigned integer in [0, 2**64).

        Raises:
            EntropySourceError: If the entropy source errors or returns a short read.
        """
        try:
            raw = secrets.token_bytes(8)
        except (OSError, NotImplementedError) as exc:
            logger.critical("Secure random source unavailable: %s", exc)
            raise EntropySourceError(f"secure random source failed: {exc}") from exc

        if len(raw) != 8:
            logger.critical("Secure random source returned %d of 8 bytes.", len(raw))
            raise EntropySourceError("secure random source returned a short read")

        return int.from_bytes(raw, "big")

    def next_f64(self) -> float:
        """
        Returns a uniformly distributed float in [0, 1).

        The low 11 bits of a 64-bit draw are discarded so that the remaining 53
        fit the double mantissa exactly; every representable output is equally
        likely and 1.0 can never be produced.
        """
        return (self.next_u64() >> (64 - _FLOAT_BITS)) * _FLOAT_SCALE


# Process-wide default. Stateless, so sharing it across threads is safe.
default_source = CryptoRandomSource()
