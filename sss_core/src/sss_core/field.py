"""Prime field arithmetic."""
from __future__ import annotations

import secrets
from dataclasses import dataclass

from .errors import EntropyUnavailable, NotInvertible

# 2^127 - 1, the 12th Mersenne prime
DEFAULT_MODULUS = 2**127 - 1

_MIN_MODULUS = 257


@dataclass(frozen=True, slots=True)
class PrimeField:
    """Arithmetic modulo a fixed prime.

    Instances are immutable and safe to share between worker threads or to
    pickle into worker processes. Every operation returns a value in
    ``[0, modulus)``.
    """

    modulus: int = DEFAULT_MODULUS

    def __post_init__(self) -> None:
        if self.modulus < _MIN_MODULUS:
            raise ValueError(f"Modulus must be at least {_MIN_MODULUS} to hold a byte")

    def contains(self, value: int) -> bool:
        return 0 <= value < self.modulus

    def reduce(self, value: int) -> int:
        return value % self.modulus

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.modulus

    def sub(self, a: int, b: int) -> int:
        return (a - b) % self.modulus

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.modulus

    def neg(self, a: int) -> int:
        return -a % self.modulus

    def modinv(self, a: int) -> int:
        """Return ``a^-1`` such that ``a * a^-1 ≡ 1 (mod modulus)``."""
        a %= self.modulus
        if a == 0:
            raise NotInvertible("Zero has no inverse modulo the field prime")
        return pow(a, -1, self.modulus)

    def random_element(self) -> int:
        """Draw uniformly from ``[0, modulus)`` using the OS entropy source."""
        try:
            return secrets.randbelow(self.modulus)
        except (OSError, NotImplementedError) as exc:
            raise EntropyUnavailable("Secure random source unavailable") from exc

    def random_nonzero(self) -> int:
        while True:
            value = self.random_element()
            if value != 0:
                return value

    def max_chunk_length(self) -> int:
        """Largest byte length ``L`` with ``2^(8L) - 1 < modulus``."""
        length = (self.modulus.bit_length() - 1) // 8
        while length > 0 and (1 << (8 * length)) - 1 >= self.modulus:
            length -= 1
        return length


__all__ = ["DEFAULT_MODULUS", "PrimeField"]
