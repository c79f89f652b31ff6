"""Prime-field arithmetic F_q.

All values are Python ints reduced mod an explicit modulus.  The
modulus is assumed prime; that is never checked here (a primality test
per call would dominate the cost of everything else).
"""

from __future__ import annotations

from quorumshare.crypto.errors import InvalidInverseInput


def reduce(a: int, m: int) -> int:
    """Reduce an integer into [0, m)."""
    return a % m  # floored remainder: already in [0, m) for m > 0


def add(a: int, b: int, m: int) -> int:
    """Field addition."""
    return reduce(a + b, m)


def sub(a: int, b: int, m: int) -> int:
    """Field subtraction."""
    return reduce(a - b, m)


def mul(a: int, b: int, m: int) -> int:
    """Field multiplication."""
    return reduce(a * b, m)


def neg(a: int, m: int) -> int:
    """Additive inverse."""
    return reduce(-a, m)


def inverse(a: int, p: int) -> int:
    """Multiplicative inverse via Fermat's little theorem.

    Computes ``a ** (p - 2) mod p`` by square-and-multiply, which costs
    O(log p) modular multiplications.  The result satisfies
    ``a * inverse(a, p) % p == 1`` only when *p* is prime.

    Raises
    ------
    InvalidInverseInput
        If ``p <= 0``, ``a <= 0`` or ``a >= p``.
    """
    if p <= 0:
        raise InvalidInverseInput(f"Modulus must be positive, got p={p}")
    if a <= 0 or a >= p:
        raise InvalidInverseInput(f"Need 0 < a < p, got a={a}, p={p}")
    return pow(a, p - 2, p)
