"""Shamir (K-of-N) secret sharing over F_q.

API
---
create(k, n, q, s)           -> list of Share(value, index), index = 1..n
reconstruct(q, shares)       -> secret   (needs >= k shares)
inverse(a, p)                -> a^-1 mod p  (re-exported from field)

pack_shares / unpack_shares / as_pairs / from_pairs convert between
shares and plain values or ``(value, index)`` tuples.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from quorumshare.config import COEFFICIENT_BITS
from quorumshare.crypto import field
from quorumshare.crypto.errors import (
    DuplicateShareIndex,
    InsufficientShares,
    InvalidModulus,
    InvalidSecret,
    InvalidShare,
    InvalidThreshold,
)
from quorumshare.crypto.field import inverse
from quorumshare.crypto.randomness import RandomSource, SystemRandomSource

__all__ = [
    "Share",
    "as_pairs",
    "create",
    "from_pairs",
    "inverse",
    "pack_shares",
    "reconstruct",
    "unpack_shares",
]

logger = logging.getLogger(__name__)

Pair = Tuple[int, int]


@dataclass(frozen=True)
class Share:
    """One participant's share: the polynomial evaluated at ``index``."""

    value: int
    index: int

    def __iter__(self):
        # Unpacks like the (value, index) pair it stands for.
        yield self.value
        yield self.index


ShareLike = Union[Share, Pair]


# -----------------------------------------------------------------------
# Packing
# -----------------------------------------------------------------------

def pack_shares(values: Sequence[int]) -> List[Share]:
    """Bundle evaluated values into shares with indices 1..len(values)."""
    return [Share(value=v, index=i) for i, v in enumerate(values, start=1)]


def unpack_shares(shares: Iterable[ShareLike]) -> Tuple[List[int], List[int]]:
    """Split shares into parallel ``(values, indices)`` lists."""
    values: List[int] = []
    indices: List[int] = []
    for value, index in shares:
        values.append(value)
        indices.append(index)
    return values, indices


def as_pairs(shares: Iterable[ShareLike]) -> List[Pair]:
    """Shares as plain ``(value, index)`` tuples, order preserved."""
    return [(value, index) for value, index in shares]


def from_pairs(pairs: Iterable[ShareLike]) -> List[Share]:
    """Build :class:`Share` objects from ``(value, index)`` pairs.

    Only the shape is validated: two ints and a positive index.
    """
    out: List[Share] = []
    for pair in pairs:
        try:
            value, index = pair
        except (TypeError, ValueError) as exc:
            raise InvalidShare(f"Expected a (value, index) pair, got {pair!r}") from exc
        if not isinstance(value, int) or not isinstance(index, int):
            raise InvalidShare(f"Share components must be ints, got {pair!r}")
        if index < 1:
            raise InvalidShare(f"Share index must be >= 1, got {index}")
        out.append(Share(value=value, index=index))
    return out


# -----------------------------------------------------------------------
# Generation
# -----------------------------------------------------------------------

def create(
    k: int,
    n: int,
    q: int,
    s: int,
    rng: RandomSource | None = None,
) -> List[Share]:
    """Split secret *s* into *n* shares over F_q with threshold *k*.

    A polynomial f of degree k-1 is chosen with f(0) = s and the other
    k-1 coefficients drawn from *rng*.  Shares are (f(i), i) for
    i = 1 … n.  Any k of them determine f and hence s; fewer reveal
    nothing about s.

    Parameters
    ----------
    k : int
        Threshold, ``1 <= k <= n``.
    n : int
        Number of shares to emit.
    q : int
        Prime modulus.  Primality is not checked.
    s : int
        Secret, ``0 <= s < q``.
    rng : RandomSource or None
        Coefficient entropy.  Defaults to a fresh
        :class:`SystemRandomSource`.

    Raises
    ------
    InvalidModulus
        If ``q <= 1``.
    InvalidSecret
        If ``s < 0`` or ``s >= q``.
    InvalidThreshold
        If ``k < 1`` or ``k > n``, or ``n >= q``.
    """
    _check_modulus(q)
    if s < 0 or s >= q:
        raise InvalidSecret(f"Secret must lie in [0, q), q has {q.bit_length()} bits")
    if k < 1 or k > n:
        raise InvalidThreshold(f"Invalid threshold: k={k}, n={n}")
    if n >= q:
        # Index q would evaluate f at 0 and hand out the secret itself.
        raise InvalidThreshold(f"Need n < q for distinct nonzero indices, got n={n}")
    if rng is None:
        rng = SystemRandomSource()

    logger.debug("creating %d-of-%d sharing over a %d-bit field", k, n, q.bit_length())

    # Coefficients are drawn wider than q so their reduction is
    # statistically uniform over the field.
    width = max(COEFFICIENT_BITS, q.bit_length() + 128)
    coeffs = [s] + [rng.randbits(width) for _ in range(k - 1)]
    try:
        values = [_eval_poly(coeffs, i, q) for i in range(1, n + 1)]
    finally:
        _wipe(coeffs)
    return pack_shares(values)


def _check_modulus(q: int) -> None:
    if q <= 1:
        raise InvalidModulus(f"Modulus must be > 1, got q={q}")


def _eval_poly(coeffs: List[int], x: int, q: int) -> int:
    """Evaluate ``sum_j coeffs[j] * x**j`` mod *q*, reducing every step."""
    result = 0
    x_pow = 1
    for c in coeffs:
        result = field.add(result, field.mul(c, x_pow, q), q)
        x_pow = field.mul(x_pow, x, q)
    return result


def _wipe(coeffs: List[int]) -> None:
    # Best effort: drops our references to the random coefficients.
    for j in range(len(coeffs)):
        coeffs[j] = 0
    coeffs.clear()


# -----------------------------------------------------------------------
# Reconstruction
# -----------------------------------------------------------------------

def reconstruct(
    q: int,
    shares: Iterable[ShareLike],
    threshold: int | None = None,
) -> int:
    """Recover the secret from *shares* by Lagrange interpolation at x=0.

    Each share contributes an independent term
    ``y_i * prod(x_j) / prod(x_j - x_i)`` over the other shares j; the
    secret is the sum of the terms mod *q*.

    Without *threshold* the routine cannot tell whether enough shares
    were supplied: fewer than the original k give a field element
    unrelated to the secret.  Pass *threshold* to have that rejected.

    Raises
    ------
    InvalidModulus
        If ``q <= 1``.
    InvalidThreshold
        If *threshold* is given and below 1.
    InsufficientShares
        No shares at all, or fewer than *threshold*.
    DuplicateShareIndex
        Two shares share an index (or indices congruent mod *q*).
    """
    _check_modulus(q)
    if threshold is not None and threshold < 1:
        raise InvalidThreshold(f"Threshold must be >= 1, got {threshold}")
    points = from_pairs(shares)
    if not points:
        raise InsufficientShares("Need at least one share")
    if threshold is not None and len(points) < threshold:
        raise InsufficientShares(
            f"Need >= {threshold} shares to reconstruct, got {len(points)}"
        )

    seen = set()
    for p in points:
        if p.index in seen:
            raise DuplicateShareIndex(f"Share index {p.index} appears more than once")
        seen.add(p.index)

    logger.debug("reconstructing from %d shares over a %d-bit field", len(points), q.bit_length())

    secret = 0
    for i, share_i in enumerate(points):
        num = 1
        den = 1
        for j, share_j in enumerate(points):
            if j == i:
                continue
            num = field.mul(num, share_j.index, q)
            den = field.mul(den, field.sub(share_j.index, share_i.index, q), q)
        if den == 0:
            raise DuplicateShareIndex(
                f"Share index {share_i.index} collides with another index mod q"
            )
        term = field.mul(field.mul(share_i.value, num, q), inverse(den, q), q)
        secret = field.add(secret, term, q)
    return secret
