"""Exceptions raised by the sharing primitives.

All of them derive from ``ValueError``: every failure is a bad argument
supplied by the caller, and no partial result accompanies it.
"""

from __future__ import annotations


class SharingError(ValueError):
    """Base class for secret-sharing failures."""


class InvalidSecret(SharingError):
    """Secret outside ``[0, q)``."""


class InvalidThreshold(SharingError):
    """Threshold ``k`` is zero or larger than the number of shares ``n``."""


class InvalidInverseInput(SharingError):
    """Inverse requested for ``a`` outside ``(0, p)`` or for ``p <= 0``."""


class DuplicateShareIndex(SharingError):
    """Two shares in a reconstruction subset carry the same index."""


class InsufficientShares(SharingError):
    """Fewer shares than the declared threshold."""


class InvalidShare(SharingError):
    """A share is not a (value, index) pair of integers with index >= 1."""


class InvalidModulus(SharingError):
    """Field modulus ``q <= 1``.  Primality itself is never checked."""


class LimitExceeded(SharingError):
    """Request larger than the dealer service accepts."""
