"""Randomness providers for polynomial coefficients.

``create`` takes its entropy from an object implementing
:class:`RandomSource` instead of a module-level generator, so that
concurrent callers never share hidden state and tests can pin a seed.
"""

from __future__ import annotations

import random
import secrets
import threading
from typing import Protocol


class RandomSource(Protocol):
    """Anything that can hand out ``k`` uniformly random bits."""

    def randbits(self, k: int) -> int:
        ...


class SystemRandomSource:
    """OS CSPRNG via :mod:`secrets`.  Safe to share across threads."""

    def randbits(self, k: int) -> int:
        return secrets.randbits(k)


class SeededRandomSource:
    """Deterministic source for tests and reproducible demos.

    Not suitable for real secrets.  Draws are serialised with a lock so a
    single instance may be shared between threads without corrupting the
    generator state.
    """

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def randbits(self, k: int) -> int:
        with self._lock:
            return self._rng.getrandbits(k)
