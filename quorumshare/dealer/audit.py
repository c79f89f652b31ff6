"""Hash-chained audit log of dealer operations.

The dealer app appends ``split`` (threshold,
share count, modulus size, whether seeded), ``combine`` (share count,
modulus size) or ``rejected`` (path and error class, written by the
``SharingError`` handler).  Secrets, coefficients and share values never
enter the log, so it can be exposed on ``GET /audit``.

Each entry contains a SHA-256 hash of the previous entry so that
tampering is detectable.
"""

from __future__ import annotations

import hashlib
import json
import time
from dataclasses import dataclass
from typing import Any, Dict, List

GENESIS_HASH = "0" * 64


@dataclass
class AuditEntry:
    timestamp: float
    event: str
    data: Dict[str, Any]
    prev_hash: str
    entry_hash: str


def _digest(timestamp: float, event: str, data: Dict[str, Any], prev_hash: str) -> str:
    payload = json.dumps(
        {"timestamp": timestamp, "event": event, "data": data, "prev_hash": prev_hash},
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(payload.encode()).hexdigest()


class AuditLog:
    """Append-only hash-chained audit log."""

    def __init__(self) -> None:
        self._entries: List[AuditEntry] = []
        self._prev_hash: str = GENESIS_HASH

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, event: str, data: Dict[str, Any]) -> AuditEntry:
        ts = time.time()
        entry = AuditEntry(
            timestamp=ts,
            event=event,
            data=data,
            prev_hash=self._prev_hash,
            entry_hash=_digest(ts, event, data, self._prev_hash),
        )
        self._entries.append(entry)
        self._prev_hash = entry.entry_hash
        return entry

    def entries(self) -> List[Dict[str, Any]]:
        return [
            {
                "timestamp": e.timestamp,
                "event": e.event,
                "data": e.data,
                "prev_hash": e.prev_hash,
                "entry_hash": e.entry_hash,
            }
            for e in self._entries
        ]

    def verify_chain(self) -> bool:
        """Verify the integrity of the full chain."""
        prev = GENESIS_HASH
        for e in self._entries:
            if e.prev_hash != prev:
                return False
            if e.entry_hash != _digest(e.timestamp, e.event, e.data, e.prev_hash):
                return False
            prev = e.entry_hash
        return True
