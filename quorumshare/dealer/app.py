"""Dealer FastAPI application.

A thin HTTP surface over :mod:`quorumshare.crypto.shamir` for a trusted
dealer.  Big integers travel as decimal strings (plain JSON ints are
accepted too).

Endpoints:
- GET  /health   – liveness and default field size
- POST /split    – share a secret: returns ``total_shares`` shares
- POST /combine  – reconstruct a secret from shares
- POST /inverse  – modular inverse in a prime field
- GET  /audit    – hash-chained log of dealer operations
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from quorumshare.config import ALLOW_SEED, LOG_LEVEL, MAX_PRIME_BITS, MAX_SHARES, PRIME
from quorumshare.crypto import shamir
from quorumshare.crypto.errors import LimitExceeded, SharingError
from quorumshare.crypto.randomness import SeededRandomSource
from quorumshare.dealer.audit import AuditLog

logger = logging.getLogger(__name__)

BigInt = Union[str, int]


# ------ request models (module-level for Pydantic / FastAPI compat) ------


class ShareModel(BaseModel):
    value: BigInt
    index: int


class SplitRequest(BaseModel):
    secret: BigInt
    threshold: int
    total_shares: int
    modulus: Optional[BigInt] = None
    # Deterministic coefficients; rejected unless the dealer allows seeding.
    seed: Optional[int] = None


class CombineRequest(BaseModel):
    shares: List[ShareModel]
    modulus: Optional[BigInt] = None
    threshold: Optional[int] = None


class InverseRequest(BaseModel):
    a: BigInt
    modulus: BigInt


class DealerState:
    """Per-app mutable state."""

    def __init__(self, prime: int = PRIME, allow_seed: bool = ALLOW_SEED) -> None:
        self.prime = prime
        self.allow_seed = allow_seed
        self.audit = AuditLog()


def _to_int(raw: BigInt, name: str) -> int:
    try:
        return int(str(raw))
    except ValueError as exc:
        raise SharingError(f"{name} is not an integer: {raw!r}") from exc


def _check_limits(q: int, num_shares: int = 0) -> None:
    if q.bit_length() > MAX_PRIME_BITS:
        raise LimitExceeded(
            f"modulus has {q.bit_length()} bits, limit is {MAX_PRIME_BITS}"
        )
    if num_shares > MAX_SHARES:
        raise LimitExceeded(f"{num_shares} shares exceeds limit {MAX_SHARES}")


def create_app(state: DealerState | None = None) -> FastAPI:
    """Factory that creates a dealer app with its own audit log."""
    if state is None:
        state = DealerState()

    # Package logger only; root logging is left to the host process.
    logging.getLogger("quorumshare").setLevel(LOG_LEVEL)

    app = FastAPI(title="QuorumShare Dealer")

    @app.exception_handler(SharingError)
    async def sharing_error_handler(request: Request, exc: SharingError):
        logger.warning("rejected %s: %s", request.url.path, type(exc).__name__)
        state.audit.append(
            "rejected", {"path": request.url.path, "error": type(exc).__name__}
        )
        return JSONResponse(
            status_code=422,
            content={"detail": {"error": type(exc).__name__, "message": str(exc)}},
        )

    @app.get("/health")
    async def health():
        return {"status": "ok", "prime_bits": state.prime.bit_length()}

    @app.post("/split")
    async def split(req: SplitRequest):
        q = _to_int(req.modulus, "modulus") if req.modulus is not None else state.prime
        _check_limits(q, req.total_shares)
        secret = _to_int(req.secret, "secret")
        if req.seed is not None and not state.allow_seed:
            raise HTTPException(403, "Seeded splits are disabled on this dealer")
        rng = SeededRandomSource(req.seed) if req.seed is not None else None
        shares = shamir.create(req.threshold, req.total_shares, q, secret, rng=rng)
        state.audit.append(
            "split",
            {
                "threshold": req.threshold,
                "total_shares": req.total_shares,
                "prime_bits": q.bit_length(),
                "seeded": req.seed is not None,
            },
        )
        return {
            "modulus": str(q),
            "threshold": req.threshold,
            "shares": [{"value": str(s.value), "index": s.index} for s in shares],
        }

    @app.post("/combine")
    async def combine(req: CombineRequest):
        q = _to_int(req.modulus, "modulus") if req.modulus is not None else state.prime
        _check_limits(q, len(req.shares))
        pairs = [(_to_int(s.value, "share value"), s.index) for s in req.shares]
        secret = shamir.reconstruct(q, pairs, threshold=req.threshold)
        state.audit.append(
            "combine",
            {"num_shares": len(pairs), "prime_bits": q.bit_length()},
        )
        return {"secret": str(secret)}

    @app.post("/inverse")
    async def inverse(req: InverseRequest):
        a = _to_int(req.a, "a")
        p = _to_int(req.modulus, "modulus")
        _check_limits(p)
        return {"inverse": str(shamir.inverse(a, p))}

    @app.get("/audit")
    async def audit() -> Dict[str, Any]:
        return {"entries": state.audit.entries(), "chain_valid": state.audit.verify_chain()}

    return app


app = create_app()
