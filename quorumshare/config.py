"""Global configuration for QuorumShare."""

import os

# ---------- Finite-field prime ----------
# Default modulus for the dealer service.  Library calls always take the
# modulus explicitly; this is only used when a request omits it.
PRIME = int(os.environ.get("QUORUMSHARE_PRIME", str(2**127 - 1)))  # Mersenne prime M127

# ---------- Polynomial coefficients ----------
# Random coefficients are drawn this wide (or wider than the modulus,
# whichever is larger) before reduction.
COEFFICIENT_BITS = int(os.environ.get("QUORUMSHARE_COEFFICIENT_BITS", "1024"))

# ---------- Dealer service limits ----------
MAX_SHARES = 255     # upper bound on shares per /split or /combine request
MAX_PRIME_BITS = 4096  # upper bound on modulus size for every endpoint

# Deterministic (seeded) splits replay their coefficients; off unless
# explicitly enabled for demos.
ALLOW_SEED = os.environ.get("QUORUMSHARE_ALLOW_SEED", "0") == "1"

# ---------- Logging ----------
LOG_LEVEL = os.environ.get("QUORUMSHARE_LOG_LEVEL", "WARNING")
