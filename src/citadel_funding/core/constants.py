"""
Citadel Funding Core Constants (integer domain)
===============================================

Only integer constants and role identifiers live here. Decimal display
quanta used for logs/printing are kept next to them; formatting helpers that
rely on Decimal live in `fmt.py`.
"""

# NOTE: All bps values are integers in [0, MAX_BPS]. MAX_BPS itself is never a valid discount.

from decimal import Decimal

# ---------------------------------------------------------------------------
# Basis points
# ---------------------------------------------------------------------------

#: 100% expressed in basis points.
MAX_BPS: int = 10_000


# ---------------------------------------------------------------------------
# Decimal precision
# ---------------------------------------------------------------------------

#: Internal fixed-point precision used to normalise input-asset amounts and
#: prices before dividing (WAD, 18 decimals).
PRECISION_DECIMALS: int = 18
WAD: int = 10 ** PRECISION_DECIMALS

#: Largest input-asset precision accepted at construction. Anything finer
#: than the internal WAD scale would be truncated by normalisation.
MAX_ASSET_DECIMALS: int = PRECISION_DECIMALS

#: Default precision of the output (citadel) token.
CITADEL_DECIMALS: int = 18


# ---------------------------------------------------------------------------
# Capabilities (role identifiers understood by the access registry)
# ---------------------------------------------------------------------------

GOVERNANCE_ROLE: str = "GOVERNANCE_ROLE"
POLICY_OPERATIONS_ROLE: str = "POLICY_OPERATIONS_ROLE"
CITADEL_PRICE_IN_ASSET_ORACLE_ROLE: str = "CITADEL_PRICE_IN_ASSET_ORACLE_ROLE"
TREASURY_OPERATIONS_ROLE: str = "TREASURY_OPERATIONS_ROLE"

#: Roles a freshly built registry knows about (used for validation only).
KNOWN_ROLES: frozenset = frozenset({
    GOVERNANCE_ROLE,
    POLICY_OPERATIONS_ROLE,
    CITADEL_PRICE_IN_ASSET_ORACLE_ROLE,
    TREASURY_OPERATIONS_ROLE,
})


# ---------------------------------------------------------------------------
# Decimal quanta for display/IO quantisation (formatting helpers)
# ---------------------------------------------------------------------------

# Display step for one basis point (0.01%).
BPS_QUANTUM: Decimal = Decimal("1e-4")


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

__all__ = [
    "MAX_BPS",
    "PRECISION_DECIMALS",
    "WAD",
    "MAX_ASSET_DECIMALS",
    "CITADEL_DECIMALS",
    "GOVERNANCE_ROLE",
    "POLICY_OPERATIONS_ROLE",
    "CITADEL_PRICE_IN_ASSET_ORACLE_ROLE",
    "TREASURY_OPERATIONS_ROLE",
    "KNOWN_ROLES",
    "BPS_QUANTUM",
]
