"""
Citadel Funding Core
====================

Unified exports for integer-domain primitives used by the funding sale.
All arithmetic is on integer base units with explicit, directional rounding
(IN rounds up, OUT rounds down). Decimal helpers are provided *only* for I/O
formatting.
"""

# NOTE:
#   The `core` package has no knowledge of access control, tokens or the sale
#   itself. Everything here is a pure function or a plain record so it can be
#   shared by pricing, discount management and the Funding entrypoints.

# Integer-domain constants
from .constants import (
    MAX_BPS,
    PRECISION_DECIMALS,
    WAD,
    MAX_ASSET_DECIMALS,
    CITADEL_DECIMALS,
    GOVERNANCE_ROLE,
    POLICY_OPERATIONS_ROLE,
    CITADEL_PRICE_IN_ASSET_ORACLE_ROLE,
    TREASURY_OPERATIONS_ROLE,
    KNOWN_ROLES,
)

# Decimal formatting helpers (non-core arithmetic)
from .fmt import (
    DEFAULT_DECIMAL_PRECISION,
    fmt_dec,
    fmt_units,
    fmt_bps,
    fmt_event,
    amount_to_decimal,
    bps_to_decimal,
)

# Amount primitives and bridges
from .amounts import (
    TokenAmount,
    mul_div_down,
    mul_div_up,
    check_decimals,
    check_units,
    to_wad,
    from_wad_down,
    from_wad_up,
    decimal_from_units,
    units_from_decimal_in,
    units_from_decimal_out,
)

# Core datatypes
from .datatypes import (
    FundingState,
    FundingParams,
    Event,
)

# Core exceptions
from .exc import (
    AmountDomainError,
    InvariantViolation,
    FundingError,
    AccessDenied,
    SystemPaused,
    LimitInvalid,
    BelowMinimum,
    AboveMaximum,
    SlippageExceeded,
    InsufficientOutputLiquidity,
    PriceFlagged,
    PriceNotSet,
    InvalidPrice,
    ZeroAmount,
    AssetCapExceeded,
    InsufficientBalance,
    InsufficientAllowance,
)

__all__ = [
    # constants
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
    # fmt
    "DEFAULT_DECIMAL_PRECISION",
    "fmt_dec",
    "fmt_units",
    "fmt_bps",
    "fmt_event",
    "amount_to_decimal",
    "bps_to_decimal",
    # amounts
    "TokenAmount",
    "mul_div_down",
    "mul_div_up",
    "check_decimals",
    "check_units",
    "to_wad",
    "from_wad_down",
    "from_wad_up",
    "decimal_from_units",
    "units_from_decimal_in",
    "units_from_decimal_out",
    # datatypes
    "FundingState",
    "FundingParams",
    "Event",
    # exceptions
    "AmountDomainError",
    "InvariantViolation",
    "FundingError",
    "AccessDenied",
    "SystemPaused",
    "LimitInvalid",
    "BelowMinimum",
    "AboveMaximum",
    "SlippageExceeded",
    "InsufficientOutputLiquidity",
    "PriceFlagged",
    "PriceNotSet",
    "InvalidPrice",
    "ZeroAmount",
    "AssetCapExceeded",
    "InsufficientBalance",
    "InsufficientAllowance",
]
