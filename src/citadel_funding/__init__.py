# Top-level API for citadel_funding (integer-domain).
"""
Top-level API for citadel_funding (integer-domain).

This module exposes the stable interface of the discount-rate token sale:
  - Funding: the sale entrypoints (discount, oracle, deposit, treasury)
  - GlobalAccessControl: mapping-backed role + pause registry (Authorizer)
  - Token / TransferBatch: in-memory ERC20-style ledger and atomic transfer staging
  - pricing: pure quote functions (round down OUT, round up IN)

Config loading (pydantic + YAML) lives in `citadel_funding.config` and is not
imported here so the core stays importable without its third-party stack.
"""

# NOTE:
#   Every amount crossing this API is an int of token base units. Decimal
#   values are only accepted at the config/display boundary.

from __future__ import annotations


# Stable surface
from .funding import Funding
from .access import (
    Authorizer,
    GlobalAccessControl,
    RoleRegistry,
    PauseRegistry,
)
from .ledger import Token, TransferBatch
from .pricing import (
    Quote,
    quote,
    quote_amount_out,
    quote_asset_amount_in,
)

# Core data types and errors
from .core import (
    MAX_BPS,
    GOVERNANCE_ROLE,
    POLICY_OPERATIONS_ROLE,
    CITADEL_PRICE_IN_ASSET_ORACLE_ROLE,
    TREASURY_OPERATIONS_ROLE,
    FundingState,
    FundingParams,
    Event,
    TokenAmount,
    FundingError,
    AccessDenied,
    SystemPaused,
    LimitInvalid,
    BelowMinimum,
    AboveMaximum,
    SlippageExceeded,
    InsufficientOutputLiquidity,
)

__all__ = [
    # entrypoints and collaborators
    "Funding",
    "Authorizer",
    "GlobalAccessControl",
    "RoleRegistry",
    "PauseRegistry",
    "Token",
    "TransferBatch",
    # pricing
    "Quote",
    "quote",
    "quote_amount_out",
    "quote_asset_amount_in",
    # constants
    "MAX_BPS",
    "GOVERNANCE_ROLE",
    "POLICY_OPERATIONS_ROLE",
    "CITADEL_PRICE_IN_ASSET_ORACLE_ROLE",
    "TREASURY_OPERATIONS_ROLE",
    # data types
    "FundingState",
    "FundingParams",
    "Event",
    "TokenAmount",
    # errors
    "FundingError",
    "AccessDenied",
    "SystemPaused",
    "LimitInvalid",
    "BelowMinimum",
    "AboveMaximum",
    "SlippageExceeded",
    "InsufficientOutputLiquidity",
]
