from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .access import GlobalAccessControl
from .core.amounts import TokenAmount
from .core.constants import CITADEL_DECIMALS, KNOWN_ROLES, MAX_ASSET_DECIMALS, MAX_BPS
from .funding import Funding
from .ledger import Token
from .log import setup_logging


class LoggingConfig(BaseModel):
    level: str = "INFO"


class TokenConfig(BaseModel):
    symbol: str
    decimals: int = Field(ge=0, le=MAX_ASSET_DECIMALS)


class LimitsConfig(BaseModel):
    min_discount: int = Field(default=0, ge=0)
    max_discount: int = Field(default=0, ge=0)
    discount: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_range(self) -> "LimitsConfig":
        if self.max_discount >= MAX_BPS:
            raise ValueError("maxDiscount >= MAX_BPS")
        if self.min_discount > self.max_discount:
            raise ValueError("minDiscount > maxDiscount")
        if not self.min_discount <= self.discount <= self.max_discount:
            raise ValueError("discount outside [minDiscount, maxDiscount]")
        return self


class PriceConfig(BaseModel):
    # Whole input-asset units per one whole citadel, e.g. "0.0005" (wBTC per CTDL).
    citadel_price_in_asset: Optional[Decimal] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None

    @field_validator("citadel_price_in_asset", "min_price", "max_price")
    @classmethod
    def _non_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("prices must be >= 0")
        return v


class FundingConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    address: str = "funding"
    asset: TokenConfig
    citadel: TokenConfig = Field(default_factory=lambda: TokenConfig(symbol="CTDL", decimals=CITADEL_DECIMALS))
    sale_recipient: str
    discount_manager: Optional[str] = None
    asset_cap: Optional[Decimal] = None  # whole input-asset units; None = uncapped
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    price: PriceConfig = Field(default_factory=PriceConfig)
    roles: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("roles")
    @classmethod
    def _known_roles(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        unknown = sorted(set(v) - KNOWN_ROLES)
        if unknown:
            raise ValueError(f"unknown roles: {unknown}")
        return v

    # Integer-domain views (exact; off-grid values are rejected)
    def asset_units(self, x: Optional[Decimal]) -> int:
        if x is None:
            return 0
        return TokenAmount.from_decimal(x, self.asset.decimals).value

    def asset_cap_units(self) -> Optional[int]:
        if self.asset_cap is None:
            return None
        return self.asset_units(self.asset_cap)


def load_config(path: str) -> FundingConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)
    data: dict[str, Any] = yaml.safe_load(p.read_text()) or {}
    return FundingConfig.model_validate(data)


def deploy_funding(config: FundingConfig,
                   gac: Optional[GlobalAccessControl] = None,
                   asset: Optional[Token] = None,
                   citadel: Optional[Token] = None,
                   *,
                   configure_logging: bool = False) -> Funding:
    """Build a Funding (and, where not supplied, its registry and tokens) from config."""
    if configure_logging:
        setup_logging(config.logging.level)
    if gac is None:
        gac = GlobalAccessControl.with_members(config.roles)
    else:
        for role, principals in config.roles.items():
            for p in principals:
                gac.grant_role(role, p)
    if asset is None:
        asset = Token(config.asset.symbol, config.asset.decimals)
    elif asset.decimals != config.asset.decimals:
        raise ValueError(
            f"asset decimals mismatch: token={asset.decimals} config={config.asset.decimals}"
        )
    if citadel is None:
        citadel = Token(config.citadel.symbol, config.citadel.decimals)

    return Funding(
        gac,
        asset,
        citadel,
        sale_recipient=config.sale_recipient,
        address=config.address,
        citadel_price_in_asset=config.asset_units(config.price.citadel_price_in_asset),
        min_discount=config.limits.min_discount,
        max_discount=config.limits.max_discount,
        discount=config.limits.discount,
        discount_manager=config.discount_manager,
        asset_cap=config.asset_cap_units(),
        min_citadel_price_in_asset=config.asset_units(config.price.min_price),
        max_citadel_price_in_asset=config.asset_units(config.price.max_price),
    )
