from __future__ import annotations

import math
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .entities import Holder, PotentialDevWallet


def _finite_or_zero(v: Any) -> float:
    if v is None:
        return 0.0
    try:
        f = float(v)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(f) or math.isinf(f) else f


class HolderIn(BaseModel):
    """One holder record as returned by the holder-data provider."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    owner: str
    balance: float = 0.0
    balance_raw: str = Field(default="", alias="balanceRaw")
    usd_value: float = Field(default=0.0, alias="usdValue")
    percentage_of_supply: float = Field(default=0.0, alias="percentageOfSupply")
    is_liquidity_pool: bool = Field(default=False, alias="isLiquidityPool")
    lp_confidence: int = Field(default=0, alias="lpConfidence")
    detected_platform: Optional[str] = Field(default=None, alias="detectedPlatform")
    lp_detection_reason: Optional[str] = Field(default=None, alias="lpDetectionReason")
    token_account: str = Field(default="", alias="tokenAccount")
    rank: int = 0

    @field_validator("balance", "usd_value", "percentage_of_supply", mode="before")
    def coerce_missing_numbers(cls, v: Any) -> float:
        return _finite_or_zero(v)

    @field_validator("lp_confidence", mode="before")
    def clamp_confidence(cls, v: Any) -> int:
        return int(max(0.0, min(100.0, _finite_or_zero(v))))

    @field_validator("balance_raw", "token_account", mode="before")
    def none_to_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    def to_entity(self) -> Holder:
        return Holder(
            owner=self.owner,
            balance=self.balance,
            usd_value=self.usd_value,
            percentage_of_supply=self.percentage_of_supply,
            balance_raw=self.balance_raw,
            is_liquidity_pool=self.is_liquidity_pool,
            lp_confidence=self.lp_confidence,
            detected_platform=self.detected_platform,
            rank=self.rank,
            token_account=self.token_account,
            lp_detection_reason=self.lp_detection_reason,
        )


class PotentialDevWalletIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    address: str
    percentage_of_supply: float = Field(default=0.0, alias="percentageOfSupply")
    reason: str = ""
    balance: float = 0.0
    usd_value: float = Field(default=0.0, alias="usdValue")
    confidence: int = 0

    @field_validator("percentage_of_supply", "usd_value", mode="before")
    def coerce_missing_numbers(cls, v: Any) -> float:
        return _finite_or_zero(v)

    def to_entity(self) -> PotentialDevWallet:
        return PotentialDevWallet(
            address=self.address,
            percentage_of_supply=self.percentage_of_supply,
            reason=self.reason,
            balance=self.balance,
            usd_value=self.usd_value,
            confidence=self.confidence,
        )


class WalletAnnotationIn(BaseModel):
    """User-applied wallet flag as stored by the annotation layer."""

    flag: Literal["dev", "team", "suspicious"]
    timestamp: Optional[int] = None


class HoldersSnapshotIn(BaseModel):
    """Holder-data provider payload for a single token."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    token_mint: Optional[str] = Field(default=None, alias="tokenMint")
    total_holders: Optional[int] = Field(default=None, alias="totalHolders")
    total_balance: Optional[float] = Field(default=None, alias="totalBalance")
    token_price_usd: float = Field(default=0.0, alias="tokenPriceUSD")
    holders: List[HolderIn] = Field(default_factory=list)
    potential_dev_wallet: Optional[PotentialDevWalletIn] = Field(
        default=None, alias="potentialDevWallet"
    )
    creator_address: Optional[str] = Field(default=None, alias="creatorAddress")
    # Opaque third-party payload; only bundledPercentage is read.
    insiders_graph: Optional[Dict[str, Any]] = Field(default=None, alias="insidersGraph")

    @field_validator("token_price_usd", mode="before")
    def coerce_price(cls, v: Any) -> float:
        return _finite_or_zero(v)

    def holder_entities(self) -> List[Holder]:
        return [h.to_entity() for h in self.holders]


def parse_annotations(raw: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """Turn stored annotations into an address -> flag mapping.

    Accepts either bare flag strings or {"flag": ..., "timestamp": ...} records.
    """

    out: Dict[str, str] = {}
    for address, value in (raw or {}).items():
        if isinstance(value, str):
            value = {"flag": value}
        out[address] = WalletAnnotationIn(**value).flag
    return out
