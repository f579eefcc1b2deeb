from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Literal, Optional

from .errors import DataIntegrityError


WalletFlag = Literal["dev", "team", "suspicious"]


class Tier(str, Enum):
    """USD value tier of a holder, in ascending order of value."""

    DUST = "Dust"
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    REAL = "Real"
    BOSS = "Boss"
    KINGPIN = "Kingpin"
    SUPER_BOSS = "SuperBoss"
    BABY_WHALE = "BabyWhale"
    TRUE_WHALE = "TrueWhale"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES.get(self, self.value)


_DISPLAY_NAMES = {
    Tier.SUPER_BOSS: "Super Boss",
    Tier.BABY_WHALE: "Baby Whale",
    Tier.TRUE_WHALE: "True Whale",
}


@dataclass(frozen=True)
class Holder:
    """One wallet's position in a holder snapshot.

    Attributes:
        owner: Wallet address (opaque, not validated).
        balance: Decimal-normalized token amount.
        usd_value: USD valuation; 0 when price discovery failed upstream.
        percentage_of_supply: balance / total supply * 100, from the provider.
        balance_raw: Raw integer amount as a string.
        is_liquidity_pool: Provider's LP detection flag.
        lp_confidence: Provider's LP detection confidence in [0, 100].
        detected_platform: DEX/launchpad name when the holder is an LP.
        rank: 1-based position in descending-balance order.
        token_account: Token account address holding the balance.
        lp_detection_reason: Provider's explanation of the LP detection.
    """

    owner: str
    balance: float
    usd_value: float = 0.0
    percentage_of_supply: float = 0.0
    balance_raw: str = ""
    is_liquidity_pool: bool = False
    lp_confidence: int = 0
    detected_platform: Optional[str] = None
    rank: int = 0
    token_account: str = ""
    lp_detection_reason: Optional[str] = None

    @property
    def safe_usd_value(self) -> float:
        v = self.usd_value
        if v is None or math.isnan(v) or v < 0:
            return 0.0
        return float(v)

    @property
    def safe_balance(self) -> float:
        b = self.balance
        if b is None or not math.isfinite(b):
            return 0.0
        return float(b)

    @property
    def safe_percentage(self) -> float:
        p = self.percentage_of_supply
        if p is None or not math.isfinite(p):
            return 0.0
        return float(p)


@dataclass(frozen=True)
class ClassifiedHolder:
    """A holder paired with the single tier it falls in."""

    holder: Holder
    tier: Tier

    @property
    def owner(self) -> str:
        return self.holder.owner

    @property
    def is_liquidity_pool(self) -> bool:
        return self.holder.is_liquidity_pool


@dataclass(frozen=True)
class PotentialDevWallet:
    """Likely creator wallet reported by an upstream heuristic."""

    address: str
    percentage_of_supply: float
    reason: str = ""
    balance: float = 0.0
    usd_value: float = 0.0
    confidence: int = 0


def non_lp(holders: Iterable[Holder]) -> List[Holder]:
    return [h for h in holders if not h.is_liquidity_pool]


def total_balance(holders: Iterable[Holder]) -> float:
    """Sum of all balances, LP included."""

    return float(sum(h.safe_balance for h in holders))


def check_integrity(holders: Iterable[Holder], total_supply: Optional[float] = None) -> None:
    """Reject snapshots carrying impossible negative amounts.

    Missing or non-finite amounts are not errors; they count as zero.

    Raises:
        DataIntegrityError: on a negative total supply, holder balance or
            supply percentage.
    """

    if total_supply is not None and math.isfinite(total_supply) and total_supply < 0:
        raise DataIntegrityError(f"Negative total supply: {total_supply}")
    for h in holders:
        if h.safe_balance < 0:
            raise DataIntegrityError(f"Negative balance {h.balance} for {h.owner}")
        if h.safe_percentage < 0:
            raise DataIntegrityError(
                f"Negative supply percentage {h.percentage_of_supply} for {h.owner}"
            )
