from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .config_schema import Config, resolve_config
from .entities import Holder


@dataclass(frozen=True)
class LiquidityAnalysis:
    """LP wallets and their share of supply.

    Attributes:
        lp_count: Number of LP-flagged holders.
        lp_total_balance: Token units held by LP wallets.
        lp_percentage_of_supply: LP share of total supply, in [0, 100].
        has_high_confidence_lp: Any LP detected with confidence >= high cut-off.
        has_low_confidence_lp: Any LP detected with confidence < low cut-off.
        suspicious_zero_lp: No LP found while the top 10 hold a large share,
            which usually means LP detection failed upstream.
        max_lp_confidence: Highest LP confidence, 0 without LPs.
        platforms: Distinct detected platforms, sorted.
        unlocked_supply: Total supply not sitting in LP wallets.
        unlocked_percentage: unlocked_supply as a share of total supply.
        liquidity_pools: The LP holders, input order.
    """

    lp_count: int
    lp_total_balance: float
    lp_percentage_of_supply: float
    has_high_confidence_lp: bool
    has_low_confidence_lp: bool
    suspicious_zero_lp: bool
    max_lp_confidence: int = 0
    platforms: Tuple[str, ...] = field(default_factory=tuple)
    unlocked_supply: float = 0.0
    unlocked_percentage: float = 0.0
    liquidity_pools: Tuple[Holder, ...] = field(default_factory=tuple)


def share_of_supply(amount: float, total_supply: float) -> float:
    """amount / total_supply as a percentage in [0, 100]; 0 on a zero supply."""

    if not total_supply or total_supply <= 0:
        return 0.0
    pct = amount / total_supply * 100.0
    if not math.isfinite(pct):
        return 0.0
    return max(0.0, min(100.0, pct))


def liquidity_pools(holders: Iterable[Holder]) -> List[Holder]:
    return [h for h in holders if h.is_liquidity_pool]


def analyze_liquidity(
    holders: Iterable[Holder],
    total_supply_balance: float,
    top10_percentage: float,
    cfg: Optional[Config] = None,
) -> LiquidityAnalysis:
    """Aggregate LP holders against total supply.

    Args:
        holders: Full holder list, LP wallets included.
        total_supply_balance: Sum of all balances, LP included.
        top10_percentage: Non-LP, creator-excluded top-10 concentration.
        cfg: Configuration.

    Returns:
        LiquidityAnalysis.
    """

    cfg = resolve_config(cfg)
    lc = cfg.liquidity
    pools = liquidity_pools(holders)

    lp_balance = float(sum(h.safe_balance for h in pools))
    lp_pct = share_of_supply(lp_balance, total_supply_balance)
    confidences = [int(h.lp_confidence or 0) for h in pools]
    platforms = sorted({h.detected_platform for h in pools if h.detected_platform})

    unlocked = max(0.0, float(total_supply_balance or 0.0) - lp_balance)

    return LiquidityAnalysis(
        lp_count=len(pools),
        lp_total_balance=lp_balance,
        lp_percentage_of_supply=lp_pct,
        has_high_confidence_lp=any(c >= lc.high_confidence for c in confidences),
        has_low_confidence_lp=any(c < lc.low_confidence for c in confidences),
        suspicious_zero_lp=not pools and top10_percentage > lc.suspicious_zero_lp_top10,
        max_lp_confidence=max(confidences) if confidences else 0,
        platforms=tuple(platforms),
        unlocked_supply=unlocked,
        unlocked_percentage=share_of_supply(unlocked, total_supply_balance),
        liquidity_pools=tuple(pools),
    )
