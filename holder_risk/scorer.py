from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Literal, Optional, Tuple

from .config_schema import Config, resolve_config
from .entities import Holder


RiskLevel = Literal["low", "medium", "high"]

WHALE_CAP = 40.0
DISTRIBUTION_CAP = 30.0
LP_CAP = 20.0
HOLDER_COUNT_CAP = 10.0


@dataclass(frozen=True)
class ScoreBreakdown:
    """Unrounded sub-scores; their sum rounds to the final score."""

    whale_score: float
    distribution_score: float
    lp_score: float
    holder_count_score: float

    @property
    def total(self) -> float:
        return self.whale_score + self.distribution_score + self.lp_score + self.holder_count_score


@dataclass(frozen=True)
class StabilityScore:
    score: int
    risk_level: RiskLevel
    label: str
    whale_percentage: float
    breakdown: ScoreBreakdown


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def whale_percentage(holders: Iterable[Holder], cfg: Optional[Config] = None) -> float:
    """Combined supply share of non-LP holders each holding at least the whale cut-off."""

    cfg = resolve_config(cfg)
    cutoff = cfg.stability.whale_min_pct
    return float(
        sum(
            h.safe_percentage
            for h in holders
            if not h.is_liquidity_pool and h.safe_percentage >= cutoff
        )
    )


def whale_score(whale_pct: float, cfg: Optional[Config] = None) -> float:
    cfg = resolve_config(cfg)
    return _clamp(WHALE_CAP - whale_pct * cfg.stability.whale_penalty_per_pct, 0.0, WHALE_CAP)


def distribution_score(top10_pct: float) -> float:
    if top10_pct > 40:
        s = max(0.0, 30 - (top10_pct - 40) * 0.75)
    elif top10_pct > 20:
        s = 15 + (40 - top10_pct) * 0.75
    else:
        s = 25 + (20 - top10_pct) * 0.25
    return _clamp(s, 0.0, DISTRIBUTION_CAP)


def lp_score(lp_pct: float) -> float:
    """Score the LP share; 5-15% is the ideal band."""

    dist = abs(lp_pct - 10)
    if 5 <= lp_pct <= 15:
        s = 18 + (15 - dist) * 0.2
    elif 2 <= lp_pct < 5 or 15 < lp_pct <= 25:
        s = 10 + 8 * (1 - dist / 15)
    else:
        s = max(0.0, 10 - dist / 3)
    # The ideal band peaks at 21 at exactly 10%.
    return _clamp(s, 0.0, LP_CAP)


def holder_count_score(total_holders: int) -> float:
    n = max(0, int(total_holders or 0))
    if n > 1000:
        s = 10.0
    elif n > 500:
        s = 7 + (n - 500) / 500 * 3
    elif n > 100:
        s = 4 + (n - 100) / 400 * 3
    else:
        s = n / 100 * 4
    return _clamp(s, 0.0, HOLDER_COUNT_CAP)


def risk_level_from_whales(whale_pct: float, cfg: Optional[Config] = None) -> Tuple[RiskLevel, str]:
    """Return (risk_level, label) for a whale concentration."""

    cfg = resolve_config(cfg)
    if whale_pct < cfg.stability.risk_low_below:
        return "low", "Community-owned"
    if whale_pct < cfg.stability.risk_medium_below:
        return "medium", "Neutral"
    return "high", "High Risk"


def compute_stability_score(
    *,
    holders: Iterable[Holder],
    total_holders: int,
    top10_percentage: float,
    lp_percentage: float,
    cfg: Optional[Config] = None,
) -> StabilityScore:
    """Compose the 0-100 stability score.

    Weights: whale concentration 40, top-10 distribution 30, LP share 20,
    holder count 10. Sub-scores stay unrounded; the total is rounded once.

    Args:
        holders: Full holder list (LP wallets are skipped for whale share).
        total_holders: Holder count reported by the provider.
        top10_percentage: Non-LP, creator-excluded top-10 concentration.
        lp_percentage: LP share of supply.
        cfg: Configuration.

    Returns:
        StabilityScore.
    """

    cfg = resolve_config(cfg)
    whale_pct = whale_percentage(holders, cfg)
    breakdown = ScoreBreakdown(
        whale_score=whale_score(whale_pct, cfg),
        distribution_score=distribution_score(top10_percentage),
        lp_score=lp_score(lp_percentage),
        holder_count_score=holder_count_score(total_holders),
    )
    level, label = risk_level_from_whales(whale_pct, cfg)
    return StabilityScore(
        score=int(_clamp(round_half_up(breakdown.total), 0, 100)),
        risk_level=level,
        label=label,
        whale_percentage=whale_pct,
        breakdown=breakdown,
    )
