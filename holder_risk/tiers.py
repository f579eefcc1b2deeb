from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Optional, Tuple

from .config_schema import Config, TierThresholds, resolve_config
from .entities import ClassifiedHolder, Holder, Tier


LPFilter = Literal["all", "exclude", "only"]

# Coarse groups used by summaries and structural flags.
SIMPLE_TIER_GROUPS: Dict[str, Tuple[Tier, ...]] = {
    "dust": (Tier.DUST,),
    "retail": (Tier.SMALL, Tier.MEDIUM, Tier.LARGE),
    "serious": (Tier.REAL, Tier.BOSS, Tier.KINGPIN),
    "whales": (Tier.SUPER_BOSS, Tier.BABY_WHALE, Tier.TRUE_WHALE),
}


@dataclass(frozen=True)
class TierGroup:
    count: int
    percentage: float


@dataclass(frozen=True)
class SimpleTiers:
    dust: TierGroup
    retail: TierGroup
    serious: TierGroup
    whales: TierGroup


def _ordered_bounds(th: TierThresholds) -> List[Tuple[Tier, float]]:
    """(tier, lower bound) pairs from highest to lowest."""

    return [
        (Tier.TRUE_WHALE, th.true_whale),
        (Tier.BABY_WHALE, th.baby_whale),
        (Tier.SUPER_BOSS, th.super_boss),
        (Tier.KINGPIN, th.kingpin),
        (Tier.BOSS, th.boss),
        (Tier.REAL, th.real),
        (Tier.LARGE, th.large),
        (Tier.MEDIUM, th.medium),
        (Tier.SMALL, th.small),
    ]


def classify_tier(usd_value: Optional[float], cfg: Optional[Config] = None) -> Tier:
    """Map a USD value to its tier.

    Thresholds are checked from highest to lowest and the first match wins.
    Missing, NaN or negative values fall through to Dust.
    """

    cfg = resolve_config(cfg)
    if usd_value is None or usd_value != usd_value or usd_value < 0:
        return Tier.DUST
    for tier, lower in _ordered_bounds(cfg.tiers):
        if usd_value >= lower:
            return tier
    return Tier.DUST


def classify_holders(
    holders: Iterable[Holder], cfg: Optional[Config] = None
) -> List[ClassifiedHolder]:
    """Assign exactly one tier to every holder, LP wallets included.

    Tier and LP flag are independent; aggregate counts drop LP wallets later.
    """

    cfg = resolve_config(cfg)
    return [ClassifiedHolder(holder=h, tier=classify_tier(h.safe_usd_value, cfg)) for h in holders]


def count_tiers(classified: Iterable[ClassifiedHolder]) -> Dict[Tier, int]:
    """Per-tier counts over non-LP holders. Every tier is present, possibly 0."""

    counts: Dict[Tier, int] = {t: 0 for t in Tier}
    for c in classified:
        if c.is_liquidity_pool:
            continue
        counts[c.tier] += 1
    return counts


def real_holder_count(classified: Iterable[ClassifiedHolder]) -> int:
    """Non-LP holders above the Dust tier."""

    return sum(1 for c in classified if not c.is_liquidity_pool and c.tier is not Tier.DUST)


def simple_tiers(classified: Iterable[ClassifiedHolder]) -> SimpleTiers:
    """Roll the ten tiers up into dust/retail/serious/whales over non-LP holders."""

    counts = count_tiers(classified)
    total = sum(counts.values())
    groups: Dict[str, TierGroup] = {}
    for name, members in SIMPLE_TIER_GROUPS.items():
        n = sum(counts[t] for t in members)
        pct = (n / total * 100.0) if total > 0 else 0.0
        groups[name] = TierGroup(count=n, percentage=pct)
    return SimpleTiers(**groups)


def filter_holders(
    classified: Iterable[ClassifiedHolder],
    *,
    tier: Optional[Tier] = None,
    lp_filter: LPFilter = "all",
    min_usd: Optional[float] = None,
    cfg: Optional[Config] = None,
) -> List[ClassifiedHolder]:
    """Select holders for display or export.

    Filters apply in order: minimum USD value, LP selection, then tier. The
    tier selection is ignored when only LP wallets are requested.

    Args:
        classified: Classified holders.
        tier: Keep only this tier when given.
        lp_filter: "all", "exclude" (drop LP wallets) or "only" (LP wallets only).
        min_usd: Minimum USD value; defaults to cfg.display.min_usd.
        cfg: Configuration.

    Returns:
        New list, input order preserved.
    """

    cfg = resolve_config(cfg)
    floor = cfg.display.min_usd if min_usd is None else min_usd
    out = [c for c in classified if c.holder.safe_usd_value >= floor]

    if lp_filter == "exclude":
        out = [c for c in out if not c.is_liquidity_pool]
    elif lp_filter == "only":
        out = [c for c in out if c.is_liquidity_pool]
    elif lp_filter != "all":
        raise ValueError(f"Invalid lp_filter: {lp_filter}")

    if tier is not None and lp_filter != "only":
        out = [c for c in out if c.tier is tier]
    return out
