from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .config_schema import Config, resolve_config
from .entities import Holder


@dataclass(frozen=True)
class ConcentrationStats:
    """Top-N supply concentration over non-LP holders.

    ``top_n`` holds (N, percentage) pairs in ascending N. Percentages are in
    [0, 100] and non-decreasing in N. ``top_wallets`` is the
    largest slice computed, in descending percentage order.
    """

    top_n: Tuple[Tuple[int, float], ...]
    top_wallets: Tuple[Holder, ...] = field(default_factory=tuple)
    creator_excluded: Optional[str] = None

    def top(self, n: int) -> float:
        for size, pct in self.top_n:
            if size == n:
                return pct
        raise KeyError(n)

    def _get(self, n: int) -> float:
        return next((pct for size, pct in self.top_n if size == n), 0.0)

    @property
    def top3(self) -> float:
        return self._get(3)

    @property
    def top5(self) -> float:
        return self._get(5)

    @property
    def top10(self) -> float:
        return self._get(10)

    @property
    def top20(self) -> float:
        return self._get(20)

    @property
    def top25(self) -> float:
        return self._get(25)


def ranked_non_lp(
    holders: Iterable[Holder], creator_address: Optional[str] = None
) -> List[Holder]:
    """Non-LP holders minus the creator, sorted by supply share descending.

    The sort is stable, so ties keep provider order.
    """

    eligible = [
        h
        for h in holders
        if not h.is_liquidity_pool and (creator_address is None or h.owner != creator_address)
    ]
    return sorted(eligible, key=lambda h: h.safe_percentage, reverse=True)


def top_n_concentration(
    holders: Iterable[Holder], n: int, creator_address: Optional[str] = None
) -> Tuple[float, List[Holder]]:
    """Sum of supply percentages over the top ``n`` qualifying holders.

    Fewer than ``n`` qualifying holders sums over all of them.

    Returns:
        Tuple of (percentage, wallets in the slice).
    """

    ranked = ranked_non_lp(holders, creator_address)
    wallets = ranked[:n]
    return float(sum(h.safe_percentage for h in wallets)), wallets


def compute_concentration(
    holders: Iterable[Holder],
    creator_address: Optional[str] = None,
    cfg: Optional[Config] = None,
) -> ConcentrationStats:
    """Compute every configured top-N concentration in one pass.

    Args:
        holders: Full holder list (LP wallets are filtered here).
        creator_address: Wallet excluded from all slices, when known.
        cfg: Configuration providing the N values.

    Returns:
        ConcentrationStats.
    """

    cfg = resolve_config(cfg)
    sizes = cfg.concentration.top_n
    ranked = ranked_non_lp(holders, creator_address)

    out: Dict[int, float] = {}
    if ranked:
        cum = np.cumsum([h.safe_percentage for h in ranked])
        for n in sizes:
            out[n] = float(cum[min(n, len(ranked)) - 1])
    else:
        out = {n: 0.0 for n in sizes}

    return ConcentrationStats(
        top_n=tuple(sorted(out.items())),
        top_wallets=tuple(ranked[: max(sizes)]),
        creator_excluded=creator_address,
    )
