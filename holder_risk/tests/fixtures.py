from __future__ import annotations

import math
from typing import List, Optional, Sequence

from holder_risk.entities import Holder


def make_holder(
    owner: str,
    pct: float,
    *,
    usd: float = 10.0,
    balance: Optional[float] = None,
    lp: bool = False,
    confidence: int = 0,
    platform: Optional[str] = None,
    rank: int = 0,
) -> Holder:
    """Holder with balance defaulting to pct * 10 (a 1000-unit supply)."""

    if balance is None:
        balance = pct * 10.0
    raw = str(int(balance * 1_000_000)) if math.isfinite(balance) else ""
    return Holder(
        owner=owner,
        balance=balance,
        usd_value=usd,
        percentage_of_supply=pct,
        balance_raw=raw,
        is_liquidity_pool=lp,
        lp_confidence=confidence,
        detected_platform=platform,
        rank=rank,
        token_account=f"ta_{owner}",
    )


def make_snapshot(pcts: Sequence[float], *, usd: float = 10.0, prefix: str = "W") -> List[Holder]:
    """Non-LP holders with the given supply shares, ranked in input order."""

    return [
        make_holder(f"{prefix}{i:040d}", p, usd=usd, rank=i + 1) for i, p in enumerate(pcts)
    ]


def even_snapshot(n: int = 2000, usd: float = 2.0) -> List[Holder]:
    """n holders sharing supply equally."""

    return make_snapshot([100.0 / n] * n, usd=usd)


def lp_snapshot(lp_pct: float, others: Sequence[float], platform: str = "Raydium") -> List[Holder]:
    """One LP wallet holding lp_pct plus non-LP holders."""

    lp = make_holder("LP" + "0" * 40, lp_pct, lp=True, confidence=95, platform=platform, rank=1)
    rest = make_snapshot(others)
    return [lp] + rest


def provider_payload() -> dict:
    """Provider-shaped payload with camelCase keys."""

    return {
        "tokenMint": "Mint1111111111111111111111111111111111111",
        "totalHolders": 6,
        "totalBalance": 1000.0,
        "tokenPriceUSD": 0.01,
        "holders": [
            {
                "owner": "PoolAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA",
                "balance": 100.0,
                "balanceRaw": "100000000",
                "usdValue": 1.0,
                "percentageOfSupply": 10.0,
                "isLiquidityPool": True,
                "lpConfidence": 92,
                "detectedPlatform": "Raydium",
                "tokenAccount": "TA1",
                "rank": 2,
            },
            {
                "owner": "WhaleBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBB",
                "balance": 400.0,
                "balanceRaw": "400000000",
                "usdValue": 6000.0,
                "percentageOfSupply": 40.0,
                "isLiquidityPool": False,
                "lpConfidence": 0,
                "detectedPlatform": None,
                "tokenAccount": "TA2",
                "rank": 1,
            },
            {
                "owner": "DevCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCC",
                "balance": 200.0,
                "balanceRaw": "200000000",
                "usdValue": 3000.0,
                "percentageOfSupply": 20.0,
                "isLiquidityPool": False,
                "tokenAccount": "TA3",
                "rank": 3,
            },
            {
                "owner": "MidDDDDDDDDDDDDDDDDDDDDDDDDDDDDDDDDDDDDDDDDD",
                "balance": 150.0,
                "usdValue": 300.0,
                "percentageOfSupply": 15.0,
                "rank": 4,
            },
            {
                "owner": "SmallEEEEEEEEEEEEEEEEEEEEEEEEEEEEEEEEEEEEEEE",
                "balance": 149.0,
                "usdValue": None,
                "percentageOfSupply": 14.9,
                "rank": 5,
            },
            {
                "owner": "DustFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF",
                "balance": 1.0,
                "usdValue": 0.5,
                "percentageOfSupply": 0.1,
                "rank": 6,
            },
        ],
        "potentialDevWallet": {
            "address": "DevCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCC",
            "balance": 200.0,
            "usdValue": 3000.0,
            "percentageOfSupply": 20.0,
            "confidence": 80,
            "reason": "Early large buyer",
        },
        "insidersGraph": {"bundledPercentage": 25.0, "clusters": [{"id": 1}]},
    }
