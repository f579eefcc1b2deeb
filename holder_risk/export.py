from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from .entities import ClassifiedHolder


CSV_COLUMNS = ["Rank", "Wallet Address", "Token Balance", "USD Value", "Wallet Type", "Token Account"]


def wallet_type(c: ClassifiedHolder) -> str:
    """Tier display name, or "LP (<platform>)" for liquidity pools."""

    if c.is_liquidity_pool:
        return f"LP ({c.holder.detected_platform or 'Unknown'})"
    return c.tier.display_name


def holders_to_frame(classified: Iterable[ClassifiedHolder]) -> pd.DataFrame:
    rows = [
        {
            "Rank": c.holder.rank,
            "Wallet Address": c.holder.owner,
            "Token Balance": c.holder.balance,
            "USD Value": f"{c.holder.safe_usd_value:.4f}",
            "Wallet Type": wallet_type(c),
            "Token Account": c.holder.token_account,
        }
        for c in classified
    ]
    if not rows:
        return pd.DataFrame(columns=CSV_COLUMNS)
    return pd.DataFrame(rows)[CSV_COLUMNS]


def export_csv(classified: Iterable[ClassifiedHolder], path: Union[str, Path]) -> Path:
    """Write the holder table to ``path`` and return it."""

    path = Path(path)
    holders_to_frame(classified).to_csv(path, index=False)
    return path
