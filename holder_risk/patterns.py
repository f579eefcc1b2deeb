from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Literal, Mapping, Optional

from .concentration import ranked_non_lp
from .config_schema import Config, resolve_config
from .entities import Holder, PotentialDevWallet, WalletFlag


Severity = Literal["critical", "warning", "info"]

FLAG_LABELS = {
    "dev": "Dev wallet",
    "team": "Team wallet",
    "suspicious": "Suspicious wallet",
}


@dataclass(frozen=True)
class Alert:
    """A user-facing concentration alert.

    flagged is True when the alert reflects a user-applied wallet annotation.
    """

    severity: Severity
    message: str
    flagged: bool = False


def truncate_address(address: str, cfg: Optional[Config] = None) -> str:
    cfg = resolve_config(cfg)
    head, tail = cfg.display.address_head, cfg.display.address_tail
    if len(address) <= head + tail:
        return address
    return f"{address[:head]}...{address[-tail:]}"


def detect_suspicious_patterns(
    *,
    holders: Iterable[Holder],
    potential_dev_wallet: Optional[PotentialDevWallet] = None,
    annotations: Optional[Mapping[str, WalletFlag]] = None,
    cfg: Optional[Config] = None,
) -> List[Alert]:
    """Scan the holder list for concentration red flags.

    Rules, in output order:
    - potential dev wallet (info if the user flagged it as dev, else warning)
    - each non-LP wallet above the single-wallet threshold (warning)
    - top 3 non-LP wallets above the combined threshold (critical)
    - each annotated wallet still holding, other than the dev wallet (info)

    Args:
        holders: Full holder list; LP wallets are ignored.
        potential_dev_wallet: Likely creator from an upstream heuristic.
        annotations: User flags keyed by address. Iteration order is kept.
        cfg: Configuration.

    Returns:
        Ordered list of Alert entries. Missing inputs yield fewer alerts.
    """

    cfg = resolve_config(cfg)
    th = cfg.alerts
    annotations = annotations or {}
    holders = list(holders)
    out: List[Alert] = []

    dev_address = potential_dev_wallet.address if potential_dev_wallet else None
    if potential_dev_wallet is not None:
        user_marked_dev = annotations.get(potential_dev_wallet.address) == "dev"
        out.append(
            Alert(
                severity="info" if user_marked_dev else "warning",
                message=(
                    f"Potential Dev: {truncate_address(potential_dev_wallet.address, cfg)} "
                    f"holds {potential_dev_wallet.percentage_of_supply:.1f}% - "
                    f"{potential_dev_wallet.reason}"
                ),
                flagged=user_marked_dev,
            )
        )

    ranked = ranked_non_lp(holders)

    for h in ranked:
        if h.safe_percentage > th.single_wallet_pct:
            out.append(
                Alert(
                    severity="warning",
                    message=(
                        f"Wallet {truncate_address(h.owner, cfg)} holds "
                        f"{h.safe_percentage:.1f}% of supply"
                    ),
                )
            )

    top3 = sum(h.safe_percentage for h in ranked[:3])
    if top3 > th.top3_pct:
        out.append(
            Alert(
                severity="critical",
                message=f"Top 3 wallets control {top3:.1f}% of supply",
            )
        )

    by_owner = {h.owner: h for h in ranked}
    for address, flag in annotations.items():
        if address == dev_address:
            continue
        holder = by_owner.get(address)
        if holder is None:
            continue
        label = FLAG_LABELS.get(flag, FLAG_LABELS["suspicious"])
        out.append(
            Alert(
                severity="info",
                message=f"{label} holds {holder.safe_percentage:.1f}% of supply",
                flagged=True,
            )
        )

    return out
