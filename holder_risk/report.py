from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .concentration import ConcentrationStats, compute_concentration
from .config_schema import Config, resolve_config
from .entities import (
    ClassifiedHolder,
    Holder,
    PotentialDevWallet,
    Tier,
    WalletFlag,
    check_integrity,
    total_balance,
)
from .errors import DataIntegrityError
from .grading import HealthGrade, compute_health_grade, structural_risk_flags
from .liquidity import LiquidityAnalysis, analyze_liquidity
from .patterns import Alert, detect_suspicious_patterns
from .schemas import HoldersSnapshotIn, parse_annotations
from .scorer import StabilityScore, compute_stability_score
from .tiers import SimpleTiers, classify_holders, count_tiers, real_holder_count, simple_tiers


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HoldersReport:
    """Full distribution assessment for one holder snapshot."""

    token_mint: Optional[str]
    total_holders: int
    total_balance: float
    holders: Tuple[ClassifiedHolder, ...]
    tier_counts: Dict[Tier, int]
    simple_tiers: SimpleTiers
    real_holders: int
    liquidity: LiquidityAnalysis
    concentration: ConcentrationStats
    stability: StabilityScore
    alerts: Tuple[Alert, ...]
    health: HealthGrade
    structural_flags: Tuple[str, ...] = field(default_factory=tuple)
    insiders_graph: Optional[Dict[str, Any]] = None

    def as_dict(self) -> Dict[str, Any]:
        """Plain-data view suitable for JSON serialization."""

        return _plain(asdict(self))


def _plain(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {_plain(k): _plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_plain(v) for v in obj]
    return obj


def _bundled_percentage(insiders_graph: Optional[Mapping[str, Any]]) -> Optional[float]:
    if not insiders_graph:
        return None
    v = insiders_graph.get("bundledPercentage")
    try:
        return None if v is None else float(v)
    except (TypeError, ValueError):
        return None


def analyze_holders(
    holders: Iterable[Holder],
    *,
    total_holders: Optional[int] = None,
    total_supply: Optional[float] = None,
    creator_address: Optional[str] = None,
    potential_dev_wallet: Optional[PotentialDevWallet] = None,
    annotations: Optional[Mapping[str, WalletFlag]] = None,
    insiders_graph: Optional[Dict[str, Any]] = None,
    external_score: Optional[float] = None,
    token_mint: Optional[str] = None,
    cfg: Optional[Config] = None,
) -> HoldersReport:
    """Run the full scoring pipeline over a holder snapshot.

    Args:
        holders: Holder snapshot, LP wallets included. Order is not trusted.
        total_holders: Provider holder count; defaults to len(holders).
        total_supply: Total balance including LP; defaults to the sum of balances.
        creator_address: Wallet excluded from concentration; defaults to the
            potential dev wallet's address.
        potential_dev_wallet: Likely creator from an upstream heuristic.
        annotations: User wallet flags keyed by address.
        insiders_graph: Third-party insider payload, passed through unchanged.
        external_score: Score to grade instead of the stability score.
        token_mint: Token identifier, carried into the report.
        cfg: Configuration.

    Returns:
        HoldersReport.

    Raises:
        DataIntegrityError: negative supply, balances or percentages.
    """

    cfg = resolve_config(cfg)
    holders = list(holders)
    try:
        check_integrity(holders, total_supply)
    except DataIntegrityError as e:
        logger.warning("Rejecting holder snapshot %s: %s", token_mint or "<unknown>", e)
        raise

    if total_supply is not None and not math.isfinite(total_supply):
        logger.warning("Ignoring non-finite total supply %r; summing balances", total_supply)
        total_supply = None
    supply = total_balance(holders) if total_supply is None else float(total_supply)
    n_holders = len(holders) if total_holders is None else int(total_holders)
    if creator_address is None and potential_dev_wallet is not None:
        creator_address = potential_dev_wallet.address

    classified = classify_holders(holders, cfg)
    if holders and all(h.safe_usd_value == 0 for h in holders):
        logger.warning("All holder USD values are zero; price discovery likely failed")

    concentration = compute_concentration(holders, creator_address, cfg)
    liquidity = analyze_liquidity(holders, supply, concentration.top10, cfg)
    if liquidity.suspicious_zero_lp:
        logger.warning(
            "No LP detected while top 10 hold %.1f%% of supply", concentration.top10
        )

    stability = compute_stability_score(
        holders=holders,
        total_holders=n_holders,
        top10_percentage=concentration.top10,
        lp_percentage=liquidity.lp_percentage_of_supply,
        cfg=cfg,
    )
    alerts = detect_suspicious_patterns(
        holders=holders,
        potential_dev_wallet=potential_dev_wallet,
        annotations=annotations,
        cfg=cfg,
    )

    # An empty snapshot has nothing to grade.
    graded: Optional[float]
    if external_score is not None:
        graded = external_score
    elif holders:
        graded = stability.score
    else:
        graded = None
    health = compute_health_grade(graded, alerts, cfg)

    tiers_simple = simple_tiers(classified)
    flags = structural_risk_flags(
        dust_percentage=tiers_simple.dust.percentage,
        lp_percentage=liquidity.lp_percentage_of_supply,
        health_score=health.score,
        bundled_percentage=_bundled_percentage(insiders_graph),
        cfg=cfg,
    )

    logger.debug(
        "Scored %d holders: score=%d grade=%s top10=%.2f lp=%.2f alerts=%d",
        len(holders),
        stability.score,
        health.grade,
        concentration.top10,
        liquidity.lp_percentage_of_supply,
        len(alerts),
    )

    return HoldersReport(
        token_mint=token_mint,
        total_holders=n_holders,
        total_balance=supply,
        holders=tuple(classified),
        tier_counts=count_tiers(classified),
        simple_tiers=tiers_simple,
        real_holders=real_holder_count(classified),
        liquidity=liquidity,
        concentration=concentration,
        stability=stability,
        alerts=tuple(alerts),
        health=health,
        structural_flags=tuple(flags),
        insiders_graph=insiders_graph,
    )


def analyze_snapshot(
    payload: Mapping[str, Any],
    *,
    annotations: Optional[Dict[str, Any]] = None,
    external_score: Optional[float] = None,
    cfg: Optional[Config] = None,
) -> HoldersReport:
    """Parse a provider payload and run analyze_holders on it.

    Args:
        payload: JSON-shaped holder report from the holder-data provider.
        annotations: Stored wallet flags (bare strings or flag records).
        external_score: Optional score to grade instead of the stability score.
        cfg: Configuration.
    """

    snap = HoldersSnapshotIn.model_validate(payload)
    dev = snap.potential_dev_wallet.to_entity() if snap.potential_dev_wallet else None
    return analyze_holders(
        snap.holder_entities(),
        total_holders=snap.total_holders,
        total_supply=snap.total_balance,
        creator_address=snap.creator_address,
        potential_dev_wallet=dev,
        annotations=parse_annotations(annotations),
        insiders_graph=snap.insiders_graph,
        external_score=external_score,
        token_mint=snap.token_mint,
        cfg=cfg,
    )
