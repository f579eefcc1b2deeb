from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Optional, Tuple

from .config_schema import Config, resolve_config
from .patterns import Alert
from .scorer import round_half_up


Grade = Literal["A", "B", "C", "D", "F"]


@dataclass(frozen=True)
class HealthGrade:
    grade: Grade
    score: Optional[int]
    risk_flags: Tuple[str, ...] = field(default_factory=tuple)


def grade_from_score(score: Optional[float], cfg: Optional[Config] = None) -> Grade:
    """Map a 0-100 score to a letter grade. No score grades F."""

    cfg = resolve_config(cfg)
    if score is None or not math.isfinite(score):
        return "F"
    th = cfg.grade
    if score >= th.A:
        return "A"
    if score >= th.B:
        return "B"
    if score >= th.C:
        return "C"
    if score >= th.D:
        return "D"
    return "F"


def normalize_score(score: Optional[float]) -> Optional[int]:
    """Clamp to [0, 100] and round half up. Missing or non-finite is None."""

    if score is None or not math.isfinite(score):
        return None
    return round_half_up(max(0.0, min(100.0, float(score))))


def compute_health_grade(
    score: Optional[float],
    alerts: Iterable[Alert] = (),
    cfg: Optional[Config] = None,
) -> HealthGrade:
    """Grade a score and surface alert messages as risk flags, in alert order.

    The score is rounded before grading, so the grade always matches the
    reported score.

    Args:
        score: Stability score or an externally supplied 0-100 score.
            Out-of-range values are clamped; NaN or inf counts as missing.
        alerts: Output of the suspicious pattern detector.
        cfg: Configuration.

    Returns:
        HealthGrade.
    """

    cfg = resolve_config(cfg)
    graded = normalize_score(score)
    return HealthGrade(
        grade=grade_from_score(graded, cfg),
        score=graded,
        risk_flags=tuple(a.message for a in alerts),
    )


def structural_risk_flags(
    *,
    dust_percentage: float,
    lp_percentage: float,
    health_score: Optional[float],
    bundled_percentage: Optional[float] = None,
    cfg: Optional[Config] = None,
) -> List[str]:
    """Coarse structure flags as short codes.

    bundled_percentage comes from the insider graph payload and is skipped
    when absent.
    """

    cfg = resolve_config(cfg)
    th = cfg.structural_flags
    flags: List[str] = []
    if dust_percentage > th.high_dust_pct:
        flags.append("high_dust")
    if lp_percentage < th.low_lp_pct:
        flags.append("low_lp")
    if bundled_percentage is not None and bundled_percentage > th.high_bundled_pct:
        flags.append("high_bundled_insiders")
    if health_score is not None and health_score < th.low_health_score:
        flags.append("low_health_score")
    return flags
