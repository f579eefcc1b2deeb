from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


logger = logging.getLogger(__name__)


class TierThresholds(BaseModel):
    """Lower USD bounds for each value tier above Dust.

    A holder belongs to the highest tier whose bound its USD value reaches;
    anything below ``small`` is Dust.
    """

    small: float = 1.0
    medium: float = 5.0
    large: float = 25.0
    real: float = 50.0
    boss: float = 200.0
    kingpin: float = 500.0
    super_boss: float = 1000.0
    baby_whale: float = 2000.0
    true_whale: float = 5000.0

    @model_validator(mode="after")
    def validate_increasing(self) -> "TierThresholds":
        bounds = list(self.model_dump().values())
        if bounds[0] <= 0:
            raise ValueError("Tier bound 'small' must be positive")
        for lo, hi in zip(bounds, bounds[1:]):
            if hi <= lo:
                raise ValueError(f"Tier bounds must be strictly increasing: {bounds}")
        return self


class LiquidityConfig(BaseModel):
    """LP confidence cut-offs and the zero-LP early warning."""

    high_confidence: int = 90
    low_confidence: int = 70
    suspicious_zero_lp_top10: float = 30.0


class ConcentrationConfig(BaseModel):
    top_n: List[int] = Field(default_factory=lambda: [3, 5, 10, 20, 25])

    @field_validator("top_n")
    def validate_top_n(cls, v: List[int]) -> List[int]:
        if not v or any(n <= 0 for n in v):
            raise ValueError(f"Invalid top_n sizes: {v}")
        return sorted(set(v))


class StabilityConfig(BaseModel):
    """Whale definition and risk-level bands for the stability score."""

    whale_min_pct: float = 1.0
    whale_penalty_per_pct: float = 1.33
    risk_low_below: float = 10.0
    risk_medium_below: float = 30.0


class AlertThresholds(BaseModel):
    single_wallet_pct: float = 10.0
    top3_pct: float = 50.0


class GradeThresholds(BaseModel):
    A: float = 90.0
    B: float = 75.0
    C: float = 60.0
    D: float = 40.0

    @model_validator(mode="after")
    def validate_decreasing(self) -> "GradeThresholds":
        if not (self.A > self.B > self.C > self.D):
            raise ValueError("Grade cut points must be strictly decreasing A > B > C > D")
        return self


class StructuralFlagThresholds(BaseModel):
    high_dust_pct: float = 70.0
    low_lp_pct: float = 5.0
    high_bundled_pct: float = 20.0
    low_health_score: float = 30.0


class DisplayConfig(BaseModel):
    min_usd: float = 1.0
    address_head: int = 8
    address_tail: int = 8


class Config(BaseModel):
    """Top-level configuration model for the holder risk engine."""

    tiers: TierThresholds = Field(default_factory=TierThresholds)
    liquidity: LiquidityConfig = Field(default_factory=LiquidityConfig)
    concentration: ConcentrationConfig = Field(default_factory=ConcentrationConfig)
    stability: StabilityConfig = Field(default_factory=StabilityConfig)
    alerts: AlertThresholds = Field(default_factory=AlertThresholds)
    grade: GradeThresholds = Field(default_factory=GradeThresholds)
    structural_flags: StructuralFlagThresholds = Field(
        default_factory=StructuralFlagThresholds
    )
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @field_validator("concentration")
    def validate_top10_present(cls, v: ConcentrationConfig) -> ConcentrationConfig:
        # Scoring and the zero-LP warning both read the top-10 figure.
        if 10 not in v.top_n:
            raise ValueError("concentration.top_n must include 10")
        return v


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from a YAML file.

    Keys missing from the file fall back to the model defaults, so a partial
    file only needs the values it overrides.

    Args:
        path: Optional custom path to the YAML config.

    Returns:
        Parsed and validated Config object.
    """

    if path is None:
        path = Path(__file__).with_name("config_defaults.yaml")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    logger.debug("Loaded holder risk config from %s", path)
    return Config(**data)


# Not cached: tests swap configs freely.
def get_default_config() -> Config:
    """Return a Config loaded from the default YAML file shipped with the package."""

    return load_config()


def resolve_config(cfg: Optional[Config]) -> Config:
    return cfg if cfg is not None else get_default_config()
