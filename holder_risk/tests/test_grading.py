from __future__ import annotations

import pytest
from pydantic import ValidationError

from holder_risk.config_schema import GradeThresholds, get_default_config
from holder_risk.grading import compute_health_grade, grade_from_score, structural_risk_flags
from holder_risk.patterns import Alert


@pytest.mark.parametrize(
    "score, grade",
    [
        (100, "A"),
        (90, "A"),
        (89.9, "B"),
        (75, "B"),
        (74, "C"),
        (60, "C"),
        (59, "D"),
        (40, "D"),
        (39.99, "F"),
        (0, "F"),
        (None, "F"),
    ],
)
def test_grade_cut_points(score, grade):
    assert grade_from_score(score, get_default_config()) == grade


def test_grades_monotonic_in_score():
    cfg = get_default_config()
    order = "FDCBA"
    grades = [order.index(grade_from_score(s, cfg)) for s in range(0, 101)]
    assert grades == sorted(grades)


def test_grade_thresholds_must_decrease():
    with pytest.raises(ValidationError):
        GradeThresholds(A=70.0, B=75.0)


def test_health_grade_surfaces_alert_messages_in_order():
    cfg = get_default_config()
    alerts = [
        Alert(severity="warning", message="Wallet abc holds 12.0% of supply"),
        Alert(severity="critical", message="Top 3 wallets control 54.2% of supply"),
    ]
    hg = compute_health_grade(72.6, alerts, cfg)
    assert hg.grade == "C"
    assert hg.score == 73
    assert hg.risk_flags == (
        "Wallet abc holds 12.0% of supply",
        "Top 3 wallets control 54.2% of supply",
    )


def test_health_grade_without_score():
    hg = compute_health_grade(None, [], get_default_config())
    assert hg.grade == "F"
    assert hg.score is None
    assert hg.risk_flags == ()


def test_structural_flags():
    cfg = get_default_config()
    flags = structural_risk_flags(
        dust_percentage=80.0,
        lp_percentage=2.0,
        health_score=20,
        bundled_percentage=35.0,
        cfg=cfg,
    )
    assert flags == ["high_dust", "low_lp", "high_bundled_insiders", "low_health_score"]

    clean = structural_risk_flags(
        dust_percentage=10.0, lp_percentage=10.0, health_score=80, cfg=cfg
    )
    assert clean == []


@pytest.mark.parametrize("score, grade, shown", [(89.4, "B", 89), (89.5, "A", 90), (89.6, "A", 90)])
def test_health_grade_matches_rounded_score(score, grade, shown):
    hg = compute_health_grade(score, [], get_default_config())
    assert hg.score == shown
    assert hg.grade == grade


@pytest.mark.parametrize("score, grade, shown", [(150, "A", 100), (-20, "F", 0)])
def test_health_grade_clamps_out_of_range(score, grade, shown):
    hg = compute_health_grade(score, [], get_default_config())
    assert hg.score == shown
    assert hg.grade == grade


@pytest.mark.parametrize("score", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_score_counts_as_missing(score):
    cfg = get_default_config()
    hg = compute_health_grade(score, [], cfg)
    assert hg.grade == "F"
    assert hg.score is None
    assert grade_from_score(score, cfg) == "F"
