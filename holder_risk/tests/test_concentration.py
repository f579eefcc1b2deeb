from __future__ import annotations

import pytest

from holder_risk.concentration import compute_concentration, top_n_concentration
from holder_risk.config_schema import get_default_config
from .fixtures import lp_snapshot, make_holder, make_snapshot


def test_top_n_excludes_lp_and_creator():
    holders = [
        make_holder("lp", 30.0, lp=True),
        make_holder("creator", 20.0),
        make_holder("a", 10.0),
        make_holder("b", 5.0),
    ]
    pct, wallets = top_n_concentration(holders, 10, creator_address="creator")
    assert pct == pytest.approx(15.0)
    assert [h.owner for h in wallets] == ["a", "b"]

    pct_all, _ = top_n_concentration(holders, 10)
    assert pct_all == pytest.approx(35.0)


def test_top_n_resorts_unsorted_input():
    holders = [make_holder("small", 1.0), make_holder("big", 9.0), make_holder("mid", 4.0)]
    pct, wallets = top_n_concentration(holders, 2)
    assert pct == pytest.approx(13.0)
    assert [h.owner for h in wallets] == ["big", "mid"]


def test_fewer_holders_than_n_sums_all():
    pct, wallets = top_n_concentration(make_snapshot([3.0, 2.0]), 25)
    assert pct == pytest.approx(5.0)
    assert len(wallets) == 2


def test_compute_concentration_all_sizes_and_monotonic():
    cfg = get_default_config()
    pcts = [12.0, 8.0, 6.0, 5.0, 4.0] + [1.0] * 30
    stats = compute_concentration(make_snapshot(list(reversed(pcts))), cfg=cfg)
    assert stats.top3 == pytest.approx(26.0)
    assert stats.top5 == pytest.approx(35.0)
    assert stats.top10 == pytest.approx(40.0)
    assert stats.top20 == pytest.approx(50.0)
    assert stats.top25 == pytest.approx(55.0)
    assert stats.top3 <= stats.top5 <= stats.top10 <= stats.top20 <= stats.top25
    assert len(stats.top_wallets) == 25
    assert stats.top_wallets[0].percentage_of_supply == 12.0


def test_compute_concentration_lp_only_snapshot_is_zero():
    cfg = get_default_config()
    stats = compute_concentration([make_holder("lp", 100.0, lp=True)], cfg=cfg)
    assert stats.top10 == 0.0
    assert stats.top_wallets == ()


def test_compute_concentration_records_creator():
    cfg = get_default_config()
    holders = lp_snapshot(10.0, [50.0, 40.0])
    creator = holders[1].owner
    stats = compute_concentration(holders, creator_address=creator, cfg=cfg)
    assert stats.creator_excluded == creator
    assert stats.top10 == pytest.approx(40.0)


def test_top_n_is_read_only_pairs():
    cfg = get_default_config()
    stats = compute_concentration(make_snapshot([20.0, 10.0]), cfg=cfg)
    assert stats.top_n == ((3, 30.0), (5, 30.0), (10, 30.0), (20, 30.0), (25, 30.0))
    assert stats.top(10) == 30.0
    with pytest.raises(KeyError):
        stats.top(7)
