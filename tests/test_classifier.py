import pytest

from shamir_audit.classifier import (
    AuditReport,
    Tier,
    classify,
    select_winner,
    tier_for,
)
from shamir_audit.errors import AmbiguousReconstruction, NoConsistentSubset
from shamir_audit.shares import Share

SHARES = [Share(1, 6), Share(2, 7), Share(3, 8), Share(4, 9)]


def test_tier_thresholds():
    assert tier_for(0, 4) is Tier.BAD
    assert tier_for(1, 4) is Tier.SUSPICIOUS
    assert tier_for(2, 4) is Tier.TRUSTED
    assert tier_for(2, 5) is Tier.SUSPICIOUS
    assert tier_for(5, 5) is Tier.TRUSTED


def test_winner_is_largest_support():
    candidates = {3: [(1, 2)], 5: [(0, 1), (0, 3), (1, 3)], 9: [(2, 3)]}
    assert select_winner(candidates) == 5


def test_tie_break_prefers_smallest_secret():
    candidates = {9: [(0, 1)], 4: [(2, 3)], 7: [(1, 2)]}
    assert select_winner(candidates) == 4
    assert select_winner(dict(reversed(list(candidates.items())))) == 4


def test_tie_break_can_refuse():
    candidates = {9: [(0, 1)], 4: [(2, 3)], 1: []}
    with pytest.raises(AmbiguousReconstruction) as excinfo:
        select_winner(candidates, tie_break="fail")
    assert excinfo.value.secrets == (4, 9)
    assert excinfo.value.support == 1


def test_unknown_tie_break():
    with pytest.raises(ValueError):
        select_winner({1: [(0,)]}, tie_break="largest")


def test_empty_candidates():
    with pytest.raises(NoConsistentSubset):
        select_winner({})


def test_classify_assigns_tiers():
    candidates = {5: [(0, 1), (0, 2), (1, 2), (0, 3)], 2: [(2, 3)]}
    report = classify(candidates, SHARES, subsets_evaluated=6)

    assert report.winning_secret == 5
    assert report.total_winning_subsets == 4
    assert report.candidate_count == 2
    assert [v.include_count for v in report.per_share] == [3, 2, 2, 1]
    assert [v.tier for v in report.per_share] == [
        Tier.TRUSTED,
        Tier.TRUSTED,
        Tier.TRUSTED,
        Tier.SUSPICIOUS,
    ]
    assert report.shares_in(Tier.SUSPICIOUS)[0].x == 4
    assert not report.clean


def test_share_missing_from_every_winning_subset_is_bad():
    report = classify({5: [(0, 1), (0, 3), (1, 3)], 3: [(1, 2)]}, SHARES)
    assert [v.tier for v in report.per_share] == [
        Tier.TRUSTED,
        Tier.TRUSTED,
        Tier.BAD,
        Tier.TRUSTED,
    ]


def test_report_to_dict():
    report = classify({5: [(0, 1)]}, SHARES[:2])
    data = report.to_dict()
    assert data["winning_secret"] == 5
    assert data["per_share"][0] == {
        "index": 0,
        "x": 1,
        "y": 6,
        "include_count": 1,
        "tier": "trusted",
    }
    assert isinstance(report, AuditReport)
    assert report.clean
