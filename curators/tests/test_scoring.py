from decimal import Decimal

import pytest

from curators.models import CuratorProfile
from curators.services.activity import log_share
from curators.services.scoring import (
    calculate_curator_score,
    compute_success_rate,
    curator_stats,
    refresh_curator_score,
    round_half_up,
    score_breakdown,
)
from recommendations.models import CoSign, Recommendation


@pytest.mark.parametrize(
    "cosigns,tips,expected",
    [
        (0, "0", 0),
        (3, "2.20", 14),
        (1, "0.1", 2),
        (0, "0.09", 0),
        (10, "100", 510),
    ],
)
def test_calculate_curator_score(cosigns, tips, expected):
    assert calculate_curator_score(cosigns, Decimal(tips)) == expected


def test_round_half_up():
    assert round_half_up(Decimal("0.5")) == 1
    assert round_half_up(Decimal("1.5")) == 2
    assert round_half_up(Decimal("2.5")) == 3
    assert round_half_up(Decimal("2.49")) == 2


def test_score_breakdown():
    breakdown = score_breakdown(3, Decimal("2.2"))

    assert breakdown["total"] == 14
    assert breakdown["cosignPoints"] == 3
    assert breakdown["tipPoints"] == 11
    assert breakdown["breakdown"] == "3 pts (3 co-signs) + 11 pts ($2.20 tips)"


@pytest.mark.django_db
def test_success_rate_without_recommendations(curator):
    assert compute_success_rate(curator) == 0


@pytest.mark.django_db
def test_success_rate_counts_tips_at_threshold(curator, track):
    for total in ("5", "4.99"):
        Recommendation.objects.create(
            curator=curator,
            track=track,
            original_url="https://open.spotify.com/track/x",
            total_tips_usd=Decimal(total),
        )

    assert compute_success_rate(curator) == 50


@pytest.mark.django_db
def test_refresh_overwrites_stale_score(recommendation):
    curator = recommendation.curator
    CuratorProfile.objects.filter(pk=curator.pk).update(curator_score=999)
    CoSign.objects.create(recommendation=recommendation, cosigner_fid=7)
    Recommendation.objects.filter(pk=recommendation.pk).update(total_tips_usd=Decimal("2"))

    assert refresh_curator_score(curator) == 11
    curator.refresh_from_db()
    assert curator.curator_score == 11


@pytest.mark.django_db
def test_curator_stats(recommendation):
    curator = recommendation.curator
    Recommendation.objects.filter(pk=recommendation.pk).update(total_tips_usd=Decimal("5.005"))
    CoSign.objects.create(recommendation=recommendation, cosigner_fid=7)
    log_share(curator, recommendation)

    stats = curator_stats(curator)

    assert stats == {
        "tracksShared": 1,
        "followers": 0,
        "tipsEarned": 5.01,
        "successRate": 100,
        "curatorScore": 26,
        "xp": 10,
    }
