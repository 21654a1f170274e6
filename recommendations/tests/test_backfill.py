from unittest.mock import patch

import pytest
import requests

from curators.models import CuratorActivity
from recommendations.models import Recommendation
from recommendations.tasks import backfill_missing_track_ids
from utils.locks import ResourceLock


@pytest.fixture
def legacy_recommendation(curator):
    return Recommendation.objects.create(
        curator=curator,
        track=None,
        original_url="https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC",
        title="Never Gonna Give You Up",
        artist="Rick Astley",
        platform="spotify",
    )


@pytest.mark.django_db
def test_backfill_links_track_and_awards_share_xp(legacy_recommendation, mock_songlink):
    linked = backfill_missing_track_ids()

    assert linked == 1
    legacy_recommendation.refresh_from_db()
    assert legacy_recommendation.track.canonical_id == "SPOTIFY_SONG::4uLU6hMCjMI75M1A2tKUQC"

    share = CuratorActivity.objects.get(recommendation=legacy_recommendation)
    assert share.activity_type == CuratorActivity.ActivityType.SHARE
    assert share.metadata["backfilled"] is True

    legacy_recommendation.curator.refresh_from_db()
    assert legacy_recommendation.curator.xp == 10


@pytest.mark.django_db
def test_backfill_awards_overlap_against_earlier_share(
    legacy_recommendation, other_curator, mock_songlink
):
    later = Recommendation.objects.create(
        curator=other_curator,
        track=None,
        original_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        platform="youtube",
    )

    assert backfill_missing_track_ids() == 2

    later.refresh_from_db()
    legacy_recommendation.refresh_from_db()
    assert later.track_id == legacy_recommendation.track_id

    overlap = CuratorActivity.objects.get(activity_type=CuratorActivity.ActivityType.TASTE_OVERLAP)
    assert overlap.curator_id == other_curator.fid
    assert overlap.metadata["other_curator_fid"] == legacy_recommendation.curator_id


@pytest.mark.django_db
def test_backfill_falls_back_when_songlink_fails(legacy_recommendation):
    with patch("music.services.songlink.requests.get", side_effect=requests.Timeout()):
        assert backfill_missing_track_ids() == 1

    legacy_recommendation.refresh_from_db()
    assert legacy_recommendation.track.is_fallback
    assert legacy_recommendation.track.title == "Never Gonna Give You Up"


@pytest.mark.django_db
def test_backfill_is_idempotent(legacy_recommendation, mock_songlink):
    backfill_missing_track_ids()

    assert backfill_missing_track_ids() == 0
    assert CuratorActivity.objects.count() == 1


@pytest.mark.django_db
def test_backfill_skips_when_locked(legacy_recommendation, mock_songlink):
    with ResourceLock("track_backfill"):
        assert backfill_missing_track_ids() is None

    legacy_recommendation.refresh_from_db()
    assert legacy_recommendation.track_id is None


@pytest.mark.django_db
def test_backfill_simultaneous_shares_earn_no_overlap(
    legacy_recommendation, other_curator, mock_songlink
):
    same_moment = Recommendation.objects.create(
        curator=other_curator,
        track=None,
        original_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        platform="youtube",
    )
    Recommendation.objects.filter(pk=same_moment.pk).update(
        created_at=legacy_recommendation.created_at
    )

    assert backfill_missing_track_ids() == 2

    assert not CuratorActivity.objects.filter(
        activity_type=CuratorActivity.ActivityType.TASTE_OVERLAP
    ).exists()
