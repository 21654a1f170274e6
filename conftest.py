from unittest.mock import Mock, patch

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from Curio.celery import app as celery_app


@pytest.fixture(autouse=True)
def celery_eager():
    celery_app.conf.CELERY_TASK_ALWAYS_EAGER = True
    yield
    celery_app.conf.CELERY_TASK_ALWAYS_EAGER = False


@pytest.fixture(autouse=True)
def clear_locks():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def curator(db):
    from curators.models import CuratorProfile

    return CuratorProfile.objects.create(
        fid=1001,
        username="alice",
        pfp_url="https://i.imgur.com/alice.png",
        wallet_address="0xAbC0000000000000000000000000000000000001",
    )


@pytest.fixture
def other_curator(db):
    from curators.models import CuratorProfile

    return CuratorProfile.objects.create(
        fid=2002,
        username="bob",
        pfp_url="https://i.imgur.com/bob.png",
    )


@pytest.fixture
def songlink_payload():
    return {
        "entityUniqueId": "SPOTIFY_SONG::4uLU6hMCjMI75M1A2tKUQC",
        "pageUrl": "https://song.link/s/4uLU6hMCjMI75M1A2tKUQC",
        "entitiesByUniqueId": {
            "SPOTIFY_SONG::4uLU6hMCjMI75M1A2tKUQC": {
                "title": "Never Gonna Give You Up",
                "artistName": "Rick Astley",
                "thumbnailUrl": "https://i.scdn.co/image/rick.jpg",
            },
            "YOUTUBE_VIDEO::dQw4w9WgXcQ": {
                "title": "Rick Astley - Never Gonna Give You Up (Official Video)",
                "artistName": "RickAstleyVEVO",
            },
        },
        "linksByPlatform": {
            "spotify": {"url": "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"},
            "youtube": {"url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ"},
            "appleMusic": {"url": "https://music.apple.com/us/album/1559523357?i=1559523359"},
            "deezer": {"url": "https://www.deezer.com/track/781592622"},
        },
    }


def json_response(payload, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload
    response.text = str(payload)
    return response


@pytest.fixture
def make_response():
    return json_response


@pytest.fixture
def mock_songlink(songlink_payload):
    with patch("music.services.songlink.requests.get") as get:
        get.return_value = json_response(songlink_payload)
        yield get


@pytest.fixture
def track(db):
    from music.models import Track

    return Track.objects.create(
        canonical_id="SPOTIFY_SONG::4uLU6hMCjMI75M1A2tKUQC",
        title="Never Gonna Give You Up",
        artist="Rick Astley",
        artwork_url="https://i.scdn.co/image/rick.jpg",
        platform_urls={"spotify": "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"},
    )


@pytest.fixture
def recommendation(curator, track):
    from recommendations.models import Recommendation

    return Recommendation.objects.create(
        curator=curator,
        track=track,
        original_url="https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC",
        platform="spotify",
        genre="pop",
    )
