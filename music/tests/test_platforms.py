import pytest

from music.services.platforms import (
    APPLE_MUSIC,
    BANDCAMP,
    OTHER,
    SOUNDCLOUD,
    SPOTIFY,
    YOUTUBE,
    build_embed_url,
    detect_platform,
    extract_youtube_id,
)


@pytest.mark.parametrize(
    "url,platform",
    [
        ("https://open.spotify.com/track/abc", SPOTIFY),
        ("https://music.apple.com/us/album/x/1?i=2", APPLE_MUSIC),
        ("https://artist.bandcamp.com/track/song", BANDCAMP),
        ("https://youtu.be/dQw4w9WgXcQ", YOUTUBE),
        ("https://SoundCloud.com/artist/song", SOUNDCLOUD),
        ("https://example.com/song.mp3", OTHER),
    ],
)
def test_detect_platform(url, platform):
    assert detect_platform(url) == platform


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        "https://music.youtube.com/watch?v=dQw4w9WgXcQ",
    ],
)
def test_extract_youtube_id(url):
    assert extract_youtube_id(url) == "dQw4w9WgXcQ"


def test_embed_urls():
    assert build_embed_url("https://open.spotify.com/track/abc?si=1") == "https://open.spotify.com/embed/track/abc"
    assert build_embed_url("https://youtu.be/dQw4w9WgXcQ") == "https://www.youtube.com/embed/dQw4w9WgXcQ"
    assert build_embed_url("https://soundcloud.com/a/b").startswith("https://w.soundcloud.com/player/?url=https%3A%2F%2F")
    assert build_embed_url("https://artist.bandcamp.com/track/song") == ""
    assert build_embed_url("") == ""
