import re
from urllib.parse import quote

# Platform labels as shown to users (legacy recommendation rows store these)
SPOTIFY = "spotify"
APPLE_MUSIC = "apple music"
BANDCAMP = "bandcamp"
YOUTUBE = "youtube"
SOUNDCLOUD = "soundcloud"
OTHER = "other"

# Legacy platform label -> catalog platform key
CATALOG_PLATFORM_KEYS = {
    SPOTIFY: "spotify",
    APPLE_MUSIC: "appleMusic",
    YOUTUBE: "youtube",
    SOUNDCLOUD: "soundcloud",
}

DEFAULT_ARTWORK_URL = "https://placehold.co/600x400/1a1a1a/white?text=Music"

EMBED_BASE_URLS = {
    YOUTUBE: "https://www.youtube.com/embed",
    SPOTIFY: "https://open.spotify.com/embed/track",
    SOUNDCLOUD: "https://w.soundcloud.com/player",
}

YOUTUBE_ID_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/shorts/([^&\n?#]+)"),
    re.compile(r"music\.youtube\.com/watch\?v=([^&\n?#]+)"),
]
SPOTIFY_TRACK_PATTERN = re.compile(r"spotify\.com/track/([^?&\n]+)")


def detect_platform(url: str) -> str:
    url_lower = (url or "").lower()

    if "spotify.com" in url_lower:
        return SPOTIFY
    if "music.apple.com" in url_lower:
        return APPLE_MUSIC
    if "bandcamp.com" in url_lower:
        return BANDCAMP
    if "youtube.com" in url_lower or "youtu.be" in url_lower:
        return YOUTUBE
    if "soundcloud.com" in url_lower:
        return SOUNDCLOUD
    return OTHER


def extract_youtube_id(url: str) -> str | None:
    for pattern in YOUTUBE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def extract_spotify_id(url: str) -> str | None:
    match = SPOTIFY_TRACK_PATTERN.search(url)
    return match.group(1) if match else None


def build_embed_url(url: str, platform: str | None = None) -> str:
    """
    iframe player URL for the given link, "" when the platform has no embed.
    """
    if not url:
        return ""
    platform = platform or detect_platform(url)

    if platform == SPOTIFY:
        track_id = extract_spotify_id(url)
        return f"{EMBED_BASE_URLS[SPOTIFY]}/{track_id}" if track_id else ""

    if platform == YOUTUBE:
        video_id = extract_youtube_id(url)
        return f"{EMBED_BASE_URLS[YOUTUBE]}/{video_id}" if video_id else ""

    if platform == SOUNDCLOUD:
        return f"{EMBED_BASE_URLS[SOUNDCLOUD]}/?url={quote(url, safe='')}"

    return ""
