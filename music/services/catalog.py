import logging
from django.db import transaction
from music.models import Track, FALLBACK_PREFIX
from music.services.platforms import CATALOG_PLATFORM_KEYS, detect_platform
from music.services.songlink import NormalizedTrack

logger = logging.getLogger(__name__)


def fallback_canonical_id(original_url: str) -> str:
    return f"{FALLBACK_PREFIX}{original_url}"


def find_or_create(canonical_id: str, metadata: dict) -> tuple[Track, bool]:
    """
    Atomic get-or-create on the unique canonical id.

    First writer wins: an existing track is returned untouched.
    Two concurrent inserts of the same song collide on the unique
    constraint and the loser re-selects the winner's row.
    """
    with transaction.atomic():
        track, created = Track.objects.get_or_create(
            canonical_id=canonical_id,
            defaults=metadata,
        )

    if created:
        logger.info(f"Catalog: created track={track.id} canonical_id={canonical_id}")
    else:
        logger.info(f"Catalog: reused track={track.id} canonical_id={canonical_id}")
    return track, created


def find_or_create_from_normalized(normalized: NormalizedTrack) -> tuple[Track, bool]:
    return find_or_create(normalized.canonical_id, normalized.as_track_defaults())


def find_or_create_fallback(
    original_url: str,
    title: str | None = None,
    artist: str | None = None,
    artwork_url: str | None = None,
    platform: str | None = None,
) -> tuple[Track, bool]:
    """
    Catalog entry for a link the normalizer could not resolve.
    Keyed by the original URL, so resubmitting the same link still dedupes.
    """
    platform = platform or detect_platform(original_url)
    platform_key = CATALOG_PLATFORM_KEYS.get(platform)

    return find_or_create(
        fallback_canonical_id(original_url),
        {
            "title": title or "Unknown Title",
            "artist": artist or "Unknown Artist",
            "artwork_url": artwork_url or "",
            "platform_urls": {platform_key: original_url} if platform_key else {},
            "canonical_page_url": "",
        },
    )
