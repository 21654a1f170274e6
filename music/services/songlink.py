import logging
from dataclasses import dataclass, field
import requests
from django.conf import settings

logger = logging.getLogger(__name__)

# Songlink platform keys we keep on the catalog track
SUPPORTED_PLATFORMS = (
    "spotify",
    "appleMusic",
    "youtube",
    "soundcloud",
    "youtubeMusic",
    "tidal",
)


@dataclass
class NormalizedTrack:
    canonical_id: str
    title: str
    artist: str
    artwork_url: str = ""
    platform_urls: dict = field(default_factory=dict)
    canonical_page_url: str = ""

    def as_track_defaults(self) -> dict:
        return {
            "title": self.title,
            "artist": self.artist,
            "artwork_url": self.artwork_url,
            "platform_urls": self.platform_urls,
            "canonical_page_url": self.canonical_page_url,
        }


def parse_songlink_payload(data: dict) -> NormalizedTrack | None:
    """
    Songlink response -> NormalizedTrack.

    The entity referenced by `entityUniqueId` is the track itself;
    the rest of `entitiesByUniqueId` are per-platform duplicates.
    """
    entity_id = data.get("entityUniqueId")
    entity = (data.get("entitiesByUniqueId") or {}).get(entity_id) if entity_id else None

    if not entity:
        logger.error("Songlink response has no entity", extra={"entity_id": entity_id})
        return None

    links = data.get("linksByPlatform") or {}
    platform_urls = {
        platform: links[platform]["url"]
        for platform in SUPPORTED_PLATFORMS
        if isinstance(links.get(platform), dict) and links[platform].get("url")
    }

    return NormalizedTrack(
        canonical_id=entity_id,
        title=entity.get("title") or "Unknown Title",
        artist=entity.get("artistName") or "Unknown Artist",
        artwork_url=entity.get("thumbnailUrl") or "",
        platform_urls=platform_urls,
        canonical_page_url=data.get("pageUrl") or "",
    )


def normalize(url: str) -> NormalizedTrack | None:
    """
    Resolve any music link to its canonical track.

    Best effort, single attempt. Returns None on any failure;
    callers fall back to curator-supplied metadata.
    """
    logger.info(f"Songlink lookup for {url}")

    try:
        response = requests.get(
            settings.SONGLINK_API_URL,
            params={"url": url},
            headers={"Accept": "application/json"},
            timeout=settings.SONGLINK_TIMEOUT,
        )
        response.raise_for_status()
        data = response.json()

    except requests.HTTPError as e:
        logger.warning(
            f"Songlink API error {e.response.status_code}",
            extra={"url": url, "status": e.response.status_code},
        )
        return None

    except requests.Timeout:
        logger.warning("Songlink request timeout", extra={"url": url})
        return None

    except requests.RequestException as e:
        logger.error("Songlink request failed", extra={"url": url, "error": str(e)})
        return None

    except ValueError:
        logger.error("Songlink returned invalid JSON", extra={"url": url})
        return None

    normalized = parse_songlink_payload(data)
    if normalized:
        logger.info(
            f"Songlink normalized: {normalized.title} – {normalized.artist} "
            f"({len(normalized.platform_urls)} platforms)"
        )
    return normalized
