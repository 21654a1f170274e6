import logging
from dataclasses import dataclass
from django.db import transaction
from curators.models import CuratorProfile
from curators.services.activity import summarize_activities
from music.services import catalog, songlink
from music.services.platforms import detect_platform
from recommendations.services.ledger import create_recommendation

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    recommendation: object
    track_created: bool
    normalized: bool
    xp: dict


def submit_track(
    url,
    curator_fid,
    username=None,
    pfp_url=None,
    wallet_address=None,
    review=None,
    genre=None,
    moods=None,
    title=None,
    artist=None,
    artwork_url=None,
) -> SubmissionResult:
    """
    URL -> normalizer -> catalog -> recommendation -> XP.

    The normalizer call happens before the transaction; everything that
    writes is applied together or not at all.
    """
    platform = detect_platform(url)
    normalized = songlink.normalize(url)
    if normalized is None:
        logger.warning(f"Normalization failed, using curator metadata for {url}")

    with transaction.atomic():
        curator, created = CuratorProfile.objects.upsert(
            fid=curator_fid,
            username=username,
            pfp_url=pfp_url,
            wallet_address=wallet_address,
        )
        if created:
            logger.info(f"New curator profile fid={curator_fid}")

        if normalized is not None:
            track, track_created = catalog.find_or_create_from_normalized(normalized)
        else:
            track, track_created = catalog.find_or_create_fallback(
                url,
                title=title,
                artist=artist,
                artwork_url=artwork_url,
                platform=platform,
            )

        recommendation, activities = create_recommendation(
            curator=curator,
            track=track,
            original_url=url,
            review=review,
            genre=genre,
            moods=moods,
            title=track.title if normalized else (title or track.title),
            artist=track.artist if normalized else (artist or track.artist),
            artwork_url=track.artwork_url or artwork_url or "",
            platform=platform,
        )

    return SubmissionResult(
        recommendation=recommendation,
        track_created=track_created,
        normalized=normalized is not None,
        xp=summarize_activities(activities, curator.xp),
    )
