import logging
from celery import shared_task
from django.db import transaction
from curators.services.activity import has_share_activity
from music.services import catalog, songlink
from recommendations.models import Recommendation
from recommendations.services.ledger import award_share_xp
from utils.locks import ResourceLock, ResourceLockedException

logger = logging.getLogger(__name__)


def link_recommendation_to_catalog(recommendation) -> bool:
    """
    Attach a legacy recommendation to a catalog track and award any XP
    it never received. Returns True when the row was linked.
    """
    normalized = songlink.normalize(recommendation.original_url)

    with transaction.atomic():
        if normalized is not None:
            track, _ = catalog.find_or_create_from_normalized(normalized)
        else:
            track, _ = catalog.find_or_create_fallback(
                recommendation.original_url,
                title=recommendation.title,
                artist=recommendation.artist,
                artwork_url=recommendation.artwork_url,
                platform=recommendation.platform,
            )

        updated = Recommendation.objects.filter(
            pk=recommendation.pk,
            track__isnull=True,
        ).update(track=track)
        if not updated:
            # someone else linked it meanwhile
            return False

        recommendation.track = track

        if not has_share_activity(recommendation):
            award_share_xp(
                recommendation,
                metadata={
                    "backfilled": True,
                    "original_created_at": recommendation.created_at.isoformat(),
                },
            )

    logger.info(f"Backfill: rec={recommendation.pk} -> track={track.pk}")
    return True


@shared_task
def backfill_missing_track_ids():
    try:
        with ResourceLock("track_backfill", timeout=1800):
            pending = list(
                Recommendation.objects.missing_track()
                .select_related("curator")
                .order_by("created_at")
            )
            if not pending:
                logger.info("Backfill: no recommendations missing a track")
                return 0

            linked = 0
            for recommendation in pending:
                if link_recommendation_to_catalog(recommendation):
                    linked += 1

            logger.info(f"Backfill: linked {linked}/{len(pending)} recommendations")
            return linked
    except ResourceLockedException:
        logger.info("Track backfill already in progress, skipping")
        return None
