import logging
from decimal import Decimal
from django.conf import settings
from django.db import transaction
from django.db.models import F
from curators.models import CuratorProfile
from curators.services.activity import log_share, log_taste_overlap
from curators.services.scoring import refresh_curator_score, refresh_curator_xp
from curators.tasks.notification_tasks import notify_curator_of_tip
from recommendations.exceptions import SelfTipError
from recommendations.models import Recommendation, Tip

logger = logging.getLogger(__name__)


# =========================================================
# SHARES
# =========================================================

def award_share_xp(recommendation, metadata=None) -> list:
    """
    +share XP for the curator, +overlap XP for every earlier share of the
    same track by someone else. Only the newer curator is credited.
    """
    curator = recommendation.curator
    activities = [log_share(curator, recommendation, metadata=metadata)]

    if recommendation.track_id:
        prior = Recommendation.objects.prior_shares_of(recommendation)
        limit = settings.CURIO_TASTE_OVERLAP_SCAN_LIMIT
        if limit:
            prior = prior[:limit]

        for prior_recommendation in prior:
            activities.append(
                log_taste_overlap(curator, recommendation, prior_recommendation, metadata=metadata)
            )

    overlaps = len(activities) - 1
    if overlaps:
        logger.info(
            f"Taste overlap: curator={curator.pk} track={recommendation.track_id} overlaps={overlaps}"
        )

    refresh_curator_xp(curator)
    return activities


@transaction.atomic
def create_recommendation(
    curator,
    track,
    original_url,
    review=None,
    genre=None,
    moods=None,
    title="",
    artist="",
    artwork_url="",
    platform="other",
):
    """
    Returns (recommendation, activities).
    """
    recommendation = Recommendation.objects.create(
        curator=curator,
        track=track,
        original_url=original_url,
        title=title or (track.title if track else ""),
        artist=artist or (track.artist if track else ""),
        artwork_url=artwork_url or (track.artwork_url if track else ""),
        platform=platform,
        review_text=review or None,
        genre=genre or "general",
        moods=list(moods or []),
    )

    activities = award_share_xp(recommendation)
    return recommendation, activities


# =========================================================
# TIPS
# =========================================================

def record_tip(recommendation, amount_usd, tx_hash, tipper_fid, tipper_username=None) -> dict:
    """
    Append to the tip ledger and bump the cached counters server-side.
    The curator notification is sent after commit and may fail silently.
    """
    amount_usd = Decimal(str(amount_usd))
    curator = recommendation.curator

    if tipper_fid == curator.fid and not settings.CURIO_ALLOW_SELF_TIP:
        raise SelfTipError()

    with transaction.atomic():
        CuratorProfile.objects.upsert(fid=tipper_fid, username=tipper_username)

        Tip.objects.create(
            recommendation=recommendation,
            tipper_fid=tipper_fid,
            curator_fid=curator.fid,
            amount_usd=amount_usd,
            transaction_hash=tx_hash,
        )

        Recommendation.objects.filter(pk=recommendation.pk).update(
            tip_count=F("tip_count") + 1,
            total_tips_usd=F("total_tips_usd") + amount_usd,
        )
        recommendation.refresh_from_db(fields=["tip_count", "total_tips_usd"])

        refresh_curator_score(curator)

        if curator.notification_token:
            transaction.on_commit(
                lambda: _dispatch_tip_notification(
                    curator.notification_token,
                    tipper_username or f"fid:{tipper_fid}",
                    amount_usd,
                    recommendation,
                )
            )

    logger.info(
        f"Tip recorded: rec={recommendation.pk} from={tipper_fid} amount={amount_usd} "
        f"count={recommendation.tip_count} total={recommendation.total_tips_usd}"
    )

    return {
        "tipCount": recommendation.tip_count,
        "totalTips": float(recommendation.total_tips_usd),
    }


def _dispatch_tip_notification(token, tipper_username, amount_usd, recommendation):
    try:
        notify_curator_of_tip.delay(
            token,
            tipper_username,
            f"{amount_usd.normalize():f}",
            recommendation.display_title,
            str(recommendation.pk),
        )
    except Exception:
        # Broker down must never fail a recorded tip
        logger.exception(f"Could not enqueue tip notification for rec={recommendation.pk}")


def increment_tip_count(recommendation) -> Recommendation:
    """
    Legacy tip action: count only, no amount.
    """
    Recommendation.objects.filter(pk=recommendation.pk).update(tip_count=F("tip_count") + 1)
    recommendation.refresh_from_db(fields=["tip_count"])
    return recommendation
