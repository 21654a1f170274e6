import logging
from curators.models import CuratorActivity

logger = logging.getLogger(__name__)


SHARE_XP = 10
TASTE_OVERLAP_XP = 50


def log_activity(curator, activity_type, xp_earned, recommendation=None, track=None, metadata=None):
    activity = CuratorActivity.objects.create(
        curator=curator,
        activity_type=activity_type,
        xp_earned=xp_earned,
        recommendation=recommendation,
        track=track,
        metadata=metadata,
    )
    logger.info(
        f"XP: curator={curator.pk} +{xp_earned} ({activity_type}) "
        f"rec={getattr(recommendation, 'pk', None)}"
    )
    return activity


def log_share(curator, recommendation, metadata=None):
    return log_activity(
        curator,
        CuratorActivity.ActivityType.SHARE,
        SHARE_XP,
        recommendation=recommendation,
        track=recommendation.track,
        metadata=metadata,
    )


def log_taste_overlap(curator, recommendation, prior_recommendation, metadata=None):
    other = prior_recommendation.curator
    return log_activity(
        curator,
        CuratorActivity.ActivityType.TASTE_OVERLAP,
        TASTE_OVERLAP_XP,
        recommendation=recommendation,
        track=recommendation.track,
        metadata={
            **(metadata or {}),
            "other_curator_fid": other.fid,
            "other_curator_username": other.username,
            "other_curator_pfp": other.pfp_url,
        },
    )


def has_share_activity(recommendation) -> bool:
    return CuratorActivity.objects.filter(
        recommendation=recommendation,
        activity_type=CuratorActivity.ActivityType.SHARE,
    ).exists()


def summarize_activities(activities, total_xp) -> dict:
    """
    XP summary returned to the client after a share.
    """
    summary = []
    for activity in activities:
        item = {"type": activity.activity_type, "xp": activity.xp_earned}
        if activity.activity_type == CuratorActivity.ActivityType.TASTE_OVERLAP and activity.metadata:
            item["curator"] = {
                "fid": activity.metadata.get("other_curator_fid"),
                "username": activity.metadata.get("other_curator_username"),
                "pfpUrl": activity.metadata.get("other_curator_pfp"),
            }
        summary.append(item)

    return {
        "earned": sum(a.xp_earned for a in activities),
        "total": total_xp,
        "activities": summary,
    }
