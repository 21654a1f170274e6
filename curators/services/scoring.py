import logging
from decimal import Decimal, ROUND_HALF_UP
from django.db.models import Count, Q, Sum
from curators.models import CuratorProfile, CuratorActivity
from recommendations.models import CoSign, Recommendation

logger = logging.getLogger(__name__)


# Points per co-sign received on any of the curator's tracks
POINTS_PER_COSIGN = 1
# Points per 1 USD received in tips
POINTS_PER_USDC = 5
# A recommendation "succeeds" once it has collected this much in tips
SUCCESS_THRESHOLD_USD = Decimal("5")


def round_half_up(value) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_curator_score(cosign_count: int, total_tips_usd) -> int:
    cosign_points = cosign_count * POINTS_PER_COSIGN
    tip_points = round_half_up(Decimal(str(total_tips_usd)) * POINTS_PER_USDC)
    return cosign_points + tip_points


def score_breakdown(cosign_count: int, total_tips_usd) -> dict:
    total_tips_usd = Decimal(str(total_tips_usd))
    cosign_points = cosign_count * POINTS_PER_COSIGN
    tip_points = round_half_up(total_tips_usd * POINTS_PER_USDC)
    return {
        "total": cosign_points + tip_points,
        "cosignPoints": cosign_points,
        "tipPoints": tip_points,
        "breakdown": (
            f"{cosign_points} pts ({cosign_count} co-signs) + "
            f"{tip_points} pts (${total_tips_usd:.2f} tips)"
        ),
    }


# =========================================================
# LEDGER AGGREGATES
# =========================================================

def engagement_totals(curator) -> dict:
    """
    {cosign_count, total_tips_usd} across all of the curator's recommendations.
    """
    cosign_count = CoSign.objects.filter(recommendation__curator=curator).count()
    total_tips = (
        Recommendation.objects.for_curator(curator)
        .aggregate(total=Sum("total_tips_usd"))
        .get("total")
    )
    return {
        "cosign_count": cosign_count,
        "total_tips_usd": total_tips or Decimal("0"),
    }


def compute_curator_score(curator) -> int:
    totals = engagement_totals(curator)
    return calculate_curator_score(totals["cosign_count"], totals["total_tips_usd"])


def compute_success_rate(curator) -> int:
    stats = Recommendation.objects.for_curator(curator).aggregate(
        total=Count("id"),
        successful=Count("id", filter=Q(total_tips_usd__gte=SUCCESS_THRESHOLD_USD)),
    )
    if not stats["total"]:
        return 0
    return round_half_up(Decimal(100) * stats["successful"] / stats["total"])


def compute_xp(curator) -> int:
    return CuratorActivity.objects.total_xp(curator)


# =========================================================
# CACHED PROFILE FIELDS
# =========================================================
# Recompute-and-overwrite, never increment. Call inside the
# transaction of the event that moved the aggregate.

def refresh_curator_score(curator) -> int:
    score = compute_curator_score(curator)
    CuratorProfile.objects.filter(pk=curator.pk).update(curator_score=score)
    curator.curator_score = score
    return score


def refresh_curator_xp(curator) -> int:
    xp = compute_xp(curator)
    CuratorProfile.objects.filter(pk=curator.pk).update(xp=xp)
    curator.xp = xp
    return xp


def curator_stats(curator) -> dict:
    totals = Recommendation.objects.for_curator(curator).aggregate(
        tracks_shared=Count("id"),
        tips_earned=Sum("total_tips_usd"),
    )
    tips_earned = totals["tips_earned"] or Decimal("0")

    return {
        "tracksShared": totals["tracks_shared"] or 0,
        # Following is not implemented yet
        "followers": 0,
        "tipsEarned": float(tips_earned.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
        "successRate": compute_success_rate(curator),
        "curatorScore": compute_curator_score(curator),
        "xp": compute_xp(curator),
    }
