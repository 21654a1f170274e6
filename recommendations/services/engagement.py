import logging
from django.db import IntegrityError, transaction
from django.db.models import Max
from curators.models import CuratorProfile
from curators.services.scoring import refresh_curator_score
from recommendations.exceptions import AlreadyCoSignedError, SelfCoSignError
from recommendations.models import CoSign, Tip

logger = logging.getLogger(__name__)


def co_sign_count(recommendation) -> int:
    return CoSign.objects.filter(recommendation=recommendation).count()


def co_sign(recommendation, cosigner_fid: int) -> int:
    """
    Endorse a recommendation once per fid.
    Returns the fresh co-sign count (counted, not cached).
    """
    if recommendation.curator_id == cosigner_fid:
        raise SelfCoSignError()

    if CoSign.objects.filter(recommendation=recommendation, cosigner_fid=cosigner_fid).exists():
        raise AlreadyCoSignedError()

    try:
        with transaction.atomic():
            CoSign.objects.create(recommendation=recommendation, cosigner_fid=cosigner_fid)
            refresh_curator_score(recommendation.curator)
    except IntegrityError:
        # lost a race against the same fid
        raise AlreadyCoSignedError()

    count = co_sign_count(recommendation)
    logger.info(f"Co-sign: rec={recommendation.pk} fid={cosigner_fid} count={count}")
    return count


def co_sign_status(recommendation, fid: int) -> tuple[bool, int]:
    has_co_signed = CoSign.objects.filter(recommendation=recommendation, cosigner_fid=fid).exists()
    return has_co_signed, co_sign_count(recommendation)


def _profiles_by_fid(fids) -> dict:
    return {p.fid: p for p in CuratorProfile.objects.filter(fid__in=set(fids))}


def _actor(fid, profiles, timestamp) -> dict:
    profile = profiles.get(fid)
    return {
        "fid": fid,
        "username": profile.username if profile and profile.username else "unknown",
        "pfpUrl": profile.pfp_url if profile else None,
        "timestamp": timestamp,
    }


def list_cosigners(recommendation, limit=10) -> list[dict]:
    cosigns = list(
        CoSign.objects.filter(recommendation=recommendation)
        .order_by("-created_at")[:limit]
        .values("cosigner_fid", "created_at")
    )
    profiles = _profiles_by_fid(c["cosigner_fid"] for c in cosigns)
    return [_actor(c["cosigner_fid"], profiles, c["created_at"]) for c in cosigns]


def list_tippers(recommendation, limit=10) -> list[dict]:
    """
    Distinct tippers, most recent first.
    """
    tippers = list(
        Tip.objects.filter(recommendation=recommendation)
        .values("tipper_fid")
        .annotate(last_tipped_at=Max("created_at"))
        .order_by("-last_tipped_at")[:limit]
    )
    profiles = _profiles_by_fid(t["tipper_fid"] for t in tippers)
    return [_actor(t["tipper_fid"], profiles, t["last_tipped_at"]) for t in tippers]
