import logging
from celery import shared_task
from django.db import transaction
from curators.models import CuratorProfile
from curators.services.farcaster import FarcasterAPIError, get_pfp_url, get_verified_addresses
from curators.services.scoring import refresh_curator_score, refresh_curator_xp
from utils.locks import ResourceLock, ResourceLockedException

logger = logging.getLogger(__name__)


@shared_task
def backfill_curator_pfps():
    """
    Fill missing profile pictures from Warpcast.
    One failed lookup never stops the batch.
    """
    try:
        with ResourceLock("curator_pfp_backfill", timeout=900):
            return _backfill_pfps()
    except ResourceLockedException:
        logger.info("PFP backfill already in progress, skipping")
        return None


def _backfill_pfps():
    results = []
    for curator in CuratorProfile.objects.filter(pfp_url__isnull=True).order_by("fid"):
        try:
            pfp_url = get_pfp_url(curator.fid)
        except FarcasterAPIError as e:
            logger.warning(f"PFP lookup failed for fid={curator.fid}: {e}")
            results.append({"fid": curator.fid, "username": curator.username, "success": False, "error": str(e)})
            continue

        if not pfp_url:
            results.append({
                "fid": curator.fid,
                "username": curator.username,
                "success": False,
                "error": "PFP not found in API response",
            })
            continue

        CuratorProfile.objects.filter(pk=curator.pk).update(pfp_url=pfp_url)
        results.append({"fid": curator.fid, "username": curator.username, "success": True, "pfp_url": pfp_url})

    logger.info(
        f"PFP backfill done: {sum(r['success'] for r in results)}/{len(results)} updated"
    )
    return {"total": len(results), "results": results}


@shared_task
def backfill_wallet_addresses():
    """
    Primary verified wallet from the Farcaster Hub for curators without one.
    """
    try:
        with ResourceLock("wallet_address_backfill", timeout=900):
            updated = 0
            missing = CuratorProfile.objects.filter(wallet_address__isnull=True).order_by("fid")
            for curator in missing:
                try:
                    addresses = get_verified_addresses(curator.fid)
                except FarcasterAPIError as e:
                    logger.warning(f"Hub lookup failed for fid={curator.fid}: {e}")
                    continue

                if not addresses:
                    continue

                CuratorProfile.objects.filter(pk=curator.pk).update(wallet_address=addresses[0])
                updated += 1

            logger.info(f"Wallet backfill done: updated={updated}")
            return updated
    except ResourceLockedException:
        logger.info("Wallet backfill already in progress, skipping")
        return None


@shared_task
def reconcile_curator_scores():
    """
    Rebuild cached curator_score / xp from the ledgers.
    """
    try:
        with ResourceLock("curator_score_reconcile", timeout=1800):
            changed = 0
            for curator in CuratorProfile.objects.order_by("fid").iterator():
                before = (curator.curator_score, curator.xp)
                with transaction.atomic():
                    refresh_curator_score(curator)
                    refresh_curator_xp(curator)
                if before != (curator.curator_score, curator.xp):
                    changed += 1
                    logger.info(
                        f"Reconciled fid={curator.fid}: score {before[0]}->{curator.curator_score}, "
                        f"xp {before[1]}->{curator.xp}"
                    )
            return changed
    except ResourceLockedException:
        logger.info("Score reconciliation already in progress, skipping")
        return None
