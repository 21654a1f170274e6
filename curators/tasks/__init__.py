from .notification_tasks import notify_curator_of_tip
from .profile_tasks import backfill_curator_pfps, backfill_wallet_addresses, reconcile_curator_scores

__all__ = [
    "notify_curator_of_tip",
    "backfill_curator_pfps",
    "backfill_wallet_addresses",
    "reconcile_curator_scores",
]
