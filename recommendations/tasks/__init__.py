from .backfill_tasks import backfill_missing_track_ids

__all__ = ["backfill_missing_track_ids"]
