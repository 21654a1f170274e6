from django.db import models
from django.db.models import Q


class CuratorProfileManager(models.Manager):
    def by_handle(self, handle):
        """
        Profile routes accept either a username or a wallet address.
        """
        profile = self.filter(username=handle).first()
        if profile is None:
            profile = self.filter(wallet_address__iexact=handle).first()
        return profile

    def upsert(self, fid, username=None, pfp_url=None, wallet_address=None):
        """
        Create the profile on first sight, refresh identity fields afterwards.
        Empty values never overwrite what we already know.
        """
        defaults = {
            key: value
            for key, value in {
                "username": username,
                "pfp_url": pfp_url,
                "wallet_address": wallet_address,
            }.items()
            if value
        }
        profile, created = self.update_or_create(fid=fid, defaults=defaults)
        return profile, created

    def ranked_by_xp(self, limit=50):
        return self.filter(xp__gt=0).order_by("-xp", "fid")[:limit]

    def ranked_by_score(self, limit=50):
        return self.filter(curator_score__gt=0).order_by("-curator_score", "fid")[:limit]


class CuratorProfile(models.Model):
    """
    A Farcaster account that shares, co-signs or tips.
    Materializes lazily on first share or tip.
    """
    fid = models.PositiveBigIntegerField(primary_key=True)
    username = models.CharField(max_length=255, blank=True, default="", db_index=True)
    pfp_url = models.URLField(max_length=1024, null=True, blank=True)
    wallet_address = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    bio = models.TextField(blank=True, default="")
    notification_token = models.CharField(max_length=255, null=True, blank=True)

    # Cached aggregates, recomputed on every event that moves them
    curator_score = models.IntegerField(default=0, db_index=True)
    xp = models.IntegerField(default=0, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CuratorProfileManager()

    class Meta:
        indexes = [
            models.Index(fields=["-curator_score"], name="curator_score_idx"),
            models.Index(fields=["-xp"], name="curator_xp_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(curator_score__gte=0) & Q(xp__gte=0),
                name="curator_aggregates_non_negative",
            )
        ]

    def as_identity(self) -> dict:
        return {
            "fid": self.fid,
            "username": self.username or "unknown",
            "pfpUrl": self.pfp_url,
        }

    def __str__(self):
        return self.username or f"fid:{self.fid}"
