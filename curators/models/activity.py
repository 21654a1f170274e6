from django.db import models
from django.db.models import Sum
from .curator import CuratorProfile


class CuratorActivityManager(models.Manager):
    def for_curator(self, curator):
        return self.filter(curator=curator)

    def total_xp(self, curator) -> int:
        return (
            self.for_curator(curator)
            .aggregate(total=Sum("xp_earned"))
            .get("total")
            or 0
        )


class CuratorActivity(models.Model):
    """
    Immutable XP ledger.
    One `share` row per recommendation, one `taste_overlap` row per
    (new recommendation, earlier recommendation of the same track) pair.
    """

    class ActivityType(models.TextChoices):
        SHARE = "share", "Share"
        TASTE_OVERLAP = "taste_overlap", "Taste overlap"

    curator = models.ForeignKey(
        CuratorProfile,
        on_delete=models.CASCADE,
        related_name="activities",
    )

    activity_type = models.CharField(
        max_length=20,
        choices=ActivityType.choices,
    )

    xp_earned = models.PositiveIntegerField()

    recommendation = models.ForeignKey(
        "recommendations.Recommendation",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="activities",
    )

    track = models.ForeignKey(
        "music.Track",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="curator_activities",
    )

    # taste_overlap: {"other_curator_fid": ..., "other_curator_username": ..., "other_curator_pfp": ...}
    metadata = models.JSONField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    objects = CuratorActivityManager()

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["curator", "activity_type"], name="activity_curator_type_idx"),
            models.Index(fields=["recommendation", "activity_type"], name="activity_rec_type_idx"),
        ]

    def __str__(self):
        return f"{self.curator} +{self.xp_earned} XP ({self.activity_type})"
