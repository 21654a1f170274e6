import uuid
from decimal import Decimal
from django.db import models
from django.db.models import Count, Q
from curators.models import CuratorProfile
from music.models import Track


class RecommendationQuerySet(models.QuerySet):
    def with_curator(self):
        return self.select_related("curator", "track")

    def with_cosign_count(self):
        return self.annotate(cosign_count=Count("cosigns", distinct=True))

    def for_curator(self, curator):
        return self.filter(curator=curator)

    def for_genre(self, genre):
        if not genre:
            return self
        return self.filter(genre__iexact=genre)

    def recent(self):
        return self.order_by("-created_at")

    def most_tipped(self):
        return self.order_by("-total_tips_usd", "-tip_count", "-created_at")

    def prior_shares_of(self, recommendation):
        """
        Earlier recommendations of the same track by other curators.
        """
        return (
            self.filter(
                track_id=recommendation.track_id,
                created_at__lt=recommendation.created_at,
            )
            .exclude(curator_id=recommendation.curator_id)
            .select_related("curator")
            .order_by("created_at")
        )

    def missing_track(self):
        return self.filter(track__isnull=True)


class Recommendation(models.Model):
    """
    One curator sharing one track.
    Many recommendations can point at the same track (taste overlap).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Null only for legacy rows waiting on the track backfill
    track = models.ForeignKey(
        Track,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="recommendations",
    )

    curator = models.ForeignKey(
        CuratorProfile,
        on_delete=models.CASCADE,
        related_name="recommendations",
    )

    # Exactly what the curator pasted
    original_url = models.URLField(max_length=1024)

    # Denormalized presentation fields, used when `track` is missing
    title = models.CharField(max_length=500, blank=True, default="")
    artist = models.CharField(max_length=500, blank=True, default="")
    artwork_url = models.URLField(max_length=1024, blank=True, default="")
    platform = models.CharField(max_length=20, blank=True, default="other")

    review_text = models.TextField(null=True, blank=True)
    genre = models.CharField(max_length=100, default="general", db_index=True)
    moods = models.JSONField(default=list, blank=True)

    tip_count = models.PositiveIntegerField(default=0)
    total_tips_usd = models.DecimalField(max_digits=18, decimal_places=6, default=Decimal("0"))

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RecommendationQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["track", "created_at"], name="rec_track_created_idx"),
            models.Index(fields=["curator", "-created_at"], name="rec_curator_created_idx"),
            models.Index(fields=["-total_tips_usd"], name="rec_total_tips_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(total_tips_usd__gte=0),
                name="rec_total_tips_non_negative",
            )
        ]

    # ---------- presentation helpers ----------
    # Catalog track first, own fields as fallback.
    @property
    def display_title(self):
        if self.track_id:
            return self.track.title
        return self.title or "Unknown Title"

    @property
    def display_artist(self):
        if self.track_id:
            return self.track.artist
        return self.artist or "Unknown Artist"

    @property
    def display_artwork(self):
        if self.track_id and self.track.artwork_url:
            return self.track.artwork_url
        return self.artwork_url or ""

    def __str__(self) -> str:
        return (
            f"Recommendation(curator={self.curator_id}, "
            f"track={self.track_id}, tips={self.tip_count})"
        )
