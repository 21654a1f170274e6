from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
from .recommendation import Recommendation


class CoSign(models.Model):
    """
    Endorsement of a recommendation. At most one per identity.
    Co-signers do not need a profile, so the fid is stored as-is.
    """
    recommendation = models.ForeignKey(
        Recommendation,
        on_delete=models.CASCADE,
        related_name="cosigns",
    )
    cosigner_fid = models.PositiveBigIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["recommendation", "cosigner_fid"],
                name="unique_cosign_per_fid",
            )
        ]
        indexes = [
            models.Index(fields=["recommendation", "-created_at"], name="cosign_rec_created_idx"),
            models.Index(fields=["cosigner_fid"], name="cosign_fid_idx"),
        ]

    def __str__(self):
        return f"CoSign(rec={self.recommendation_id}, fid={self.cosigner_fid})"


class Tip(models.Model):
    """
    Append-only USDC tip ledger. The transaction hash is recorded, not verified.
    """
    recommendation = models.ForeignKey(
        Recommendation,
        on_delete=models.CASCADE,
        related_name="tips",
    )
    tipper_fid = models.PositiveBigIntegerField()
    curator_fid = models.PositiveBigIntegerField()
    amount_usd = models.DecimalField(
        max_digits=18,
        decimal_places=6,
        validators=[MinValueValidator(Decimal("0.000001"))],
    )
    transaction_hash = models.CharField(max_length=100, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recommendation", "-created_at"], name="tip_rec_created_idx"),
            models.Index(fields=["tipper_fid"], name="tip_tipper_idx"),
        ]

    def __str__(self):
        return f"Tip({self.amount_usd} USD, rec={self.recommendation_id}, from={self.tipper_fid})"
