from decimal import Decimal
from django.conf import settings
from rest_framework import serializers
from music.services.platforms import DEFAULT_ARTWORK_URL, build_embed_url
from recommendations.models import Recommendation


class SubmitTrackSerializer(serializers.Serializer):
    url = serializers.URLField(max_length=1024)
    curatorFid = serializers.IntegerField(min_value=1, source="curator_fid")
    username = serializers.CharField(max_length=255, required=False, allow_blank=True)
    pfpUrl = serializers.URLField(max_length=1024, required=False, allow_null=True, allow_blank=True, source="pfp_url")
    walletAddress = serializers.CharField(
        max_length=64, required=False, allow_null=True, allow_blank=True, source="wallet_address"
    )
    review = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    genre = serializers.CharField(max_length=100, required=False, allow_blank=True, default="general")
    moods = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
        default=list,
        max_length=20,
    )

    # Used only if the link can't be normalized
    title = serializers.CharField(max_length=500, required=False, allow_blank=True)
    artist = serializers.CharField(max_length=500, required=False, allow_blank=True)
    artworkUrl = serializers.URLField(
        max_length=1024, required=False, allow_blank=True, allow_null=True, source="artwork_url"
    )

    def validate_genre(self, value):
        return value.strip() or "general"

    def validate_moods(self, value):
        seen = []
        for mood in value:
            mood = mood.strip()
            if mood and mood not in seen:
                seen.append(mood)
        return seen


class TipSerializer(serializers.Serializer):
    txHash = serializers.CharField(max_length=100, source="tx_hash")
    fromFid = serializers.IntegerField(min_value=1, source="from_fid")
    toFid = serializers.IntegerField(min_value=1, required=False, allow_null=True, source="to_fid")
    requestedAmount = serializers.DecimalField(max_digits=18, decimal_places=6, source="amount_usd")
    tipperUsername = serializers.CharField(max_length=255, source="tipper_username")

    def validate_txHash(self, value):
        if not value.startswith("0x"):
            raise serializers.ValidationError("Invalid transaction hash")
        return value

    def validate_requestedAmount(self, value):
        if value <= 0 or value > Decimal(settings.CURIO_MAX_TIP_USD):
            raise serializers.ValidationError(
                f"Invalid tip amount (must be between 0 and {settings.CURIO_MAX_TIP_USD})"
            )
        return value


class CoSignSerializer(serializers.Serializer):
    userFid = serializers.IntegerField(min_value=1, source="user_fid")


class LegacyActionSerializer(serializers.Serializer):
    action = serializers.CharField()


class CuratorSummarySerializer(serializers.Serializer):
    fid = serializers.IntegerField()
    username = serializers.CharField()
    curatorScore = serializers.IntegerField(source="curator_score")
    pfpUrl = serializers.CharField(source="pfp_url", allow_null=True)
    walletAddress = serializers.CharField(source="wallet_address", allow_null=True)


class RecommendationSerializer(serializers.ModelSerializer):
    """
    Feed/detail shape. Catalog track first, the row's own fields otherwise.
    """
    url = serializers.CharField(source="original_url")
    trackId = serializers.IntegerField(source="track_id", allow_null=True)
    title = serializers.CharField(source="display_title")
    artist = serializers.CharField(source="display_artist")
    artwork = serializers.SerializerMethodField()
    embedUrl = serializers.SerializerMethodField()
    platformLinks = serializers.SerializerMethodField()
    songlinkPageUrl = serializers.SerializerMethodField()
    review = serializers.CharField(source="review_text", allow_null=True)
    tips = serializers.DecimalField(source="total_tips_usd", max_digits=18, decimal_places=6, coerce_to_string=False)
    tipCount = serializers.IntegerField(source="tip_count")
    coSignCount = serializers.SerializerMethodField()
    sharedBy = CuratorSummarySerializer(source="curator")
    timestamp = serializers.SerializerMethodField()

    class Meta:
        model = Recommendation
        fields = [
            "id",
            "trackId",
            "url",
            "platform",
            "title",
            "artist",
            "artwork",
            "embedUrl",
            "platformLinks",
            "songlinkPageUrl",
            "review",
            "genre",
            "moods",
            "tips",
            "tipCount",
            "coSignCount",
            "sharedBy",
            "timestamp",
        ]

    def get_artwork(self, obj):
        return obj.display_artwork or DEFAULT_ARTWORK_URL

    def get_embedUrl(self, obj):
        return build_embed_url(obj.original_url, obj.platform)

    def get_platformLinks(self, obj):
        if obj.track_id:
            return obj.track.platform_urls or {}
        return {}

    def get_songlinkPageUrl(self, obj):
        if obj.track_id:
            return obj.track.canonical_page_url or None
        return None

    def get_coSignCount(self, obj):
        count = getattr(obj, "cosign_count", None)
        if count is None:
            count = obj.cosigns.count()
        return count

    def get_timestamp(self, obj):
        return int(obj.created_at.timestamp() * 1000)
