from rest_framework import serializers
from curators.models import CuratorProfile


class BioSerializer(serializers.Serializer):
    bio = serializers.CharField(max_length=500, allow_blank=True)


class XPLeaderboardSerializer(serializers.ModelSerializer):
    farcaster_fid = serializers.IntegerField(source="fid")
    pfp_url = serializers.CharField(allow_null=True)

    class Meta:
        model = CuratorProfile
        fields = ["farcaster_fid", "username", "pfp_url", "xp"]


class ScoreLeaderboardSerializer(serializers.ModelSerializer):
    farcaster_fid = serializers.IntegerField(source="fid")
    pfp_url = serializers.CharField(allow_null=True)

    class Meta:
        model = CuratorProfile
        fields = ["farcaster_fid", "username", "pfp_url", "curator_score"]


class TopCuratorSerializer(serializers.ModelSerializer):
    pfpUrl = serializers.CharField(source="pfp_url", allow_null=True)
    curatorScore = serializers.IntegerField(source="curator_score")
    trackCount = serializers.IntegerField(source="track_count")

    class Meta:
        model = CuratorProfile
        fields = ["fid", "username", "pfpUrl", "curatorScore", "trackCount"]
