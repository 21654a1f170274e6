import logging
from django.db.models import Count
from django.shortcuts import get_object_or_404
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from curators.models import CuratorProfile
from curators.serializers import (
    BioSerializer,
    ScoreLeaderboardSerializer,
    TopCuratorSerializer,
    XPLeaderboardSerializer,
)
from curators.services.farcaster import FarcasterAPIError, NeynarNotConfigured, lookup_addresses
from curators.services.scoring import (
    compute_success_rate,
    curator_stats,
    engagement_totals,
    score_breakdown,
)
from curators.tasks.profile_tasks import backfill_curator_pfps
from recommendations.models import Recommendation
from recommendations.serializers import RecommendationSerializer

logger = logging.getLogger(__name__)


def user_not_found():
    return Response(
        {"success": False, "error": "User not found"},
        status=status.HTTP_404_NOT_FOUND,
    )


class CuratorStatsView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, username):
        curator = CuratorProfile.objects.by_handle(username)
        if curator is None:
            return user_not_found()

        return Response({
            "success": True,
            "stats": curator_stats(curator),
            "bio": curator.bio or "",
        })


class CuratorTracksView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, username):
        curator = CuratorProfile.objects.by_handle(username)
        if curator is None:
            return user_not_found()

        tracks = (
            Recommendation.objects.for_curator(curator)
            .with_curator()
            .with_cosign_count()
            .recent()
        )
        return Response({
            "success": True,
            "tracks": RecommendationSerializer(tracks, many=True).data,
        })


class CuratorBioView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request, username):
        serializer = BioSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated = CuratorProfile.objects.filter(username=username).update(
            bio=serializer.validated_data["bio"]
        )
        if not updated:
            return user_not_found()

        return Response({"success": True})


class CuratorAddressView(APIView):
    """
    Wallet address for tipping. Accepts a numeric fid or a username.
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request, username):
        if username.isdigit():
            fid = int(username)
        else:
            curator = CuratorProfile.objects.filter(username=username).first()
            if curator is None:
                return user_not_found()
            fid = curator.fid

        try:
            addresses = lookup_addresses(fid)
        except NeynarNotConfigured:
            return Response(
                {"success": False, "error": "Wallet address lookup not configured"},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        except FarcasterAPIError as e:
            return Response(
                {"success": False, "error": str(e)},
                status=e.status_code,
            )

        return Response({
            "success": True,
            "fid": fid,
            "primaryAddress": addresses[0] if addresses else None,
            "allAddresses": addresses,
        })


class CuratorScoreView(APIView):
    """
    Live score from the ledgers (the cached profile field may lag).
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request, fid):
        curator = get_object_or_404(CuratorProfile, fid=fid)
        totals = engagement_totals(curator)

        return Response({
            "success": True,
            "fid": curator.fid,
            "score": score_breakdown(totals["cosign_count"], totals["total_tips_usd"]),
            "cachedScore": curator.curator_score,
            "successRate": compute_success_rate(curator),
            "xp": curator.xp,
        })


class ProfilePicturesView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        pfps = list(
            CuratorProfile.objects.filter(pfp_url__isnull=False)
            .exclude(pfp_url="")
            .values_list("pfp_url", flat=True)[:10]
        )
        return Response({"pfps": pfps})


class BackfillProfilePicturesView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        backfill_curator_pfps.delay()
        return Response(
            {"message": "PFP backfill scheduled"},
            status=status.HTTP_202_ACCEPTED,
        )


class LeaderboardView(APIView):
    permission_classes = [permissions.AllowAny]

    LIMIT = 50

    def get(self, request):
        xp_leaderboard = CuratorProfile.objects.ranked_by_xp(limit=self.LIMIT)
        score_leaderboard = CuratorProfile.objects.ranked_by_score(limit=self.LIMIT)

        return Response({
            "success": True,
            "xpLeaderboard": XPLeaderboardSerializer(xp_leaderboard, many=True).data,
            "curatorScoreLeaderboard": ScoreLeaderboardSerializer(score_leaderboard, many=True).data,
        })


class TopCuratorsView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        try:
            limit = max(1, min(int(request.query_params.get("limit", 6)), 50))
        except ValueError:
            limit = 6

        curators = (
            CuratorProfile.objects.filter(curator_score__gt=0)
            .annotate(track_count=Count("recommendations"))
            .order_by("-curator_score", "fid")[:limit]
        )

        return Response({
            "success": True,
            "curators": TopCuratorSerializer(curators, many=True).data,
        })
