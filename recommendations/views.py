import logging
from django.conf import settings
from django.shortcuts import get_object_or_404
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from recommendations.exceptions import EngagementError
from recommendations.models import Recommendation
from recommendations.serializers import (
    CoSignSerializer,
    LegacyActionSerializer,
    RecommendationSerializer,
    SubmitTrackSerializer,
    TipSerializer,
)
from recommendations.services.engagement import co_sign, co_sign_status, list_cosigners, list_tippers
from recommendations.services.ledger import increment_tip_count, record_tip
from recommendations.services.submission import submit_track

logger = logging.getLogger(__name__)


def parse_int(value, default, minimum=0, maximum=None):
    try:
        value = int(value)
    except (TypeError, ValueError):
        return default
    value = max(minimum, value)
    if maximum is not None:
        value = min(maximum, value)
    return value


def get_recommendation(pk):
    return get_object_or_404(Recommendation.objects.with_curator(), pk=pk)


def engagement_error_response(error):
    return Response(
        {"success": False, "error": error.message},
        status=status.HTTP_400_BAD_REQUEST,
    )


class TrackListView(APIView):
    """
    GET  -> paged feed (?sort=recent|most_tipped&limit&offset&genre)
    POST -> share a new track
    """
    permission_classes = [permissions.AllowAny]

    DEFAULT_LIMIT = 20

    def get(self, request):
        sort = request.query_params.get("sort", "recent")
        limit = parse_int(
            request.query_params.get("limit"),
            self.DEFAULT_LIMIT,
            minimum=1,
            maximum=settings.CURIO_FEED_MAX_LIMIT,
        )
        offset = parse_int(request.query_params.get("offset"), 0)
        genre = request.query_params.get("genre")

        qs = Recommendation.objects.with_curator().with_cosign_count().for_genre(genre)
        qs = qs.most_tipped() if sort == "most_tipped" else qs.recent()

        page = qs[offset:offset + limit]
        return Response({
            "success": True,
            "tracks": RecommendationSerializer(page, many=True).data,
            "limit": limit,
            "offset": offset,
        })

    def post(self, request):
        serializer = SubmitTrackSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = submit_track(
            url=data["url"],
            curator_fid=data["curator_fid"],
            username=data.get("username"),
            pfp_url=data.get("pfp_url"),
            wallet_address=data.get("wallet_address"),
            review=data.get("review"),
            genre=data.get("genre"),
            moods=data.get("moods"),
            title=data.get("title"),
            artist=data.get("artist"),
            artwork_url=data.get("artwork_url"),
        )

        recommendation = (
            Recommendation.objects.with_curator()
            .with_cosign_count()
            .get(pk=result.recommendation.pk)
        )

        return Response(
            {
                "success": True,
                "track": RecommendationSerializer(recommendation).data,
                "trackCreated": result.track_created,
                "normalized": result.normalized,
                "xp": result.xp,
            },
            status=status.HTTP_200_OK,
        )


class TrackDetailView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):
        recommendation = get_object_or_404(
            Recommendation.objects.with_curator().with_cosign_count(), pk=pk
        )
        return Response({"success": True, "track": RecommendationSerializer(recommendation).data})

    def post(self, request, pk):
        """
        Legacy `{"action": "tip"}`: count-only tip without an amount.
        Superseded by TrackTipView.
        """
        serializer = LegacyActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if serializer.validated_data["action"] != "tip":
            return Response(
                {"success": False, "error": "Invalid action"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        recommendation = get_recommendation(pk)
        increment_tip_count(recommendation)

        recommendation = (
            Recommendation.objects.with_curator().with_cosign_count().get(pk=recommendation.pk)
        )
        return Response({"success": True, "track": RecommendationSerializer(recommendation).data})


class TrackTipView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request, pk):
        serializer = TipSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        recommendation = get_recommendation(pk)

        to_fid = data.get("to_fid")
        if to_fid and to_fid != recommendation.curator_id:
            logger.warning(
                f"Tip toFid={to_fid} differs from curator={recommendation.curator_id} "
                f"for rec={recommendation.pk}; crediting the curator"
            )

        try:
            totals = record_tip(
                recommendation,
                amount_usd=data["amount_usd"],
                tx_hash=data["tx_hash"],
                tipper_fid=data["from_fid"],
                tipper_username=data["tipper_username"],
            )
        except EngagementError as e:
            return engagement_error_response(e)

        return Response({"success": True, **totals})


class TrackCoSignView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request, pk):
        serializer = CoSignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        recommendation = get_recommendation(pk)

        try:
            count = co_sign(recommendation, serializer.validated_data["user_fid"])
        except EngagementError as e:
            return engagement_error_response(e)

        return Response({"success": True, "coSignCount": count})


class TrackCoSignCheckView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):
        serializer = CoSignSerializer(data={"userFid": request.query_params.get("userFid")})
        if not serializer.is_valid():
            return Response(
                {"success": False, "error": "Missing user FID"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        recommendation = get_recommendation(pk)
        has_co_signed, count = co_sign_status(recommendation, serializer.validated_data["user_fid"])

        return Response({
            "success": True,
            "hasCoSigned": has_co_signed,
            "coSignCount": count,
        })


class TrackCoSignersView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):
        limit = parse_int(request.query_params.get("limit"), 10, minimum=1, maximum=100)
        recommendation = get_recommendation(pk)

        cosigners = list_cosigners(recommendation, limit=limit)
        return Response({"success": True, "cosigners": cosigners, "total": len(cosigners)})


class TrackTippersView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):
        limit = parse_int(request.query_params.get("limit"), 10, minimum=1, maximum=100)
        recommendation = get_recommendation(pk)

        tippers = list_tippers(recommendation, limit=limit)
        return Response({"success": True, "tippers": tippers, "total": len(tippers)})
