from django.urls import path
from curators.views import (
    BackfillProfilePicturesView,
    CuratorAddressView,
    CuratorBioView,
    CuratorScoreView,
    CuratorStatsView,
    CuratorTracksView,
    LeaderboardView,
    ProfilePicturesView,
    TopCuratorsView,
)

urlpatterns = [
    # fixed paths first, they would otherwise match <username>
    path("users/pfps/", ProfilePicturesView.as_view(), name="user-pfps"),
    path("users/backfill-pfp/", BackfillProfilePicturesView.as_view(), name="user-backfill-pfp"),
    path("users/<str:username>/stats/", CuratorStatsView.as_view(), name="user-stats"),
    path("users/<str:username>/tracks/", CuratorTracksView.as_view(), name="user-tracks"),
    path("users/<str:username>/bio/", CuratorBioView.as_view(), name="user-bio"),
    path("users/<str:username>/address/", CuratorAddressView.as_view(), name="user-address"),
    path("leaderboard/", LeaderboardView.as_view(), name="leaderboard"),
    path("curators/top/", TopCuratorsView.as_view(), name="curators-top"),
    path("curators/<int:fid>/score/", CuratorScoreView.as_view(), name="curator-score"),
]
