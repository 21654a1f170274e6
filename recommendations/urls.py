from django.urls import path
from recommendations.views import (
    TrackCoSignCheckView,
    TrackCoSignersView,
    TrackCoSignView,
    TrackDetailView,
    TrackListView,
    TrackTippersView,
    TrackTipView,
)

urlpatterns = [
    path("tracks/", TrackListView.as_view(), name="track-list"),
    path("tracks/<uuid:pk>/", TrackDetailView.as_view(), name="track-detail"),
    path("tracks/<uuid:pk>/tip/", TrackTipView.as_view(), name="track-tip"),
    path("tracks/<uuid:pk>/cosign/", TrackCoSignView.as_view(), name="track-cosign"),
    path("tracks/<uuid:pk>/cosign/check/", TrackCoSignCheckView.as_view(), name="track-cosign-check"),
    path("tracks/<uuid:pk>/cosigners/", TrackCoSignersView.as_view(), name="track-cosigners"),
    path("tracks/<uuid:pk>/tippers/", TrackTippersView.as_view(), name="track-tippers"),
]
