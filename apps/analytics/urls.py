"""URL routing for analytics endpoints."""

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import LeaderboardView, OverviewAnalyticsView, PerformanceViewSet

router = DefaultRouter()
router.register(r"performance", PerformanceViewSet, basename="performance")

urlpatterns = [
    # Do not prefix with 'analytics/' here; the namespace is defined in config.urls
    path('leaderboard/', LeaderboardView.as_view(), name='analytics-leaderboard'),
    path('overview/', OverviewAnalyticsView.as_view(), name='analytics-overview'),
    path('', include(router.urls)),
]
