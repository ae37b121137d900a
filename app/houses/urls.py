"""
URL configuration for house listings.

All routes are prefixed with /api/v1/houses/ when included in the main URLconf.
"""

from rest_framework.routers import DefaultRouter

from houses.views import HouseViewSet

app_name = "houses"

router = DefaultRouter()
router.register("", HouseViewSet, basename="house")

urlpatterns = router.urls
