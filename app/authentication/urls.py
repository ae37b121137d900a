"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/users/{user_id}/     - Public profile (GET)

Note:
    The base auth URLs from dj-rest-auth are included in config/urls.py:
    - /api/v1/auth/login/
    - /api/v1/auth/logout/
    - /api/v1/auth/user/
    - /api/v1/auth/password/change/
    - /api/v1/auth/registration/
"""

from django.urls import path

from authentication.views import UserDetailView

app_name = "authentication"

urlpatterns = [
    path("users/<uuid:user_id>/", UserDetailView.as_view(), name="user-detail"),
]
