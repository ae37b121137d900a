"""
Authentication views.

Most authentication endpoints are handled by dj-rest-auth:
    - Login: /api/v1/auth/login/
    - Logout: /api/v1/auth/logout/
    - Register: /api/v1/auth/registration/
    - Password change: /api/v1/auth/password/change/
    - Current user: /api/v1/auth/user/

This module adds the public profile endpoint used by chat and listing
clients to show who they are talking to.

Related files:
    - serializers.py: Request/response serialization
    - urls.py: URL routing
"""

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.models import User
from authentication.serializers import PublicUserSerializer


class UserDetailView(APIView):
    """
    Public profile of any active user.

    GET /api/v1/auth/users/{user_id}/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get a user's public profile",
        description="Name, role, picture and rating of another user.",
        tags=["Auth - User"],
        responses={200: PublicUserSerializer},
    )
    def get(self, request, user_id):
        user = get_object_or_404(User, pk=user_id, is_active=True)
        serializer = PublicUserSerializer(user, context={"request": request})
        return Response(serializer.data)
