"""
Test configuration and fixtures for authentication tests.

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get("/api/v1/auth/user/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import AdminFactory, SellerFactory, UserFactory


@pytest.fixture
def user(db):
    """Create a basic buyer."""
    return UserFactory()


@pytest.fixture
def seller(db):
    """Create a seller."""
    return SellerFactory()


@pytest.fixture
def admin_user(db):
    """Create a user with the admin role."""
    return AdminFactory()


@pytest.fixture
def authenticated_client(user):
    """API client authenticated with a JWT for the default user fixture."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client
