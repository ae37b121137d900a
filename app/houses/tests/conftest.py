"""
Test configuration and fixtures for house listing tests.

Usage:
    def test_example(seller_client, upload):
        response = seller_client.post(
            "/api/v1/houses/",
            {"title": "Villa", "main_image": upload(), ...},
            format="multipart",
        )
"""

import io

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import AdminFactory, SellerFactory, UserFactory
from houses.tests.factories import HouseFactory


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


def make_upload(name="photo.png", color="red", size=(8, 8)):
    """A small PNG as it would arrive in a multipart request."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return SimpleUploadedFile(name, buffer.getvalue(), content_type="image/png")


@pytest.fixture
def upload():
    """Factory for in-memory PNG uploads."""
    return make_upload


@pytest.fixture
def seller(db):
    return SellerFactory(name="Selam")


@pytest.fixture
def other_seller(db):
    return SellerFactory(name="Dawit")


@pytest.fixture
def buyer(db):
    return UserFactory(name="Hana")


@pytest.fixture
def site_admin(db):
    return AdminFactory()


@pytest.fixture
def seller_client(seller):
    return _client_for(seller)


@pytest.fixture
def other_seller_client(other_seller):
    return _client_for(other_seller)


@pytest.fixture
def buyer_client(buyer):
    return _client_for(buyer)


@pytest.fixture
def site_admin_client(site_admin):
    return _client_for(site_admin)


@pytest.fixture
def house(seller):
    return HouseFactory(owner=seller)


@pytest.fixture
def house_limit(settings):
    """Allow at most three sub images per house."""
    settings.HOUSE_MAX_SUB_IMAGES = 3
    return 3
