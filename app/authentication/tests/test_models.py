"""
Tests for authentication models.

Test Organization:
    - TestUserModel: defaults, constraints and role helpers
    - TestUserManager: create_user / create_superuser
    - TestRatingModel: per-pair uniqueness and score range

Testing Philosophy:
    Tests focus on observable behavior: field defaults, database
    constraints and model properties.
"""

import pytest
from django.db import IntegrityError, transaction

from authentication.models import Rating, User
from authentication.tests.factories import (
    AdminFactory,
    RatingFactory,
    SellerFactory,
    UserFactory,
)


class TestUserModel:
    """Tests for the User model."""

    def test_new_user_starts_with_signup_coins(self, db, settings):
        """
        New accounts receive SIGNUP_COINS.

        Why it matters: Coins pay for chat messages; a new user must be able
        to contact a seller without buying coins first.
        """
        settings.SIGNUP_COINS = 100
        user = User.objects.create_user(email="new@example.com", password="TestPass123!")
        assert user.coins == 100

    def test_default_role_is_buyer(self, db):
        user = User.objects.create_user(email="buyer@example.com", password="TestPass123!")
        assert user.role == User.Role.BUYER

    def test_primary_key_is_uuid(self, db):
        """
        User ids are UUIDs.

        Why it matters: Chat pairs and channel names order users by the
        string form of their id.
        """
        user = UserFactory()
        assert len(str(user.id)) == 36

    def test_email_must_be_unique(self, db):
        user = UserFactory()
        with pytest.raises(IntegrityError):
            User.objects.create_user(email=user.email, password="TestPass123!")

    def test_phone_number_unique_when_set(self, db):
        UserFactory(phone_number="+251911000000")
        with pytest.raises(IntegrityError):
            UserFactory(phone_number="+251911000000")

    def test_multiple_users_without_phone_number_allowed(self, db):
        """NULL phone numbers don't collide on the unique index."""
        UserFactory(phone_number=None)
        UserFactory(phone_number=None)
        assert User.objects.filter(phone_number__isnull=True).count() == 2

    def test_coins_cannot_go_negative(self, db):
        """
        The database rejects a negative coin balance.

        Why it matters: Balance changes use conditional UPDATEs; the check
        constraint is the last line against a double spend.
        """
        user = UserFactory(coins=5)
        with pytest.raises(IntegrityError), transaction.atomic():
            User.objects.filter(pk=user.pk).update(coins=-1)

    def test_seller_and_admin_are_sellers(self, db):
        assert SellerFactory().is_seller
        assert AdminFactory().is_seller
        assert not UserFactory().is_seller

    def test_admin_role_detection(self, db):
        assert AdminFactory().is_admin_role
        assert not SellerFactory().is_admin_role

    def test_str_is_email(self, db):
        user = UserFactory(email="abebe@example.com")
        assert str(user) == "abebe@example.com"

    def test_get_full_name_falls_back_to_email(self, db):
        user = UserFactory(name="", email="anon@example.com")
        assert user.get_full_name() == "anon@example.com"


class TestUserManager:
    """Tests for UserManager."""

    def test_create_user_requires_email(self, db):
        with pytest.raises(ValueError):
            User.objects.create_user(email="", password="TestPass123!")

    def test_create_user_hashes_password(self, db):
        user = User.objects.create_user(email="hash@example.com", password="TestPass123!")
        assert user.password != "TestPass123!"
        assert user.check_password("TestPass123!")

    def test_create_user_without_password_is_unusable(self, db):
        user = User.objects.create_user(email="nopass@example.com")
        assert not user.has_usable_password()

    def test_create_superuser_gets_admin_role(self, db):
        admin = User.objects.create_superuser(
            email="admin@example.com", password="AdminPass123!"
        )
        assert admin.is_staff
        assert admin.is_superuser
        assert admin.role == User.Role.ADMIN

    def test_create_superuser_rejects_non_staff(self, db):
        with pytest.raises(ValueError):
            User.objects.create_superuser(
                email="admin@example.com", password="AdminPass123!", is_staff=False
            )


class TestRatingModel:
    """Tests for the Rating model."""

    def test_one_rating_per_rater_and_ratee(self, db):
        rating = RatingFactory()
        with pytest.raises(IntegrityError):
            Rating.objects.create(rater=rating.rater, ratee=rating.ratee, score=2)

    def test_score_out_of_range_rejected_by_database(self, db):
        with pytest.raises(IntegrityError):
            RatingFactory(score=6)
