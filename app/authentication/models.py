"""
Authentication models.

This module defines:
- User: Email-authenticated account carrying the marketplace role, the coin
  balance spent on chat messages, and the aggregate owner rating
- Rating: One user's 1-5 score for another user

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: RatingService (rating aggregation)
    - permissions.py: Role and ownership checks
    - payments/services.py: CoinService (all coin balance changes)

Security:
    - User passwords hashed with Django's PBKDF2
    - Coin balance is never written from request data; only CoinService
      changes it, with conditional UPDATE statements
"""

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.validators import (
    FileExtensionValidator,
    MaxValueValidator,
    MinValueValidator,
)
from django.db import models

from authentication.managers import UserManager
from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel
from core.validators import IMAGE_EXTENSIONS, FileSizeValidator


def default_signup_coins() -> int:
    """Coins granted to a new account."""
    return settings.SIGNUP_COINS


class User(UUIDPrimaryKeyMixin, AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Fields:
        email: Primary identifier, unique, used for login
        name: Display name shown to other users
        phone_number: Optional contact number, unique when set
        role: Buyer, Seller or Admin; gates listing management
        profile_pic: Optional avatar image
        coins: Virtual currency balance, never negative
        average_rating: Mean of all Rating scores received
        rating_count: Number of Rating rows received
        is_active / is_staff: Django account flags
        date_joined / updated_at: Timestamps

    Usage:
        user = User.objects.create_user(
            email="seller@example.com",
            password="securepassword",
            name="Abebe",
            role=User.Role.SELLER,
        )
    """

    class Role(models.TextChoices):
        BUYER = "buyer", "Buyer"
        SELLER = "seller", "Seller"
        ADMIN = "admin", "Admin"

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )
    name = models.CharField(
        max_length=150,
        blank=True,
        default="",
        help_text="Display name shown in chats and listings",
    )
    phone_number = models.CharField(
        max_length=32,
        unique=True,
        null=True,
        blank=True,
        help_text="Contact phone number (unique when provided)",
    )
    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.BUYER,
        db_index=True,
        help_text="Marketplace role: buyers browse, sellers list houses",
    )
    profile_pic = models.ImageField(
        upload_to="profile_pics/%Y/%m/",
        null=True,
        blank=True,
        validators=[
            FileExtensionValidator(IMAGE_EXTENSIONS),
            FileSizeValidator(max_mb=5),
        ],
        help_text="Profile picture",
    )
    coins = models.PositiveIntegerField(
        default=default_signup_coins,
        help_text="Coin balance; each chat message costs MESSAGE_COIN_COST",
    )
    average_rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=0,
        help_text="Mean of received rating scores (0 when unrated)",
    )
    rating_count = models.PositiveIntegerField(
        default=0,
        help_text="Number of ratings received",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(coins__gte=0),
                name="user_coins_non_negative",
            ),
        ]

    def __str__(self):
        return self.email

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name or self.email.split("@")[0]

    @property
    def is_seller(self) -> bool:
        """Sellers and admins may publish listings."""
        return self.role in (self.Role.SELLER, self.Role.ADMIN)

    @property
    def is_admin_role(self) -> bool:
        return self.role == self.Role.ADMIN or self.is_superuser


class Rating(BaseModel):
    """
    A score one user gives another (typically a buyer rating a house owner).

    Each rater holds at most one rating per ratee; rating again replaces the
    previous score. The ratee's average_rating and rating_count are
    recomputed by RatingService in the same transaction.
    """

    rater = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="ratings_given",
        help_text="User who gave the score",
    )
    ratee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="ratings_received",
        help_text="User being rated",
    )
    score = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text="Score from 1 to 5",
    )

    class Meta:
        db_table = "authentication_rating"
        constraints = [
            models.UniqueConstraint(
                fields=["rater", "ratee"],
                name="unique_rating_per_rater",
            ),
            models.CheckConstraint(
                condition=models.Q(score__gte=1) & models.Q(score__lte=5),
                name="rating_score_range",
            ),
        ]

    def __str__(self):
        return f"{self.rater_id} -> {self.ratee_id}: {self.score}"
