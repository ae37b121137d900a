"""
Serializers for authentication models.

This module provides DRF serializers for:
- User (current user details, used by dj-rest-auth /auth/user/)
- Public user profile and the compact summary embedded in chats/listings
- Registration (create user with role)
- Rating input

Related files:
    - models.py: User and Rating models
    - views.py: Views that use these serializers
    - settings.py: REST_AUTH serializer configuration

Security:
    - Password fields are write-only
    - Role, coins and rating aggregates are read-only on every serializer
"""

from allauth.account.models import EmailAddress
from django.core.validators import FileExtensionValidator
from rest_framework import serializers

from authentication.models import User
from core.validators import IMAGE_EXTENSIONS


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for the authenticated user's own account.

    Used by dj-rest-auth for GET/PUT/PATCH /api/v1/auth/user/ and in
    login/registration responses. Only name, phone number and profile picture
    are writable.
    """

    profile_pic = serializers.ImageField(
        required=False,
        allow_null=True,
        validators=[FileExtensionValidator(IMAGE_EXTENSIONS)],
    )

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "phone_number",
            "role",
            "profile_pic",
            "coins",
            "average_rating",
            "rating_count",
            "date_joined",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "coins",
            "average_rating",
            "rating_count",
            "date_joined",
        ]

    def validate_phone_number(self, value):
        """Normalize blank numbers to NULL so the unique index ignores them."""
        value = (value or "").strip()
        return value or None


class PublicUserSerializer(serializers.ModelSerializer):
    """Profile visible to other users (no email, phone or coin balance)."""

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "role",
            "profile_pic",
            "average_rating",
            "rating_count",
        ]
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact participant summary embedded in chats and house listings."""

    class Meta:
        model = User
        fields = ["id", "name", "role", "profile_pic"]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for user registration.

    Used by dj-rest-auth for the /api/v1/auth/registration/ endpoint.
    New accounts may register as buyer or seller; the admin role is only
    granted through the Django admin or createsuperuser.
    """

    email = serializers.EmailField(required=True)
    name = serializers.CharField(max_length=150)
    phone_number = serializers.CharField(
        max_length=32, required=False, allow_blank=True
    )
    role = serializers.ChoiceField(
        choices=[User.Role.BUYER, User.Role.SELLER],
        default=User.Role.BUYER,
    )
    password1 = serializers.CharField(
        write_only=True,
        min_length=8,
        style={"input_type": "password"},
        help_text="Password must be at least 8 characters.",
    )
    password2 = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="Confirm your password.",
    )

    def validate_email(self, value):
        """Validate that email is not already in use."""
        email = value.lower().strip()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return email

    def validate_phone_number(self, value):
        """Validate that a provided phone number is not already in use."""
        phone = (value or "").strip()
        if phone and User.objects.filter(phone_number=phone).exists():
            raise serializers.ValidationError(
                "A user with this phone number already exists."
            )
        return phone or None

    def validate(self, attrs):
        """Validate that passwords match."""
        if attrs["password1"] != attrs["password2"]:
            raise serializers.ValidationError({"password2": "Passwords do not match."})
        return attrs

    def get_cleaned_data(self):
        """Return cleaned data for user creation (required by dj-rest-auth)."""
        return {
            "email": self.validated_data.get("email", ""),
            "password1": self.validated_data.get("password1", ""),
        }

    def save(self, request):
        """
        Create a new user with the validated data.

        dj-rest-auth passes the request object to save(). The address is
        recorded unverified; allauth sends the confirmation e-mail and login
        is refused until it is confirmed.
        """
        user = User.objects.create_user(
            email=self.validated_data["email"],
            password=self.validated_data["password1"],
            name=self.validated_data["name"],
            phone_number=self.validated_data.get("phone_number"),
            role=self.validated_data["role"],
        )
        EmailAddress.objects.create(
            user=user, email=user.email, primary=True, verified=False
        )
        return user


class RatingSerializer(serializers.Serializer):
    """Request body for rating a user: {"amount": 1..5}."""

    amount = serializers.IntegerField(min_value=1, max_value=5)
