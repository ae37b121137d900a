"""
Django admin configuration for authentication models.

Related files:
    - models.py: User, Rating
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from authentication.models import Rating, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for the email-based User model, including role and coin balance."""

    list_display = (
        "email",
        "name",
        "role",
        "coins",
        "average_rating",
        "is_active",
        "date_joined",
    )
    list_filter = ("role", "is_active", "is_staff", "is_superuser", "date_joined")
    search_fields = ("email", "name", "phone_number")
    ordering = ("-date_joined",)
    readonly_fields = ("average_rating", "rating_count", "date_joined", "last_login")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "phone_number", "profile_pic", "role")}),
        ("Coins & rating", {"fields": ("coins", "average_rating", "rating_count")}),
        (
            "Status",
            {"fields": ("is_active", "is_staff", "is_superuser")},
        ),
        ("Permissions", {"fields": ("groups", "user_permissions")}),
        ("Important dates", {"fields": ("date_joined", "last_login")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "name", "role", "password1", "password2"),
            },
        ),
    )


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ("rater", "ratee", "score", "created_at")
    search_fields = ("rater__email", "ratee__email")
    raw_id_fields = ("rater", "ratee")
