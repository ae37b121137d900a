"""
Admin configuration for coin purchases.
"""

from django.contrib import admin

from payments.models import CoinPurchase


@admin.register(CoinPurchase)
class CoinPurchaseAdmin(admin.ModelAdmin):
    """
    Admin configuration for CoinPurchase.

    The state is managed by the FSM and shown read-only.
    """

    list_display = [
        "id",
        "user",
        "coins",
        "amount_display",
        "state",
        "completed_at",
        "created_at",
    ]
    list_filter = ["state", "currency"]
    search_fields = ["id", "stripe_session_id", "user__email"]
    readonly_fields = [
        "id",
        "state",
        "stripe_session_id",
        "checkout_url",
        "completed_at",
        "created_at",
        "updated_at",
    ]
    ordering = ["-created_at"]
    raw_id_fields = ["user"]

    fieldsets = (
        (
            None,
            {
                "fields": ("id", "user", "coins", "amount_cents", "currency"),
            },
        ),
        (
            "Stripe",
            {
                "fields": ("stripe_session_id", "checkout_url"),
            },
        ),
        (
            "Status",
            {
                "fields": ("state", "completed_at", "failure_reason"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    @admin.display(description="Amount")
    def amount_display(self, obj):
        return f"{obj.amount_cents / 100:.2f} {obj.currency.upper()}"
