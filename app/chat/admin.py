"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Chat browsing (with messages inline)
- Message moderation
"""

from django.contrib import admin

from chat.models import Chat, Message


class MessageInline(admin.TabularInline):
    """Inline display of messages in chat admin."""

    model = Message
    extra = 0
    fields = ["sender", "content", "created_at"]
    readonly_fields = ["created_at"]
    raw_id_fields = ["sender"]
    ordering = ["created_at", "id"]


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    """Admin interface for Chat model."""

    list_display = [
        "id",
        "user_lower",
        "user_higher",
        "last_update_time",
        "created_at",
    ]
    search_fields = ["id", "user_lower__email", "user_higher__email"]
    readonly_fields = ["created_at", "updated_at", "last_update_time", "last_message"]
    raw_id_fields = ["user_lower", "user_higher"]
    inlines = [MessageInline]
    ordering = ["-last_update_time"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = ["id", "chat", "sender", "content_preview", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["content", "sender__email"]
    readonly_fields = ["created_at", "updated_at", "seen"]
    raw_id_fields = ["chat", "sender"]
    ordering = ["-created_at"]

    @admin.display(description="Content")
    def content_preview(self, obj):
        return obj.content[:50] + "..." if len(obj.content) > 50 else obj.content
