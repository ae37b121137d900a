from django.apps import AppConfig


class HousesConfig(AppConfig):
    """Configuration for the houses application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "houses"
    verbose_name = "Houses"
