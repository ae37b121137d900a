"""
Add celery-beat schedule for the weekly coin allowance.

Runs payments.tasks.grant_weekly_coins every Sunday at 00:00 UTC.
"""

from django.db import migrations

TASK_NAME = "Grant Weekly Coin Allowance"


def create_periodic_task(apps, schema_editor):
    """Create the periodic task for the weekly allowance."""
    CrontabSchedule = apps.get_model("django_celery_beat", "CrontabSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    # Every Sunday at midnight
    schedule, _ = CrontabSchedule.objects.get_or_create(
        minute="0",
        hour="0",
        day_of_week="0",
        day_of_month="*",
        month_of_year="*",
        timezone="UTC",
    )

    PeriodicTask.objects.get_or_create(
        name=TASK_NAME,
        defaults={
            "task": "payments.tasks.grant_weekly_coins",
            "crontab": schedule,
            "enabled": True,
            "description": "Adds WEEKLY_COIN_ALLOWANCE coins to every active user.",
        },
    )


def remove_periodic_task(apps, schema_editor):
    """Remove the periodic task on migration rollback."""
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    PeriodicTask.objects.filter(name=TASK_NAME).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("payments", "0001_initial"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_periodic_task, remove_periodic_task),
    ]
