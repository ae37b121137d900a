"""
Celery configuration for the home rental backend.

Celery runs the periodic coin allowance (payments.tasks.grant_weekly_coins).
Schedules are stored in the database by django-celery-beat and created by
data migrations, so `celery -A config beat` picks them up without extra setup.

Usage:
    celery -A config worker -l info
    celery -A config beat -l info

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

# Looks for a tasks.py module in each installed app
app.autodiscover_tasks()
