"""
State enums for payment models.

These are Django TextChoices used with django-fsm for database storage and
admin integration.

CoinPurchase States:
    pending → completed (gateway reports the checkout paid)
    pending → failed (checkout could not be created, expired or was not paid)
"""

from django.db import models


class CoinPurchaseState(models.TextChoices):
    """
    States of a coin purchase.

    Terminal states: COMPLETED, FAILED
    """

    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    FAILED = "failed", "Failed"
