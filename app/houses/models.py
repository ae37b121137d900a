"""
House listing models.

Models:
    House: A property listed for sale or rent by its owner
    HouseImage: One of the ordered sub images of a house
"""

from __future__ import annotations

from django.conf import settings
from django.core.validators import FileExtensionValidator, MinValueValidator
from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel
from core.validators import IMAGE_EXTENSIONS, FileSizeValidator

HOUSE_IMAGE_UPLOAD_TO = "houses/%Y/%m/"


class House(UUIDPrimaryKeyMixin, BaseModel):
    """
    A listing published by a seller.

    Fields:
        owner: Seller who published the listing
        title: Short headline
        main_image: Cover picture
        location: Free-text address or area
        description: Long description
        price: Asking price (sale) or monthly rent
        for_sell: True for sale, False for rent
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="houses",
        help_text="User who published this listing",
    )
    title = models.CharField(
        max_length=200,
        help_text="Listing headline",
    )
    main_image = models.ImageField(
        upload_to=HOUSE_IMAGE_UPLOAD_TO,
        validators=[
            FileExtensionValidator(IMAGE_EXTENSIONS),
            FileSizeValidator(max_mb=10),
        ],
        help_text="Cover picture",
    )
    location = models.CharField(
        max_length=255,
        db_index=True,
        help_text="Address or area",
    )
    description = models.TextField(
        blank=True,
        help_text="Long description",
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        help_text="Sale price or monthly rent",
    )
    for_sell = models.BooleanField(
        default=False,
        db_index=True,
        help_text="True if the house is for sale, False if for rent",
    )

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["for_sell", "price"], name="house_for_sell_price_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({'sale' if self.for_sell else 'rent'})"


class HouseImage(UUIDPrimaryKeyMixin, BaseModel):
    """A sub image of a house, shown in ``position`` order."""

    house = models.ForeignKey(
        House,
        on_delete=models.CASCADE,
        related_name="images",
        help_text="House this picture belongs to",
    )
    image = models.ImageField(
        upload_to=HOUSE_IMAGE_UPLOAD_TO,
        validators=[
            FileExtensionValidator(IMAGE_EXTENSIONS),
            FileSizeValidator(max_mb=10),
        ],
    )
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        ordering = ["position", "created_at"]

    def __str__(self) -> str:
        return f"Image {self.position} of house {self.house_id}"
