import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import core.validators


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="House",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier (UUID4)",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "title",
                    models.CharField(help_text="Listing headline", max_length=200),
                ),
                (
                    "main_image",
                    models.ImageField(
                        help_text="Cover picture",
                        upload_to="houses/%Y/%m/",
                        validators=[
                            django.core.validators.FileExtensionValidator(
                                ["png", "jpg", "jpeg", "webp", "avif"]
                            ),
                            core.validators.FileSizeValidator(max_mb=10),
                        ],
                    ),
                ),
                (
                    "location",
                    models.CharField(
                        db_index=True,
                        help_text="Address or area",
                        max_length=255,
                    ),
                ),
                (
                    "description",
                    models.TextField(blank=True, help_text="Long description"),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Sale price or monthly rent",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "for_sell",
                    models.BooleanField(
                        db_index=True,
                        default=False,
                        help_text="True if the house is for sale, False if for rent",
                    ),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        help_text="User who published this listing",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="houses",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["for_sell", "price"],
                        name="house_for_sell_price_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="HouseImage",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier (UUID4)",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "image",
                    models.ImageField(
                        upload_to="houses/%Y/%m/",
                        validators=[
                            django.core.validators.FileExtensionValidator(
                                ["png", "jpg", "jpeg", "webp", "avif"]
                            ),
                            core.validators.FileSizeValidator(max_mb=10),
                        ],
                    ),
                ),
                ("position", models.PositiveSmallIntegerField(default=0)),
                (
                    "house",
                    models.ForeignKey(
                        help_text="House this picture belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="images",
                        to="houses.house",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "created_at"],
            },
        ),
    ]
