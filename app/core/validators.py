"""
Reusable field validators.

Validators are deconstructible so they can be referenced from migrations.

Usage:
    from core.validators import FileSizeValidator, IMAGE_EXTENSIONS

    image = models.ImageField(
        validators=[
            FileExtensionValidator(IMAGE_EXTENSIONS),
            FileSizeValidator(max_mb=5),
        ]
    )
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.utils.deconstruct import deconstructible

# Formats accepted for profile pictures and listing photos
IMAGE_EXTENSIONS = ["png", "jpg", "jpeg", "webp", "avif"]


@deconstructible
class FileSizeValidator:
    """Reject uploads larger than ``max_mb`` megabytes."""

    def __init__(self, max_mb: int = 10):
        self.max_mb = max_mb

    def __call__(self, file) -> None:
        max_bytes = self.max_mb * 1024 * 1024
        if file.size > max_bytes:
            raise ValidationError(
                f"File size must be less than {self.max_mb}MB. "
                f"Current size: {file.size / 1024 / 1024:.1f}MB"
            )

    def __eq__(self, other) -> bool:
        return isinstance(other, FileSizeValidator) and self.max_mb == other.max_mb
