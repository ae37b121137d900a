"""
Serializers for house listings.

Serializer Hierarchy:
    HouseSerializer: Listing as returned by the API
    HouseCreateSerializer: POST body (multipart, main image and sub images)
    HouseUpdateSerializer: PATCH body (text fields only)
    HouseImagesSerializer: PUT /<id>/images/ body
    RateOwnerSerializer: PATCH /<id>/rate/ body

The number of sub images is checked by HouseService so that it reports
TOO_MANY_IMAGES.
"""

from __future__ import annotations

from django.core.validators import FileExtensionValidator
from rest_framework import serializers

from authentication.serializers import UserSummarySerializer
from core.validators import IMAGE_EXTENSIONS, FileSizeValidator
from houses.models import House, HouseImage


def _image_field(**kwargs) -> serializers.ImageField:
    return serializers.ImageField(
        validators=[
            FileExtensionValidator(IMAGE_EXTENSIONS),
            FileSizeValidator(max_mb=10),
        ],
        **kwargs,
    )


class HouseImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = HouseImage
        fields = ["id", "image", "position"]
        read_only_fields = fields


class HouseSerializer(serializers.ModelSerializer):
    owner = UserSummarySerializer(read_only=True)
    images = HouseImageSerializer(many=True, read_only=True)

    class Meta:
        model = House
        fields = [
            "id",
            "owner",
            "title",
            "main_image",
            "images",
            "location",
            "description",
            "price",
            "for_sell",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class HouseCreateSerializer(serializers.ModelSerializer):
    sub_images = serializers.ListField(
        child=_image_field(),
        required=False,
        default=list,
        write_only=True,
        help_text="Additional pictures, in display order",
    )

    class Meta:
        model = House
        fields = [
            "title",
            "main_image",
            "location",
            "description",
            "price",
            "for_sell",
            "sub_images",
        ]


class HouseUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = House
        fields = ["title", "location", "description", "price", "for_sell"]


class HouseImagesSerializer(serializers.Serializer):
    """Replacement pictures; omitted parts are left as they are."""

    main_image = _image_field(required=False)
    sub_images = serializers.ListField(
        child=_image_field(),
        required=False,
        help_text="Replaces every sub image",
    )

    def validate(self, attrs):
        if "main_image" not in attrs and "sub_images" not in attrs:
            raise serializers.ValidationError(
                "Provide main_image, sub_images or both."
            )
        return attrs


class RateOwnerSerializer(serializers.Serializer):
    amount = serializers.IntegerField(help_text="Score from 1 to 5")
