"""
House listing service layer.

Usage:
    from houses.services import HouseService

    result = HouseService.create_house(seller, data, sub_images=[...])
    result = HouseService.replace_images(house, main_image=new_cover)
    result = HouseService.rate_owner(buyer, house, 4)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.db import transaction

from authentication.services import RatingService
from core.services import BaseService, ServiceResult

from houses.models import House, HouseImage

if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile

    from authentication.models import Rating, User


class ERROR_CODES:
    TOO_MANY_IMAGES = "TOO_MANY_IMAGES"


def _delete_files_on_commit(files) -> None:
    """Remove stored files once the rows that referenced them are gone."""
    stored = [(f.storage, f.name) for f in files if f]

    def delete():
        for storage, name in stored:
            storage.delete(name)

    transaction.on_commit(delete)


class HouseService(BaseService):
    """
    Service for publishing and maintaining listings.

    Methods:
        create_house: Publish a listing with its pictures
        replace_images: Swap the main image and/or all sub images
        delete_house: Remove a listing and its pictures
        rate_owner: Rate the owner of a listing
    """

    @classmethod
    def _check_image_count(cls, sub_images) -> ServiceResult | None:
        limit = settings.HOUSE_MAX_SUB_IMAGES
        if len(sub_images) > limit:
            return ServiceResult.failure(
                f"A house can have at most {limit} sub images",
                error_code=ERROR_CODES.TOO_MANY_IMAGES,
            )
        return None

    @classmethod
    def _add_images(cls, house: House, sub_images) -> None:
        HouseImage.objects.bulk_create(
            [
                HouseImage(house=house, image=image, position=position)
                for position, image in enumerate(sub_images)
            ]
        )

    @classmethod
    def create_house(
        cls,
        owner: User,
        data: dict,
        sub_images: list[UploadedFile] | None = None,
    ) -> ServiceResult[House]:
        """
        Publish a listing.

        Args:
            owner: Seller publishing the listing
            data: Validated House fields (title, main_image, price, ...)
            sub_images: Additional pictures in display order

        Error codes:
            TOO_MANY_IMAGES: More than HOUSE_MAX_SUB_IMAGES sub images
        """
        sub_images = sub_images or []
        failure = cls._check_image_count(sub_images)
        if failure is not None:
            return failure

        with cls.atomic():
            house = House.objects.create(owner=owner, **data)
            cls._add_images(house, sub_images)

        cls.get_logger().info(
            f"User {owner.id} listed house {house.id} with {len(sub_images)} sub images"
        )
        return ServiceResult.success(house)

    @classmethod
    def replace_images(
        cls,
        house: House,
        main_image: UploadedFile | None = None,
        sub_images: list[UploadedFile] | None = None,
    ) -> ServiceResult[House]:
        """
        Replace the main image, the sub images, or both.

        ``sub_images=None`` keeps the current sub images; a list replaces
        all of them. Replaced files are deleted from storage after commit.

        Error codes:
            TOO_MANY_IMAGES: More than HOUSE_MAX_SUB_IMAGES sub images
        """
        if sub_images is not None:
            failure = cls._check_image_count(sub_images)
            if failure is not None:
                return failure

        with cls.atomic():
            if main_image is not None:
                _delete_files_on_commit([house.main_image])
                house.main_image = main_image
                house.save(update_fields=["main_image", "updated_at"])

            if sub_images is not None:
                old_images = list(house.images.all())
                _delete_files_on_commit([image.image for image in old_images])
                house.images.all().delete()
                cls._add_images(house, sub_images)

        cls.get_logger().info(f"Replaced images of house {house.id}")
        return ServiceResult.success(house)

    @classmethod
    def delete_house(cls, house: House) -> ServiceResult[None]:
        """Delete a listing, its sub images and every stored picture."""
        house_id = house.id
        with cls.atomic():
            files = [house.main_image] + [image.image for image in house.images.all()]
            _delete_files_on_commit(files)
            house.delete()

        cls.get_logger().info(f"Deleted house {house_id}")
        return ServiceResult.success(None)

    @classmethod
    def rate_owner(cls, rater: User, house: House, amount) -> ServiceResult[Rating]:
        """
        Rate the owner of ``house``.

        Error codes:
            SELF_RATING: The rater owns the house
            INVALID_SCORE: amount outside 1..5
        """
        return RatingService.rate_user(rater, house.owner, amount)
