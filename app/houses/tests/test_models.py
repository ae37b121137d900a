"""Tests for House and HouseImage models."""

from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from houses.tests.conftest import make_upload
from houses.tests.factories import HouseFactory, HouseImageFactory


@pytest.mark.django_db
class TestHouse:
    def test_str_mentions_sale_or_rent(self):
        assert str(HouseFactory(title="Villa", for_sell=True)) == "Villa (sale)"
        assert str(HouseFactory(title="Flat", for_sell=False)) == "Flat (rent)"

    def test_uuid_primary_key(self):
        house = HouseFactory()

        assert len(str(house.pk)) == 36

    def test_negative_price_invalid(self):
        house = HouseFactory()
        house.price = Decimal("-1")

        with pytest.raises(ValidationError) as exc_info:
            house.full_clean()

        assert "price" in exc_info.value.message_dict

    def test_non_image_extension_invalid(self):
        house = HouseFactory()
        house.main_image = make_upload(name="cover.gif")

        with pytest.raises(ValidationError) as exc_info:
            house.full_clean()

        assert "main_image" in exc_info.value.message_dict

    def test_deleting_house_deletes_images(self):
        image = HouseImageFactory()

        image.house.delete()

        assert not type(image).objects.filter(pk=image.pk).exists()


@pytest.mark.django_db
class TestHouseImage:
    def test_ordered_by_position(self):
        house = HouseFactory()
        second = HouseImageFactory(house=house, position=1)
        first = HouseImageFactory(house=house, position=0)

        assert list(house.images.all()) == [first, second]
