"""
Factory Boy factories for house listings.

Usage:
    from houses.tests.factories import HouseFactory, HouseImageFactory

    house = HouseFactory(price=1500, for_sell=False)
    HouseImageFactory(house=house, position=0)
"""

from decimal import Decimal

import factory

from authentication.tests.factories import SellerFactory
from houses.models import House, HouseImage


class HouseFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = House

    owner = factory.SubFactory(SellerFactory)
    title = factory.Sequence(lambda n: f"House {n}")
    main_image = factory.django.ImageField(filename="cover.png", color="blue")
    location = "Bole, Addis Ababa"
    description = "Two bedrooms with a garden"
    price = Decimal("250000.00")
    for_sell = True


class HouseImageFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = HouseImage

    house = factory.SubFactory(HouseFactory)
    image = factory.django.ImageField(filename="room.png", color="green")
    position = factory.Sequence(lambda n: n)
