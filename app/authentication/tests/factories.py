"""
Factory Boy factories for authentication models.

Usage:
    from authentication.tests.factories import UserFactory, SellerFactory

    buyer = UserFactory()
    seller = SellerFactory(name="Abebe")
    broke_user = UserFactory(coins=0)
"""

import factory

from authentication.models import Rating, User


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    Creates active buyers with the default signup coin balance unless
    overridden.
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.Sequence(lambda n: f"User {n}")
    role = User.Role.BUYER
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", "TestPass123!")
        return model_class.objects.create_user(
            email=kwargs.pop("email"), password=password, **kwargs
        )


class SellerFactory(UserFactory):
    role = User.Role.SELLER


class AdminFactory(UserFactory):
    role = User.Role.ADMIN


class RatingFactory(factory.django.DjangoModelFactory):
    """Factory for Rating rows (does not update the ratee's aggregate)."""

    class Meta:
        model = Rating

    rater = factory.SubFactory(UserFactory)
    ratee = factory.SubFactory(SellerFactory)
    score = 4
