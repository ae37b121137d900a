import django_filters as filters

from houses.models import House


class HouseFilter(filters.FilterSet):
    min_price = filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = filters.NumberFilter(field_name="price", lookup_expr="lte")
    location = filters.CharFilter(field_name="location", lookup_expr="icontains")
    owner = filters.UUIDFilter(field_name="owner_id")

    class Meta:
        model = House
        fields = ["for_sell", "min_price", "max_price", "location", "owner"]
