import django_filters

from modules.catalog.constants import UnitType
from modules.catalog.models import FoodItem


class FoodItemFilter(django_filters.FilterSet):
    title = django_filters.CharFilter(field_name="title", lookup_expr="icontains")
    producer = django_filters.CharFilter(field_name="producer", lookup_expr="icontains")
    origin = django_filters.CharFilter(field_name="origin", lookup_expr="icontains")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    unit_type = django_filters.ChoiceFilter(
        field_name="unit_type", choices=UnitType.choices
    )

    class Meta:
        model = FoodItem
        fields = ["title", "producer", "origin", "min_price", "max_price", "unit_type"]
