import logging
from collections import OrderedDict

import django_filters
from django.db.models import Q

from .models import Product, ProductSpec

logger = logging.getLogger(__name__)

SPEC_SEPARATOR = ':'


def parse_spec_filters(raw_values):
    """
    Turn repeated ``spec=key:value`` parameters into ``{key: [values]}``.

    Entries without a separator or with an empty key/value are skipped.
    """
    grouped = OrderedDict()
    for raw in raw_values:
        key, sep, value = (raw or '').partition(SPEC_SEPARATOR)
        key, value = key.strip(), value.strip()
        if not sep or not key or not value:
            logger.debug(f"Ignoring malformed spec filter: {raw!r}")
            continue
        values = grouped.setdefault(key, [])
        if value not in values:
            values.append(value)
    return grouped


def apply_spec_filters(queryset, grouped):
    """
    Values of the same key are alternatives; different keys must all match.
    """
    for key, values in grouped.items():
        queryset = queryset.filter(
            id__in=ProductSpec.objects.filter(key=key, value__in=values).values('product_id')
        )
    return queryset


def spec_filter_groups(queryset):
    """Available spec keys with their sorted distinct values for ``queryset``"""
    rows = (
        ProductSpec.objects
        .filter(product__in=queryset)
        .values_list('key', 'value')
        .distinct()
    )
    groups = {}
    for key, value in rows:
        groups.setdefault(key, set()).add(value)
    return OrderedDict((key, sorted(groups[key])) for key in sorted(groups))


class ProductFilter(django_filters.FilterSet):
    category = django_filters.CharFilter(field_name='categories__slug', method='filter_category')
    min_price = django_filters.NumberFilter(field_name='price', lookup_expr='gte')
    max_price = django_filters.NumberFilter(field_name='price', lookup_expr='lte')
    search = django_filters.CharFilter(method='filter_search')
    in_stock = django_filters.BooleanFilter(method='filter_in_stock')
    spec = django_filters.CharFilter(method='filter_spec')
    ordering = django_filters.OrderingFilter(
        fields=(
            ('price', 'price'),
            ('name', 'name'),
            ('created_at', 'created_at'),
        )
    )

    class Meta:
        model = Product
        fields = ['category', 'min_price', 'max_price', 'search', 'in_stock']

    def filter_category(self, queryset, name, value):
        return queryset.filter(categories__slug=value).distinct()

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))

    def filter_in_stock(self, queryset, name, value):
        if value:
            return queryset.filter(stock_qty__gt=0)
        return queryset.filter(stock_qty__lte=0)

    def filter_spec(self, queryset, name, value):
        return apply_spec_filters(queryset, self.selected_specs)

    @property
    def selected_specs(self):
        return parse_spec_filters(self.data.getlist('spec') if hasattr(self.data, 'getlist') else [])
