import logging

from django.db import transaction

from .models import Product, ProductSpec

logger = logging.getLogger(__name__)


class CatalogService:
    """Product writes used by the admin panel"""

    @staticmethod
    def replace_specs(product, specs):
        """
        Delete all spec rows of ``product`` and insert ``specs``.

        Rows with a blank key or value are ignored.
        """
        rows = []
        for spec in specs:
            key = (spec.get('key') or '').strip()
            value = (spec.get('value') or '').strip()
            if not key or not value:
                continue
            unit = (spec.get('unit') or '').strip() or None
            rows.append(ProductSpec(product=product, key=key, value=value, unit=unit))

        with transaction.atomic():
            ProductSpec.objects.filter(product=product).delete()
            ProductSpec.objects.bulk_create(rows)

        logger.info(f"Replaced specs of product {product.id}: {len(rows)} row(s)")
        return rows

    @staticmethod
    def save_product(data, instance=None):
        data = dict(data)
        categories = data.pop('category_ids', None)
        specs = data.pop('specs', None)

        with transaction.atomic():
            if instance is None:
                product = Product.objects.create(**data)
            else:
                product = instance
                for field, value in data.items():
                    setattr(product, field, value)
                product.save()

            if categories is not None:
                product.categories.set(categories)
            if specs is not None:
                CatalogService.replace_specs(product, specs)

        return product
