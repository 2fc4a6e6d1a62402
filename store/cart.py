"""
Session-backed shopping cart.

The cart lives in ``request.session[settings.CART_SESSION_KEY]`` as a JSON
list of lines ``{product_id, name, price, quantity, image_url}``. The price is
stored as a string and is captured when the product is first added.
"""
import logging
from decimal import Decimal

from django.conf import settings

logger = logging.getLogger(__name__)


class SessionCart:
    def __init__(self, session):
        self.session = session
        self.key = settings.CART_SESSION_KEY
        lines = session.get(self.key)
        self.lines = lines if isinstance(lines, list) else []

    def __iter__(self):
        return iter(self.lines)

    def __len__(self):
        return len(self.lines)

    def _find(self, product_id):
        for line in self.lines:
            if line['product_id'] == product_id:
                return line
        return None

    def save(self):
        self.session[self.key] = self.lines
        self.session.modified = True

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add(self, product):
        line = self._find(product.id)
        if line is None:
            line = {
                'product_id': product.id,
                'name': product.name,
                'price': str(product.price),
                'quantity': 1,
                'image_url': product.image_url,
            }
            self.lines.append(line)
        else:
            line['quantity'] += 1
        self.save()
        logger.debug(f"Cart add: product {product.id}, quantity now {line['quantity']}")
        return line

    def increment(self, product_id):
        line = self._find(product_id)
        if line is None:
            return None
        line['quantity'] += 1
        self.save()
        return line

    def decrement(self, product_id):
        """Lower the quantity by one; a line reaching zero is removed."""
        line = self._find(product_id)
        if line is None:
            return None
        line['quantity'] -= 1
        if line['quantity'] <= 0:
            self.lines.remove(line)
        self.save()
        return line

    def remove(self, product_id):
        line = self._find(product_id)
        if line is None:
            return False
        self.lines.remove(line)
        self.save()
        return True

    def clear(self):
        self.lines = []
        self.session.pop(self.key, None)
        self.session.modified = True

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------
    @staticmethod
    def line_total(line):
        return Decimal(line['price']) * line['quantity']

    @property
    def items_total(self):
        return sum((self.line_total(line) for line in self.lines), Decimal('0'))

    @property
    def item_count(self):
        return sum(line['quantity'] for line in self.lines)

    def as_order_lines(self):
        """``(product_id, quantity, unit_price)`` tuples for order placement"""
        return [
            (line['product_id'], line['quantity'], Decimal(line['price']))
            for line in self.lines
        ]

    def to_dict(self):
        return {
            'items': [
                dict(line, line_total=str(self.line_total(line)))
                for line in self.lines
            ],
            'items_total': str(self.items_total),
            'item_count': self.item_count,
        }
