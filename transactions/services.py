import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import DatabaseError, transaction
from django.db.models import F

from store.models import Product
from .exceptions import (
    DeliveryTypeInUseException,
    EmptyCartException,
    InvalidDeliveryTypeException,
    OrderPlacementFailedException,
)
from .models import DeliveryType, Order, OrderItem

logger = logging.getLogger(__name__)

CUSTOMER_FIELDS = ('first_name', 'last_name', 'address_line', 'phone', 'email')
CENT = Decimal('0.01')


class OrderService:
    """Order placement and order/delivery administration"""

    @staticmethod
    def place_order(lines, delivery_type_id, customer, user=None):
        """
        Store an order for ``lines`` as one unit of work.

        ``lines`` is an iterable of ``(product_id, quantity, unit_price)``
        tuples and ``customer`` holds the contact fields. Unit prices are
        rounded to whole cents before any total is computed. Either the
        order header, every line item and every stock decrement are
        committed together, or nothing is written.

        Raises EmptyCartException, InvalidDeliveryTypeException or
        OrderPlacementFailedException.
        """
        lines = [
            (int(product_id), int(quantity), Decimal(unit_price).quantize(CENT, rounding=ROUND_HALF_UP))
            for product_id, quantity, unit_price in lines
        ]
        if not lines:
            raise EmptyCartException()

        try:
            with transaction.atomic():
                delivery_type = DeliveryType.objects.filter(pk=delivery_type_id, is_active=True).first()
                if delivery_type is None:
                    logger.warning(f"Checkout with unknown or inactive delivery type: {delivery_type_id}")
                    raise InvalidDeliveryTypeException()

                items_total = sum((price * quantity for _, quantity, price in lines), Decimal('0'))
                delivery_price = delivery_type.price
                grand_total = items_total + delivery_price

                order = Order.objects.create(
                    customer=user if user is not None and user.is_authenticated else None,
                    delivery_type=delivery_type,
                    items_total=items_total,
                    delivery_price=delivery_price,
                    grand_total=grand_total,
                    status=Order.Status.NEW,
                    **{field: customer[field] for field in CUSTOMER_FIELDS},
                )

                OrderService._create_line_items(order, lines)
                OrderService._decrement_stock(lines)
        except DatabaseError as exc:
            logger.error(f"Order placement failed, transaction rolled back: {exc}")
            raise OrderPlacementFailedException() from exc

        logger.info(
            f"Order {order.order_id} placed: {len(lines)} line(s), grand total {grand_total}, "
            f"customer {order.email}"
        )
        return order

    @staticmethod
    def _create_line_items(order, lines):
        products = Product.objects.in_bulk([product_id for product_id, _, _ in lines])

        items = []
        for product_id, quantity, unit_price in lines:
            product = products.get(product_id)
            if product is None:
                logger.error(f"Product {product_id} disappeared during checkout of order {order.order_id}")
                raise OrderPlacementFailedException()
            items.append(OrderItem(
                order=order,
                product=product,
                product_name=product.name,
                quantity=quantity,
                unit_price=unit_price,
                line_total=unit_price * quantity,
            ))
        OrderItem.objects.bulk_create(items)
        return items

    @staticmethod
    def _decrement_stock(lines):
        # No floor at zero: concurrent checkouts can oversell and push
        # stock_qty negative. Nothing is reserved at add-to-cart time.
        for product_id, quantity, _ in lines:
            Product.objects.filter(pk=product_id).update(stock_qty=F('stock_qty') - quantity)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------
    @staticmethod
    def update_status(order, new_status):
        previous = order.status
        order.status = new_status
        order.save(update_fields=['status', 'updated_at'])
        logger.info(f"Order {order.order_id} status changed: {previous} -> {new_status}")
        return previous

    @staticmethod
    def delete_delivery_type(delivery_type):
        if delivery_type.orders.exists():
            logger.warning(f"Refused to delete delivery type {delivery_type.pk} referenced by orders")
            raise DeliveryTypeInUseException()
        delivery_type.delete()
