from decimal import Decimal
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db import DatabaseError
from django.db.models import Sum
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from store.models import Product
from transactions.exceptions import (
    EmptyCartException,
    InvalidDeliveryTypeException,
    OrderPlacementFailedException,
)
from transactions.models import DeliveryType, Order, OrderItem
from transactions.services import OrderService


CUSTOMER = {
    "first_name": "Ilze",
    "last_name": "Berzina",
    "address_line": "Brivibas iela 10, Riga",
    "phone": "+371 20000000",
    "email": "ilze@example.com",
}


class OrderPlacementTests(TestCase):
    def setUp(self):
        self.courier = DeliveryType.objects.create(name="Courier", price=Decimal("4.99"))
        self.pickup = DeliveryType.objects.create(name="Store pickup", price=Decimal("0.00"))
        self.cpu = Product.objects.create(name="Ryzen 5 7600", price=Decimal("199.99"), stock_qty=10)
        self.ram = Product.objects.create(name="DDR5 32GB", price=Decimal("104.50"), stock_qty=1)

    def lines(self, *items):
        return [(product.id, quantity, product.price) for product, quantity in items]

    def test_line_totals_plus_delivery_equal_grand_total(self):
        scenarios = [
            (self.lines((self.cpu, 1)), self.courier),
            (self.lines((self.cpu, 3), (self.ram, 1)), self.courier),
            (self.lines((self.ram, 7)), self.pickup),
            ([(self.cpu.id, 2, Decimal("0.10")), (self.ram.id, 3, Decimal("0.20"))], self.courier),
        ]
        for lines, delivery in scenarios:
            with self.subTest(lines=lines, delivery=delivery.name):
                order = OrderService.place_order(lines, delivery.id, CUSTOMER)
                order.refresh_from_db()

                line_sum = order.order_items.aggregate(total=Sum("line_total"))["total"]
                self.assertEqual(line_sum + order.delivery_price, order.grand_total)
                self.assertEqual(order.items_total, line_sum)
                self.assertEqual(order.delivery_price, delivery.price)

    def test_sub_cent_unit_prices_are_rounded_before_totals(self):
        lines = [(self.cpu.id, 1, Decimal("0.005")), (self.ram.id, 1, Decimal("0.005"))]
        order = OrderService.place_order(lines, self.courier.id, CUSTOMER)
        placed_total = order.grand_total
        order.refresh_from_db()

        line_totals = list(order.order_items.values_list("line_total", flat=True))
        self.assertEqual(line_totals, [Decimal("0.01"), Decimal("0.01")])
        self.assertEqual(order.items_total, Decimal("0.02"))
        self.assertEqual(sum(line_totals) + order.delivery_price, order.grand_total)
        self.assertEqual(placed_total, order.grand_total)

    def test_order_header_and_items_are_stored(self):
        order = OrderService.place_order(self.lines((self.cpu, 2), (self.ram, 1)), self.courier.id, CUSTOMER)

        self.assertEqual(order.status, Order.Status.NEW)
        self.assertIsNone(order.customer)
        self.assertEqual(order.email, "ilze@example.com")
        self.assertEqual(order.grand_total, Decimal("509.47"))

        items = list(order.order_items.values_list("product_name", "quantity", "unit_price", "line_total"))
        self.assertEqual(items, [
            ("Ryzen 5 7600", 2, Decimal("199.99"), Decimal("399.98")),
            ("DDR5 32GB", 1, Decimal("104.50"), Decimal("104.50")),
        ])

    def test_order_is_linked_to_signed_in_user(self):
        user = get_user_model().objects.create_user(
            email="buyer@test.com", password="pass12345", first_name="B", last_name="U"
        )
        order = OrderService.place_order(self.lines((self.cpu, 1)), self.courier.id, CUSTOMER, user=user)
        self.assertEqual(order.customer, user)

    def test_stock_is_decremented_without_floor(self):
        OrderService.place_order(self.lines((self.cpu, 4), (self.ram, 3)), self.courier.id, CUSTOMER)

        self.cpu.refresh_from_db()
        self.ram.refresh_from_db()
        self.assertEqual(self.cpu.stock_qty, 6)
        self.assertEqual(self.ram.stock_qty, -2)

    def test_empty_cart_is_rejected_before_writing(self):
        with self.assertRaises(EmptyCartException):
            OrderService.place_order([], self.courier.id, CUSTOMER)
        self.assertEqual(Order.objects.count(), 0)

    def test_unknown_delivery_type_is_rejected(self):
        with self.assertRaises(InvalidDeliveryTypeException):
            OrderService.place_order(self.lines((self.cpu, 1)), 999999, CUSTOMER)
        self.assertEqual(Order.objects.count(), 0)

    def test_inactive_delivery_type_is_rejected(self):
        self.courier.is_active = False
        self.courier.save()
        with self.assertRaises(InvalidDeliveryTypeException):
            OrderService.place_order(self.lines((self.cpu, 1)), self.courier.id, CUSTOMER)

    def test_failure_after_header_insert_rolls_everything_back(self):
        with patch.object(OrderService, "_create_line_items", side_effect=DatabaseError("disk full")):
            with self.assertRaises(OrderPlacementFailedException):
                OrderService.place_order(self.lines((self.cpu, 2)), self.courier.id, CUSTOMER)

        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(OrderItem.objects.count(), 0)
        self.cpu.refresh_from_db()
        self.assertEqual(self.cpu.stock_qty, 10)

    def test_failure_during_stock_decrement_rolls_back_items(self):
        with patch.object(OrderService, "_decrement_stock", side_effect=DatabaseError("deadlock")):
            with self.assertRaises(OrderPlacementFailedException):
                OrderService.place_order(self.lines((self.cpu, 1), (self.ram, 1)), self.courier.id, CUSTOMER)

        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(OrderItem.objects.count(), 0)

    def test_vanished_product_is_a_storage_failure(self):
        lines = self.lines((self.cpu, 1), (self.ram, 1))
        self.ram.delete()

        with self.assertRaises(OrderPlacementFailedException):
            OrderService.place_order(lines, self.courier.id, CUSTOMER)

        self.assertEqual(Order.objects.count(), 0)
        self.cpu.refresh_from_db()
        self.assertEqual(self.cpu.stock_qty, 10)


class CheckoutViewTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.courier = DeliveryType.objects.create(name="Courier", price=Decimal("4.99"))
        DeliveryType.objects.create(name="Retired", price=Decimal("1.00"), is_active=False)
        self.gpu = Product.objects.create(name="RTX 4070", price=Decimal("599.00"), stock_qty=3)
        self.user = get_user_model().objects.create_user(
            email="buyer@test.com", password="pass12345", first_name="Buyer", last_name="One"
        )

    def add_to_cart(self, product, times=1):
        for _ in range(times):
            self.client.post("/api/store/cart/add/", {"product_id": product.id}, format="json")

    def checkout(self, **overrides):
        payload = dict(CUSTOMER, delivery_type_id=self.courier.id)
        payload.update(overrides)
        return self.client.post("/api/transactions/checkout/", payload, format="json")

    def test_delivery_types_lists_active_only(self):
        response = self.client.get("/api/transactions/delivery-types/")
        self.assertEqual([d["name"] for d in response.data["data"]], ["Courier"])

    def test_guest_checkout_creates_order_and_clears_cart(self):
        self.add_to_cart(self.gpu, times=2)
        response = self.checkout()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["data"]["grand_total"], "1202.99")
        self.assertEqual(len(response.data["data"]["items"]), 1)

        order = Order.objects.get(order_id=response.data["data"]["order_id"])
        self.assertIsNone(order.customer)
        self.gpu.refresh_from_db()
        self.assertEqual(self.gpu.stock_qty, 1)

        cart = self.client.get("/api/store/cart/")
        self.assertEqual(cart.data["data"]["items"], [])

    def test_empty_cart_checkout_is_400(self):
        response = self.checkout()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error_code"], "empty_cart")

    def test_invalid_delivery_type_is_400_and_cart_kept(self):
        self.add_to_cart(self.gpu)
        retired = DeliveryType.objects.get(name="Retired")
        response = self.checkout(delivery_type_id=retired.id)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error_code"], "invalid_delivery_type")
        self.assertEqual(len(self.client.get("/api/store/cart/").data["data"]["items"]), 1)

    def test_missing_customer_fields_are_400(self):
        self.add_to_cart(self.gpu)
        response = self.checkout(address_line="", phone="not a phone")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("address_line", response.data["error"])
        self.assertIn("phone", response.data["error"])

    def test_storage_failure_is_500_and_cart_kept(self):
        self.add_to_cart(self.gpu)
        with patch.object(OrderService, "_create_line_items", side_effect=DatabaseError("boom")):
            response = self.checkout()

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["error_code"], "order_placement_failed")
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(len(self.client.get("/api/store/cart/").data["data"]["items"]), 1)

    def test_signed_in_checkout_prefills_contact_and_lists_my_orders(self):
        self.client.force_authenticate(user=self.user)
        self.add_to_cart(self.gpu)

        payload = {
            "address_line": "Elizabetes 1, Riga",
            "phone": "+371 21111111",
            "delivery_type_id": self.courier.id,
        }
        response = self.client.post("/api/transactions/checkout/", payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["email"], "buyer@test.com")
        self.assertEqual(response.data["data"]["first_name"], "Buyer")

        orders = self.client.get("/api/transactions/orders/")
        self.assertEqual(orders.data["data"]["count"], 1)

        order_id = response.data["data"]["order_id"]
        detail = self.client.get(f"/api/transactions/orders/{order_id}/")
        self.assertEqual(detail.status_code, status.HTTP_200_OK)

    def test_order_detail_hidden_from_other_users(self):
        order = OrderService.place_order([(self.gpu.id, 1, self.gpu.price)], self.courier.id, CUSTOMER, user=self.user)
        other = get_user_model().objects.create_user(
            email="other@test.com", password="pass12345", first_name="O", last_name="T"
        )
        self.client.force_authenticate(user=other)

        response = self.client.get(f"/api/transactions/orders/{order.order_id}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class AdminOrderTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.admin_user = get_user_model().objects.create_superuser(
            email="admin@test.com", password="pass12345", first_name="Ada", last_name="Admin"
        )
        self.client.force_authenticate(user=self.admin_user)
        self.courier = DeliveryType.objects.create(name="Courier", price=Decimal("4.99"))
        self.ssd = Product.objects.create(name="990 Pro", price=Decimal("150.00"), stock_qty=5)
        self.order = OrderService.place_order([(self.ssd.id, 1, self.ssd.price)], self.courier.id, CUSTOMER)

    def test_list_and_filter_orders(self):
        other = OrderService.place_order(
            [(self.ssd.id, 2, self.ssd.price)], self.courier.id, dict(CUSTOMER, first_name="Zane", email="zane@example.com")
        )
        OrderService.update_status(other, Order.Status.SHIPPED)

        response = self.client.get("/api/admin/orders/")
        self.assertEqual(response.data["data"]["count"], 2)

        response = self.client.get("/api/admin/orders/", {"status": "shipped"})
        results = response.data["data"]["results"]
        self.assertEqual([r["email"] for r in results], ["zane@example.com"])
        self.assertEqual(results[0]["item_count"], 1)

        response = self.client.get("/api/admin/orders/", {"search": "ilze"})
        self.assertEqual(response.data["data"]["count"], 1)

    def test_search_orders_by_order_id(self):
        OrderService.place_order(
            [(self.ssd.id, 1, self.ssd.price)], self.courier.id, dict(CUSTOMER, email="other@example.com")
        )

        response = self.client.get("/api/admin/orders/", {"search": str(self.order.order_id)})

        results = response.data["data"]["results"]
        self.assertEqual([r["order_id"] for r in results], [str(self.order.order_id)])

    def test_order_detail_includes_items_and_delivery(self):
        response = self.client.get(f"/api/admin/orders/{self.order.order_id}/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["delivery_type_name"], "Courier")
        self.assertEqual(response.data["data"]["items"][0]["product_name"], "990 Pro")

    def test_update_status_to_any_value(self):
        for new_status in ["DELIVERED", "NEW", "CANCELED"]:
            response = self.client.patch(
                f"/api/admin/orders/{self.order.order_id}/status/", {"status": new_status}, format="json"
            )
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.order.refresh_from_db()
            self.assertEqual(self.order.status, new_status)

    def test_unknown_status_is_rejected(self):
        response = self.client.patch(
            f"/api/admin/orders/{self.order.order_id}/status/", {"status": "LOST"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_status_list(self):
        response = self.client.get("/api/admin/orders/statuses/")
        self.assertEqual(
            [s["value"] for s in response.data["data"]],
            ["NEW", "PROCESSING", "SHIPPED", "DELIVERED", "CANCELED"]
        )

    def test_delivery_type_crud(self):
        created = self.client.post(
            "/api/admin/delivery-types/", {"name": "Parcel locker", "price": "2.49"}, format="json"
        )
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        delivery_id = created.data["data"]["id"]

        updated = self.client.patch(
            f"/api/admin/delivery-types/{delivery_id}/", {"is_active": False}, format="json"
        )
        self.assertEqual(updated.status_code, status.HTTP_200_OK)
        self.assertFalse(DeliveryType.objects.get(pk=delivery_id).is_active)

        deleted = self.client.delete(f"/api/admin/delivery-types/{delivery_id}/")
        self.assertEqual(deleted.status_code, status.HTTP_200_OK)
        self.assertFalse(DeliveryType.objects.filter(pk=delivery_id).exists())

    def test_delivery_type_in_use_cannot_be_deleted(self):
        response = self.client.delete(f"/api/admin/delivery-types/{self.courier.id}/")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error_code"], "delivery_type_in_use")
        self.assertTrue(DeliveryType.objects.filter(pk=self.courier.pk).exists())

    def test_customer_cannot_manage_orders(self):
        customer = get_user_model().objects.create_user(
            email="c@test.com", password="pass12345", first_name="C", last_name="U"
        )
        self.client.force_authenticate(user=customer)
        response = self.client.get("/api/admin/orders/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
