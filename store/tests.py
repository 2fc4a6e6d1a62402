from decimal import Decimal
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from store.models import Category, Product, ProductSpec


def make_product(name, price, stock=5, categories=(), specs=()):
    product = Product.objects.create(name=name, price=Decimal(price), stock_qty=stock)
    product.categories.set(categories)
    for key, value in specs:
        ProductSpec.objects.create(product=product, key=key, value=value)
    return product


class ProductModelTests(TestCase):
    def test_slug_is_generated_and_unique(self):
        first = Product.objects.create(name="Ryzen 7 7800X3D", price=Decimal("399.00"))
        second = Product.objects.create(name="Ryzen 7 7800X3D", price=Decimal("389.00"))

        self.assertEqual(first.slug, "ryzen-7-7800x3d")
        self.assertEqual(second.slug, "ryzen-7-7800x3d-1")

    def test_in_stock_follows_stock_qty(self):
        product = Product.objects.create(name="Fan", price=Decimal("9.99"), stock_qty=0)
        self.assertFalse(product.in_stock)
        product.stock_qty = 3
        self.assertTrue(product.in_stock)


class ProductListTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.cpus = Category.objects.create(name="Processors")
        self.gpus = Category.objects.create(name="Graphics Cards")

        self.am5 = make_product(
            "Ryzen 5 7600", "199.00", categories=[self.cpus],
            specs=[("Socket", "AM5"), ("Cores", "6")]
        )
        self.am5_big = make_product(
            "Ryzen 9 7950X", "549.00", categories=[self.cpus],
            specs=[("Socket", "AM5"), ("Cores", "16")]
        )
        self.lga = make_product(
            "Core i5-14600K", "299.00", categories=[self.cpus],
            specs=[("Socket", "LGA1700"), ("Cores", "14")]
        )
        self.gpu = make_product(
            "RTX 4070", "599.00", categories=[self.gpus],
            specs=[("VRAM", "12")]
        )

    def names(self, response):
        return sorted(row["name"] for row in response.data["data"]["results"])

    def test_list_all_products(self):
        response = self.client.get("/api/store/products/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["count"], 4)

    def test_filter_by_category(self):
        response = self.client.get("/api/store/products/", {"category": self.gpus.slug})
        self.assertEqual(self.names(response), ["RTX 4070"])

    def test_spec_values_of_same_key_are_alternatives(self):
        response = self.client.get(
            "/api/store/products/", {"category": self.cpus.slug, "spec": ["Cores:6", "Cores:14"]}
        )
        self.assertEqual(self.names(response), ["Core i5-14600K", "Ryzen 5 7600"])

    def test_spec_keys_must_all_match(self):
        response = self.client.get(
            "/api/store/products/", {"spec": ["Socket:AM5", "Cores:16"]}
        )
        self.assertEqual(self.names(response), ["Ryzen 9 7950X"])
        self.assertEqual(response.data["data"]["selected_filters"], {"Socket": ["AM5"], "Cores": ["16"]})

    def test_spec_filters_list_values_of_current_category(self):
        response = self.client.get("/api/store/products/", {"category": self.cpus.slug})
        spec_filters = response.data["data"]["spec_filters"]

        self.assertEqual(spec_filters["Socket"], ["AM5", "LGA1700"])
        self.assertEqual(spec_filters["Cores"], ["14", "16", "6"])
        self.assertNotIn("VRAM", spec_filters)

    def test_malformed_spec_filter_is_ignored(self):
        response = self.client.get("/api/store/products/", {"spec": "no-separator"})
        self.assertEqual(response.data["data"]["count"], 4)

    def test_price_range_and_ordering(self):
        response = self.client.get(
            "/api/store/products/", {"min_price": "200", "max_price": "600", "ordering": "-price"}
        )
        prices = [row["price"] for row in response.data["data"]["results"]]
        self.assertEqual(prices, ["599.00", "549.00", "299.00"])

    def test_pagination_uses_twelve_per_page(self):
        for i in range(12):
            make_product(f"Cable {i}", "1.00")
        first = self.client.get("/api/store/products/")
        second = self.client.get("/api/store/products/", {"page": 2})

        self.assertEqual(len(first.data["data"]["results"]), 12)
        self.assertEqual(len(second.data["data"]["results"]), 4)

    def test_product_detail_by_slug(self):
        response = self.client.get(f"/api/store/products/{self.am5.slug}/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["name"], "Ryzen 5 7600")
        self.assertEqual({s["key"] for s in response.data["data"]["specs"]}, {"Socket", "Cores"})

    def test_product_detail_not_found(self):
        response = self.client.get("/api/store/products/does-not-exist/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data["success"])

    def test_categories_are_listed_by_name(self):
        response = self.client.get("/api/store/categories/")
        self.assertEqual([c["name"] for c in response.data["data"]], ["Graphics Cards", "Processors"])


class SessionCartTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.product = make_product("Samsung 990 Pro 2TB", "179.99")
        self.other = make_product("Corsair RM850x", "139.00")

    def add(self, product):
        return self.client.post("/api/store/cart/add/", {"product_id": product.id}, format="json")

    def test_add_creates_line_then_increments(self):
        self.add(self.product)
        response = self.add(self.product)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        items = response.data["data"]["items"]
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0]["quantity"], 2)
        self.assertEqual(response.data["data"]["items_total"], "359.98")

    def test_add_unknown_product_is_404(self):
        response = self.client.post("/api/store/cart/add/", {"product_id": 999999}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_price_is_captured_when_first_added(self):
        self.add(self.product)
        Product.objects.filter(pk=self.product.pk).update(price=Decimal("1.00"))

        response = self.client.get("/api/store/cart/")
        self.assertEqual(response.data["data"]["items"][0]["price"], "179.99")

    def test_decrement_removes_line_at_zero(self):
        self.add(self.product)
        self.add(self.other)

        response = self.client.post(f"/api/store/cart/{self.product.id}/decrement/")
        self.assertEqual([i["product_id"] for i in response.data["data"]["items"]], [self.other.id])

    def test_increment_and_remove(self):
        self.add(self.product)
        response = self.client.post(f"/api/store/cart/{self.product.id}/increment/")
        self.assertEqual(response.data["data"]["item_count"], 2)

        response = self.client.post(f"/api/store/cart/{self.product.id}/remove/")
        self.assertEqual(response.data["data"]["items"], [])

    def test_line_not_in_cart_is_404(self):
        response = self.client.post(f"/api/store/cart/{self.product.id}/increment/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_clear(self):
        self.add(self.product)
        self.add(self.other)
        response = self.client.post("/api/store/cart/clear/")

        self.assertEqual(response.data["data"]["item_count"], 0)
        self.assertEqual(self.client.get("/api/store/cart/").data["data"]["items"], [])


class AdminCatalogTests(TestCase):
    def setUp(self):
        cache.clear()
        User = get_user_model()
        self.client = APIClient()
        self.admin_user = User.objects.create_superuser(
            email="admin@test.com", password="pass12345", first_name="Ada", last_name="Admin"
        )
        self.client.force_authenticate(user=self.admin_user)
        self.cpus = Category.objects.create(name="Processors")
        self.gpus = Category.objects.create(name="Graphics Cards")

    def test_customer_is_forbidden(self):
        customer = get_user_model().objects.create_user(
            email="c@test.com", password="pass12345", first_name="C", last_name="U"
        )
        self.client.force_authenticate(user=customer)
        response = self.client.post("/api/admin/products/", {"name": "X", "price": "1.00"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_product_with_categories_and_specs(self):
        response = self.client.post(
            "/api/admin/products/",
            {
                "name": "Radeon RX 7800 XT",
                "price": "499.00",
                "stock_qty": 4,
                "category_ids": [self.gpus.id],
                "specs": [
                    {"key": "VRAM", "value": "16", "unit": "GB"},
                    {"key": "", "value": "ignored"},
                    {"key": "Boost clock", "value": "  "},
                ],
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        product = Product.objects.get(name="Radeon RX 7800 XT")
        self.assertEqual(list(product.categories.all()), [self.gpus])
        self.assertEqual(list(product.specs.values_list("key", "value", "unit")), [("VRAM", "16", "GB")])

    def test_update_replaces_categories_and_specs(self):
        product = make_product("Ryzen 5 7600", "199.00", categories=[self.gpus], specs=[("Socket", "AM4")])

        response = self.client.patch(
            f"/api/admin/products/{product.id}/",
            {"price": "189.00", "category_ids": [self.cpus.id], "specs": [{"key": "Socket", "value": "AM5"}]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        product.refresh_from_db()
        self.assertEqual(product.price, Decimal("189.00"))
        self.assertEqual(list(product.categories.all()), [self.cpus])
        self.assertEqual(list(product.specs.values_list("key", "value")), [("Socket", "AM5")])

    def test_update_without_specs_keeps_them(self):
        product = make_product("Ryzen 5 7600", "199.00", specs=[("Socket", "AM5")])
        self.client.patch(f"/api/admin/products/{product.id}/", {"stock_qty": 10}, format="json")
        self.assertEqual(product.specs.count(), 1)

    def test_replace_specs_endpoint(self):
        product = make_product("Ryzen 5 7600", "199.00", specs=[("Socket", "AM5"), ("Cores", "6")])
        response = self.client.put(
            f"/api/admin/products/{product.id}/specs/",
            {"specs": [{"key": "TDP", "value": "65", "unit": "W"}]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([s["display_value"] for s in response.data["data"]], ["65 W"])

    def test_delete_product(self):
        product = make_product("Old part", "5.00")
        response = self.client.delete(f"/api/admin/products/{product.id}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Product.objects.filter(pk=product.pk).exists())

    def test_category_crud(self):
        created = self.client.post("/api/admin/categories/", {"name": "Cooling"}, format="json")
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        category_id = created.data["data"]["id"]
        self.assertEqual(created.data["data"]["slug"], "cooling")

        updated = self.client.patch(
            f"/api/admin/categories/{category_id}/", {"description": "Fans and coolers"}, format="json"
        )
        self.assertEqual(updated.status_code, status.HTTP_200_OK)

        deleted = self.client.delete(f"/api/admin/categories/{category_id}/")
        self.assertEqual(deleted.status_code, status.HTTP_200_OK)
        self.assertFalse(Category.objects.filter(pk=category_id).exists())

    def test_duplicate_category_name_rejected(self):
        response = self.client.post("/api/admin/categories/", {"name": "Processors"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class InitDefaultCategoriesCommandTests(TestCase):
    def test_command_is_idempotent(self):
        call_command("init_default_categories", stdout=StringIO())
        count = Category.objects.count()
        call_command("init_default_categories", stdout=StringIO())

        self.assertGreater(count, 0)
        self.assertEqual(Category.objects.count(), count)
        self.assertTrue(Category.objects.filter(slug="graphics-cards").exists())
