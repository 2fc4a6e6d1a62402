from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from authentication.models import AdminAuditLog
from contact.models import ContactMessage
from transactions.models import DeliveryType, Order


class AdminUserManagementTests(TestCase):
    def setUp(self):
        cache.clear()
        User = get_user_model()
        self.client = APIClient()

        self.admin_user = User.objects.create_superuser(
            email="admin@test.com", password="pass12345", first_name="Ada", last_name="Admin"
        )
        self.customer = User.objects.create_user(
            email="customer@test.com", password="pass12345", first_name="Carl", last_name="Customer"
        )
        self.client.force_authenticate(user=self.admin_user)

    def test_customer_cannot_access_admin_panel(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get("/api/admin/users/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_users_with_search_and_role_filter(self):
        response = self.client.get("/api/admin/users/", {"search": "carl"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        emails = [row["email"] for row in response.data["data"]["results"]]
        self.assertEqual(emails, ["customer@test.com"])

        response = self.client.get("/api/admin/users/", {"role": "admin"})
        emails = [row["email"] for row in response.data["data"]["results"]]
        self.assertEqual(emails, ["admin@test.com"])

    def test_retrieve_user(self):
        response = self.client.get(f"/api/admin/users/{self.customer.uuid}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["email"], "customer@test.com")
        self.assertEqual(response.data["data"]["total_orders"], 0)

    def test_update_user_promotes_and_sets_password(self):
        response = self.client.patch(
            f"/api/admin/users/{self.customer.uuid}/",
            {"first_name": "Carla", "is_admin": True, "password": "newpass123", "confirm_password": "newpass123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.customer.refresh_from_db()
        self.assertEqual(self.customer.first_name, "Carla")
        self.assertTrue(self.customer.is_admin)
        self.assertTrue(self.customer.check_password("newpass123"))
        self.assertTrue(AdminAuditLog.objects.filter(action="update_user", target_id=str(self.customer.uuid)).exists())

    def test_update_rejects_password_mismatch(self):
        response = self.client.patch(
            f"/api/admin/users/{self.customer.uuid}/",
            {"password": "newpass123", "confirm_password": "newpass124"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_demoting_last_admin_is_rejected(self):
        response = self.client.patch(
            f"/api/admin/users/{self.admin_user.uuid}/", {"is_admin": False}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error_code"], "last_administrator")
        self.admin_user.refresh_from_db()
        self.assertTrue(self.admin_user.is_admin)

    def test_deleting_last_admin_is_rejected(self):
        response = self.client.delete(f"/api/admin/users/{self.admin_user.uuid}/")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error_code"], "last_administrator")
        self.assertTrue(get_user_model().objects.filter(pk=self.admin_user.pk).exists())

    def test_deleting_only_active_admin_is_rejected_when_others_are_disabled(self):
        get_user_model().objects.create_superuser(
            email="dormant@test.com", password="pass12345", first_name="Dora", last_name="Mant", is_active=False
        )
        response = self.client.delete(f"/api/admin/users/{self.admin_user.uuid}/")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error_code"], "last_administrator")
        self.assertTrue(get_user_model().objects.filter(pk=self.admin_user.pk).exists())

    def test_admin_can_be_deleted_when_another_admin_remains(self):
        second = get_user_model().objects.create_superuser(
            email="second@test.com", password="pass12345", first_name="Sec", last_name="Ond"
        )
        response = self.client.delete(f"/api/admin/users/{second.uuid}/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(get_user_model().objects.filter(pk=second.pk).exists())

    def test_delete_user_removes_contact_messages(self):
        ContactMessage.objects.create(user=self.customer, email=self.customer.email, content="Hello")
        response = self.client.delete(f"/api/admin/users/{self.customer.uuid}/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(get_user_model().objects.filter(pk=self.customer.pk).exists())
        self.assertEqual(ContactMessage.objects.count(), 0)
        self.assertTrue(AdminAuditLog.objects.filter(action="delete_user").exists())

    def test_user_with_orders_cannot_be_deleted(self):
        delivery = DeliveryType.objects.create(name="Courier", price=Decimal("5.00"))
        Order.objects.create(
            customer=self.customer,
            first_name="Carl",
            last_name="Customer",
            address_line="Brivibas 1, Riga",
            phone="+37120000000",
            email=self.customer.email,
            delivery_type=delivery,
            items_total=Decimal("10.00"),
            delivery_price=Decimal("5.00"),
            grand_total=Decimal("15.00"),
        )
        response = self.client.delete(f"/api/admin/users/{self.customer.uuid}/")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error_code"], "user_has_orders")
        self.assertTrue(get_user_model().objects.filter(pk=self.customer.pk).exists())

    def test_audit_log_lists_newest_first(self):
        self.client.patch(f"/api/admin/users/{self.customer.uuid}/", {"first_name": "A"}, format="json")
        self.client.patch(f"/api/admin/users/{self.customer.uuid}/", {"last_name": "B"}, format="json")

        response = self.client.get("/api/admin/audit-logs/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        results = response.data["data"]["results"]
        self.assertEqual(len(results), 2)
        self.assertEqual(results[0]["details"]["fields"], ["last_name"])
