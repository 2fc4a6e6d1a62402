from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from contact.models import ContactMessage


class ContactMessageTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        User = get_user_model()
        self.customer = User.objects.create_user(
            email="customer@test.com", password="pass12345", first_name="Carl", last_name="Customer"
        )
        self.admin_user = User.objects.create_superuser(
            email="admin@test.com", password="pass12345", first_name="Ada", last_name="Admin"
        )

    def test_guest_must_supply_email(self):
        response = self.client.post("/api/contact/messages/", {"content": "Do you ship to Tallinn?"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data["error"])

    def test_guest_message_is_stored(self):
        response = self.client.post(
            "/api/contact/messages/",
            {"email": "guest@example.com", "content": "Do you ship to Tallinn?"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        message = ContactMessage.objects.get()
        self.assertIsNone(message.user)
        self.assertFalse(message.is_read)

    def test_signed_in_user_defaults_to_account_email(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.post("/api/contact/messages/", {"content": "Invoice please"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["email"], "customer@test.com")
        self.assertEqual(ContactMessage.objects.get().user, self.customer)

    def test_content_is_limited_to_2000_characters(self):
        response = self.client.post(
            "/api/contact/messages/", {"email": "guest@example.com", "content": "x" * 2001}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_lists_newest_first_and_marks_read(self):
        older = ContactMessage.objects.create(email="a@example.com", content="first")
        newer = ContactMessage.objects.create(email="b@example.com", content="second")
        self.client.force_authenticate(user=self.admin_user)

        response = self.client.get("/api/admin/messages/")
        self.assertEqual([m["id"] for m in response.data["data"]["results"]], [newer.id, older.id])

        response = self.client.post(f"/api/admin/messages/{older.id}/read/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        older.refresh_from_db()
        self.assertTrue(older.is_read)

        unread = self.client.get("/api/admin/messages/", {"unread": "true"})
        self.assertEqual([m["id"] for m in unread.data["data"]["results"]], [newer.id])

    def test_customer_cannot_list_messages(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get("/api/admin/messages/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
