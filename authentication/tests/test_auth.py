from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient


class RegistrationTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.payload = {
            "first_name": "Jana",
            "last_name": "Ozola",
            "email": "Jana@Example.com",
            "password": "pass12345",
            "confirm_password": "pass12345",
        }

    def test_register_creates_customer_and_returns_tokens(self):
        response = self.client.post("/api/auth/register/", self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["success"])
        self.assertIn("access_token", response.data["data"]["tokens"])
        self.assertEqual(response.data["data"]["user"]["email"], "jana@example.com")

        user = get_user_model().objects.get(email="jana@example.com")
        self.assertEqual(user.role, user.Role.CUSTOMER)
        self.assertTrue(user.check_password("pass12345"))

    def test_register_rejects_mismatched_passwords(self):
        self.payload["confirm_password"] = "different1"
        response = self.client.post("/api/auth/register/", self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
        self.assertIn("confirm_password", response.data["error"])

    def test_register_rejects_duplicate_email(self):
        get_user_model().objects.create_user(
            email="jana@example.com", password="pass12345", first_name="J", last_name="O"
        )
        response = self.client.post("/api/auth/register/", self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "A user with this email already exists")


class LoginTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.user = get_user_model().objects.create_user(
            email="buyer@test.com", password="pass12345", first_name="Buyer", last_name="One"
        )

    def login(self, email, password):
        return self.client.post("/api/auth/login/", {"email": email, "password": password}, format="json")

    def test_login_success_returns_tokens(self):
        response = self.login("buyer@test.com", "pass12345")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertIn("refresh_token", response.data["data"]["tokens"])
        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)

    def test_unknown_email_and_wrong_password_are_indistinguishable(self):
        unknown = self.login("nobody@test.com", "pass12345")
        wrong = self.login("buyer@test.com", "wrong-pass")

        self.assertEqual(unknown.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(wrong.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(unknown.data["error"], wrong.data["error"])

    def test_disabled_account_is_rejected(self):
        self.user.is_active = False
        self.user.save()

        response = self.login("buyer@test.com", "pass12345")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    @override_settings(LOGIN_LOCKOUT_ATTEMPTS=3)
    def test_repeated_failures_lock_the_account(self):
        for _ in range(2):
            self.assertEqual(self.login("buyer@test.com", "bad-pass").status_code, status.HTTP_401_UNAUTHORIZED)

        locked = self.login("buyer@test.com", "bad-pass")
        self.assertEqual(locked.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(locked.data["lockout"])

        # Correct password is refused while the lock holds
        self.assertEqual(self.login("buyer@test.com", "pass12345").status_code, status.HTTP_403_FORBIDDEN)


class TokenLifecycleTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        get_user_model().objects.create_user(
            email="buyer@test.com", password="pass12345", first_name="Buyer", last_name="One"
        )
        response = self.client.post(
            "/api/auth/login/", {"email": "buyer@test.com", "password": "pass12345"}, format="json"
        )
        self.tokens = response.data["data"]["tokens"]

    def test_me_requires_authentication(self):
        self.client.cookies.clear()
        response = self.client.get("/api/auth/me/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])

    def test_me_returns_profile(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.tokens['access_token']}")
        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["email"], "buyer@test.com")
        self.assertEqual(response.data["data"]["full_name"], "Buyer One")

    def test_refresh_rotates_and_blacklists_old_token(self):
        response = self.client.post(
            "/api/auth/token/refresh/", {"refresh_token": self.tokens["refresh_token"]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotEqual(response.data["data"]["tokens"]["refresh_token"], self.tokens["refresh_token"])

        reused = self.client.post(
            "/api/auth/token/refresh/", {"refresh_token": self.tokens["refresh_token"]}, format="json"
        )
        self.assertEqual(reused.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_blacklists_refresh_token(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.tokens['access_token']}")
        response = self.client.post(
            "/api/auth/logout/", {"refresh_token": self.tokens["refresh_token"]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["tokens_blacklisted"], 1)

        self.client.credentials()
        refresh = self.client.post(
            "/api/auth/token/refresh/", {"refresh_token": self.tokens["refresh_token"]}, format="json"
        )
        self.assertEqual(refresh.status_code, status.HTTP_401_UNAUTHORIZED)
