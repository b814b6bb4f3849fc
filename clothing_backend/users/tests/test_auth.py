# users/tests/test_auth.py

"""
AUTH TESTS

GUARANTEES:
- register/login return a JWT pair and set the httpOnly cookie
- the cookie alone authenticates later requests
- a stale cookie never blocks public endpoints
- bad credentials use the shared error envelope
"""

from django.conf import settings
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from common.factories import DEFAULT_PASSWORD, make_product, make_user


class RegisterTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_register_sets_cookie_and_returns_tokens(self):
        res = self.client.post(
            reverse("users:register"),
            {"name": "Ada", "email": "Ada@Example.com", "password": DEFAULT_PASSWORD},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertIn("access", res.data)
        self.assertIn("refresh", res.data)
        self.assertEqual(res.data["user"]["email"], "ada@example.com")
        self.assertEqual(res.data["user"]["role"], "customer")
        self.assertEqual(res.data["cartItemCount"], 0)

        cookie = res.cookies[settings.JWT_COOKIE_NAME]
        self.assertTrue(cookie["httponly"])
        self.assertIn(cookie["samesite"], ("Lax", "Strict"))

    @override_settings(JWT_COOKIE_SAMESITE="Strict")
    def test_cookie_carries_configured_samesite(self):
        make_user(email="strict@example.com")
        res = self.client.post(
            reverse("users:login"),
            {"email": "strict@example.com", "password": DEFAULT_PASSWORD},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.cookies[settings.JWT_COOKIE_NAME]["samesite"], "Strict")

    def test_register_duplicate_email(self):
        make_user(email="taken@example.com")
        res = self.client.post(
            reverse("users:register"),
            {"name": "Again", "email": "TAKEN@example.com", "password": DEFAULT_PASSWORD},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")
        self.assertIn("email", res.data["error"]["details"])

    def test_register_merges_posted_guest_cart(self):
        cap = make_product(name="Cap", sizes=("OS",))
        res = self.client.post(
            reverse("users:register"),
            {
                "name": "New",
                "email": "new@example.com",
                "password": DEFAULT_PASSWORD,
                "guestCart": [{"productId": str(cap.id), "size": "OS", "qty": 2}],
            },
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["cartItemCount"], 2)


class LoginTests(TestCase):
    def setUp(self):
        self.user = make_user(email="user@example.com", name="User")
        self.client = APIClient()

    def _login(self, password=DEFAULT_PASSWORD):
        return self.client.post(
            reverse("users:login"),
            {"email": "USER@example.com", "password": password},
            format="json",
        )

    def test_login_success(self):
        res = self._login()

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["user"]["id"], str(self.user.id))
        self.assertIn(settings.JWT_COOKIE_NAME, res.cookies)

    def test_login_wrong_password(self):
        res = self._login(password="nope-nope")

        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(res.data["error"]["code"], "INVALID_CREDENTIALS")

    def test_cookie_authenticates_me(self):
        self._login()
        res = self.client.get(reverse("users:me"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["email"], "user@example.com")

    def test_bearer_header_authenticates_me(self):
        access = self._login().data["access"]

        api = APIClient()
        api.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        res = api.get(reverse("users:me"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_me_requires_auth(self):
        res = APIClient().get(reverse("users:me"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_stale_cookie_is_ignored_on_public_endpoints(self):
        self.client.cookies[settings.JWT_COOKIE_NAME] = "not-a-token"

        res = self.client.get(reverse("cart:cart"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["guest"])

    def test_logout_clears_cookie(self):
        self._login()
        res = self.client.post(reverse("users:logout"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.cookies[settings.JWT_COOKIE_NAME].value, "")
