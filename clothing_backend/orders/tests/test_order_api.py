# orders/tests/test_order_api.py

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from cart.services import cart_service
from common.factories import auth_client, make_product, make_user
from orders.models import Order
from orders.services.checkout import place_order


class OrderApiTests(TestCase):
    """
    Order endpoints.

    GUARANTEES:
    - checkout returns 201 with user display fields
    - checkout errors use the shared error envelope
    - orders are only visible to their owner
    """

    def setUp(self):
        self.user = make_user(email="owner@example.com", name="Owner")
        self.client = auth_client(self.user)
        self.tee = make_product(name="Tee", price="10.00", stock=2, sizes=("M",))

    def _fill_cart(self, qty=1):
        cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=qty)

    def test_checkout_created(self):
        self._fill_cart(2)
        res = self.client.post(reverse("orders:list-create"))

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["totalPrice"], "20.00")
        self.assertEqual(res.data["user"]["name"], "Owner")
        self.assertEqual(res.data["user"]["email"], "owner@example.com")
        self.assertEqual(res.data["items"][0]["qty"], 2)
        self.assertEqual(res.data["items"][0]["product"]["name"], "Tee")

    def test_checkout_empty_cart(self):
        res = self.client.post(reverse("orders:list-create"))

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "EMPTY_CART")

    def test_checkout_insufficient_stock(self):
        self._fill_cart(3)
        res = self.client.post(reverse("orders:list-create"))

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["error"]["code"], "INSUFFICIENT_STOCK")
        self.assertEqual(
            res.data["error"]["message"],
            "Insufficient stock for Tee. Only 2 available.",
        )

    def test_checkout_requires_auth(self):
        res = APIClient().post(reverse("orders:list-create"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_own_orders(self):
        other = make_user(email="other@example.com")
        cart_service.add_item(user=other, product_id=self.tee.id, size="M", quantity=1)
        place_order(user=other)

        self._fill_cart(1)
        place_order(user=self.user)

        res = self.client.get(reverse("orders:list-create"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 1)
        self.assertEqual(res.data[0]["user"]["email"], "owner@example.com")

    def test_detail_forbidden_for_other_user(self):
        self._fill_cart(1)
        order = place_order(user=self.user)

        intruder = auth_client(make_user(email="intruder@example.com"))
        res = intruder.get(reverse("orders:detail", args=[order.id]))

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(res.data["error"]["code"], "NOT_AUTHORIZED")

    def test_detail_owner(self):
        self._fill_cart(1)
        order = place_order(user=self.user)

        res = self.client.get(reverse("orders:detail", args=[order.id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["orderNo"], order.order_no)

    def test_status_update_admin_only(self):
        self._fill_cart(1)
        order = place_order(user=self.user)
        url = reverse("orders:status", args=[order.id])

        res = self.client.patch(url, {"status": "shipped"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        admin = auth_client(make_user(email="admin@example.com", role="admin"))
        res = admin.patch(url, {"status": "shipped"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        order.refresh_from_db()
        self.assertEqual(order.status, Order.STATUS_SHIPPED)

        res = admin.patch(url, {"status": "lost"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")
