# cart/tests/test_cart_service.py

import uuid
from decimal import Decimal

from django.test import TestCase

from cart.models import Cart, CartItem
from cart.services import cart_service
from common.exceptions import (
    InvalidQuantityError,
    InvalidSizeError,
    ItemNotFoundError,
    ProductNotFoundError,
)
from common.factories import make_product, make_user


class CartServiceTests(TestCase):
    """
    Server cart mutations.

    GUARANTEES:
    - one line per (product, size); repeat adds sum quantities
    - invalid product / size / quantity never change the cart
    - remove of an absent pair is a silent no-op
    """

    def setUp(self):
        self.user = make_user()
        self.tee = make_product(name="Tee", price="20.00", sizes=("S", "M"))

    def test_cart_is_created_lazily(self):
        self.assertFalse(Cart.objects.filter(user=self.user).exists())
        cart = cart_service.load_cart(user=self.user)
        self.assertEqual(cart.user, self.user)
        self.assertTrue(cart.is_empty)

    def test_add_unseen_pair_creates_single_line(self):
        cart = cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=2)

        self.assertEqual(cart.items.count(), 1)
        line = cart.items.get()
        self.assertEqual((line.product_id, line.size, line.quantity), (self.tee.id, "M", 2))

    def test_add_same_pair_twice_sums_quantity(self):
        cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=2)
        cart = cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=3)

        self.assertEqual(cart.items.count(), 1)
        self.assertEqual(cart.items.get().quantity, 5)

    def test_same_product_other_size_is_separate_line(self):
        cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=1)
        cart = cart_service.add_item(user=self.user, product_id=self.tee.id, size="S", quantity=1)

        self.assertEqual(cart.items.count(), 2)
        self.assertEqual(cart.item_count, 2)

    def test_add_unknown_product(self):
        with self.assertRaises(ProductNotFoundError):
            cart_service.add_item(user=self.user, product_id=uuid.uuid4(), size="M", quantity=1)

    def test_add_size_not_offered(self):
        with self.assertRaises(InvalidSizeError):
            cart_service.add_item(user=self.user, product_id=self.tee.id, size="XXL", quantity=1)
        self.assertFalse(CartItem.objects.exists())

    def test_add_zero_quantity(self):
        with self.assertRaises(InvalidQuantityError):
            cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=0)

    def test_update_checks_quantity_before_lookup(self):
        with self.assertRaises(InvalidQuantityError):
            cart_service.update_item(user=self.user, product_id=uuid.uuid4(), size="M", quantity=0)

    def test_update_missing_line(self):
        with self.assertRaises(ItemNotFoundError):
            cart_service.update_item(user=self.user, product_id=self.tee.id, size="M", quantity=4)

    def test_update_sets_quantity(self):
        cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=2)
        cart = cart_service.update_item(user=self.user, product_id=self.tee.id, size="M", quantity=7)
        self.assertEqual(cart.items.get().quantity, 7)

    def test_remove_absent_pair_is_noop(self):
        cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=2)
        cart = cart_service.remove_item(user=self.user, product_id=self.tee.id, size="S")
        self.assertEqual(cart.items.count(), 1)

    def test_remove_and_clear(self):
        cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=2)
        cart_service.add_item(user=self.user, product_id=self.tee.id, size="S", quantity=1)

        cart = cart_service.remove_item(user=self.user, product_id=self.tee.id, size="M")
        self.assertEqual(cart.items.count(), 1)

        cart = cart_service.clear_cart(user=self.user)
        self.assertTrue(cart.is_empty)

    def test_subtotal_uses_current_price(self):
        cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=3)
        self.tee.price = "30.00"
        self.tee.save(update_fields=["price"])

        cart = cart_service.load_cart(user=self.user)
        self.assertEqual(cart.subtotal_amount, Decimal("90.00"))


class MergeGuestCartTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.tee = make_product(name="Tee", sizes=("S", "M"))
        self.jeans = make_product(name="Jeans", sizes=("30", "32"))

    def test_union_sums_quantities_by_pair(self):
        cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=1)

        cart = cart_service.merge_guest_cart(
            user=self.user,
            lines=[
                {"productId": str(self.tee.id), "size": "M", "qty": 2},
                {"productId": str(self.tee.id), "size": "M", "qty": 1},
                {"productId": str(self.jeans.id), "size": "32", "qty": 1},
            ],
        )

        quantities = {(i.product_id, i.size): i.quantity for i in cart.items.all()}
        self.assertEqual(quantities, {(self.tee.id, "M"): 4, (self.jeans.id, "32"): 1})

    def test_invalid_lines_are_skipped(self):
        cart = cart_service.merge_guest_cart(
            user=self.user,
            lines=[
                {"productId": str(uuid.uuid4()), "size": "M", "qty": 1},
                {"productId": str(self.tee.id), "size": "XL", "qty": 1},
                {"productId": str(self.jeans.id), "size": "30", "qty": 2},
            ],
        )

        self.assertEqual(cart.items.count(), 1)
        self.assertEqual(cart.item_count, 2)
