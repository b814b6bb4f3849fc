# cart/services/storage.py

"""
CART STORAGE (GUEST vs ACCOUNT)

Purpose:
- One cart interface for the API views regardless of who is asking.
  - Authenticated user -> server cart (cart.services.cart_service)
  - Anonymous visitor  -> guest cart kept in the Django session
- Guest -> authenticated transition (login/register) adopts the guest cart
  into the account cart exactly once.

GUARANTEES:
- Both backends enforce the same validation (product exists, size offered,
  quantity >= 1) and the same (product, size) merge rule.
- Guest carts never touch the database tables of the cart app.
- After adoption the session copy is removed, so a second login in the same
  session cannot merge it again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from cart.models import Cart
from cart.services import cart_service
from common.exceptions import ItemNotFoundError, ProductNotFoundError
from products.models import Product

logger = logging.getLogger(__name__)

GUEST_CART_SESSION_KEY = "guest_cart"


# ============================================================
# READ MODEL
# ============================================================

@dataclass
class CartLine:
    product: Product
    size: str
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


@dataclass
class CartSnapshot:
    """
    What the cart endpoints return (server and guest alike).
    """

    id: Optional[str]
    guest: bool
    lines: list = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0.00"))

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartSnapshot":
        return cls(
            id=str(cart.id),
            guest=False,
            lines=[CartLine(product=i.product, size=i.size, quantity=i.quantity) for i in cart.items.all()],
        )


# ============================================================
# BACKENDS
# ============================================================

class CartStorage:
    """
    Interface shared by the account and guest backends.
    """

    def snapshot(self) -> CartSnapshot:
        raise NotImplementedError

    def add(self, *, product_id, size: str, quantity) -> CartSnapshot:
        raise NotImplementedError

    def update(self, *, product_id, size: str, quantity) -> CartSnapshot:
        raise NotImplementedError

    def remove(self, *, product_id, size: str) -> CartSnapshot:
        raise NotImplementedError

    def clear(self) -> CartSnapshot:
        raise NotImplementedError


class AccountCartStorage(CartStorage):
    def __init__(self, user):
        self.user = user

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot.from_cart(cart_service.load_cart(user=self.user))

    def add(self, *, product_id, size, quantity):
        cart = cart_service.add_item(user=self.user, product_id=product_id, size=size, quantity=quantity)
        return CartSnapshot.from_cart(cart)

    def update(self, *, product_id, size, quantity):
        cart = cart_service.update_item(user=self.user, product_id=product_id, size=size, quantity=quantity)
        return CartSnapshot.from_cart(cart)

    def remove(self, *, product_id, size):
        cart = cart_service.remove_item(user=self.user, product_id=product_id, size=size)
        return CartSnapshot.from_cart(cart)

    def clear(self):
        return CartSnapshot.from_cart(cart_service.clear_cart(user=self.user))


class GuestCartStorage(CartStorage):
    """
    Session-backed cart. Stored shape:
        [{"productId": "<uuid>", "size": "M", "qty": 2}, ...]
    """

    def __init__(self, session):
        self.session = session

    # ---------------- session I/O ----------------
    def _read(self) -> list[dict]:
        return list(self.session.get(GUEST_CART_SESSION_KEY) or [])

    def _write(self, lines: list[dict]) -> None:
        self.session[GUEST_CART_SESSION_KEY] = lines
        self.session.modified = True

    @staticmethod
    def _find(lines, product_id: str, size: str) -> Optional[dict]:
        for line in lines:
            if line["productId"] == product_id and line["size"] == size:
                return line
        return None

    # ---------------- operations ----------------
    def snapshot(self) -> CartSnapshot:
        stored = self._read()
        ids = {line["productId"] for line in stored}
        products = {str(p.pk): p for p in Product.objects.filter(pk__in=ids)}

        lines = []
        for line in stored:
            product = products.get(line["productId"])
            if product is None:
                # product removed from the catalog since it was added
                continue
            lines.append(CartLine(product=product, size=line["size"], quantity=int(line["qty"])))

        return CartSnapshot(id=None, guest=True, lines=lines)

    def add(self, *, product_id, size, quantity):
        qty = cart_service.to_quantity(quantity)
        product = cart_service.resolve_product(product_id=product_id, size=size)

        lines = self._read()
        pid = str(product.pk)
        existing = self._find(lines, pid, size)
        if existing is not None:
            existing["qty"] = int(existing["qty"]) + qty
        else:
            lines.append({"productId": pid, "size": size, "qty": qty})

        self._write(lines)
        return self.snapshot()

    def update(self, *, product_id, size, quantity):
        qty = cart_service.to_quantity(quantity)
        pid = str(cart_service.parse_product_id(product_id))

        lines = self._read()
        existing = self._find(lines, pid, size)
        if existing is None:
            raise ItemNotFoundError()

        existing["qty"] = qty
        self._write(lines)
        return self.snapshot()

    def remove(self, *, product_id, size):
        try:
            pid = str(cart_service.parse_product_id(product_id))
        except ProductNotFoundError:
            return self.snapshot()

        lines = [line for line in self._read() if not (line["productId"] == pid and line["size"] == size)]
        self._write(lines)
        return self.snapshot()

    def clear(self):
        self._write([])
        return self.snapshot()


def get_cart_storage(request) -> CartStorage:
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return AccountCartStorage(user)
    return GuestCartStorage(request.session)


# ============================================================
# GUEST -> AUTHENTICATED TRANSITION
# ============================================================

def adopt_guest_cart(*, request, user, posted_lines=None) -> Cart:
    """
    Merge the guest cart into the user's cart, then drop the session copy.

    A client that keeps its cart in local storage mirrors the session cart,
    so posted lines replace the session lines instead of adding to them.
    posted_lines are validated dicts: {"productId", "size", "qty"}.
    """
    lines = list(posted_lines or []) or GuestCartStorage(request.session)._read()

    if not lines:
        discard_guest_cart(request)
        return cart_service.get_or_create_cart(user=user)

    cart = cart_service.merge_guest_cart(user=user, lines=lines)
    discard_guest_cart(request)
    return cart


def discard_guest_cart(request) -> None:
    session = getattr(request, "session", None)
    if session is not None and GUEST_CART_SESSION_KEY in session:
        del session[GUEST_CART_SESSION_KEY]
        session.modified = True
