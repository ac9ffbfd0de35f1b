"""Tests for the Cart aggregate."""

from decimal import Decimal

from ordering.cart.cart import Cart
from ordering.cart.events import (
    CartCleared,
    CartCreated,
    CartItemAdded,
    CartItemPriceChanged,
    CartItemQuantityChanged,
    CartItemRemoved,
)
from ordering.customer.customer import Customer
from ordering.customer.user import User
from ordering.product.product import Product


def _make_cart():
    return Cart.create(customer_id="cust-001")


def _product(unit_price="100", name="Desk Lamp"):
    return Product.create(name=name, product_type="Lighting", unit_price=unit_price)


class TestCreate:
    def test_create_cart(self):
        cart = _make_cart()
        assert cart.customer_id == "cust-001"
        assert cart.is_empty()
        assert cart.total() == Decimal("0")

    def test_create_raises_event(self):
        cart = _make_cart()
        assert isinstance(cart._events[0], CartCreated)


class TestAddItem:
    def test_add_item(self):
        cart = _make_cart()
        product = _product()
        assert cart.add_item(product, 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].unit_price == "100.00"

    def test_add_item_raises_event(self):
        cart = _make_cart()
        product = _product()
        cart.add_item(product, 1)
        added = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert len(added) == 1
        assert added[0].product_id == str(product.id)
        assert added[0].unit_price == "100.00"

    def test_add_same_product_merges_line(self):
        cart = _make_cart()
        product = _product()
        cart.add_item(product, 1)
        cart.add_item(product, 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3
        assert Decimal(cart.items[0].subtotal) == Decimal("300")

    def test_add_different_products_creates_lines(self):
        cart = _make_cart()
        cart.add_item(_product(), 1)
        cart.add_item(_product(name="Chair"), 1)
        assert len(cart.items) == 2

    def test_non_positive_quantity_is_rejected(self):
        cart = _make_cart()
        product = _product()
        cart._events.clear()
        assert not cart.add_item(product, 0)
        assert not cart.add_item(product, -2)
        assert cart.is_empty()
        assert cart._events == []


class TestUpdateItem:
    def test_update_quantity(self):
        cart = _make_cart()
        cart.add_item(_product(), 1)
        item_id = cart.items[0].id
        cart._events.clear()

        assert cart.update_item(item_id, 5)
        assert cart.items[0].quantity == 5
        assert Decimal(cart.items[0].subtotal) == Decimal("500")

        event = cart._events[0]
        assert isinstance(event, CartItemQuantityChanged)
        assert event.previous_quantity == 1
        assert event.new_quantity == 5

    def test_zero_quantity_is_rejected(self):
        cart = _make_cart()
        cart.add_item(_product(), 2)
        assert not cart.update_item(cart.items[0].id, 0)
        assert cart.items[0].quantity == 2

    def test_unknown_item_is_rejected(self):
        cart = _make_cart()
        outcome = cart.update_item("no-such-item", 3)
        assert not outcome
        assert outcome.reason == "Item not found in cart"


class TestRemoveAndClear:
    def test_remove_item(self):
        cart = _make_cart()
        cart.add_item(_product(), 1)
        item_id = cart.items[0].id
        assert cart.remove_item(item_id)
        assert cart.is_empty()
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_remove_unknown_item_is_rejected(self):
        cart = _make_cart()
        assert not cart.remove_item("no-such-item")

    def test_clear(self):
        cart = _make_cart()
        cart.add_item(_product(), 1)
        cart.add_item(_product(name="Chair"), 4)
        cart.clear()
        assert cart.is_empty()
        event = cart._events[-1]
        assert isinstance(event, CartCleared)
        assert event.items_removed == 2


class TestTotal:
    def test_total_sums_current_subtotals(self):
        cart = _make_cart()
        cart.add_item(_product("19.99"), 3)
        cart.add_item(_product("0.10", name="Sticker"), 3)
        assert cart.total() == Decimal("60.27")

    def test_total_follows_price_changes(self):
        cart = _make_cart()
        product = _product("100")
        cart.add_item(product, 2)
        cart.follow_price(product.id, "120")
        assert cart.total() == Decimal("240")


class TestPricing:
    def test_follow_price_raises_event(self):
        cart = _make_cart()
        product = _product("100")
        cart.add_item(product, 3)
        cart._events.clear()

        assert cart.follow_price(product.id, "150")
        event = cart._events[0]
        assert isinstance(event, CartItemPriceChanged)
        assert event.previous_price == "100.00"
        assert event.new_price == "150.00"

    def test_follow_same_price_raises_nothing(self):
        cart = _make_cart()
        product = _product("100")
        cart.add_item(product, 3)
        cart._events.clear()
        assert cart.follow_price(product.id, "100")
        assert cart._events == []

    def test_follow_price_for_absent_product(self):
        cart = _make_cart()
        assert not cart.follow_price("prod-missing", "10")

    def test_refresh_prices(self):
        cart = _make_cart()
        lamp = _product("100")
        chair = _product("50", name="Chair")
        cart.add_item(lamp, 1)
        cart.add_item(chair, 2)

        lamp.change_price("90")
        changed = cart.refresh_prices({str(lamp.id): lamp, str(chair.id): chair})

        assert changed == [str(cart.item_for_product(lamp.id).id)]
        assert cart.total() == Decimal("190")

    def test_invalid_items(self):
        cart = _make_cart()
        lamp = _product()
        chair = _product(name="Chair")
        cart.add_item(lamp, 1)
        cart.add_item(chair, 1)
        chair.mark_as_out_of_stock()

        invalid = cart.invalid_items({str(lamp.id): lamp, str(chair.id): chair})
        assert [str(i.product_id) for i in invalid] == [str(chair.id)]

    def test_missing_product_counts_as_invalid(self):
        cart = _make_cart()
        cart.add_item(_product(), 1)
        assert len(cart.invalid_items({})) == 1


class TestOwnerName:
    def _chain(self):
        user = User.register(username="alice", email="alice@example.com", password="s3cret")
        customer = Customer.register(user_id=user.id, name="Alice")
        cart = Cart.create(customer_id=customer.id)
        return cart, customer, user

    def test_owner_name_is_username(self):
        cart, customer, user = self._chain()
        assert cart.get_owner_name(customer, user) == "alice"

    def test_missing_links_give_empty_name(self):
        cart, customer, user = self._chain()
        assert cart.get_owner_name(None, user) == ""
        assert cart.get_owner_name(customer, None) == ""

    def test_mismatched_customer_gives_empty_name(self):
        cart, _, user = self._chain()
        stranger = Customer.register(user_id=user.id, name="Mallory")
        assert cart.get_owner_name(stranger, user) == ""

    def test_mismatched_user_gives_empty_name(self):
        cart, customer, _ = self._chain()
        other = User.register(username="bob", email="bob@example.com", password="pw")
        assert cart.get_owner_name(customer, other) == ""
