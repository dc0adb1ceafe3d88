"""
Cart manager tests.
"""
from dataclasses import replace
from decimal import Decimal
from uuid import uuid4

import pytest

from apps.cart.application import CartManager
from apps.cart.application.cart_manager import MAX_QUANTITY_REACHED, NOT_ENOUGH_STOCK
from apps.cart.domain.catalog import Card, Coupon, CouponType, ShipmentMethod
from apps.cart.domain.exceptions import (
    CardNotFoundError,
    CartItemNotFoundError,
    CartNotEditableError,
    CouponNotFoundError,
    InvalidCartConfigurationError,
    ProductNotFoundError,
    ShipmentMethodNotFoundError,
)
from apps.cart.domain.value_objects import CartState, PricingSettings
from apps.cart.infrastructure.catalog import InMemoryCatalog
from shared.domain import ValidationError

from .factories import InMemoryCartRepository, make_product


@pytest.fixture
def store():
    return InMemoryCatalog()


@pytest.fixture
def repository():
    return InMemoryCartRepository()


@pytest.fixture
def manager_for(store, repository):
    def build(**settings):
        return CartManager(repository, store, PricingSettings(**settings))
    return build


@pytest.fixture
def manager(manager_for):
    return manager_for()


class TestItems:
    def test_add_item_creates_cart(self, manager, repository):
        product = make_product('10.00')

        result = manager.add_item(product, 2)

        assert manager.exists()
        assert result.item.quantity == 2
        assert not result.has_warnings
        assert manager.total() == Decimal('20.00')
        assert repository.find_by_id(manager.cart.id) is manager.cart

    def test_add_same_product_merges_lines(self, manager):
        product = make_product()
        manager.add_item(product, 1)
        manager.add_item(product, 2)

        assert len(manager.get_items()) == 1
        assert manager.item_count() == 3

    def test_add_by_id_uses_catalog(self, manager, store):
        product = make_product()
        store.register_product(product)

        manager.add_item(product.id)

        assert manager.has_item(product.id)

    def test_unknown_product(self, manager):
        with pytest.raises(ProductNotFoundError):
            manager.add_item(uuid4())

    def test_only_simple_products(self, manager):
        with pytest.raises(ValidationError):
            manager.add_item(make_product(simple=False))

    def test_quantity_must_be_positive(self, manager):
        with pytest.raises(ValidationError):
            manager.add_item(make_product(), 0)

    def test_set_quantity_and_remove(self, manager):
        product = make_product('5.00')
        item = manager.add_item(product, 1).item

        manager.set_item_quantity(item.id, 4)
        assert manager.total() == Decimal('20.00')

        result = manager.set_item_quantity(product.id, 0)
        assert result.item is None
        assert manager.is_empty()

    def test_remove_unknown_product(self, manager):
        manager.add_item(make_product(), 1)
        with pytest.raises(CartItemNotFoundError):
            manager.remove_product(uuid4())

    def test_clear(self, manager):
        manager.add_item(make_product(), 1)
        manager.add_item(make_product(), 1)
        manager.clear()

        assert manager.is_empty()
        assert not manager.cart.ledger

    def test_extra_product_attributes(self, manager_for):
        manager = manager_for(extra_product_attributes=('color',))
        product = make_product(attributes={'color': 'red'})

        item = manager.add_item(product, 1, {'engraving': 'A'}).item

        assert item.attributes == {'color': 'red', 'engraving': 'A'}

    @pytest.mark.parametrize('configured', ['color', (1,)])
    def test_malformed_extra_product_attributes(self, manager_for, configured):
        manager = manager_for(extra_product_attributes=configured)
        with pytest.raises(InvalidCartConfigurationError):
            manager.add_item(make_product(), 1)


class TestStock:
    def test_clamped_to_max_per_cart(self, manager_for):
        manager = manager_for(max_stock_cart=5)
        product = make_product(stock=100)
        manager.add_item(product, 4)

        result = manager.add_item(product, 3)

        assert result.item.quantity == 5
        assert result.warning_codes() == [MAX_QUANTITY_REACHED]
        assert result.warnings[0].requested == 7
        assert result.warnings[0].granted == 5

    def test_product_limit_tighter_than_store_limit(self, manager_for):
        manager = manager_for(max_stock_cart=5)
        result = manager.add_item(make_product(stock=100, max_per_cart=2), 3)

        assert result.item.quantity == 2

    def test_clamped_to_stock(self, manager):
        result = manager.add_item(make_product(stock=2), 3)

        assert result.item.quantity == 2
        assert result.warning_codes() == [NOT_ENOUGH_STOCK]

    def test_exact_stock_is_enough(self, manager):
        result = manager.add_item(make_product(stock=3), 3)

        assert result.item.quantity == 3
        assert not result.has_warnings

    def test_out_of_stock_adds_nothing(self, manager):
        result = manager.add_item(make_product(stock=0), 1)

        assert result.item is None
        assert manager.is_empty()
        assert result.warning_codes() == [NOT_ENOUGH_STOCK]

    @pytest.mark.parametrize('stock_left', [0, 1, 2])
    def test_add_keeps_line_when_stock_dropped(self, manager, stock_left):
        product = make_product(stock=5)
        manager.add_item(product, 2)

        result = manager.add_item(replace(product, stock=stock_left), 1)

        assert result.item.quantity == 2
        assert manager.cart.find_item(product.id).quantity == 2
        assert result.warning_codes() == [NOT_ENOUGH_STOCK]

    def test_infinite_stock(self, manager_for):
        manager = manager_for(infinite_stock=True)
        result = manager.add_item(make_product(stock=0), 3)

        assert result.item.quantity == 3

    def test_set_quantity_clamped(self, manager):
        product = make_product(stock=4)
        item = manager.add_item(product, 1).item

        result = manager.set_item_quantity(item, 10)

        assert result.item.quantity == 4
        assert result.warning_codes() == [NOT_ENOUGH_STOCK]


class TestCheckoutContext:
    def test_apply_coupon_by_code(self, manager, store):
        store.register_coupon(Coupon(code='SAVE10', type=CouponType.PERCENTAGE, value=Decimal('10')))
        manager.add_item(make_product('50.00'), 1)

        validation = manager.apply_coupon('save10')

        assert validation.passed
        assert manager.get_active_coupon().code == 'SAVE10'
        assert manager.total() == Decimal('45.00')

        manager.remove_coupon()
        assert manager.get_active_coupon() is None
        assert manager.total() == Decimal('50.00')

    def test_unknown_coupon(self, manager):
        with pytest.raises(CouponNotFoundError):
            manager.apply_coupon('NOPE')

    def test_set_shipping(self, manager, store):
        method = ShipmentMethod(name='Courier', price=Decimal('3.00'))
        store.register_shipment_method(method)
        manager.add_item(make_product('10.00'), 1)

        adjustment = manager.set_shipping(method.id, country='PT')

        assert adjustment.amount == Decimal('3.00')
        assert manager.get_shipping_adjustment() is adjustment
        assert manager.total() == Decimal('13.00')

    def test_unknown_shipment_method(self, manager):
        with pytest.raises(ShipmentMethodNotFoundError):
            manager.set_shipping(uuid4(), country='PT')

    def test_set_card(self, manager_for, store):
        manager = manager_for(card_rate=Decimal('10'))
        store.register_card(Card(number='0001', current_balance=Decimal('5')))
        manager.add_item(make_product('20.00'), 1)

        credit = manager.set_card('0001')

        assert credit.amount == Decimal('-2.00')
        assert manager.set_card(None) is None

    def test_unknown_card(self, manager):
        with pytest.raises(CardNotFoundError):
            manager.set_card('missing')

    def test_user(self, manager):
        user_id = uuid4()
        manager.create()
        manager.set_user(user_id)

        assert manager.get_user() == user_id


class TestLifecycle:
    def test_restore_last_active_cart(self, manager_for, repository):
        user_id = uuid4()
        first = manager_for()
        first.create(user_id=user_id)
        first.add_item(make_product(), 1)

        second = manager_for()
        assert second.restore_last_active_cart(user_id) is first.cart

    def test_complete_freezes_cart(self, manager):
        manager.add_item(make_product('10.00'), 2)
        manager.begin_checkout()
        cart = manager.complete()

        assert cart.state is CartState.COMPLETED
        assert cart.frozen_totals.total == Decimal('20.00')
        with pytest.raises(CartNotEditableError):
            manager.add_item(make_product(), 1)

    def test_abandon(self, manager):
        manager.create()
        assert manager.abandon().state is CartState.ABANDONED

    def test_destroy(self, manager, repository):
        cart = manager.create()
        manager.destroy()

        assert not manager.exists()
        assert repository.find_by_id(cart.id) is None

    def test_recalculate_without_cart(self, manager):
        assert manager.recalculate() is False
