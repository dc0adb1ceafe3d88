"""
Django cart repository tests.
"""
from decimal import Decimal
from uuid import uuid4

import pytest

from apps.cart.application import CartManager
from apps.cart.domain.catalog import Card, Coupon, CouponType, DirectDiscount, ShipmentMethod
from apps.cart.domain.value_objects import CartState, PricingSettings
from apps.cart.infrastructure.models import AdjustmentModel, CartItemModel, CartModel
from apps.cart.infrastructure.repositories import DjangoCartRepository

from .factories import make_product

pytestmark = pytest.mark.django_db


@pytest.fixture
def repository(catalog):
    return DjangoCartRepository(catalog)


@pytest.fixture
def manager(repository, catalog):
    return CartManager(repository, catalog, PricingSettings(card_rate=Decimal('5')))


@pytest.fixture
def product(catalog):
    product = make_product('20.00', direct_discount=DirectDiscount(Decimal('10')))
    catalog.register_product(product)
    return product


class TestDjangoCartRepository:
    def test_round_trip_keeps_ledger_and_context(self, manager, repository, catalog, product):
        method = ShipmentMethod(name='Courier', price=Decimal('4.00'))
        catalog.register_shipment_method(method)
        catalog.register_coupon(Coupon(code='SAVE', type=CouponType.PERCENTAGE, value=Decimal('10')))
        catalog.register_card(Card(number='0001', current_balance=Decimal('10')))

        manager.add_item(product.id, 2)
        manager.set_shipping(method.id, country='PT')
        manager.apply_coupon('SAVE')
        manager.set_card('0001')
        cart = manager.cart

        loaded = repository.find_by_id(cart.id)

        assert loaded.ledger.snapshot() == cart.ledger.snapshot()
        assert loaded.total() == cart.total()
        assert loaded.shipment_method is method
        assert loaded.destination.country == 'PT'
        assert loaded.card.number == '0001'
        assert loaded.coupon.code == 'SAVE'
        assert loaded.coupon_validation.passed
        assert loaded.active_coupon is not None

    def test_adjustment_rows_replaced_on_save(self, manager, product):
        manager.add_item(product.id, 1)
        manager.remove_product(product.id)

        assert CartItemModel.objects.count() == 0
        assert AdjustmentModel.objects.count() == 0

    def test_failed_coupon_validation_persisted(self, manager, repository, catalog, product):
        catalog.register_coupon(Coupon(
            code='BIG', type=CouponType.PERCENTAGE, value=Decimal('10'), min_order_value=Decimal('500'),
        ))
        manager.add_item(product.id, 1)
        manager.apply_coupon('BIG')

        loaded = repository.find_by_id(manager.cart.id)

        assert loaded.coupon_validation.rule == 'order_has_min_value'
        assert loaded.active_coupon is None

    def test_frozen_totals_persisted(self, manager, repository, product):
        manager.add_item(product.id, 1)
        cart = manager.complete()

        loaded = repository.find_by_id(cart.id)

        assert loaded.state is CartState.COMPLETED
        assert loaded.frozen_totals == cart.frozen_totals
        assert loaded.total() == Decimal('18.00')

    def test_find_by_user_returns_latest_active(self, repository, catalog, product):
        user_id = uuid4()
        older = CartManager(repository, catalog)
        older.create(user_id=user_id)
        older.abandon()
        newer = CartManager(repository, catalog)
        newer.create(user_id=user_id)

        assert repository.find_by_user_id(user_id).id == newer.cart.id

    def test_missing_product_dropped_on_load(self, manager, repository, catalog, product):
        manager.add_item(product.id, 1)
        del catalog.products[product.id]

        loaded = repository.find_by_id(manager.cart.id)

        assert loaded.items == []

    def test_delete(self, manager, repository, product):
        manager.add_item(product.id, 1)

        assert repository.delete(manager.cart.id)
        assert CartModel.objects.count() == 0
        assert repository.find_by_id(manager.cart.id) is None
