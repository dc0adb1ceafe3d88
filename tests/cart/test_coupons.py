"""
Coupon validation and application tests.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from apps.cart.domain.adjustments import AdjustmentType
from apps.cart.domain.catalog import Coupon, CouponType, DirectDiscount, ShipmentMethod
from apps.cart.domain.events import CouponRejected
from apps.cart.domain.services import CartRecalculator, CouponValidator

from .factories import make_cart, make_product

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def validator():
    return CouponValidator(clock=lambda: NOW)


@pytest.fixture
def recalculator(validator):
    return CartRecalculator(coupon_validator=validator)


def with_coupon(cart, coupon, recalculator):
    cart.attach_coupon(coupon)
    recalculator.recalculate(cart)
    return cart


def percentage(value='10', **kwargs):
    return Coupon(code='SAVE', type=CouponType.PERCENTAGE, value=Decimal(value), **kwargs)


class TestCouponValidator:
    def test_valid_coupon(self, validator):
        cart = make_cart((make_product('50.00'), 1))
        result = validator.validate(percentage(), cart)

        assert result.passed
        assert result.errors() == []

    def test_first_failing_rule_is_reported(self, validator):
        coupon = percentage(
            expires_at=NOW - timedelta(days=1),
            min_order_value=Decimal('100'),
        )
        cart = make_cart((make_product('50.00'), 1))

        result = validator.validate(coupon, cart)

        assert result.fails()
        assert result.rule == 'is_coupon_not_expired'
        assert 'expired' in result.message

    def test_min_order_value(self, validator):
        coupon = percentage(min_order_value=Decimal('100'))
        cart = make_cart((make_product('50.00'), 1))

        assert validator.validate(coupon, cart).rule == 'order_has_min_value'

    def test_not_started(self, validator):
        coupon = percentage(starts_at=NOW + timedelta(hours=1))
        assert validator.validate(coupon, make_cart()).rule == 'is_start_date_valid'

    def test_inactive(self, validator):
        assert validator.validate(percentage(is_active=False), make_cart()).rule == 'is_coupon_active'

    def test_no_uses_left(self, validator):
        assert validator.validate(percentage(uses_left=0), make_cart()).rule == 'has_uses_left'

    def test_per_user_uses(self, validator):
        user_id = uuid4()
        coupon = percentage(uses_per_user=1, user_redemptions={user_id: 1})

        assert validator.validate(coupon, make_cart(user_id=user_id)).rule == 'has_uses_left'
        assert validator.validate(coupon, make_cart(user_id=uuid4())).passed

    def test_restricted_to_users(self, validator):
        user_id = uuid4()
        coupon = percentage(allowed_user_ids=frozenset({user_id}))

        assert validator.validate(coupon, make_cart()).rule == 'is_user_allowed'
        assert validator.validate(coupon, make_cart(), user_id=user_id).passed

    def test_products_must_be_in_cart(self, validator):
        coupon = percentage(product_ids=frozenset({uuid4()}))
        cart = make_cart((make_product(), 1))

        assert validator.validate(coupon, cart).rule == 'can_be_used_with_products'

    def test_not_combinable_with_direct_discounts(self, validator):
        coupon = percentage(combinable_with_discounts=False)
        cart = make_cart((make_product(direct_discount=DirectDiscount(Decimal('5'))), 1))

        assert validator.validate(coupon, cart).rule == 'can_be_used_with_discounts'

    def test_shipping_rules_only_for_free_shipping(self, validator):
        cart = make_cart((make_product(prevents_free_shipping=True), 1))

        free_shipping = Coupon(code='SHIP', type=CouponType.FREE_SHIPPING)
        assert [rule.name for rule in validator.rules_for(percentage(), cart)][-1] == 'can_be_used_with_products'
        assert validator.validate(free_shipping, cart).rule == 'products_allow_free_shipping'


class TestCouponApplication:
    def test_percentage_coupon(self, recalculator):
        cart = with_coupon(make_cart((make_product('50.00'), 1)), percentage(), recalculator)

        assert cart.active_coupon is not None
        assert cart.coupon_discount() == Decimal('5.00')
        assert cart.total() == Decimal('45.00')

    def test_percentage_coupon_on_discounted_price(self, recalculator):
        product = make_product('50.00', direct_discount=DirectDiscount(Decimal('10')))
        cart = with_coupon(make_cart((product, 1)), percentage(), recalculator)

        assert cart.total() == Decimal('40.50')

    def test_product_specific_coupon(self, recalculator):
        covered = make_product('30.00')
        other = make_product('20.00')
        coupon = percentage(product_ids=frozenset({covered.id}))
        cart = with_coupon(make_cart((covered, 1), (other, 1)), coupon, recalculator)

        assert cart.find_item(covered.id).coupon_adjustments(cart.ledger)[0].amount == Decimal('-3.00')
        assert cart.find_item(other.id).coupon_adjustments(cart.ledger) == []

    def test_numeric_coupon_split_across_lines(self, recalculator):
        a = make_product('30.00')
        b = make_product('20.00')
        coupon = Coupon(code='TEN', type=CouponType.NUMERIC, value=Decimal('10'))
        cart = with_coupon(make_cart((a, 1), (b, 1)), coupon, recalculator)

        assert cart.find_item(a.id).coupon_adjustments(cart.ledger)[0].amount == Decimal('-6.00')
        assert cart.find_item(b.id).coupon_adjustments(cart.ledger)[0].amount == Decimal('-4.00')
        assert cart.total() == Decimal('40.00')

    def test_numeric_coupon_rounding_absorbed_by_last_line(self, recalculator):
        products = [make_product('10.00') for _ in range(3)]
        coupon = Coupon(code='TEN', type=CouponType.NUMERIC, value=Decimal('10'))
        cart = with_coupon(make_cart(*[(p, 1) for p in products]), coupon, recalculator)

        amounts = [item.coupon_adjustments(cart.ledger)[0].amount for item in cart.items]
        assert amounts == [Decimal('-3.33'), Decimal('-3.33'), Decimal('-3.34')]
        assert cart.coupon_discount() == Decimal('10.00')

    def test_numeric_coupon_never_exceeds_lines(self, recalculator):
        coupon = Coupon(code='BIG', type=CouponType.NUMERIC, value=Decimal('100'))
        cart = with_coupon(make_cart((make_product('30.00'), 1)), coupon, recalculator)

        assert cart.total() == Decimal('0.00')

    def test_free_shipping_coupon(self, recalculator):
        cart = make_cart((make_product('20.00'), 1))
        cart.set_shipment_method(ShipmentMethod(name='Courier', price=Decimal('4.99')))
        cart.set_country('PT')
        with_coupon(cart, Coupon(code='SHIP', type=CouponType.FREE_SHIPPING), recalculator)

        credit = cart.adjustment_by_type(AdjustmentType.COUPON_FREE_SHIPPING)
        assert credit.amount == Decimal('-4.99')
        assert cart.shipping_amount() == Decimal('4.99')
        assert cart.shipping_display_amount() == Decimal('0.00')
        assert cart.total() == Decimal('20.00')

    def test_free_shipping_coupon_rejected_when_shipping_free(self, recalculator):
        cart = make_cart((make_product('20.00'), 1))
        cart.set_shipment_method(ShipmentMethod(name='Pickup', price=Decimal('0')))
        cart.set_country('PT')
        with_coupon(cart, Coupon(code='SHIP', type=CouponType.FREE_SHIPPING), recalculator)

        assert cart.coupon_validation.rule == 'is_valid_shipping_adjustment'

    def test_free_shipping_coupon_limited_to_countries(self, recalculator):
        cart = make_cart((make_product('20.00'), 1))
        cart.set_shipment_method(ShipmentMethod(name='Courier', price=Decimal('4.99')))
        cart.set_country('ES')
        coupon = Coupon(code='SHIP', type=CouponType.FREE_SHIPPING, countries=frozenset({'PT'}))
        with_coupon(cart, coupon, recalculator)

        assert cart.coupon_validation.rule == 'can_be_used_in_zone'
        assert cart.total() == Decimal('24.99')

    def test_rejected_coupon_leaves_no_adjustment(self, recalculator):
        coupon = percentage(min_order_value=Decimal('100'))
        cart = with_coupon(make_cart((make_product('50.00'), 1)), coupon, recalculator)

        assert cart.coupon is coupon
        assert cart.active_coupon is None
        assert cart.coupon_discount() == Decimal('0')
        rejected = [e for e in cart.domain_events if isinstance(e, CouponRejected)]
        assert rejected[0].rule == 'order_has_min_value'

    def test_coupon_revalidated_after_cart_change(self, recalculator):
        product = make_product('60.00')
        coupon = percentage(min_order_value=Decimal('100'))
        cart = with_coupon(make_cart((product, 2)), coupon, recalculator)
        assert cart.active_coupon is coupon

        cart.set_item_quantity(cart.items[0], 1)
        recalculator.recalculate(cart)

        assert cart.active_coupon is None
        assert cart.total() == Decimal('60.00')

    def test_detach_coupon(self, recalculator):
        cart = with_coupon(make_cart((make_product('50.00'), 1)), percentage(), recalculator)
        cart.detach_coupon()

        assert cart.coupon_discount() == Decimal('0')
        assert cart.total() == Decimal('50.00')
