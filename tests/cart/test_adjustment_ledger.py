"""
Adjustment and ledger tests.
"""
from decimal import Decimal
from uuid import uuid4

import pytest

from apps.cart.domain.adjustments import Adjustment, AdjustmentLedger, AdjustmentOwner, AdjustmentType


@pytest.fixture
def cart_owner():
    return AdjustmentOwner.cart(uuid4())


@pytest.fixture
def item_owner():
    return AdjustmentOwner.item(uuid4())


class TestAdjustment:
    def test_amount_rounded_half_up_on_creation(self, cart_owner):
        adjustment = Adjustment.create(AdjustmentType.SHIPPING, Decimal('2.345'), cart_owner)
        assert adjustment.amount == Decimal('2.35')

    def test_negative_amount_rounded_away_from_zero(self, item_owner):
        adjustment = Adjustment.create(AdjustmentType.DIRECT_DISCOUNT, Decimal('-1.005'), item_owner)
        assert adjustment.amount == Decimal('-1.01')

    def test_title_defaults_to_type_label(self, cart_owner):
        adjustment = Adjustment.create(AdjustmentType.FEE_PACKAGING_BAG, 1, cart_owner)
        assert adjustment.title == 'Fee packaging bag'

    def test_data_accessors(self, item_owner):
        adjustment = Adjustment.create(
            AdjustmentType.CHEAPEST_FREE, -3, item_owner,
            quantity=2, single_amount='1.50',
        )
        assert adjustment.quantity == 2
        assert adjustment.single_amount == Decimal('1.50')
        assert adjustment.get_data('missing', 'x') == 'x'
        assert adjustment.is_credit


class TestAdjustmentLedger:
    def test_total_sums_every_owner(self, cart_owner, item_owner):
        ledger = AdjustmentLedger([
            Adjustment.create(AdjustmentType.SHIPPING, '4.99', cart_owner),
            Adjustment.create(AdjustmentType.DIRECT_DISCOUNT, '-2.00', item_owner),
        ])
        assert ledger.total() == Decimal('2.99')
        assert ledger.total(item_owner) == Decimal('-2.00')
        assert ledger.total(type=AdjustmentType.SHIPPING) == Decimal('4.99')

    def test_by_type_returns_first_match(self, item_owner):
        first = Adjustment.create(AdjustmentType.SCALABLE_PERCENTAGE, '-1', item_owner, level=0)
        second = Adjustment.create(AdjustmentType.SCALABLE_PERCENTAGE, '-2', item_owner, level=1)
        ledger = AdjustmentLedger([first, second])
        assert ledger.by_type(item_owner, AdjustmentType.SCALABLE_PERCENTAGE) is first
        assert ledger.by_type(item_owner, AdjustmentType.SHIPPING) is None

    def test_by_type_without_type_is_programming_error(self, item_owner):
        ledger = AdjustmentLedger()
        with pytest.raises(ValueError):
            ledger.by_type(item_owner, None)
        with pytest.raises(ValueError):
            ledger.all_by_type(None)

    def test_remove_types_strips_coupons_everywhere(self, cart_owner, item_owner):
        ledger = AdjustmentLedger([
            Adjustment.create(AdjustmentType.COUPON_FREE_SHIPPING, '-4.99', cart_owner),
            Adjustment.create(AdjustmentType.COUPON_PERCENTAGE, '-1.00', item_owner),
            Adjustment.create(AdjustmentType.DIRECT_DISCOUNT, '-2.00', item_owner),
        ])
        ledger.remove_types(AdjustmentType.coupon_types())

        assert len(ledger) == 1
        assert [a.type for a in ledger] == [AdjustmentType.DIRECT_DISCOUNT]

    def test_clear_owner_only(self, cart_owner, item_owner):
        ledger = AdjustmentLedger([
            Adjustment.create(AdjustmentType.SHIPPING, '4.99', cart_owner),
            Adjustment.create(AdjustmentType.DIRECT_DISCOUNT, '-2.00', item_owner),
        ])
        ledger.clear(item_owner)
        assert ledger.owners() == [cart_owner]

    def test_totals_by_type_lists_every_type(self, item_owner):
        ledger = AdjustmentLedger([
            Adjustment.create(AdjustmentType.DIRECT_DISCOUNT, '-2.00', item_owner),
            Adjustment.create(AdjustmentType.DIRECT_DISCOUNT, '-1.00', AdjustmentOwner.item(uuid4())),
        ])
        totals = ledger.totals_by_type()
        assert set(totals) == set(AdjustmentType)
        assert totals[AdjustmentType.DIRECT_DISCOUNT] == Decimal('-3.00')
        assert totals[AdjustmentType.SHIPPING] == Decimal('0')

    def test_empty_ledger_is_falsy(self):
        assert not AdjustmentLedger()
        assert AdjustmentLedger().total() == Decimal('0')

    def test_copy_is_independent(self, cart_owner):
        ledger = AdjustmentLedger([Adjustment.create(AdjustmentType.SHIPPING, '1', cart_owner)])
        copy = ledger.copy()
        copy.clear()
        assert len(ledger) == 1
        assert ledger.snapshot() != copy.snapshot()
