"""
Coupon application.
"""
from typing import List

from ..adjustments import Adjustment, AdjustmentType
from ..catalog import Coupon, CouponType
from ..entities.cart import Cart
from ..entities.cart_item import CartItem
from .adjusters import CouponFreeShippingAdjuster, CouponNumericAdjuster, CouponPercentageAdjuster


class CouponApplier:
    """Writes the adjustments of a validated coupon, dispatched by coupon type."""

    def __init__(self):
        self.percentage = CouponPercentageAdjuster()
        self.numeric = CouponNumericAdjuster()
        self.free_shipping = CouponFreeShippingAdjuster()

    def eligible_items(self, cart: Cart, coupon: Coupon) -> List[CartItem]:
        if not coupon.is_specific_to_products():
            return list(cart.items)
        valid = coupon.fetch_valid_product_ids(item.product_id for item in cart.items)
        return [item for item in cart.items if item.product_id in valid]

    def apply(self, cart: Cart, coupon: Coupon) -> List[Adjustment]:
        cart.ledger.remove_types(AdjustmentType.coupon_types())
        items = self.eligible_items(cart, coupon)

        if coupon.type is CouponType.FREE_SHIPPING:
            adjustment = self.free_shipping.create(cart, coupon)
            adjustments = [adjustment] if adjustment is not None else []
        elif coupon.type is CouponType.NUMERIC:
            adjustments = self.numeric.create_all(cart, items, coupon)
        else:
            adjustments = [self.percentage.create(cart, item, coupon) for item in items]
            adjustments = [a for a in adjustments if a is not None]

        for adjustment in adjustments:
            cart.ledger.add(adjustment)
        return adjustments
