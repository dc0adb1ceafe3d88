"""
Coupon validator.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional
from uuid import UUID

from shared.domain import utc_now
from ..catalog import Coupon
from ..entities.cart import Cart
from ..value_objects import CouponValidationResult
from .coupon_rules import (
    CanBeUsedInZone,
    CanBeUsedWithDiscounts,
    CanBeUsedWithProducts,
    CouponContext,
    CouponRule,
    HasUsesLeft,
    IsCouponActive,
    IsCouponNotExpired,
    IsStartDateValid,
    IsUserAllowed,
    IsValidShippingAdjustment,
    OrderHasMinValue,
    ProductsAllowFreeShipping,
)

logger = logging.getLogger(__name__)


class CouponValidator:
    """
    Runs the coupon rule chain and stops at the first failing rule.

    The order of the rules is observable: when several constraints fail the
    reported reason is the one checked first.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock

    def rules_for(self, coupon: Coupon, cart: Cart) -> List[CouponRule]:
        rules: List[CouponRule] = [
            IsCouponActive(),
            IsStartDateValid(),
            IsCouponNotExpired(),
            HasUsesLeft(),
            IsUserAllowed(),
            OrderHasMinValue(),
            CanBeUsedWithDiscounts(),
            CanBeUsedWithProducts(),
        ]
        if coupon.is_free_shipping:
            if cart.shipping_adjustment() is not None:
                rules.append(IsValidShippingAdjustment())
            if cart.shipment_method is not None and cart.destination.country:
                rules.append(CanBeUsedInZone())
            rules.append(ProductsAllowFreeShipping())
        return rules

    def validate(self, coupon: Coupon, cart: Cart, user_id: Optional[UUID] = None) -> CouponValidationResult:
        context = CouponContext(
            cart=cart,
            now=self.clock(),
            user_id=user_id if user_id is not None else cart.user_id,
        )
        for rule in self.rules_for(coupon, cart):
            outcome = rule.check(coupon, context)
            if not outcome.passed:
                logger.info("Coupon %s rejected by %s: %s", coupon.code, rule.name, outcome.message)
                return CouponValidationResult.failure(coupon.code, rule.name, outcome.message)

        logger.info("Coupon %s accepted for cart %s", coupon.code, cart.id)
        return CouponValidationResult.success(coupon.code)
