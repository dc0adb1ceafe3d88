"""
Coupon rules.

Each rule checks one constraint of the attached coupon against the cart and
returns a `RuleOutcome`. Rules never raise for a failed check.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from ..catalog import Coupon
from ..entities.cart import Cart


@dataclass(frozen=True)
class RuleOutcome:
    passed: bool
    message: str = ''

    @classmethod
    def ok(cls) -> 'RuleOutcome':
        return cls(passed=True)

    @classmethod
    def fail(cls, message: str) -> 'RuleOutcome':
        return cls(passed=False, message=message)


@dataclass(frozen=True)
class CouponContext:
    """What a rule may look at besides the coupon."""
    cart: Cart
    now: datetime
    user_id: Optional[UUID] = None


class CouponRule(ABC):
    """A single coupon constraint."""

    name: str = ''

    @abstractmethod
    def check(self, coupon: Coupon, context: CouponContext) -> RuleOutcome:
        ...


class IsCouponActive(CouponRule):
    name = 'is_coupon_active'

    def check(self, coupon, context):
        if not coupon.is_active:
            return RuleOutcome.fail(f"Coupon '{coupon.code}' is not active.")
        return RuleOutcome.ok()


class IsStartDateValid(CouponRule):
    name = 'is_start_date_valid'

    def check(self, coupon, context):
        if coupon.starts_at is not None and context.now < coupon.starts_at:
            return RuleOutcome.fail(f"Coupon '{coupon.code}' is not valid yet.")
        return RuleOutcome.ok()


class IsCouponNotExpired(CouponRule):
    name = 'is_coupon_not_expired'

    def check(self, coupon, context):
        if coupon.expires_at is not None and context.now > coupon.expires_at:
            return RuleOutcome.fail(f"Coupon '{coupon.code}' has expired.")
        return RuleOutcome.ok()


class HasUsesLeft(CouponRule):
    """Global uses, and per-user uses when a user is known."""

    name = 'has_uses_left'

    def check(self, coupon, context):
        if coupon.uses_left is not None and coupon.uses_left <= 0:
            return RuleOutcome.fail(f"Coupon '{coupon.code}' has no uses left.")
        if (
            context.user_id is not None
            and coupon.uses_per_user is not None
            and coupon.redemptions_by(context.user_id) >= coupon.uses_per_user
        ):
            return RuleOutcome.fail(f"You have already used coupon '{coupon.code}'.")
        return RuleOutcome.ok()


class IsUserAllowed(CouponRule):
    name = 'is_user_allowed'

    def check(self, coupon, context):
        if not coupon.allowed_user_ids:
            return RuleOutcome.ok()
        if context.user_id is None or context.user_id not in coupon.allowed_user_ids:
            return RuleOutcome.fail(f"Coupon '{coupon.code}' is not available for this account.")
        return RuleOutcome.ok()


class OrderHasMinValue(CouponRule):
    name = 'order_has_min_value'

    def check(self, coupon, context):
        if coupon.min_order_value is None:
            return RuleOutcome.ok()
        if context.cart.goods_total() < coupon.min_order_value:
            return RuleOutcome.fail(
                f"Coupon '{coupon.code}' requires a minimum order of {coupon.min_order_value}."
            )
        return RuleOutcome.ok()


class CanBeUsedWithDiscounts(CouponRule):
    name = 'can_be_used_with_discounts'

    def check(self, coupon, context):
        if coupon.combinable_with_discounts:
            return RuleOutcome.ok()
        cart = context.cart
        product_ids = coupon.fetch_valid_product_ids(item.product_id for item in cart.items)
        if cart.has_discounts_for_products(product_ids) or cart.has_direct_discounts_for_products(product_ids):
            return RuleOutcome.fail(
                f"Coupon '{coupon.code}' cannot be combined with other discounts."
            )
        return RuleOutcome.ok()


class CanBeUsedWithProducts(CouponRule):
    name = 'can_be_used_with_products'

    def check(self, coupon, context):
        if coupon.is_specific_to_products() and not context.cart.has_items(coupon.product_ids):
            return RuleOutcome.fail(
                f"Coupon '{coupon.code}' does not apply to the products in your cart."
            )
        return RuleOutcome.ok()


class IsValidShippingAdjustment(CouponRule):
    """There has to be a shipping fee left to waive."""

    name = 'is_valid_shipping_adjustment'

    def check(self, coupon, context):
        shipping = context.cart.shipping_adjustment()
        if shipping is None or shipping.amount <= 0:
            return RuleOutcome.fail("Shipping is already free for this order.")
        return RuleOutcome.ok()


class CanBeUsedInZone(CouponRule):
    name = 'can_be_used_in_zone'

    def check(self, coupon, context):
        country = context.cart.destination.country
        if coupon.countries and country not in coupon.countries:
            return RuleOutcome.fail(
                f"Coupon '{coupon.code}' is not valid for shipping to {country}."
            )
        return RuleOutcome.ok()


class ProductsAllowFreeShipping(CouponRule):
    name = 'products_allow_free_shipping'

    def check(self, coupon, context):
        blocking = context.cart.items_preventing_free_shipping()
        if blocking:
            names = ', '.join(item.product.name for item in blocking)
            return RuleOutcome.fail(f"Free shipping is not available for: {names}.")
        return RuleOutcome.ok()
