"""
Adjusters.

One adjuster per adjustment kind. Each builds an `Adjustment` from the
cart's current ledger without adding it; callers decide where it goes.
Item-level discounts are taken from the item's adjusted unit price, so
discounts applied earlier in a pass narrow the base of later ones and a
unit never goes below zero.
"""
from abc import ABC
from decimal import Decimal
from typing import List, Optional

from ..adjustments import Adjustment, AdjustmentType
from ..catalog import Coupon, DiscountCampaign, ValueType
from ..entities.capabilities import Checkoutable
from ..entities.cart_item import CartItem
from ..value_objects.money import ZERO, percentage_of, quantize_money, sum_money, to_decimal


def ensure_checkoutable(adjustable) -> Checkoutable:
    """Item-level adjusters only accept a cart-like aggregate."""
    if not isinstance(adjustable, Checkoutable):
        raise TypeError(
            f"Argument must be an instance of Checkoutable, {type(adjustable).__name__} given"
        )
    return adjustable


def unit_reduction(unit_price: Decimal, value: Decimal, value_type: ValueType) -> Decimal:
    """Reduction of one unit for a percentage or numeric value, capped at the unit price."""
    if unit_price <= 0:
        return ZERO
    if value_type is ValueType.PERCENTAGE:
        reduction = percentage_of(unit_price, value)
    else:
        reduction = to_decimal(value)
    return min(max(reduction, ZERO), unit_price)


class Adjuster(ABC):
    """Base adjuster: knows its type and how to stamp an adjustment."""

    type: AdjustmentType

    def build(self, amount, owner, **data) -> Adjustment:
        return Adjustment.create(self.type, amount, owner, **data)


class ItemDiscountAdjuster(Adjuster):
    """Shared path for discounts that lower every chargeable unit of an item."""

    def discount_item(self, cart, item: CartItem, single_amount: Decimal, **data) -> Optional[Adjustment]:
        cart = ensure_checkoutable(cart)
        quantity = item.effective_quantity(cart.ledger)
        if single_amount <= 0 or quantity <= 0:
            return None
        return self.build(
            -(single_amount * quantity),
            item.adjustment_owner,
            single_amount=str(quantize_money(single_amount)),
            quantity=quantity,
            **data,
        )


class IntervalDiscountAdjuster(ItemDiscountAdjuster):
    """Quantity-break unit price looked up by effective quantity."""

    type = AdjustmentType.INTERVAL_DISCOUNT

    def create(self, cart, item: CartItem) -> Optional[Adjustment]:
        cart = ensure_checkoutable(cart)
        interval_price = item.product.get_interval(item.effective_quantity(cart.ledger))
        if interval_price is None:
            return None
        interval_price = to_decimal(interval_price)
        return self.discount_item(
            cart, item, item.price_vat - interval_price,
            interval_price=str(interval_price),
        )


class DirectDiscountAdjuster(ItemDiscountAdjuster):
    type = AdjustmentType.DIRECT_DISCOUNT

    def create(self, cart, item: CartItem) -> Optional[Adjustment]:
        cart = ensure_checkoutable(cart)
        direct = item.product.valid_direct_discount()
        if direct is None:
            return None
        single = unit_reduction(item.adjusted_price(cart.ledger), direct.value, direct.value_type)
        return self.discount_item(
            cart, item, single,
            value=str(direct.value),
            value_type=direct.value_type.value,
        )


class PercentageOrNumericAdjuster(ItemDiscountAdjuster):
    type = AdjustmentType.DISCOUNT_PERC_NUM

    def create(self, cart, item: CartItem, campaign: DiscountCampaign) -> Optional[Adjustment]:
        cart = ensure_checkoutable(cart)
        single = unit_reduction(item.adjusted_price(cart.ledger), campaign.value, campaign.value_type)
        return self.discount_item(
            cart, item, single,
            campaign_id=str(campaign.id),
            value=str(campaign.value),
            value_type=campaign.value_type.value,
        )


class CheapestFreeAdjuster(Adjuster):
    """
    Buy N, get the cheapest units free.

    `remainder` is the free-unit allowance still to hand out; the returned
    adjustment records how much of it is left in `remainder_quantity`.
    """

    type = AdjustmentType.CHEAPEST_FREE

    def create(self, cart, item: CartItem, campaign: DiscountCampaign, remainder: int) -> Optional[Adjustment]:
        cart = ensure_checkoutable(cart)
        free = min(remainder, item.effective_quantity(cart.ledger))
        if free <= 0:
            return None
        unit_price = item.adjusted_price(cart.ledger)
        return self.build(
            -(unit_price * free),
            item.adjustment_owner,
            campaign_id=str(campaign.id),
            quantity=free,
            remainder_quantity=remainder - free,
            sku=item.product.sku,
        )


class SameProductFreeAdjuster(Adjuster):
    """Free units of the same product on top of the ones bought."""

    type = AdjustmentType.SAME_PRODUCT_FREE

    def create(self, cart, item: CartItem, campaign: DiscountCampaign) -> Optional[Adjustment]:
        ensure_checkoutable(cart)
        free = campaign.free_units_for(item.quantity)
        if free <= 0:
            return None
        return self.build(
            ZERO,
            item.adjustment_owner,
            campaign_id=str(campaign.id),
            quantity=free,
            sku=item.product.sku,
        )


class FreeGiftProductAdjuster(Adjuster):
    """A configured gift product, granted once per campaign entry."""

    type = AdjustmentType.FREE_GIFT_PRODUCT

    def create(self, cart, item: CartItem, campaign: DiscountCampaign) -> Adjustment:
        ensure_checkoutable(cart)
        return self.build(
            ZERO,
            item.adjustment_owner,
            campaign_id=str(campaign.id),
            quantity=campaign.gift_quantity,
            sku=campaign.gift_sku,
        )


class ScalablePercentageAdjuster(Adjuster):
    """Discount on one unit at the percentage of its assigned tier."""

    type = AdjustmentType.SCALABLE_PERCENTAGE

    def create(
        self,
        cart,
        item: CartItem,
        campaign: DiscountCampaign,
        level: int,
        unit_price: Decimal,
    ) -> Adjustment:
        ensure_checkoutable(cart)
        percentage = campaign.levels[level]
        single = unit_reduction(unit_price, percentage, ValueType.PERCENTAGE)
        return self.build(
            -single,
            item.adjustment_owner,
            campaign_id=str(campaign.id),
            level=level,
            percentage=str(percentage),
        )


class StoreDiscountAdjuster(ItemDiscountAdjuster):
    type = AdjustmentType.STORE_DISCOUNT

    def create(self, cart, item: CartItem, percentage: Decimal) -> Optional[Adjustment]:
        cart = ensure_checkoutable(cart)
        single = unit_reduction(item.adjusted_price(cart.ledger), percentage, ValueType.PERCENTAGE)
        return self.discount_item(cart, item, single, percentage=str(percentage))


class CouponPercentageAdjuster(Adjuster):
    type = AdjustmentType.COUPON_PERCENTAGE

    def create(self, cart, item: CartItem, coupon: Coupon) -> Optional[Adjustment]:
        cart = ensure_checkoutable(cart)
        line_total = max(item.total(cart.ledger), ZERO)
        amount = min(percentage_of(line_total, coupon.value), line_total)
        if amount <= 0:
            return None
        return self.build(-amount, item.adjustment_owner, coupon_code=coupon.code)


class CouponNumericAdjuster(Adjuster):
    """
    Fixed coupon value spread over the eligible lines in proportion to
    their totals. The last line absorbs the rounding so the parts add up to
    the discount, which never exceeds what the lines are worth.
    """

    type = AdjustmentType.COUPON_NUMERIC

    def create_all(self, cart, items: List[CartItem], coupon: Coupon) -> List[Adjustment]:
        cart = ensure_checkoutable(cart)
        totals = [(item, max(item.total(cart.ledger), ZERO)) for item in items]
        totals = [(item, total) for item, total in totals if total > 0]
        lines_value = sum_money(total for _, total in totals)
        if lines_value <= 0:
            return []

        discount = quantize_money(min(to_decimal(coupon.value), lines_value))
        adjustments = []
        allocated = ZERO
        for index, (item, total) in enumerate(totals):
            if index == len(totals) - 1:
                share = discount - allocated
            else:
                share = quantize_money(discount * total / lines_value)
            share = min(share, total)
            allocated += share
            if share > 0:
                adjustments.append(
                    self.build(-share, item.adjustment_owner, coupon_code=coupon.code)
                )
        return adjustments


class CouponFreeShippingAdjuster(Adjuster):
    """Cart-level credit cancelling the shipping fee."""

    type = AdjustmentType.COUPON_FREE_SHIPPING

    def create(self, cart, coupon: Coupon) -> Optional[Adjustment]:
        cart = ensure_checkoutable(cart)
        shipping = cart.shipping_adjustment()
        if shipping is None or shipping.amount <= 0:
            return None
        return self.build(-shipping.amount, cart.adjustment_owner, coupon_code=coupon.code)
