"""
Discount application.

Writes the item-level discount adjustments of one recalculation pass in a
fixed order: interval and direct discounts, then campaign entries, then
the store discount.
"""
import logging
from typing import List

from ..adjustments import AdjustmentType
from ..catalog import DiscountTag
from ..entities.cart import Cart
from ..entities.cart_item import CartItem
from ..value_objects import PricingSettings
from .adjusters import (
    CheapestFreeAdjuster,
    DirectDiscountAdjuster,
    FreeGiftProductAdjuster,
    IntervalDiscountAdjuster,
    PercentageOrNumericAdjuster,
    SameProductFreeAdjuster,
    ScalablePercentageAdjuster,
    StoreDiscountAdjuster,
)
from .discount_resolver import DiscountEntry, DiscountResolution

logger = logging.getLogger(__name__)


def build_level_list(campaign, quantity: int) -> List[int]:
    """
    Tier index for each of `quantity` units.

    With `highest` every unit gets the highest tier the quantity reaches.
    Otherwise tiers are dealt round-robin and then ordered by their
    percentage, so the assignment does not depend on item order.
    """
    levels = campaign.levels
    if not levels or quantity <= 0:
        return []
    if campaign.highest:
        max_level = min(quantity, len(levels)) - 1
        return [max_level] * quantity
    level_list = [index % len(levels) for index in range(quantity)]
    return sorted(level_list, key=lambda level: levels[level])


class DiscountApplier:
    """Applies resolved campaign entries and standing discounts to a cart."""

    def __init__(self, settings: PricingSettings):
        self.settings = settings
        self.interval = IntervalDiscountAdjuster()
        self.direct = DirectDiscountAdjuster()
        self.percentage_or_numeric = PercentageOrNumericAdjuster()
        self.cheapest_free = CheapestFreeAdjuster()
        self.same_product_free = SameProductFreeAdjuster()
        self.free_gift = FreeGiftProductAdjuster()
        self.scalable = ScalablePercentageAdjuster()
        self.store = StoreDiscountAdjuster()

    def apply(self, cart: Cart, resolution: DiscountResolution) -> None:
        ledger = cart.ledger
        ledger.remove_types(AdjustmentType.coupon_types())
        ledger.clear()

        for item in cart.items:
            self.apply_standing_discounts(cart, item)

        for entry in resolution.applyable_entries():
            self.apply_entry(cart, entry)

        for item in cart.items:
            self.apply_store_discount(cart, item)

    def apply_standing_discounts(self, cart: Cart, item: CartItem) -> None:
        self._add(cart, self.interval.create(cart, item))

        campaigns = item.product.valid_discount_tree
        if campaigns and not campaigns[0].can_stack_direct_discount:
            return
        self._add(cart, self.direct.create(cart, item))

    def apply_entry(self, cart: Cart, entry: DiscountEntry) -> None:
        """Dispatch one campaign entry by its tag."""
        campaign = entry.campaign
        tag = campaign.discount_tag
        items = [item for item in entry.items if self._stacks_with_campaigns(item)]

        if tag is None:
            logger.debug("Skipping campaign %s with unknown tag '%s'", campaign.name, campaign.tag)
            return
        if tag is DiscountTag.CART_WIDE_OFFER:
            logger.debug("Skipping campaign %s: cart wide offers are not priced", campaign.name)
            return

        if tag is DiscountTag.PERCENTAGE_OR_NUMERIC:
            for item in items:
                self._add(cart, self.percentage_or_numeric.create(cart, item, campaign))

        elif tag is DiscountTag.CHEAPEST_FREE:
            remainder = campaign.free_units_for(entry.quantity)
            for item in items:
                if remainder <= 0:
                    break
                adjustment = self._add(cart, self.cheapest_free.create(cart, item, campaign, remainder))
                if adjustment is not None:
                    remainder = adjustment.get_data('remainder_quantity', 0)

        elif tag is DiscountTag.SAME_PRODUCT_FREE:
            for item in items:
                self._add(cart, self.same_product_free.create(cart, item, campaign))

        elif tag is DiscountTag.FREE_GIFT_PRODUCT:
            if items:
                self._add(cart, self.free_gift.create(cart, items[0], campaign))

        elif tag is DiscountTag.SCALABLE_PERCENTAGE_TIERED:
            level_list = build_level_list(campaign, entry.quantity)
            position = 0
            for item in items:
                unit_price = item.adjusted_price(cart.ledger)
                for _ in range(item.quantity):
                    if position >= len(level_list):
                        break
                    self._add(cart, self.scalable.create(cart, item, campaign, level_list[position], unit_price))
                    position += 1

    def apply_store_discount(self, cart: Cart, item: CartItem) -> None:
        if not self.settings.has_store_discount:
            return
        product = item.product
        if not product.allows_store_discount():
            return
        if self.settings.campaign_ignore_store_discount and (
            product.valid_discount_tree or product.valid_direct_discount()
        ):
            return
        self._add(cart, self.store.create(cart, item, self.settings.store_discount))

    def _stacks_with_campaigns(self, item: CartItem) -> bool:
        product = item.product
        if not product.valid_direct_discount():
            return True
        return product.direct_discount_stacks_with_discounts()

    @staticmethod
    def _add(cart: Cart, adjustment):
        if adjustment is not None:
            cart.ledger.add(adjustment)
        return adjustment
