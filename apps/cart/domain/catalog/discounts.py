"""
Discount campaign definitions (read-only catalog data).
"""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple
from uuid import UUID


class DiscountTag(str, Enum):
    """Behaviour class of a discount campaign."""
    PERCENTAGE_OR_NUMERIC = 'percentage_or_numeric'
    CHEAPEST_FREE = 'cheapest_free'
    SAME_PRODUCT_FREE = 'same_product_free'
    FREE_GIFT_PRODUCT = 'free_gift_product'
    SCALABLE_PERCENTAGE_TIERED = 'scalable_percentage_tiered'
    CART_WIDE_OFFER = 'cart_wide_offer'

    @classmethod
    def parse(cls, value: str) -> Optional['DiscountTag']:
        """Return the tag for `value`, or None when the tag is unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


class ValueType(str, Enum):
    """How a discount value is read."""
    PERCENTAGE = 'percentage'
    NUMERIC = 'numeric'


@dataclass(frozen=True, eq=False)
class DiscountCampaign:
    """
    A discount campaign as the catalog defines it.

    `tag` is kept as a raw string so campaigns created with a tag this engine
    does not know yet can still be loaded; they are skipped when applied.
    """
    id: UUID
    name: str
    tag: str
    value: Decimal = Decimal('0')
    value_type: ValueType = ValueType.PERCENTAGE
    # buy N (cheapest_free, same_product_free, free_gift_product)
    purchase_number: int = 1
    # free units granted per N bought
    offer_quantity: int = 1
    # grant `offer_quantity` for every N bought instead of once
    repeat: bool = False
    minimum_value: Optional[Decimal] = None
    # scalable_percentage_tiered
    minimum_purchase: int = 1
    levels: Tuple[Decimal, ...] = ()
    highest: bool = False
    # free_gift_product
    gift_sku: Optional[str] = None
    gift_quantity: int = 1
    # stacking
    can_stack_direct_discount: bool = True
    # loyalty card rate override for products of this campaign
    card_rate: Optional[Decimal] = None

    @property
    def discount_tag(self) -> Optional[DiscountTag]:
        return DiscountTag.parse(self.tag)

    def free_units_for(self, quantity: int) -> int:
        """Free units earned by buying `quantity` units of this campaign."""
        if self.purchase_number <= 0 or quantity < self.purchase_number:
            return 0
        if self.repeat:
            return (quantity // self.purchase_number) * self.offer_quantity
        return self.offer_quantity
