"""
Adjustment types.
"""
from enum import Enum
from typing import FrozenSet


class AdjustmentType(str, Enum):
    """Closed set of adjustment kinds the engine writes."""
    INTERVAL_DISCOUNT = 'interval_discount'
    DIRECT_DISCOUNT = 'direct_discount'
    STORE_DISCOUNT = 'store_discount'
    DISCOUNT_PERC_NUM = 'discount_perc_num'
    CHEAPEST_FREE = 'cheapest_free'
    SAME_PRODUCT_FREE = 'same_product_free'
    FREE_GIFT_PRODUCT = 'free_gift_product'
    SCALABLE_PERCENTAGE = 'scalable_percentage'
    SHIPPING = 'shipping'
    FEE_PACKAGING_BAG = 'fee_packaging_bag'
    CLIENT_CARD = 'client_card'
    COUPON_PERCENTAGE = 'coupon_percentage'
    COUPON_NUMERIC = 'coupon_numeric'
    COUPON_FREE_SHIPPING = 'coupon_free_shipping'

    @classmethod
    def coupon_types(cls) -> FrozenSet['AdjustmentType']:
        return frozenset({cls.COUPON_PERCENTAGE, cls.COUPON_NUMERIC, cls.COUPON_FREE_SHIPPING})

    @classmethod
    def campaign_types(cls) -> FrozenSet['AdjustmentType']:
        return frozenset({
            cls.DISCOUNT_PERC_NUM,
            cls.CHEAPEST_FREE,
            cls.SAME_PRODUCT_FREE,
            cls.FREE_GIFT_PRODUCT,
            cls.SCALABLE_PERCENTAGE,
        })

    @classmethod
    def visual_separator_types(cls) -> FrozenSet['AdjustmentType']:
        """Free-unit types shown as separate lines; they carry no per-unit discount."""
        return frozenset({cls.CHEAPEST_FREE, cls.SAME_PRODUCT_FREE, cls.FREE_GIFT_PRODUCT})

    @property
    def is_coupon(self) -> bool:
        return self in self.coupon_types()

    @property
    def is_campaign_discount(self) -> bool:
        return self in self.campaign_types()

    @property
    def is_visual_separator(self) -> bool:
        return self in self.visual_separator_types()

    @property
    def label(self) -> str:
        return self.value.replace('_', ' ').capitalize()
