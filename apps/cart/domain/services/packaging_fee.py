"""
Packaging fee calculation.
"""
from typing import Optional

from ..adjustments import Adjustment, AdjustmentType
from ..entities.cart import Cart
from ..value_objects import PricingSettings


class PackagingFeeCalculator:
    """Cart-level packaging bag fee, charged when the setting holds a value."""

    def __init__(self, settings: PricingSettings):
        self.settings = settings

    def calculate(self, cart: Cart) -> Optional[Adjustment]:
        if not self.settings.has_packaging_fee:
            return None
        adjustment = Adjustment.create(
            AdjustmentType.FEE_PACKAGING_BAG,
            self.settings.packaging_fee,
            cart.adjustment_owner,
        )
        cart.ledger.remove_type(cart.adjustment_owner, AdjustmentType.FEE_PACKAGING_BAG)
        cart.ledger.add(adjustment)
        return adjustment
