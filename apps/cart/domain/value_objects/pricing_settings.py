"""
Pricing settings value object.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from .money import ZERO


@dataclass(frozen=True)
class PricingSettings:
    """
    Store-wide knobs the pricing pipeline reads.

    Rates are percentages (``10`` means 10%). `packaging_fee` of None
    disables the packaging fee; `max_stock_cart` of None disables the
    per-cart maximum.
    """
    store_discount: Decimal = ZERO
    campaign_ignore_store_discount: bool = False
    infinite_stock: bool = False
    max_stock_cart: Optional[int] = None
    packaging_fee: Optional[Decimal] = None
    card_rate: Decimal = ZERO
    card_rate_medical: Decimal = ZERO
    card_price_ceiling: Optional[Decimal] = None
    extra_product_attributes: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_store_discount(self) -> bool:
        return self.store_discount > 0

    @property
    def has_packaging_fee(self) -> bool:
        return self.packaging_fee is not None and self.packaging_fee > 0
