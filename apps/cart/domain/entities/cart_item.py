"""
Cart item entity.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from shared.domain import BaseEntity
from ..adjustments import Adjustment, AdjustmentLedger, AdjustmentOwner, AdjustmentType
from ..catalog import Buyable
from ..value_objects.money import ZERO, extract_vat, quantize_money, to_decimal
from .capabilities import Adjustable


@dataclass(eq=False)
class CartItem(BaseEntity, Adjustable):
    """
    A cart line.

    The unit price is captured when the product is added. Item-level
    adjustments live in the cart's ledger under this item's owner key, so
    every priced helper takes that ledger.
    """
    product: Buyable
    quantity: int
    price_vat: Decimal
    attributes: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.price_vat = to_decimal(self.price_vat)
        if self.quantity < 0:
            raise ValueError("Cart item quantity cannot be negative")

    @classmethod
    def create(
        cls,
        product: Buyable,
        quantity: int,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> 'CartItem':
        """Create a line capturing the product's current VAT-inclusive price."""
        return cls(
            product=product,
            quantity=quantity,
            price_vat=product.get_price_vat(),
            attributes=dict(attributes or {}),
        )

    @property
    def adjustment_owner(self) -> AdjustmentOwner:
        return AdjustmentOwner.item(self.id)

    @property
    def product_id(self) -> UUID:
        return self.product.id

    @property
    def subtotal(self) -> Decimal:
        """Undiscounted line value."""
        return self.price_vat * self.quantity

    def adjustments(self, ledger: AdjustmentLedger) -> List[Adjustment]:
        return ledger.for_owner(self.adjustment_owner)

    def adjustment_by_type(self, ledger: AdjustmentLedger, type: Optional[AdjustmentType]) -> Optional[Adjustment]:
        return ledger.by_type(self.adjustment_owner, type)

    def free_quantity(self, ledger: AdjustmentLedger) -> int:
        """Units given away by cheapest-free adjustments."""
        return sum(
            a.quantity for a in self.adjustments(ledger)
            if a.type is AdjustmentType.CHEAPEST_FREE
        )

    def effective_quantity(self, ledger: AdjustmentLedger) -> int:
        """Chargeable quantity: stored quantity minus units made free."""
        return self.quantity - self.free_quantity(ledger)

    def adjustments_total(self, ledger: AdjustmentLedger) -> Decimal:
        return ledger.total(self.adjustment_owner)

    def total(self, ledger: AdjustmentLedger) -> Decimal:
        return self.subtotal + self.adjustments_total(ledger)

    def adjusted_price(self, ledger: AdjustmentLedger) -> Decimal:
        """Current price of one chargeable unit after the item's adjustments."""
        chargeable = self.effective_quantity(ledger)
        if chargeable <= 0:
            return ZERO
        return max(self.total(ledger) / chargeable, ZERO)

    def vat_total(self, ledger: AdjustmentLedger) -> Decimal:
        return extract_vat(self.total(ledger), self.product.get_vat())

    def weight(self, ledger: Optional[AdjustmentLedger] = None) -> Decimal:
        quantity = self.effective_quantity(ledger) if ledger is not None else self.quantity
        return to_decimal(self.product.weight or ZERO) * quantity

    def prevents_free_shipping(self) -> bool:
        return bool(self.product.prevents_free_shipping)

    def is_medical(self) -> bool:
        return bool(self.product.is_medical)

    def campaign_adjustments(self, ledger: AdjustmentLedger) -> List[Adjustment]:
        return [a for a in self.adjustments(ledger) if a.type.is_campaign_discount]

    def coupon_adjustments(self, ledger: AdjustmentLedger) -> List[Adjustment]:
        return [a for a in self.adjustments(ledger) if a.type.is_coupon]

    def price_summary(self, ledger: AdjustmentLedger) -> Dict[str, Decimal]:
        return {
            'price_unit': quantize_money(self.price_vat),
            'price_adjusted': quantize_money(self.adjusted_price(ledger)),
            'total': quantize_money(self.total(ledger)),
        }
