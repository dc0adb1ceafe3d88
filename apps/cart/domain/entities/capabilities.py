"""
Capabilities shared by checkout aggregates.

`Adjustable` is anything adjustments can be attached to. `Checkoutable`
derives every total from the items and the adjustment ledger; an aggregate
whose state is no longer editable reports the totals frozen when it left
the active states.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

from ..adjustments import Adjustment, AdjustmentLedger, AdjustmentOwner, AdjustmentType
from ..value_objects.money import ZERO, quantize_money, sum_money


class Adjustable(ABC):
    """Target of adjustments (a cart or a cart item)."""

    @property
    @abstractmethod
    def adjustment_owner(self) -> AdjustmentOwner:
        ...


@dataclass(frozen=True)
class CheckoutTotals:
    """Totals captured when an aggregate stops being editable."""
    items_subtotal: Decimal
    items_total: Decimal
    shipping: Decimal
    packaging_fee: Decimal
    total: Decimal
    vat_total: Decimal


class Checkoutable(Adjustable):
    """
    Totals for an aggregate made of items plus an adjustment ledger.

    Implementers provide `items`, `ledger`, `state` and `frozen_totals`.
    Every total satisfies
    ``total() == items_subtotal() + ledger.total()``.
    """

    items: list
    ledger: AdjustmentLedger
    frozen_totals: Optional[CheckoutTotals]

    @property
    @abstractmethod
    def is_editable(self) -> bool:
        ...

    # -- lookups ---------------------------------------------------------

    def adjustment_by_type(self, type: Optional[AdjustmentType]) -> Optional[Adjustment]:
        """First cart-level adjustment of `type`."""
        return self.ledger.by_type(self.adjustment_owner, type)

    def cart_adjustments(self) -> List[Adjustment]:
        return self.ledger.for_owner(self.adjustment_owner)

    def shipping_adjustment(self) -> Optional[Adjustment]:
        return self.adjustment_by_type(AdjustmentType.SHIPPING)

    def free_shipping_coupon_adjustment(self) -> Optional[Adjustment]:
        adjustment = self.adjustment_by_type(AdjustmentType.COUPON_FREE_SHIPPING)
        if adjustment is None:
            for item in self.items:
                adjustment = self.ledger.by_type(item.adjustment_owner, AdjustmentType.COUPON_FREE_SHIPPING)
                if adjustment is not None:
                    break
        return adjustment

    def shipping_display_amount(self) -> Optional[Decimal]:
        """Shipping fee net of a free-shipping coupon, None when not computed."""
        shipping = self.shipping_adjustment()
        if shipping is None:
            return None
        amount = shipping.amount
        coupon = self.free_shipping_coupon_adjustment()
        if coupon is not None:
            amount += coupon.amount
        return amount

    def packaging_fee_adjustment(self) -> Optional[Adjustment]:
        return self.adjustment_by_type(AdjustmentType.FEE_PACKAGING_BAG)

    def client_card_adjustment(self) -> Optional[Adjustment]:
        return self.adjustment_by_type(AdjustmentType.CLIENT_CARD)

    # -- totals ----------------------------------------------------------

    def items_subtotal(self) -> Decimal:
        """Undiscounted value of the lines: captured unit price x quantity."""
        return quantize_money(sum_money(item.subtotal for item in self.items))

    def item_total(self, item) -> Decimal:
        return item.total(self.ledger)

    def items_total(self) -> Decimal:
        if not self.is_editable and self.frozen_totals is not None:
            return self.frozen_totals.items_total
        return quantize_money(sum_money(item.total(self.ledger) for item in self.items))

    def adjustments_total(self) -> Decimal:
        return self.ledger.total()

    def total(self) -> Decimal:
        if not self.is_editable and self.frozen_totals is not None:
            return self.frozen_totals.total
        return quantize_money(self.items_subtotal() + self.ledger.total())

    def shipping_amount(self) -> Decimal:
        if not self.is_editable and self.frozen_totals is not None:
            return self.frozen_totals.shipping
        shipping = self.shipping_adjustment()
        return shipping.amount if shipping is not None else ZERO

    def packaging_fee_amount(self) -> Decimal:
        if not self.is_editable and self.frozen_totals is not None:
            return self.frozen_totals.packaging_fee
        fee = self.packaging_fee_adjustment()
        return fee.amount if fee is not None else ZERO

    def sub_total(self) -> Decimal:
        """Total without shipping and packaging fees."""
        return self.total() - self.shipping_amount() - self.packaging_fee_amount()

    def goods_total(self) -> Decimal:
        """Lines after item-level adjustments, before any cart-level adjustment."""
        return self.items_total()

    def vat_total(self) -> Decimal:
        if not self.is_editable and self.frozen_totals is not None:
            return self.frozen_totals.vat_total
        return quantize_money(sum_money(item.vat_total(self.ledger) for item in self.items))

    def weight(self) -> Decimal:
        return sum_money(item.weight(self.ledger) for item in self.items)

    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def coupon_discount(self) -> Decimal:
        """Absolute value of every coupon adjustment."""
        return abs(sum_money(a.amount for a in self.ledger if a.type.is_coupon))

    def adjustments_totals(self) -> Dict[AdjustmentType, Decimal]:
        return self.ledger.totals_by_type()

    def discount_total(self) -> Decimal:
        """Absolute value of every negative per-type parcel."""
        return abs(sum_money(v for v in self.adjustments_totals().values() if v < 0))

    def capture_totals(self) -> CheckoutTotals:
        return CheckoutTotals(
            items_subtotal=self.items_subtotal(),
            items_total=self.items_total(),
            shipping=self.shipping_amount(),
            packaging_fee=self.packaging_fee_amount(),
            total=self.total(),
            vat_total=self.vat_total(),
        )
