"""
Cart DTOs.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from ...domain.adjustments import Adjustment
from ...domain.entities import Cart, CartItem
from ...domain.value_objects import quantize_money


@dataclass
class AdjustmentDTO:
    """DTO for adjustment output."""
    type: str
    title: str
    amount: Decimal
    data: Dict[str, Any]

    @classmethod
    def from_adjustment(cls, adjustment: Adjustment) -> 'AdjustmentDTO':
        return cls(
            type=adjustment.type.value,
            title=adjustment.title,
            amount=adjustment.amount,
            data=dict(adjustment.data),
        )


@dataclass
class CartItemDTO:
    """DTO for cart line output."""
    id: UUID
    product_id: UUID
    sku: Optional[str]
    name: Optional[str]
    quantity: int
    effective_quantity: int
    price_vat: Decimal
    adjusted_price: Decimal
    total: Decimal
    attributes: Dict[str, Any]
    adjustments: List[AdjustmentDTO]

    @classmethod
    def from_entity(cls, item: CartItem, cart: Cart) -> 'CartItemDTO':
        ledger = cart.ledger
        summary = item.price_summary(ledger)
        return cls(
            id=item.id,
            product_id=item.product_id,
            sku=item.product.sku,
            name=item.product.name,
            quantity=item.quantity,
            effective_quantity=item.effective_quantity(ledger),
            price_vat=summary['price_unit'],
            adjusted_price=summary['price_adjusted'],
            total=summary['total'],
            attributes=dict(item.attributes),
            adjustments=[AdjustmentDTO.from_adjustment(a) for a in item.adjustments(ledger)],
        )


@dataclass
class CouponStatusDTO:
    """DTO for the attached coupon and its validation outcome."""
    code: str
    active: bool
    rule: Optional[str] = None
    message: str = ''


@dataclass
class CartWarningDTO:
    code: str
    message: str
    requested: int
    granted: int


@dataclass
class CartDTO:
    """DTO for cart output."""
    id: UUID
    user_id: Optional[UUID]
    state: str
    items: List[CartItemDTO]
    free_items: List[Dict[str, Any]]
    adjustments: List[AdjustmentDTO]
    items_subtotal: Decimal
    items_total: Decimal
    shipping: Decimal
    shipping_display: Optional[Decimal]
    packaging_fee: Decimal
    discount_total: Decimal
    coupon_discount: Decimal
    sub_total: Decimal
    vat_total: Decimal
    total: Decimal
    item_count: int
    country: Optional[str]
    postal_code: Optional[str]
    shipment_method_id: Optional[UUID]
    card_number: Optional[str]
    coupon: Optional[CouponStatusDTO]
    created_at: datetime
    updated_at: datetime
    warnings: List[CartWarningDTO] = field(default_factory=list)

    @classmethod
    def from_entity(cls, cart: Cart, warnings=()) -> 'CartDTO':
        coupon = None
        if cart.coupon is not None:
            validation = cart.coupon_validation
            coupon = CouponStatusDTO(
                code=cart.coupon.code,
                active=cart.active_coupon is not None,
                rule=validation.rule if validation else None,
                message=validation.message if validation else '',
            )
        shipping_display = cart.shipping_display_amount()

        return cls(
            id=cart.id,
            user_id=cart.user_id,
            state=cart.state.value,
            items=[CartItemDTO.from_entity(item, cart) for item in cart.items],
            free_items=cart.items_display()['free'],
            adjustments=[AdjustmentDTO.from_adjustment(a) for a in cart.cart_adjustments()],
            items_subtotal=cart.items_subtotal(),
            items_total=cart.items_total(),
            shipping=cart.shipping_amount(),
            shipping_display=quantize_money(shipping_display) if shipping_display is not None else None,
            packaging_fee=cart.packaging_fee_amount(),
            discount_total=cart.discount_total(),
            coupon_discount=cart.coupon_discount(),
            sub_total=cart.sub_total(),
            vat_total=cart.vat_total(),
            total=cart.total(),
            item_count=cart.item_count(),
            country=cart.destination.country,
            postal_code=cart.destination.postal_code,
            shipment_method_id=cart.shipment_method.id if cart.shipment_method else None,
            card_number=cart.card.number if cart.card else None,
            coupon=coupon,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
            warnings=[
                CartWarningDTO(code=w.code, message=w.message, requested=w.requested, granted=w.granted)
                for w in warnings
            ],
        )
