"""
Cart entity (Aggregate Root).
"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional
from uuid import UUID

from shared.domain import AggregateRoot
from ..adjustments import AdjustmentLedger, AdjustmentOwner, AdjustmentType
from ..catalog import Buyable, Card, Coupon, ShipmentMethod
from ..events import CartStateChanged
from ..exceptions import CartItemNotFoundError, CartNotEditableError
from ..value_objects import CartState, CouponValidationResult, ShippingDestination
from .capabilities import CheckoutTotals, Checkoutable
from .cart_item import CartItem

if TYPE_CHECKING:
    from ..services.discount_resolver import DiscountResolution


@dataclass(eq=False)
class Cart(AggregateRoot, Checkoutable):
    """
    Shopping cart.

    The cart owns its items and a single adjustment ledger. Mutating methods
    here only change contents; pricing is rebuilt by the recalculation
    service, which the application layer runs after every mutation.
    """
    user_id: Optional[UUID] = None
    items: List[CartItem] = field(default_factory=list)
    state: CartState = CartState.ACTIVE
    ledger: AdjustmentLedger = field(default_factory=AdjustmentLedger, repr=False)
    coupon: Optional[Coupon] = None
    coupon_validation: Optional[CouponValidationResult] = None
    active_coupon: Optional[Coupon] = None
    shipment_method: Optional[ShipmentMethod] = None
    destination: ShippingDestination = field(default_factory=ShippingDestination)
    card: Optional[Card] = None
    resolution: Optional['DiscountResolution'] = field(default=None, repr=False)
    frozen_totals: Optional[CheckoutTotals] = None

    @classmethod
    def create(cls, user_id: Optional[UUID] = None) -> 'Cart':
        """Create a new, empty cart."""
        return cls(user_id=user_id)

    @property
    def adjustment_owner(self) -> AdjustmentOwner:
        return AdjustmentOwner.cart(self.id)

    @property
    def is_editable(self) -> bool:
        return self.state.is_editable

    def ensure_editable(self, operation: str) -> None:
        if not self.state.is_active:
            raise CartNotEditableError(operation, self.state.value)

    # -- items -----------------------------------------------------------

    def find_item(self, product_id: UUID) -> Optional[CartItem]:
        """Find the line holding a product."""
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def get_item(self, item_id: UUID) -> CartItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise CartItemNotFoundError(str(item_id))

    def has_item(self, product_id: UUID) -> bool:
        return self.find_item(product_id) is not None

    def has_items(self, product_ids: Iterable[UUID]) -> bool:
        return any(self.has_item(product_id) for product_id in product_ids)

    def add_line(
        self,
        product: Buyable,
        quantity: int,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> CartItem:
        """Add units of a product, merging into an existing line."""
        self.ensure_editable('add item to')
        item = self.find_item(product.id)
        if item is not None:
            item.quantity += quantity
            item.touch()
        else:
            item = CartItem.create(product, quantity, attributes)
            self.items.append(item)
        self.touch()
        return item

    def set_item_quantity(self, item: CartItem, quantity: int) -> Optional[CartItem]:
        """Set a line's quantity; zero or less removes the line."""
        self.ensure_editable('update item in')
        if quantity <= 0:
            self.remove_item(item)
            return None
        item.quantity = quantity
        item.touch()
        self.touch()
        return item

    def remove_item(self, item: CartItem) -> None:
        """Remove a line together with its adjustments."""
        self.ensure_editable('remove item from')
        self.items = [i for i in self.items if i.id != item.id]
        self.ledger.clear(item.adjustment_owner)
        self.touch()

    def clear(self) -> None:
        """Remove every line one by one so their adjustments go too."""
        for item in list(self.items):
            self.remove_item(item)

    # -- checkout context ------------------------------------------------

    def attach_coupon(self, coupon: Coupon) -> None:
        """Attach a coupon; it is validated on the next recalculation."""
        self.ensure_editable('apply coupon to')
        if self.coupon is not None and self.coupon.id == coupon.id:
            return
        self.coupon = coupon
        self.coupon_validation = None
        self.active_coupon = None
        self.touch()

    def detach_coupon(self) -> None:
        self.ensure_editable('remove coupon from')
        self.ledger.remove_types(AdjustmentType.coupon_types())
        self.coupon = None
        self.coupon_validation = None
        self.active_coupon = None
        self.touch()

    def set_shipment_method(self, method: Optional[ShipmentMethod]) -> None:
        self.ensure_editable('set shipping on')
        self.shipment_method = method
        self.touch()

    def set_country(self, country: str) -> None:
        self.ensure_editable('set country on')
        self.destination = self.destination.with_country(country)
        self.touch()

    def set_shipping_address(self, postal_code: str, country: Optional[str] = None) -> None:
        self.ensure_editable('set shipping address on')
        destination = self.destination.with_postal_code(postal_code)
        if country is not None:
            destination = destination.with_country(country)
        self.destination = destination
        self.touch()

    def set_card(self, card: Optional[Card]) -> None:
        self.ensure_editable('set card on')
        self.card = card
        self.touch()

    def set_user(self, user_id: Optional[UUID]) -> None:
        self.user_id = user_id
        self.touch()

    @property
    def has_shipping_context(self) -> bool:
        """A method and a destination it can price are both selected."""
        if self.shipment_method is None:
            return False
        if self.shipment_method.is_home_delivery():
            return bool(self.destination.postal_code)
        return bool(self.destination.country)

    # -- lifecycle -------------------------------------------------------

    def _change_state(self, new_state: CartState) -> None:
        old_state = self.state
        if old_state is new_state:
            return
        self.state = new_state
        self.touch()
        if not new_state.is_loading and not old_state.is_loading:
            self.add_domain_event(
                CartStateChanged(
                    cart_id=self.id,
                    old_state=old_state.value,
                    new_state=new_state.value,
                )
            )

    def mark_loading(self) -> CartState:
        """Enter the recalculation guard; returns the state to restore."""
        previous = self.state
        self._change_state(CartState.LOADING)
        return previous

    def reset_state(self, state: CartState = CartState.ACTIVE) -> None:
        self._change_state(state)

    def begin_checkout(self) -> None:
        self.ensure_editable('check out')
        self._change_state(CartState.CHECKOUT)

    def complete(self) -> None:
        """Freeze totals and close the cart."""
        self.ensure_editable('complete')
        self.frozen_totals = self.capture_totals()
        self._change_state(CartState.COMPLETED)

    def abandon(self) -> None:
        self.ensure_editable('abandon')
        self._change_state(CartState.ABANDONED)

    # -- discount diagnostics --------------------------------------------

    @property
    def discounts(self) -> list:
        return list(self.resolution.discounts.values()) if self.resolution else []

    @property
    def applyable_discounts(self) -> list:
        return list(self.resolution.applyable.values()) if self.resolution else []

    @property
    def conflicting_discounts(self) -> list:
        return list(self.resolution.conflicting.values()) if self.resolution else []

    def has_direct_discounts(self) -> bool:
        return any(item.product.valid_direct_discount() for item in self.items)

    def has_discounts_for_products(self, product_ids: Iterable[UUID]) -> bool:
        """Whether an applyable campaign covers any of the products."""
        product_ids = set(product_ids)
        for entry in self.applyable_discounts:
            if any(item.product_id in product_ids for item in entry.items):
                return True
        return False

    def has_direct_discounts_for_products(self, product_ids: Iterable[UUID]) -> bool:
        product_ids = set(product_ids)
        return any(
            item.product_id in product_ids and item.product.valid_direct_discount()
            for item in self.items
        )

    def items_prevent_free_shipping(self) -> bool:
        return any(item.prevents_free_shipping() for item in self.items)

    def items_preventing_free_shipping(self) -> List[CartItem]:
        return [item for item in self.items if item.prevents_free_shipping()]

    # -- display ---------------------------------------------------------

    def items_display(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Lines split for display: chargeable units per line, and the units
        handed out for free as separate lines.
        """
        lines = []
        free = []
        for item in self.items:
            display_quantity = item.quantity
            for adjustment in item.adjustments(self.ledger):
                if not adjustment.type.is_visual_separator:
                    continue
                free_quantity = adjustment.quantity
                if adjustment.type is AdjustmentType.CHEAPEST_FREE:
                    display_quantity -= free_quantity
                free.append({
                    'item_id': item.id,
                    'product_id': item.product_id,
                    'sku': adjustment.get_data('sku', item.product.sku),
                    'type': adjustment.type.value,
                    'display_quantity': free_quantity,
                })
            lines.append({
                'item_id': item.id,
                'product_id': item.product_id,
                'display_quantity': display_quantity,
            })
        return {'cart': lines, 'free': free}
