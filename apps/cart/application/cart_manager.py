"""
Cart manager.

Application service exposing the cart operations. Every mutation is
followed by a full recalculation and a save, so callers always read a
ledger that matches the cart's contents.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
from uuid import UUID

from shared.domain import ValidationError
from ..domain.adjustments import Adjustment
from ..domain.catalog import Buyable, Card, CatalogGateway, Coupon, ShipmentMethod
from ..domain.entities import Cart, CartItem
from ..domain.exceptions import (
    CardNotFoundError,
    CartItemNotFoundError,
    CouponNotFoundError,
    InvalidCartConfigurationError,
    ProductNotFoundError,
    ShipmentMethodNotFoundError,
)
from ..domain.repositories import CartRepository
from ..domain.services import CartRecalculator
from ..domain.value_objects import CouponValidationResult, PricingSettings, ZERO

logger = logging.getLogger(__name__)

EXTRA_PRODUCT_ATTRIBUTES_SETTING = 'CART_EXTRA_PRODUCT_ATTRIBUTES'

NOT_ENOUGH_STOCK = 'not-enough-stock'
MAX_QUANTITY_REACHED = 'max-quantity-reached'


@dataclass(frozen=True)
class CartWarning:
    """Non-fatal problem met while changing a line; the quantity was clamped."""
    code: str
    message: str
    requested: int
    granted: int


@dataclass
class ItemChangeResult:
    """The line after a change (None when it is gone) and any warnings."""
    item: Optional[CartItem]
    warnings: List[CartWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def warning_codes(self) -> List[str]:
        return [warning.code for warning in self.warnings]


class StockPolicy:
    """
    Clamps requested quantities.

    A request is short of stock when the requested total is strictly
    greater than the stock. Infinite stock skips that check but still
    honours the per-cart maximum.
    """

    def __init__(self, settings: PricingSettings):
        self.settings = settings

    def max_per_cart(self, product: Buyable) -> Optional[int]:
        limits = [
            limit for limit in (self.settings.max_stock_cart, product.max_per_cart)
            if limit is not None
        ]
        return min(limits) if limits else None

    def clamp(self, product: Buyable, requested: int) -> Tuple[int, List[CartWarning]]:
        granted = requested
        warnings = []

        if not self.settings.infinite_stock:
            stock = max(product.get_stock(), 0)
            if granted > stock:
                granted = stock
                warnings.append(CartWarning(
                    code=NOT_ENOUGH_STOCK,
                    message=f"Only {stock} units in stock",
                    requested=requested,
                    granted=granted,
                ))

        limit = self.max_per_cart(product)
        if limit is not None and granted > limit:
            granted = limit
            warnings.append(CartWarning(
                code=MAX_QUANTITY_REACHED,
                message=f"At most {limit} units per cart",
                requested=requested,
                granted=granted,
            ))

        if warnings:
            logger.warning(
                "Clamped %s from %d to %d units (%s)",
                product.sku, requested, granted,
                ', '.join(w.code for w in warnings),
            )
        return granted, warnings


class CartManager:
    """Operations on one cart, loaded from or created through the repository."""

    def __init__(
        self,
        repository: CartRepository,
        catalog: CatalogGateway,
        settings: Optional[PricingSettings] = None,
        recalculator: Optional[CartRecalculator] = None,
        cart: Optional[Cart] = None,
    ):
        self.repository = repository
        self.catalog = catalog
        self.settings = settings or PricingSettings()
        self.recalculator = recalculator or CartRecalculator(
            self.settings,
            postal_codes=catalog.postal_codes,
        )
        self.stock_policy = StockPolicy(self.settings)
        self._cart = cart

    # -- cart lifecycle --------------------------------------------------

    @property
    def cart(self) -> Optional[Cart]:
        return self._cart

    def exists(self) -> bool:
        return self._cart is not None

    def create(self, user_id: Optional[UUID] = None, force: bool = False) -> Cart:
        if self._cart is not None and not force:
            return self._cart
        self._cart = self.repository.save(Cart.create(user_id=user_id))
        return self._cart

    def find_or_create(self) -> Cart:
        return self._cart or self.create()

    def restore_last_active_cart(self, user_id: UUID) -> Optional[Cart]:
        cart = self.repository.find_by_user_id(user_id)
        if cart is not None:
            self._cart = cart
        return cart

    def destroy(self) -> None:
        if self._cart is None:
            return
        self.repository.delete(self._cart.id)
        self._cart = None

    def recalculate(self) -> bool:
        if self._cart is None:
            return False
        return self._commit(self._cart)

    def _commit(self, cart: Cart) -> bool:
        recalculated = self.recalculator.recalculate(cart)
        self._cart = self.repository.save(cart)
        return recalculated

    # -- items -----------------------------------------------------------

    def extra_product_attributes(self, product: Buyable) -> Dict[str, Any]:
        """Product attributes copied onto new lines, as configured."""
        configured = self.settings.extra_product_attributes
        if not isinstance(configured, (list, tuple)):
            raise InvalidCartConfigurationError(
                f"The value of `{EXTRA_PRODUCT_ATTRIBUTES_SETTING}` must be a list",
                setting=EXTRA_PRODUCT_ATTRIBUTES_SETTING,
            )
        attributes = {}
        for name in configured:
            if not isinstance(name, str):
                raise InvalidCartConfigurationError(
                    f"`{EXTRA_PRODUCT_ATTRIBUTES_SETTING}` can only contain strings, "
                    f"`{type(name).__name__}` given",
                    setting=EXTRA_PRODUCT_ATTRIBUTES_SETTING,
                )
            attributes[name] = product.get_attribute(name)
        return attributes

    def add_item(
        self,
        product: Union[Buyable, UUID],
        quantity: int = 1,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> ItemChangeResult:
        product = self._product(product)
        if quantity <= 0:
            raise ValidationError("Quantity must be at least 1", field='quantity')
        if not product.is_simple_product():
            raise ValidationError("Only simple products can be added to the cart", field='product')
        merged = {**self.extra_product_attributes(product), **(attributes or {})}

        cart = self.find_or_create()
        cart.ensure_editable('add item to')
        item = cart.find_item(product.id)
        current = item.quantity if item is not None else 0
        granted, warnings = self.stock_policy.clamp(product, current + quantity)

        if item is not None:
            # an add never shrinks or drops what the line already holds
            if granted <= current:
                return ItemChangeResult(item=item, warnings=warnings)
            item = cart.set_item_quantity(item, granted)
        elif granted > 0:
            item = cart.add_line(product, granted, merged)

        self._commit(cart)
        return ItemChangeResult(item=item, warnings=warnings)

    def set_item_quantity(self, item: Union[CartItem, UUID], quantity: int) -> ItemChangeResult:
        """Set a line's quantity; zero removes it. `item` may be a line, line id or product id."""
        cart = self._require_cart()
        item = self._resolve_item(cart, item)
        if quantity <= 0:
            cart.remove_item(item)
            self._commit(cart)
            return ItemChangeResult(item=None)

        granted, warnings = self.stock_policy.clamp(item.product, quantity)
        item = cart.set_item_quantity(item, granted)
        self._commit(cart)
        return ItemChangeResult(item=item, warnings=warnings)

    def remove_item(self, item: Union[CartItem, UUID]) -> None:
        cart = self._require_cart()
        cart.remove_item(self._resolve_item(cart, item))
        self._commit(cart)

    def remove_product(self, product: Union[Buyable, UUID]) -> None:
        cart = self._require_cart()
        product_id = product if isinstance(product, UUID) else product.id
        item = cart.find_item(product_id)
        if item is None:
            raise CartItemNotFoundError(str(product_id))
        cart.remove_item(item)
        self._commit(cart)

    def clear(self) -> None:
        if self._cart is None:
            return
        self._cart.clear()
        self._commit(self._cart)

    # -- coupon ----------------------------------------------------------

    def apply_coupon(self, coupon: Union[Coupon, str]) -> CouponValidationResult:
        """Attach a coupon and report how validation went."""
        if isinstance(coupon, str):
            code = coupon
            coupon = self.catalog.get_coupon_by_code(code)
            if coupon is None:
                raise CouponNotFoundError(code)
        cart = self.find_or_create()
        cart.attach_coupon(coupon)
        self._commit(cart)
        return cart.coupon_validation

    def remove_coupon(self) -> None:
        cart = self._require_cart()
        cart.detach_coupon()
        self._commit(cart)

    def get_active_coupon(self) -> Optional[Coupon]:
        return self._cart.active_coupon if self._cart else None

    def validator(self) -> Optional[CouponValidationResult]:
        """Result of the last coupon validation, if a coupon is attached."""
        return self._cart.coupon_validation if self._cart else None

    # -- shipping, card, user --------------------------------------------

    def set_shipping(
        self,
        method: Union[ShipmentMethod, UUID, None],
        country: Optional[str] = None,
        postal_code: Optional[str] = None,
    ) -> Optional[Adjustment]:
        cart = self._require_cart()
        if isinstance(method, UUID):
            method_id = method
            method = self.catalog.get_shipment_method(method_id)
            if method is None:
                raise ShipmentMethodNotFoundError(str(method_id))
        cart.set_shipment_method(method)
        if postal_code:
            cart.set_shipping_address(postal_code, country)
        elif country:
            cart.set_country(country)
        self._commit(cart)
        return cart.shipping_adjustment()

    def set_country(self, country: str) -> None:
        cart = self._require_cart()
        cart.set_country(country)
        self._commit(cart)

    def set_shipping_address(self, postal_code: str, country: Optional[str] = None) -> None:
        cart = self._require_cart()
        cart.set_shipping_address(postal_code, country)
        self._commit(cart)

    def set_card(self, card: Union[Card, str, None]) -> Optional[Adjustment]:
        cart = self._require_cart()
        if isinstance(card, str):
            number = card
            card = self.catalog.get_card(number)
            if card is None:
                raise CardNotFoundError(number)
        cart.set_card(card)
        self._commit(cart)
        return cart.client_card_adjustment()

    def set_user(self, user_id: Optional[UUID]) -> None:
        if self._cart is None:
            return
        self._cart.set_user(user_id)
        self._cart = self.repository.save(self._cart)

    def get_user(self) -> Optional[UUID]:
        return self._cart.user_id if self._cart else None

    # -- checkout --------------------------------------------------------

    def begin_checkout(self) -> Cart:
        cart = self._require_cart()
        cart.begin_checkout()
        self._commit(cart)
        logger.info("Cart %s entered checkout", cart.id)
        return cart

    def complete(self) -> Cart:
        cart = self._require_cart()
        self.recalculator.recalculate(cart)
        cart.complete()
        self._cart = self.repository.save(cart)
        logger.info("Cart %s completed with total %s", cart.id, cart.total())
        return cart

    def abandon(self) -> Cart:
        cart = self._require_cart()
        cart.abandon()
        self._cart = self.repository.save(cart)
        logger.info("Cart %s abandoned", cart.id)
        return cart

    # -- queries ---------------------------------------------------------

    def get_items(self) -> List[CartItem]:
        return list(self._cart.items) if self._cart else []

    def get_item(self, item_id: UUID) -> CartItem:
        return self._require_cart().get_item(item_id)

    def has_item(self, product_id: UUID) -> bool:
        return self._cart.has_item(product_id) if self._cart else False

    def has_items(self, product_ids: Iterable[UUID]) -> bool:
        return self._cart.has_items(product_ids) if self._cart else False

    def item_count(self) -> int:
        return self._cart.item_count() if self._cart else 0

    def is_empty(self) -> bool:
        return self.item_count() == 0

    def items_display(self) -> Dict[str, List[Dict[str, Any]]]:
        return self._cart.items_display() if self._cart else {'cart': [], 'free': []}

    def total(self) -> Decimal:
        return self._cart.total() if self._cart else ZERO

    def sub_total(self) -> Decimal:
        return self._cart.sub_total() if self._cart else ZERO

    def vat_total(self) -> Decimal:
        return self._cart.vat_total() if self._cart else ZERO

    def get_shipping_adjustment(self) -> Optional[Adjustment]:
        return self._cart.shipping_adjustment() if self._cart else None

    # -- helpers ---------------------------------------------------------

    def _require_cart(self) -> Cart:
        if self._cart is None:
            return self.create()
        return self._cart

    def _product(self, product: Union[Buyable, UUID]) -> Buyable:
        if isinstance(product, Buyable):
            return product
        found = self.catalog.get_product(product)
        if found is None:
            raise ProductNotFoundError(str(product))
        return found

    @staticmethod
    def _resolve_item(cart: Cart, item: Union[CartItem, UUID]) -> CartItem:
        if isinstance(item, CartItem):
            return cart.get_item(item.id)
        for candidate in cart.items:
            if candidate.id == item or candidate.product_id == item:
                return candidate
        raise CartItemNotFoundError(str(item))
