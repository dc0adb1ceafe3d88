"""
Catalog gateways.

The catalog (products, campaigns, coupons, shipment methods, cards) is
owned elsewhere; the cart reaches it through the gateway named by the
``CART_CATALOG`` setting.
"""
from typing import Dict, Iterable, Optional
from uuid import UUID

from django.conf import settings
from django.utils.module_loading import import_string

from ..domain.catalog import (
    Buyable,
    Card,
    CatalogGateway,
    Coupon,
    InMemoryPostalCodeDirectory,
    PostalCodeDirectory,
    PostalCodeEntry,
    ShipmentMethod,
)

DEFAULT_CATALOG = 'apps.cart.infrastructure.catalog.InMemoryCatalog'

_catalog: Optional[CatalogGateway] = None


class InMemoryCatalog(CatalogGateway):
    """Catalog held in memory, filled through the `register_*` methods."""

    def __init__(self):
        self.products: Dict[UUID, Buyable] = {}
        self.coupons: Dict[str, Coupon] = {}
        self.shipment_methods: Dict[UUID, ShipmentMethod] = {}
        self.cards: Dict[str, Card] = {}
        self._postal_codes = InMemoryPostalCodeDirectory()

    def register_product(self, *products: Buyable) -> None:
        for product in products:
            self.products[product.id] = product

    def register_coupon(self, *coupons: Coupon) -> None:
        for coupon in coupons:
            self.coupons[coupon.code.upper()] = coupon

    def register_shipment_method(self, *methods: ShipmentMethod) -> None:
        for method in methods:
            self.shipment_methods[method.id] = method

    def register_card(self, *cards: Card) -> None:
        for card in cards:
            self.cards[card.number] = card

    def register_postal_codes(self, entries: Iterable[PostalCodeEntry]) -> None:
        self._postal_codes = InMemoryPostalCodeDirectory(entries)

    def get_product(self, product_id: UUID) -> Optional[Buyable]:
        return self.products.get(product_id)

    def get_coupon_by_code(self, code: str) -> Optional[Coupon]:
        return self.coupons.get(code.strip().upper())

    def get_shipment_method(self, method_id: UUID) -> Optional[ShipmentMethod]:
        return self.shipment_methods.get(method_id)

    def get_card(self, number: str) -> Optional[Card]:
        return self.cards.get(number)

    @property
    def postal_codes(self) -> PostalCodeDirectory:
        return self._postal_codes


def get_catalog() -> CatalogGateway:
    """Process-wide catalog gateway built from ``CART_CATALOG``."""
    global _catalog
    if _catalog is None:
        path = getattr(settings, 'CART_CATALOG', DEFAULT_CATALOG)
        _catalog = import_string(path)()
    return _catalog


def set_catalog(catalog: Optional[CatalogGateway]) -> None:
    """Replace the process-wide catalog gateway (None resets it)."""
    global _catalog
    _catalog = catalog
