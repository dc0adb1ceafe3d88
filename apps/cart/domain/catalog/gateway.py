"""
Catalog gateway interface.
"""
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from .buyable import Buyable
from .card import Card
from .coupons import Coupon
from .shipping import PostalCodeDirectory, ShipmentMethod


class CatalogGateway(ABC):
    """Read-only access to the products, coupons and shipping data a cart refers to."""

    @abstractmethod
    def get_product(self, product_id: UUID) -> Optional[Buyable]:
        pass

    @abstractmethod
    def get_coupon_by_code(self, code: str) -> Optional[Coupon]:
        pass

    @abstractmethod
    def get_shipment_method(self, method_id: UUID) -> Optional[ShipmentMethod]:
        pass

    @abstractmethod
    def get_card(self, number: str) -> Optional[Card]:
        pass

    @property
    @abstractmethod
    def postal_codes(self) -> PostalCodeDirectory:
        """Home-delivery postal code table."""
        pass
