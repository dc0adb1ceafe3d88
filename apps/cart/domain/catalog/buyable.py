"""
Purchasable products as seen by the cart.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Optional, Tuple
from uuid import UUID, uuid4

from .discounts import DiscountCampaign, ValueType


@dataclass(frozen=True)
class PriceInterval:
    """Quantity break: from `min_quantity` units on, each unit costs `price_vat`."""
    min_quantity: int
    price_vat: Decimal


@dataclass(frozen=True)
class DirectDiscount:
    """Standing per-product discount, independent of campaigns."""
    value: Decimal
    value_type: ValueType = ValueType.PERCENTAGE


class Buyable(ABC):
    """Contract the cart needs from a product."""

    id: UUID
    sku: str
    name: str
    weight: Decimal
    is_medical: bool
    prevents_free_shipping: bool
    max_per_cart: Optional[int]

    @abstractmethod
    def is_simple_product(self) -> bool:
        ...

    @abstractmethod
    def get_stock(self) -> int:
        ...

    @abstractmethod
    def get_price_vat(self) -> Decimal:
        ...

    @abstractmethod
    def get_vat(self) -> Decimal:
        ...

    @abstractmethod
    def get_interval(self, quantity: int) -> Optional[Decimal]:
        ...

    @property
    @abstractmethod
    def valid_discount_tree(self) -> Tuple[DiscountCampaign, ...]:
        ...

    @abstractmethod
    def valid_direct_discount(self) -> Optional[DirectDiscount]:
        ...

    @abstractmethod
    def direct_discount_stacks_with_discounts(self) -> bool:
        """Whether the standing discount still applies inside a campaign."""

    @abstractmethod
    def allows_store_discount(self) -> bool:
        ...

    @abstractmethod
    def get_attribute(self, name: str) -> Any:
        ...


@dataclass(frozen=True, eq=False)
class Product(Buyable):
    """Catalog product snapshot."""
    name: str
    sku: str
    price_vat: Decimal
    vat: Decimal = Decimal('0.23')
    stock: int = 0
    weight: Decimal = Decimal('0')
    id: UUID = field(default_factory=uuid4)
    simple: bool = True
    intervals: Tuple[PriceInterval, ...] = ()
    discount_tree: Tuple[DiscountCampaign, ...] = ()
    direct_discount: Optional[DirectDiscount] = None
    direct_discount_stacks_with_campaigns: bool = True
    no_store_discount: bool = False
    prevents_free_shipping: bool = False
    is_medical: bool = False
    max_per_cart: Optional[int] = None
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def is_simple_product(self) -> bool:
        return self.simple

    def get_stock(self) -> int:
        return self.stock

    def get_price_vat(self) -> Decimal:
        return self.price_vat

    def get_vat(self) -> Decimal:
        return self.vat

    def get_interval(self, quantity: int) -> Optional[Decimal]:
        """Unit price of the largest quantity break reached by `quantity`."""
        reached = [i for i in self.intervals if i.min_quantity <= quantity]
        if not reached:
            return None
        return max(reached, key=lambda i: i.min_quantity).price_vat

    @property
    def valid_discount_tree(self) -> Tuple[DiscountCampaign, ...]:
        return self.discount_tree

    def valid_direct_discount(self) -> Optional[DirectDiscount]:
        return self.direct_discount

    def direct_discount_stacks_with_discounts(self) -> bool:
        return self.direct_discount_stacks_with_campaigns

    def allows_store_discount(self) -> bool:
        return not self.no_store_discount

    def get_attribute(self, name: str) -> Any:
        if name in self.attributes:
            return self.attributes[name]
        return getattr(self, name, None)
