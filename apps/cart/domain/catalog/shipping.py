"""
Shipment methods, zones and postal code tables.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import FrozenSet, List, Optional, Tuple
from uuid import UUID, uuid4


@dataclass(frozen=True)
class WeightBand:
    """Price for carts whose weight falls in [min_weight, max_weight)."""
    min_weight: Decimal
    max_weight: Optional[Decimal]
    price: Decimal

    def fits(self, weight: Decimal) -> bool:
        if weight < self.min_weight:
            return False
        return self.max_weight is None or weight < self.max_weight


@dataclass(frozen=True)
class ShippingZone:
    """Group of countries sharing weight bands and a free-shipping offer."""
    name: str
    countries: FrozenSet[str]
    weight_bands: Tuple[WeightBand, ...] = ()
    shipping_offer: bool = False
    # order value from which shipping is free
    min_value: Optional[Decimal] = None
    # free shipping only below this weight; None or 0 disables the limit
    max_weight: Optional[Decimal] = None
    id: UUID = field(default_factory=uuid4)

    def covers(self, country: str) -> bool:
        return country.upper() in self.countries

    def band_for(self, weight: Decimal) -> Optional[WeightBand]:
        for band in self.weight_bands:
            if band.fits(weight):
                return band
        return None


@dataclass(frozen=True, eq=False)
class ShipmentMethod:
    """A way of shipping the cart; pricing model follows its flags."""
    name: str
    price: Decimal = Decimal('0')
    uses_weight: bool = False
    home_delivery: bool = False
    zones: Tuple[ShippingZone, ...] = ()
    id: UUID = field(default_factory=uuid4)

    def uses_weights(self) -> bool:
        return self.uses_weight

    def is_home_delivery(self) -> bool:
        return self.home_delivery

    def zone_for(self, country: str) -> Optional[ShippingZone]:
        for zone in self.zones:
            if zone.covers(country):
                return zone
        return None


@dataclass(frozen=True)
class PostalCodeEntry:
    """Whitelisted postal code (or prefix) for home delivery."""
    postal_code: str
    shipping_price: Decimal
    parish: str = ''
    shipping_offer: bool = False
    min_value: Optional[Decimal] = None


class PostalCodeDirectory(ABC):
    """Home-delivery postal code table."""

    @abstractmethod
    def find(self, postal_code: str) -> List[PostalCodeEntry]:
        """Entries registered under exactly `postal_code`."""


class ParishLocator(ABC):
    """Geocoding lookup resolving a postal code to its parish name."""

    @abstractmethod
    def locate(self, prefix: str, suffix: Optional[str]) -> Optional[str]:
        """Parish for the postal code, or None when it cannot be resolved."""


class InMemoryPostalCodeDirectory(PostalCodeDirectory):
    """Postal code table held in memory."""

    def __init__(self, entries=()):
        self._entries = list(entries)

    def find(self, postal_code: str) -> List[PostalCodeEntry]:
        return [e for e in self._entries if e.postal_code == postal_code]
