"""
Shipping destination value object.
"""
from dataclasses import dataclass
from typing import Optional

from shared.domain import ValueObject


@dataclass(frozen=True)
class ShippingDestination(ValueObject):
    """Where the cart ships to: a country and, for home delivery, a postal code."""
    country: Optional[str] = None
    postal_code: Optional[str] = None

    def __post_init__(self):
        if self.country is not None:
            object.__setattr__(self, 'country', self.country.strip().upper())
        if self.postal_code is not None:
            object.__setattr__(self, 'postal_code', self.postal_code.strip())

    def with_country(self, country: str) -> 'ShippingDestination':
        return ShippingDestination(country=country, postal_code=self.postal_code)

    def with_postal_code(self, postal_code: str) -> 'ShippingDestination':
        return ShippingDestination(country=self.country, postal_code=postal_code)

    @property
    def postal_code_prefix(self) -> Optional[str]:
        """Leading block of the postal code ("1000" for "1000-001")."""
        if not self.postal_code:
            return None
        return self.postal_code.split('-')[0]

    @property
    def postal_code_suffix(self) -> Optional[str]:
        if not self.postal_code or '-' not in self.postal_code:
            return None
        return self.postal_code.split('-', 1)[1]
