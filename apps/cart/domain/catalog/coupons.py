"""
Coupon definitions (read-only catalog data).
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import FrozenSet, Mapping, Optional
from uuid import UUID, uuid4


class CouponType(str, Enum):
    PERCENTAGE = 'percentage'
    NUMERIC = 'numeric'
    FREE_SHIPPING = 'free_shipping'


@dataclass(frozen=True, eq=False)
class Coupon:
    """A coupon and the constraints the validator checks."""
    code: str
    type: CouponType
    value: Decimal = Decimal('0')
    id: UUID = field(default_factory=uuid4)
    is_active: bool = True
    starts_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    # None means unlimited
    uses_left: Optional[int] = None
    uses_per_user: Optional[int] = None
    user_redemptions: Mapping[UUID, int] = field(default_factory=dict)
    allowed_user_ids: FrozenSet[UUID] = frozenset()
    min_order_value: Optional[Decimal] = None
    # empty means every product
    product_ids: FrozenSet[UUID] = frozenset()
    combinable_with_discounts: bool = True
    # empty means every country
    countries: FrozenSet[str] = frozenset()

    def is_specific_to_products(self) -> bool:
        return bool(self.product_ids)

    def fetch_valid_product_ids(self, product_ids) -> FrozenSet[UUID]:
        """Subset of `product_ids` this coupon can discount."""
        if not self.is_specific_to_products():
            return frozenset(product_ids)
        return frozenset(pid for pid in product_ids if pid in self.product_ids)

    def redemptions_by(self, user_id: UUID) -> int:
        return self.user_redemptions.get(user_id, 0)

    @property
    def is_free_shipping(self) -> bool:
        return self.type is CouponType.FREE_SHIPPING
