"""
Coupon rejected domain event.
"""
from dataclasses import dataclass
from uuid import UUID

from shared.domain import DomainEvent


@dataclass(frozen=True)
class CouponRejected(DomainEvent):
    """Event raised when the attached coupon fails validation."""
    cart_id: UUID
    coupon_code: str
    rule: str
    message: str
