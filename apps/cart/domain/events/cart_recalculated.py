"""
Cart recalculated domain event.
"""
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from shared.domain import DomainEvent


@dataclass(frozen=True)
class CartRecalculated(DomainEvent):
    """Event raised after a recalculation pass replaced the ledger."""
    cart_id: UUID
    total: Decimal
    adjustment_count: int
