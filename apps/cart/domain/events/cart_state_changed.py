"""
Cart state changed domain event.
"""
from dataclasses import dataclass
from uuid import UUID

from shared.domain import DomainEvent


@dataclass(frozen=True)
class CartStateChanged(DomainEvent):
    """Event raised when a cart moves through its lifecycle."""
    cart_id: UUID
    old_state: str
    new_state: str
