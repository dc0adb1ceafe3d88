"""
Cart repository interface.
"""
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ..entities.cart import Cart


class CartRepository(ABC):
    """Abstract repository for the Cart aggregate."""

    @abstractmethod
    def save(self, cart: Cart) -> Cart:
        """Persist the cart, its items and its current adjustments."""
        pass

    @abstractmethod
    def find_by_id(self, cart_id: UUID) -> Optional[Cart]:
        pass

    @abstractmethod
    def find_by_user_id(self, user_id: UUID) -> Optional[Cart]:
        """Most recent active cart of a user."""
        pass

    @abstractmethod
    def delete(self, cart_id: UUID) -> bool:
        pass
