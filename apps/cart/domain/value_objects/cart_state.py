"""
Cart lifecycle state.
"""
from enum import Enum
from typing import FrozenSet


class CartState(str, Enum):
    """Lifecycle state of a cart; LOADING doubles as the recalculation guard."""
    ACTIVE = 'active'
    CHECKOUT = 'checkout'
    LOADING = 'in_use'
    COMPLETED = 'completed'
    ABANDONED = 'abandoned'

    @classmethod
    def default(cls) -> 'CartState':
        return cls.ACTIVE

    @classmethod
    def active_states(cls) -> FrozenSet['CartState']:
        return frozenset({cls.ACTIVE, cls.CHECKOUT, cls.LOADING})

    @classmethod
    def loading_states(cls) -> FrozenSet['CartState']:
        return frozenset({cls.LOADING})

    @property
    def is_active(self) -> bool:
        return self in self.active_states()

    @property
    def is_loading(self) -> bool:
        return self in self.loading_states()

    @property
    def is_abandoned(self) -> bool:
        return self is CartState.ABANDONED

    @property
    def is_editable(self) -> bool:
        """Totals are live (recomputed from the ledger) only for active carts."""
        return self.is_active

    @property
    def label(self) -> str:
        return {
            CartState.ACTIVE: 'Active',
            CartState.CHECKOUT: 'Checkout',
            CartState.LOADING: 'In Use',
            CartState.COMPLETED: 'Completed',
            CartState.ABANDONED: 'Abandoned',
        }[self]
