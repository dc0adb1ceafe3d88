"""
Adjustment ledger.

One ledger holds every adjustment of a cart, both cart-level and item-level,
keyed by owner. A recalculation builds a brand new ledger; nothing in it is
updated in place.
"""
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..value_objects.money import ZERO, sum_money
from .adjustment import Adjustment, AdjustmentOwner
from .adjustment_type import AdjustmentType


def _require_type(type: Optional[AdjustmentType]) -> AdjustmentType:
    if type is None:
        raise ValueError('Adjustment type is empty. Please provide a valid value.')
    return type


class AdjustmentLedger:
    """Ordered adjustments grouped by the cart or cart item they belong to."""

    def __init__(self, adjustments: Iterable[Adjustment] = ()):
        self._by_owner: 'OrderedDict[AdjustmentOwner, List[Adjustment]]' = OrderedDict()
        for adjustment in adjustments:
            self.add(adjustment)

    def add(self, adjustment: Adjustment) -> Adjustment:
        self._by_owner.setdefault(adjustment.owner, []).append(adjustment)
        return adjustment

    def for_owner(self, owner: AdjustmentOwner) -> List[Adjustment]:
        return list(self._by_owner.get(owner, ()))

    def by_type(self, owner: AdjustmentOwner, type: Optional[AdjustmentType]) -> Optional[Adjustment]:
        """First adjustment of `type` attached to `owner`."""
        type = _require_type(type)
        for adjustment in self._by_owner.get(owner, ()):
            if adjustment.type is type:
                return adjustment
        return None

    def all_by_type(self, type: Optional[AdjustmentType]) -> List[Adjustment]:
        """Every adjustment of `type`, whatever it is attached to."""
        type = _require_type(type)
        return [a for a in self if a.type is type]

    def total(
        self,
        owner: Optional[AdjustmentOwner] = None,
        type: Optional[AdjustmentType] = None,
    ) -> Decimal:
        adjustments = self.for_owner(owner) if owner is not None else list(self)
        if type is not None:
            adjustments = [a for a in adjustments if a.type is type]
        return sum_money(a.amount for a in adjustments)

    def remove(self, adjustment: Adjustment) -> None:
        owned = self._by_owner.get(adjustment.owner)
        if owned and adjustment in owned:
            owned.remove(adjustment)

    def remove_type(self, owner: AdjustmentOwner, type: Optional[AdjustmentType]) -> None:
        """Drop the first adjustment of `type` on `owner`, if any."""
        adjustment = self.by_type(owner, type)
        if adjustment is not None:
            self.remove(adjustment)

    def remove_types(self, types: Iterable[AdjustmentType]) -> None:
        """Drop every adjustment of the given types, cart-wide and item-wide."""
        types = frozenset(types)
        for owner, owned in self._by_owner.items():
            self._by_owner[owner] = [a for a in owned if a.type not in types]

    def clear(self, owner: Optional[AdjustmentOwner] = None) -> None:
        if owner is None:
            self._by_owner.clear()
        else:
            self._by_owner.pop(owner, None)

    def owners(self) -> List[AdjustmentOwner]:
        return [owner for owner, owned in self._by_owner.items() if owned]

    def totals_by_type(self) -> Dict[AdjustmentType, Decimal]:
        """Per-type parcels summed over the cart and all of its items."""
        totals = {adjustment_type: ZERO for adjustment_type in AdjustmentType}
        for adjustment in self:
            totals[adjustment.type] += adjustment.amount
        return totals

    def snapshot(self) -> Tuple[Tuple, ...]:
        return tuple(a.as_tuple() for a in self)

    def copy(self) -> 'AdjustmentLedger':
        return AdjustmentLedger(self)

    def __iter__(self) -> Iterator[Adjustment]:
        for owned in self._by_owner.values():
            yield from owned

    def __len__(self) -> int:
        return sum(len(owned) for owned in self._by_owner.values())

    def __bool__(self) -> bool:
        return len(self) > 0
