"""
Adjustment value objects.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Tuple
from uuid import UUID

from ..value_objects.money import ZERO, quantize_money, to_decimal
from .adjustment_type import AdjustmentType


class OwnerKind(str, Enum):
    CART = 'cart'
    CART_ITEM = 'cart_item'


@dataclass(frozen=True)
class AdjustmentOwner:
    """What an adjustment is attached to: the cart itself or one of its items."""
    kind: OwnerKind
    id: UUID

    @classmethod
    def cart(cls, cart_id: UUID) -> 'AdjustmentOwner':
        return cls(kind=OwnerKind.CART, id=cart_id)

    @classmethod
    def item(cls, item_id: UUID) -> 'AdjustmentOwner':
        return cls(kind=OwnerKind.CART_ITEM, id=item_id)

    @property
    def is_cart(self) -> bool:
        return self.kind is OwnerKind.CART


@dataclass(frozen=True)
class Adjustment:
    """
    A signed monetary delta: discounts and credits are negative, fees positive.

    `data` holds type specific bookkeeping such as `quantity`,
    `single_amount`, `remainder_quantity`, `sku`, `level` or `threshold`.
    """
    type: AdjustmentType
    amount: Decimal
    owner: AdjustmentOwner
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)
    title: str = ''

    @classmethod
    def create(
        cls,
        type: AdjustmentType,
        amount,
        owner: AdjustmentOwner,
        title: str = '',
        **data: Any,
    ) -> 'Adjustment':
        """Build an adjustment with its amount rounded to cents."""
        return cls(
            type=type,
            amount=quantize_money(amount),
            owner=owner,
            data=dict(data),
            title=title or type.label,
        )

    def get_data(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    @property
    def single_amount(self) -> Decimal:
        """Per-unit price reduction this adjustment represents."""
        value = self.data.get('single_amount')
        return to_decimal(value) if value is not None else ZERO

    @property
    def quantity(self) -> int:
        return int(self.data.get('quantity') or 0)

    @property
    def is_charge(self) -> bool:
        return self.amount > 0

    @property
    def is_credit(self) -> bool:
        return self.amount < 0

    def as_tuple(self) -> Tuple:
        """Comparable form, used to check recalculations for drift."""
        return (
            self.type.value,
            str(self.amount),
            self.owner.kind.value,
            str(self.owner.id),
            tuple(sorted((k, str(v)) for k, v in self.data.items())),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type.value,
            'title': self.title,
            'amount': self.amount,
            'owner_kind': self.owner.kind.value,
            'owner_id': self.owner.id,
            'data': dict(self.data),
        }
