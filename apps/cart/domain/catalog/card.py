"""
Loyalty card.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID, uuid4


@dataclass(frozen=True, eq=False)
class Card:
    """Loyalty card with a spendable balance."""
    number: str
    current_balance: Decimal = Decimal('0')
    id: UUID = field(default_factory=uuid4)

    def balance(self) -> Decimal:
        return self.current_balance
