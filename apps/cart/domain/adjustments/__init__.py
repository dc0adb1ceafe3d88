# Adjustment ledger
from .adjustment_type import AdjustmentType
from .adjustment import Adjustment, AdjustmentOwner, OwnerKind
from .ledger import AdjustmentLedger

__all__ = [
    'AdjustmentType',
    'Adjustment',
    'AdjustmentOwner',
    'OwnerKind',
    'AdjustmentLedger',
]
