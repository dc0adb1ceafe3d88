"""
Base value object class.
"""
from abc import ABC
from dataclasses import astuple, dataclass
from typing import Any


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Immutable object compared by its attributes.

    Subclasses must be frozen dataclasses whose fields are hashable.
    """

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return astuple(self) == astuple(other)

    def __hash__(self) -> int:
        return hash((self.__class__.__name__,) + astuple(self))
