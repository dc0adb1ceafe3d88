"""
Base entity classes for the cart domain.
"""
from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List
from uuid import UUID, uuid4

from .domain_event import DomainEvent


def utc_now() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


@dataclass(eq=False)
class BaseEntity(ABC):
    """Entity with identity; two entities are equal when their ids match."""
    id: UUID = field(default_factory=uuid4, kw_only=True)
    created_at: datetime = field(default_factory=utc_now, kw_only=True)
    updated_at: datetime = field(default_factory=utc_now, kw_only=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseEntity):
            return False
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = utc_now()


@dataclass(eq=False)
class AggregateRoot(BaseEntity):
    """Aggregate root collecting domain events until they are dispatched."""
    _domain_events: List[DomainEvent] = field(default_factory=list, repr=False, kw_only=True)

    def add_domain_event(self, event: DomainEvent) -> None:
        """Record a domain event to be dispatched after persistence."""
        self._domain_events.append(event)

    def clear_domain_events(self) -> List[DomainEvent]:
        """Clear and return all pending domain events."""
        events = self._domain_events.copy()
        self._domain_events.clear()
        return events

    @property
    def domain_events(self) -> List[DomainEvent]:
        """Get a copy of pending domain events."""
        return self._domain_events.copy()
