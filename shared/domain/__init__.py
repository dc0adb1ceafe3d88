# Shared domain module
from .base_entity import BaseEntity, AggregateRoot, utc_now
from .base_value_object import ValueObject
from .domain_event import DomainEvent
from .exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
    BusinessRuleViolationError,
    InvalidOperationError,
)

__all__ = [
    'BaseEntity',
    'AggregateRoot',
    'utc_now',
    'ValueObject',
    'DomainEvent',
    'DomainException',
    'EntityNotFoundError',
    'ValidationError',
    'BusinessRuleViolationError',
    'InvalidOperationError',
]
