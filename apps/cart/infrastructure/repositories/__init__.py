# Repository implementations
from .django_cart_repository import DjangoCartRepository

__all__ = ['DjangoCartRepository']
