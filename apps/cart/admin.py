"""
Admin registration for the cart app.
"""
from .interfaces.admin import CartAdmin

__all__ = ['CartAdmin']
