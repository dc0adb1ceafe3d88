# Domain entities
from .capabilities import Adjustable, Checkoutable, CheckoutTotals
from .cart import Cart
from .cart_item import CartItem

__all__ = ['Adjustable', 'Checkoutable', 'CheckoutTotals', 'Cart', 'CartItem']
