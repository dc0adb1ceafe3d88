# Application services
from .cart_manager import CartManager, CartWarning, ItemChangeResult, StockPolicy

__all__ = ['CartManager', 'CartWarning', 'ItemChangeResult', 'StockPolicy']
