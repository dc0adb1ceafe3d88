"""
Model registration for the cart app.
"""
from .infrastructure.models import CartModel, CartItemModel, AdjustmentModel, CartCouponModel

__all__ = ['CartModel', 'CartItemModel', 'AdjustmentModel', 'CartCouponModel']
