# Django models
from .cart_model import CartModel, CartItemModel, AdjustmentModel, CartCouponModel

__all__ = ['CartModel', 'CartItemModel', 'AdjustmentModel', 'CartCouponModel']
