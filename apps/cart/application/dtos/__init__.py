# DTOs
from .cart_dto import AdjustmentDTO, CartDTO, CartItemDTO, CartWarningDTO, CouponStatusDTO

__all__ = ['AdjustmentDTO', 'CartDTO', 'CartItemDTO', 'CartWarningDTO', 'CouponStatusDTO']
