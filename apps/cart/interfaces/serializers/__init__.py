# Serializers
from .cart_serializer import (
    CartSerializer,
    CartItemSerializer,
    CartCreateSerializer,
    CartItemCreateSerializer,
    CartItemUpdateSerializer,
    CouponApplySerializer,
    ShippingSerializer,
    CardSerializer,
    CheckoutSerializer,
)

__all__ = [
    'CartSerializer',
    'CartItemSerializer',
    'CartCreateSerializer',
    'CartItemCreateSerializer',
    'CartItemUpdateSerializer',
    'CouponApplySerializer',
    'ShippingSerializer',
    'CardSerializer',
    'CheckoutSerializer',
]
