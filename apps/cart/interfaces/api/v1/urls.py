"""
Cart API v1 URLs.
"""
from django.urls import path

from .views import (
    CartCreateView,
    CartDetailView,
    CartItemListView,
    CartItemDetailView,
    CartCouponView,
    CartShippingView,
    CartCardView,
    CartCheckoutView,
)

urlpatterns = [
    path('', CartCreateView.as_view(), name='cart-create'),
    path('<uuid:cart_id>/', CartDetailView.as_view(), name='cart-detail'),

    # Items
    path('<uuid:cart_id>/items/', CartItemListView.as_view(), name='cart-items'),
    path('<uuid:cart_id>/items/<uuid:item_id>/', CartItemDetailView.as_view(), name='cart-item'),

    # Checkout context
    path('<uuid:cart_id>/coupon/', CartCouponView.as_view(), name='cart-coupon'),
    path('<uuid:cart_id>/shipping/', CartShippingView.as_view(), name='cart-shipping'),
    path('<uuid:cart_id>/card/', CartCardView.as_view(), name='cart-card'),
    path('<uuid:cart_id>/checkout/', CartCheckoutView.as_view(), name='cart-checkout'),
]
