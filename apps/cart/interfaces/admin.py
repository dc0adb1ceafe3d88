"""
Cart admin configuration.
"""
from django.contrib import admin

from ..infrastructure.models.cart_model import (
    AdjustmentModel,
    CartCouponModel,
    CartItemModel,
    CartModel,
)


class CartItemInline(admin.TabularInline):
    """Inline for cart items."""
    model = CartItemModel
    extra = 0
    readonly_fields = ('id', 'product_id', 'quantity', 'price_vat', 'attributes')


class AdjustmentInline(admin.TabularInline):
    """Inline for the cart's adjustment ledger."""
    model = AdjustmentModel
    extra = 0
    readonly_fields = ('owner_kind', 'owner_id', 'type', 'title', 'amount', 'data')
    can_delete = False


class CartCouponInline(admin.StackedInline):
    model = CartCouponModel
    extra = 0
    readonly_fields = ('validation_passed', 'validation_rule', 'validation_message')


@admin.register(CartModel)
class CartAdmin(admin.ModelAdmin):
    """Admin configuration for Cart model."""
    list_display = ('id', 'user_id', 'state', 'country', 'created_at', 'updated_at')
    list_filter = ('state', 'created_at')
    search_fields = ('user_id', 'postal_code', 'card_number')
    ordering = ('-updated_at',)
    readonly_fields = ('id', 'frozen_totals', 'created_at', 'updated_at')
    inlines = [CartItemInline, CartCouponInline, AdjustmentInline]
