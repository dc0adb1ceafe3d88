"""
Cart Django ORM models.
"""
import uuid

from django.db import models

from ...domain.adjustments import AdjustmentType, OwnerKind
from ...domain.value_objects import CartState


class CartModel(models.Model):
    """Cart model."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField(null=True, blank=True, db_index=True)
    state = models.CharField(
        max_length=20,
        choices=[(s.value, s.label) for s in CartState],
        default=CartState.ACTIVE.value,
    )

    shipment_method_id = models.UUIDField(null=True, blank=True)
    country = models.CharField(max_length=2, blank=True, default='')
    postal_code = models.CharField(max_length=20, blank=True, default='')
    card_number = models.CharField(max_length=50, blank=True, default='')
    # totals captured when the cart stops being editable
    frozen_totals = models.JSONField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'carts'
        ordering = ['-updated_at']

    def __str__(self):
        return f"Cart {self.id} ({self.state})"


class CartItemModel(models.Model):
    """Cart item model."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cart = models.ForeignKey(CartModel, on_delete=models.CASCADE, related_name='items')
    product_id = models.UUIDField()
    quantity = models.PositiveIntegerField(default=1)
    price_vat = models.DecimalField(max_digits=12, decimal_places=2)
    attributes = models.JSONField(default=dict, blank=True)
    position = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cart_items'
        unique_together = ['cart', 'product_id']
        ordering = ['position']

    def __str__(self):
        return f"{self.product_id} x {self.quantity}"


class AdjustmentModel(models.Model):
    """
    Adjustment row.

    Attached to the cart or to one of its items through `owner_kind` and
    `owner_id`; `cart` is kept on every row so a cart's ledger loads and
    deletes in one query.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cart = models.ForeignKey(CartModel, on_delete=models.CASCADE, related_name='adjustments')
    owner_kind = models.CharField(max_length=20, choices=[(k.value, k.value) for k in OwnerKind])
    owner_id = models.UUIDField()
    type = models.CharField(max_length=40, choices=[(t.value, t.label) for t in AdjustmentType])
    title = models.CharField(max_length=255, blank=True, default='')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    data = models.JSONField(default=dict, blank=True)
    position = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'cart_adjustments'
        ordering = ['position']
        indexes = [
            models.Index(fields=['owner_kind', 'owner_id']),
        ]

    def __str__(self):
        return f"{self.type} {self.amount}"


class CartCouponModel(models.Model):
    """Coupon attached to a cart and the outcome of its last validation."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cart = models.OneToOneField(CartModel, on_delete=models.CASCADE, related_name='coupon')
    coupon_id = models.UUIDField()
    code = models.CharField(max_length=50)
    validation_passed = models.BooleanField(null=True)
    validation_rule = models.CharField(max_length=50, blank=True, default='')
    validation_message = models.CharField(max_length=255, blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cart_coupons'

    def __str__(self):
        return self.code
