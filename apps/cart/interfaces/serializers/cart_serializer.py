"""
Cart serializers.
"""
from rest_framework import serializers


class AdjustmentSerializer(serializers.Serializer):
    """Serializer for adjustment output."""
    type = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    data = serializers.DictField(read_only=True)


class CartItemSerializer(serializers.Serializer):
    """Serializer for cart item output."""
    id = serializers.UUIDField(read_only=True)
    product_id = serializers.UUIDField(read_only=True)
    sku = serializers.CharField(read_only=True, allow_null=True)
    name = serializers.CharField(read_only=True, allow_null=True)
    quantity = serializers.IntegerField(read_only=True)
    effective_quantity = serializers.IntegerField(read_only=True)
    price_vat = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    adjusted_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    attributes = serializers.DictField(read_only=True)
    adjustments = AdjustmentSerializer(many=True, read_only=True)


class FreeItemSerializer(serializers.Serializer):
    """Units handed out for free, shown as their own lines."""
    item_id = serializers.UUIDField(read_only=True)
    product_id = serializers.UUIDField(read_only=True)
    sku = serializers.CharField(read_only=True, allow_null=True)
    type = serializers.CharField(read_only=True)
    display_quantity = serializers.IntegerField(read_only=True)


class CouponStatusSerializer(serializers.Serializer):
    code = serializers.CharField(read_only=True)
    active = serializers.BooleanField(read_only=True)
    rule = serializers.CharField(read_only=True, allow_null=True)
    message = serializers.CharField(read_only=True)


class CartWarningSerializer(serializers.Serializer):
    code = serializers.CharField(read_only=True)
    message = serializers.CharField(read_only=True)
    requested = serializers.IntegerField(read_only=True)
    granted = serializers.IntegerField(read_only=True)


class CartSerializer(serializers.Serializer):
    """Serializer for cart output."""
    id = serializers.UUIDField(read_only=True)
    user_id = serializers.UUIDField(read_only=True, allow_null=True)
    state = serializers.CharField(read_only=True)
    items = CartItemSerializer(many=True, read_only=True)
    free_items = FreeItemSerializer(many=True, read_only=True)
    adjustments = AdjustmentSerializer(many=True, read_only=True)
    items_subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    items_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    shipping = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    shipping_display = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True, allow_null=True)
    packaging_fee = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    discount_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    coupon_discount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    sub_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    vat_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    item_count = serializers.IntegerField(read_only=True)
    country = serializers.CharField(read_only=True, allow_null=True)
    postal_code = serializers.CharField(read_only=True, allow_null=True)
    shipment_method_id = serializers.UUIDField(read_only=True, allow_null=True)
    card_number = serializers.CharField(read_only=True, allow_null=True)
    coupon = CouponStatusSerializer(read_only=True, allow_null=True)
    warnings = CartWarningSerializer(many=True, read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class CartCreateSerializer(serializers.Serializer):
    """Serializer for creating a cart."""
    user_id = serializers.UUIDField(required=False, allow_null=True)


class CartItemCreateSerializer(serializers.Serializer):
    """Serializer for adding item to cart."""
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)
    attributes = serializers.DictField(required=False, default=dict)


class CartItemUpdateSerializer(serializers.Serializer):
    """Serializer for updating cart item."""
    quantity = serializers.IntegerField(min_value=0)


class CouponApplySerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50)


class ShippingSerializer(serializers.Serializer):
    """Shipment method plus a country, or a postal code for home delivery."""
    shipment_method_id = serializers.UUIDField()
    country = serializers.CharField(max_length=2, required=False, allow_blank=True)
    postal_code = serializers.CharField(max_length=20, required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get('country') and not attrs.get('postal_code'):
            raise serializers.ValidationError("Either country or postal_code is required.")
        return attrs


class CardSerializer(serializers.Serializer):
    number = serializers.CharField(max_length=50)


class CheckoutSerializer(serializers.Serializer):
    """Lifecycle transition to apply."""
    action = serializers.ChoiceField(choices=['checkout', 'complete', 'abandon'])
