# Value objects
from .cart_state import CartState
from .coupon_validation import CouponValidationResult
from .pricing_settings import PricingSettings
from .shipping_destination import ShippingDestination
from .money import ZERO, quantize_money, to_decimal, percentage_of, extract_vat, sum_money

__all__ = [
    'CartState',
    'CouponValidationResult',
    'PricingSettings',
    'ShippingDestination',
    'ZERO',
    'quantize_money',
    'to_decimal',
    'percentage_of',
    'extract_vat',
    'sum_money',
]
