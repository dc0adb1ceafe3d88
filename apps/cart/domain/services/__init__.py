# Domain services
from .discount_resolver import DiscountEntry, DiscountResolution, DiscountResolver
from .discount_applier import DiscountApplier, build_level_list
from .coupon_validator import CouponValidator
from .coupon_applier import CouponApplier
from .shipping_fee import ShippingFeeCalculator
from .packaging_fee import PackagingFeeCalculator
from .card_credit import CardCreditCalculator
from .recalculation import CartRecalculator

__all__ = [
    'DiscountEntry',
    'DiscountResolution',
    'DiscountResolver',
    'DiscountApplier',
    'build_level_list',
    'CouponValidator',
    'CouponApplier',
    'ShippingFeeCalculator',
    'PackagingFeeCalculator',
    'CardCreditCalculator',
    'CartRecalculator',
]
