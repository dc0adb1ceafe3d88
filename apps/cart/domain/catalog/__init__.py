# Read-only catalog data the cart consumes
from .buyable import Buyable, Product, PriceInterval, DirectDiscount
from .card import Card
from .gateway import CatalogGateway
from .coupons import Coupon, CouponType
from .discounts import DiscountCampaign, DiscountTag, ValueType
from .shipping import (
    ShipmentMethod,
    ShippingZone,
    WeightBand,
    PostalCodeEntry,
    PostalCodeDirectory,
    ParishLocator,
    InMemoryPostalCodeDirectory,
)

__all__ = [
    'Buyable',
    'Product',
    'PriceInterval',
    'DirectDiscount',
    'Card',
    'CatalogGateway',
    'Coupon',
    'CouponType',
    'DiscountCampaign',
    'DiscountTag',
    'ValueType',
    'ShipmentMethod',
    'ShippingZone',
    'WeightBand',
    'PostalCodeEntry',
    'PostalCodeDirectory',
    'ParishLocator',
    'InMemoryPostalCodeDirectory',
]
