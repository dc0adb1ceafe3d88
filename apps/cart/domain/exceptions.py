"""
Cart domain exceptions.
"""
from shared.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    BusinessRuleViolationError,
    InvalidOperationError,
)


class InvalidCartConfigurationError(DomainException):
    """Raised when cart configuration is missing or malformed."""

    def __init__(self, message: str, setting: str = None):
        super().__init__(message=message, code="INVALID_CART_CONFIGURATION")
        self.setting = setting


class CartNotFoundError(EntityNotFoundError):
    """Raised when a cart is not found."""

    def __init__(self, identifier: str):
        super().__init__(entity_name="Cart", entity_id=str(identifier), code="CART_NOT_FOUND")


class CartItemNotFoundError(EntityNotFoundError):
    """Raised when a cart holds no line for the requested product or item."""

    def __init__(self, identifier: str):
        super().__init__(entity_name="Cart item", entity_id=str(identifier), code="CART_ITEM_NOT_FOUND")


class ProductNotFoundError(EntityNotFoundError):
    """Raised when the catalog has no such product."""

    def __init__(self, identifier: str):
        super().__init__(entity_name="Product", entity_id=str(identifier), code="PRODUCT_NOT_FOUND")


class CouponNotFoundError(EntityNotFoundError):
    """Raised when no coupon matches a code."""

    def __init__(self, code: str):
        super().__init__(entity_name="Coupon", entity_id=code, code="COUPON_NOT_FOUND")


class ShipmentMethodNotFoundError(EntityNotFoundError):
    """Raised when the catalog has no such shipment method."""

    def __init__(self, identifier: str):
        super().__init__(
            entity_name="Shipment method",
            entity_id=str(identifier),
            code="SHIPMENT_METHOD_NOT_FOUND",
        )


class CardNotFoundError(EntityNotFoundError):
    """Raised when no loyalty card matches a number."""

    def __init__(self, number: str):
        super().__init__(entity_name="Card", entity_id=number, code="CARD_NOT_FOUND")


class ShippingResolutionError(BusinessRuleViolationError):
    """Raised when the shipping fee cannot be determined for the destination."""

    def __init__(self, message: str, rule: str = "shipping_resolution"):
        super().__init__(message=message, rule=rule, code="SHIPPING_RESOLUTION_FAILED")


class ShippingZoneNotFoundError(ShippingResolutionError):
    """Raised when a weight-priced method has no zone for the country."""

    def __init__(self, method: str, country: str):
        super().__init__(
            message=f"Shipping method '{method}' uses weights but no zone was found for '{country}'",
            rule="shipping_zone",
        )
        self.method = method
        self.country = country


class WeightBandNotFoundError(ShippingResolutionError):
    """Raised when no weight band of the zone fits the cart weight."""

    def __init__(self, method: str, weight):
        super().__init__(
            message=f"Shipping method '{method}' uses weights but no band fits {weight}",
            rule="weight_band",
        )
        self.method = method
        self.weight = weight


class PostalCodeNotDeliverableError(ShippingResolutionError):
    """Raised when home delivery is not available for a postal code."""

    def __init__(self, postal_code: str):
        super().__init__(
            message=f"Postal code '{postal_code}' is not eligible for home delivery",
            rule="postal_code",
        )
        self.postal_code = postal_code


class CartNotEditableError(InvalidOperationError):
    """Raised when a completed or abandoned cart is mutated."""

    def __init__(self, operation: str, current_state: str):
        super().__init__(
            message=f"Cannot {operation} cart in '{current_state}' state",
            operation=operation,
            state=current_state,
        )
