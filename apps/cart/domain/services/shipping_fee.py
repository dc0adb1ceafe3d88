"""
Shipping fee calculation.
"""
import logging
from decimal import Decimal
from typing import Optional, Tuple

from ..adjustments import Adjustment, AdjustmentType
from ..catalog import ParishLocator, PostalCodeDirectory, PostalCodeEntry, ShipmentMethod
from ..entities.cart import Cart
from ..exceptions import (
    PostalCodeNotDeliverableError,
    ShippingZoneNotFoundError,
    WeightBandNotFoundError,
)
from ..value_objects.money import ZERO, to_decimal

logger = logging.getLogger(__name__)


class ShippingFeeCalculator:
    """
    Prices the selected shipment method for the cart's destination.

    Three models, picked by the method's flags: weight banded by zone,
    banded by postal code for home delivery, or the method's flat price.
    A free-shipping `threshold` is recorded on the adjustment; the fee is
    waived when the goods total reaches it.
    """

    def __init__(
        self,
        postal_codes: Optional[PostalCodeDirectory] = None,
        parish_locator: Optional[ParishLocator] = None,
    ):
        self.postal_codes = postal_codes
        self.parish_locator = parish_locator

    def calculate(self, cart: Cart) -> Optional[Adjustment]:
        """Replace the cart's shipping adjustment; None when nothing can be priced yet."""
        if not cart.has_shipping_context:
            return None

        method = cart.shipment_method
        if method.uses_weights():
            logger.debug("Shipping for cart %s priced by weight (%s)", cart.id, method.name)
            price, threshold = self._weight_banded(cart, method)
        elif method.is_home_delivery():
            logger.debug("Shipping for cart %s priced by postal code (%s)", cart.id, method.name)
            price, threshold = self._postal_code_banded(cart)
        else:
            logger.debug("Shipping for cart %s priced flat (%s)", cart.id, method.name)
            price, threshold = to_decimal(method.price), None

        waived = threshold is not None and cart.goods_total() >= threshold
        adjustment = Adjustment.create(
            AdjustmentType.SHIPPING,
            ZERO if waived else price,
            cart.adjustment_owner,
            title=method.name,
            method_id=str(method.id),
            price=str(price),
            threshold=str(threshold) if threshold is not None else None,
            waived=waived,
        )
        cart.ledger.remove_type(cart.adjustment_owner, AdjustmentType.SHIPPING)
        cart.ledger.add(adjustment)
        return adjustment

    def _weight_banded(self, cart: Cart, method: ShipmentMethod) -> Tuple[Decimal, Optional[Decimal]]:
        country = cart.destination.country
        zone = method.zone_for(country) if country else None
        if zone is None:
            raise ShippingZoneNotFoundError(method.name, country)

        weight = cart.weight()
        band = zone.band_for(weight)
        if band is None:
            raise WeightBandNotFoundError(method.name, weight)

        threshold = None
        under_max_weight = not zone.max_weight or weight < zone.max_weight
        if zone.shipping_offer and under_max_weight and not cart.items_prevent_free_shipping():
            threshold = zone.min_value
        return to_decimal(band.price), threshold

    def _postal_code_banded(self, cart: Cart) -> Tuple[Decimal, Optional[Decimal]]:
        entry = self.resolve_postal_code(cart)
        threshold = None
        if entry.shipping_offer and not cart.items_prevent_free_shipping():
            threshold = entry.min_value
        return to_decimal(entry.shipping_price), threshold

    def resolve_postal_code(self, cart: Cart) -> PostalCodeEntry:
        """Exact match, then prefix match, then parish lookup when prefix prices disagree."""
        destination = cart.destination
        postal_code = destination.postal_code
        if self.postal_codes is None:
            raise PostalCodeNotDeliverableError(postal_code)

        entries = self.postal_codes.find(postal_code)
        if entries:
            return entries[0]

        prefix = destination.postal_code_prefix
        entries = self.postal_codes.find(prefix) if prefix else []
        if not entries:
            raise PostalCodeNotDeliverableError(postal_code)
        if len({entry.shipping_price for entry in entries}) == 1:
            return entries[0]

        parish = None
        if self.parish_locator is not None:
            parish = self.parish_locator.locate(prefix, destination.postal_code_suffix)
        if parish:
            for entry in entries:
                if entry.parish.lower() == parish.lower():
                    return entry
        raise PostalCodeNotDeliverableError(postal_code)
