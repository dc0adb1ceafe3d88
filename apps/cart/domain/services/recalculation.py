"""
Cart recalculation.

Runs the whole pricing pipeline for a cart: resolve campaigns, apply item
discounts, price shipping and packaging, validate and apply the coupon,
then draw loyalty card credit. Every pass starts from an empty ledger.
"""
import logging
from typing import Optional

from ..adjustments import AdjustmentLedger
from ..catalog import ParishLocator, PostalCodeDirectory
from ..entities.cart import Cart
from ..events import CartRecalculated, CouponRejected
from ..exceptions import CartNotEditableError
from ..value_objects import PricingSettings
from .card_credit import CardCreditCalculator
from .coupon_applier import CouponApplier
from .coupon_validator import CouponValidator
from .discount_applier import DiscountApplier
from .discount_resolver import DiscountResolver
from .packaging_fee import PackagingFeeCalculator
from .shipping_fee import ShippingFeeCalculator

logger = logging.getLogger(__name__)


class CartRecalculator:
    """Orchestrates one recalculation pass, guarded by the cart state."""

    def __init__(
        self,
        settings: Optional[PricingSettings] = None,
        postal_codes: Optional[PostalCodeDirectory] = None,
        parish_locator: Optional[ParishLocator] = None,
        coupon_validator: Optional[CouponValidator] = None,
    ):
        self.settings = settings or PricingSettings()
        self.resolver = DiscountResolver()
        self.discount_applier = DiscountApplier(self.settings)
        self.shipping_fee = ShippingFeeCalculator(postal_codes, parish_locator)
        self.packaging_fee = PackagingFeeCalculator(self.settings)
        self.coupon_validator = coupon_validator or CouponValidator()
        self.coupon_applier = CouponApplier()
        self.card_credit = CardCreditCalculator(self.settings)

    def recalculate(self, cart: Cart) -> bool:
        """
        Rebuild every adjustment of the cart.

        Returns False without touching the cart when a pass is already
        running. If a step raises, the previous ledger is put back (it is
        stale from then on) and the error propagates. The cart leaves the
        loading state in every case.
        """
        if cart.state.is_loading:
            logger.warning("Recalculation of cart %s ignored: already in progress", cart.id)
            return False
        if not cart.state.is_active:
            raise CartNotEditableError('recalculate', cart.state.value)

        logger.debug("Recalculating cart %s (%d items)", cart.id, len(cart.items))
        previous_state = cart.mark_loading()
        previous_ledger = cart.ledger
        previous_resolution = cart.resolution
        cart.ledger = AdjustmentLedger()
        try:
            self._run_pipeline(cart)
        except Exception:
            cart.ledger = previous_ledger
            cart.resolution = previous_resolution
            raise
        finally:
            cart.reset_state(previous_state)

        cart.add_domain_event(
            CartRecalculated(
                cart_id=cart.id,
                total=cart.total(),
                adjustment_count=len(cart.ledger),
            )
        )
        logger.debug("Recalculated cart %s: total %s", cart.id, cart.total())
        return True

    def _run_pipeline(self, cart: Cart) -> None:
        resolution = self.resolver.resolve(cart.items)
        cart.resolution = resolution
        self.discount_applier.apply(cart, resolution)
        self.shipping_fee.calculate(cart)
        self.packaging_fee.calculate(cart)
        self._apply_coupon(cart)
        self.card_credit.calculate(cart)

    def _apply_coupon(self, cart: Cart) -> None:
        coupon = cart.coupon
        if coupon is None:
            cart.coupon_validation = None
            cart.active_coupon = None
            return

        result = self.coupon_validator.validate(coupon, cart)
        cart.coupon_validation = result
        if result.fails():
            cart.active_coupon = None
            cart.add_domain_event(
                CouponRejected(
                    cart_id=cart.id,
                    coupon_code=coupon.code,
                    rule=result.rule,
                    message=result.message,
                )
            )
            return

        cart.active_coupon = coupon
        self.coupon_applier.apply(cart, coupon)
