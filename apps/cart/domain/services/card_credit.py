"""
Loyalty card credit.
"""
from decimal import Decimal
from typing import Optional

from ..adjustments import Adjustment, AdjustmentType
from ..entities.cart import Cart
from ..entities.cart_item import CartItem
from ..value_objects import PricingSettings
from ..value_objects.money import ZERO, percentage_of, quantize_money, sum_money, to_decimal


class CardCreditCalculator:
    """
    Credit drawn from the attached card's balance.

    Each line earns a share of its total at a card rate: the first campaign
    overriding the rate wins, then the medical rate for medical products,
    then the store rate. Lines whose unit price exceeds the price ceiling
    earn nothing.
    """

    def __init__(self, settings: PricingSettings):
        self.settings = settings

    def rate_for(self, item: CartItem) -> Decimal:
        for campaign in item.product.valid_discount_tree:
            if campaign.card_rate is not None:
                return to_decimal(campaign.card_rate)
        if item.is_medical():
            return to_decimal(self.settings.card_rate_medical)
        return to_decimal(self.settings.card_rate)

    def eligible_amount(self, cart: Cart) -> Decimal:
        ceiling = self.settings.card_price_ceiling
        amounts = []
        for item in cart.items:
            if ceiling is not None and item.price_vat > ceiling:
                continue
            amounts.append(percentage_of(max(item.total(cart.ledger), ZERO), self.rate_for(item)))
        return quantize_money(sum_money(amounts))

    def calculate(self, cart: Cart) -> Optional[Adjustment]:
        cart.ledger.remove_type(cart.adjustment_owner, AdjustmentType.CLIENT_CARD)
        if cart.card is None:
            return None

        balance = max(to_decimal(cart.card.balance() or ZERO), ZERO)
        credit = min(balance, self.eligible_amount(cart))
        if credit <= 0:
            return None

        adjustment = Adjustment.create(
            AdjustmentType.CLIENT_CARD,
            -credit,
            cart.adjustment_owner,
            card_number=cart.card.number,
            balance=str(balance),
        )
        cart.ledger.add(adjustment)
        return adjustment
