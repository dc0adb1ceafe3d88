"""
Builders for cart tests.
"""
from decimal import Decimal
from typing import Dict, Optional
from uuid import UUID, uuid4

from apps.cart.domain.catalog import DiscountCampaign, Product
from apps.cart.domain.entities import Cart
from apps.cart.domain.repositories import CartRepository
from apps.cart.domain.services import CartRecalculator
from apps.cart.domain.value_objects import PricingSettings


def make_product(price='10.00', **kwargs) -> Product:
    defaults = {
        'name': 'Product',
        'sku': f"SKU-{uuid4().hex[:8]}",
        'price_vat': Decimal(price),
        'stock': 100,
    }
    defaults.update(kwargs)
    return Product(**defaults)


def make_campaign(tag, **kwargs) -> DiscountCampaign:
    defaults = {
        'id': uuid4(),
        'name': f"Campaign {tag}",
        'tag': tag,
    }
    defaults.update(kwargs)
    return DiscountCampaign(**defaults)


def make_cart(*lines, user_id=None) -> Cart:
    """Cart holding `(product, quantity)` lines."""
    cart = Cart.create(user_id=user_id)
    for product, quantity in lines:
        cart.add_line(product, quantity)
    return cart


def recalculated(cart: Cart, settings: Optional[PricingSettings] = None, **kwargs) -> Cart:
    CartRecalculator(settings, **kwargs).recalculate(cart)
    return cart


class InMemoryCartRepository(CartRepository):
    """Cart repository kept in a dict."""

    def __init__(self):
        self.carts: Dict[UUID, Cart] = {}
        self.saves = 0

    def save(self, cart: Cart) -> Cart:
        self.carts[cart.id] = cart
        self.saves += 1
        return cart

    def find_by_id(self, cart_id: UUID) -> Optional[Cart]:
        return self.carts.get(cart_id)

    def find_by_user_id(self, user_id: UUID) -> Optional[Cart]:
        carts = [
            cart for cart in self.carts.values()
            if cart.user_id == user_id and cart.state.is_active
        ]
        return max(carts, key=lambda cart: cart.updated_at) if carts else None

    def delete(self, cart_id: UUID) -> bool:
        return self.carts.pop(cart_id, None) is not None
