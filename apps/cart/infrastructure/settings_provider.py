"""
Pricing settings provider.

Static defaults come from Django settings (``CART_PRICING`` and
``CART_EXTRA_PRODUCT_ATTRIBUTES``). Values edited at runtime from the back
office live in the cache under the ``settings`` prefix and win over them.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from django.conf import settings as django_settings

from shared.infrastructure.cache import SettingsCache
from ..domain.exceptions import InvalidCartConfigurationError
from ..domain.value_objects import PricingSettings

DECIMAL_FIELDS = ('store_discount', 'card_rate', 'card_rate_medical')
OPTIONAL_DECIMAL_FIELDS = ('packaging_fee', 'card_price_ceiling')
BOOLEAN_FIELDS = ('campaign_ignore_store_discount', 'infinite_stock')


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def _as_decimal(name: str, value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidCartConfigurationError(
            f"Pricing setting `{name}` must be a number, got {value!r}",
            setting=name,
        ) from exc


def _as_optional_decimal(name: str, value: Any) -> Optional[Decimal]:
    # an empty value disables the setting
    if value is None or value == '':
        return None
    return _as_decimal(name, value)


class CartSettingsProvider:
    """Builds `PricingSettings` from Django settings plus cache overrides."""

    def __init__(self, cache: Optional[SettingsCache] = None):
        self.cache = cache or SettingsCache(prefix='settings')

    def raw_value(self, name: str, default: Any = None) -> Any:
        configured = getattr(django_settings, 'CART_PRICING', {}).get(name, default)
        return self.cache.get(name, configured)

    def get_settings(self) -> PricingSettings:
        values = {}
        for name in DECIMAL_FIELDS:
            values[name] = _as_decimal(name, self.raw_value(name, 0))
        for name in OPTIONAL_DECIMAL_FIELDS:
            values[name] = _as_optional_decimal(name, self.raw_value(name))
        for name in BOOLEAN_FIELDS:
            values[name] = _as_bool(self.raw_value(name, False))

        max_stock_cart = self.raw_value('max_stock_cart')
        if max_stock_cart in (None, ''):
            values['max_stock_cart'] = None
        else:
            try:
                values['max_stock_cart'] = int(max_stock_cart)
            except (TypeError, ValueError) as exc:
                raise InvalidCartConfigurationError(
                    f"Pricing setting `max_stock_cart` must be an integer, got {max_stock_cart!r}",
                    setting='max_stock_cart',
                ) from exc

        # validated by the cart manager before it merges attributes
        values['extra_product_attributes'] = getattr(
            django_settings, 'CART_EXTRA_PRODUCT_ATTRIBUTES', ()
        )
        return PricingSettings(**values)
