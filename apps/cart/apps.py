"""
Cart app configuration.
"""
from django.apps import AppConfig


class CartConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.cart'
    label = 'cart'
    verbose_name = 'Cart'
