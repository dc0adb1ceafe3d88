"""
Pytest configuration and fixtures.
"""
import pytest


@pytest.fixture
def api_client():
    """Create an API client for testing."""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    """Pricing overrides live in the cache; start every test without them."""
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def catalog():
    """In-memory catalog installed as the process-wide gateway."""
    from apps.cart.infrastructure.catalog import InMemoryCatalog, set_catalog

    catalog = InMemoryCatalog()
    set_catalog(catalog)
    yield catalog
    set_catalog(None)
