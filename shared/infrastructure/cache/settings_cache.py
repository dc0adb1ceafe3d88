"""
Settings cache.

Runtime overrides edited from the back office are stored in the Django
cache as JSON strings under a key prefix. This wrapper decodes them back.
"""
import json
from typing import Any, Optional

from django.core.cache import cache


class SettingsCache:
    """Prefixed Django cache wrapper with JSON (de)serialization."""

    def __init__(self, prefix: str = "settings"):
        self.prefix = prefix

    def _make_key(self, key: str) -> str:
        if self.prefix:
            return f"{self.prefix}:{key}"
        return key

    def get(self, key: str, default: Any = None) -> Optional[Any]:
        """Stored value, decoded from JSON when possible."""
        value = cache.get(self._make_key(key))
        if value is None:
            return default
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return value
        return value

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """Store a value; None timeout keeps it until it is deleted."""
        if isinstance(value, (dict, list, bool)):
            value = json.dumps(value)
        cache.set(self._make_key(key), value, timeout)

    def delete(self, key: str) -> None:
        cache.delete(self._make_key(key))
