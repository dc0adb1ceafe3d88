# Cache
from .settings_cache import SettingsCache

__all__ = ['SettingsCache']
