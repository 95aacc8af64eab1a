# bingtiles/providers/__init__.py

from .base import SourceState, TileProviderType, TileSource
from .bing import BingMapsSource
from .manager import ProviderManager

__all__ = [
    'SourceState',
    'TileProviderType',
    'TileSource',
    'BingMapsSource',
    'ProviderManager'
]
