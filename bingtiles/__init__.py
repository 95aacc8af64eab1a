# bingtiles/__init__.py
"""
bingtiles：Bing Maps 瓦片寻址

功能：
1. 瓦片坐标 -> QuadKey
2. 根据影像元数据构建瓦片金字塔
3. 多子域名瓦片 URL
4. 按可视范围计算版权信息
"""

from .attribution import TOS_ATTRIBUTION, AttributionResolver, FrameState
from .config import BingMapsOptions
from .exceptions import BingTilesError, MetadataFetchError, MetadataValidationError
from .providers import BingMapsSource, ProviderManager, SourceState, TileSource
from .tile_math import TileMath
from .tilegrid import TileGrid, build_tile_grid, create_xyz
from .tileurlfunction import UrlTemplateConfig, create_from_template

__all__ = [
    'TOS_ATTRIBUTION',
    'AttributionResolver',
    'FrameState',
    'BingMapsOptions',
    'BingTilesError',
    'MetadataFetchError',
    'MetadataValidationError',
    'BingMapsSource',
    'ProviderManager',
    'SourceState',
    'TileSource',
    'TileMath',
    'TileGrid',
    'build_tile_grid',
    'create_xyz',
    'UrlTemplateConfig',
    'create_from_template',
]
__version__ = '1.0'
