# bingtiles/tileurlfunction.py
"""
瓦片 URL 函数

URL 函数签名：(tile_coord, pixel_ratio, projection) -> Optional[str]
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from .tile_math import TileCoord, TileMath

TileUrlFunction = Callable[[Optional[TileCoord], float, Any], Optional[str]]

HIDPI_SUFFIX = "&dpi=d1&device=mobile"


@dataclass(frozen=True)
class UrlTemplateConfig:
    """
    URL 模板配置

    Args:
        template: 含 {subdomain}、{culture}、{quadkey} 占位符的模板
        subdomains: 子域名列表
        culture: 语言区域
        hidpi: 是否请求高分辨率瓦片
    """

    template: str
    subdomains: Tuple[str, ...] = ()
    culture: str = "en-us"
    hidpi: bool = False


def tile_coord_hash(tile_coord: TileCoord) -> int:
    zoom, column, row = tile_coord
    return (column << zoom) + row


def create_from_tile_url_functions(functions: Sequence[TileUrlFunction]) -> TileUrlFunction:
    """
    将多个 URL 函数合并为一个，同一瓦片总是落在同一个函数（子域名）上

    Args:
        functions: URL 函数列表

    Returns:
        TileUrlFunction: 合并后的 URL 函数
    """
    functions = tuple(functions)
    if not functions:
        raise ValueError("至少需要一个 URL 函数")
    if len(functions) == 1:
        return functions[0]

    def tile_url_function(tile_coord, pixel_ratio=1.0, projection=None):
        if not tile_coord:
            return None
        index = tile_coord_hash(tile_coord) % len(functions)
        return functions[index](tile_coord, pixel_ratio, projection)

    return tile_url_function


def _create_for_base_url(base_url: str, hidpi: bool) -> TileUrlFunction:
    if hidpi:
        base_url += HIDPI_SUFFIX

    def tile_url_function(tile_coord, pixel_ratio=1.0, projection=None):
        if not tile_coord:
            return None
        zoom, column, row = tile_coord
        return base_url.replace("{quadkey}", TileMath.quadkey(zoom, column, row))

    return tile_url_function


def create_from_template(config: UrlTemplateConfig) -> TileUrlFunction:
    """
    根据模板构建 URL 函数

    {subdomain} 和 {culture} 在构建时替换，每个子域名对应一个基础 URL；
    {quadkey} 在请求时替换。

    Args:
        config: URL 模板配置

    Returns:
        TileUrlFunction: URL 函数
    """
    template = config.template.replace("{culture}", config.culture)
    subdomains = config.subdomains or (None,)
    functions = []
    for subdomain in subdomains:
        base_url = template if subdomain is None else template.replace("{subdomain}", subdomain)
        functions.append(_create_for_base_url(base_url, config.hidpi))
    return create_from_tile_url_functions(functions)
