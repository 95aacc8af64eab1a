# bingtiles/tilegrid.py
"""
瓦片金字塔（Tile Grid）

原点在范围左上角，瓦片源的行号自顶行 -1 起向下递减。
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .config import MAX_ZOOM_UNSET
from .metadata import ImageryResource
from .projection import EPSG_3857, Extent

TileSize = Union[int, float, Tuple[float, float]]


@dataclass(frozen=True)
class TileGrid:
    """
    标准 2 的幂瓦片金字塔，构建后不可变
    """

    extent: Extent
    min_zoom: int
    max_zoom: int
    tile_size: TileSize
    origin: Tuple[float, float]
    resolutions: Tuple[float, ...]


def create_xyz(
    extent: Extent,
    min_zoom: int = 0,
    max_zoom: int = 42,
    tile_size: TileSize = 256,
) -> TileGrid:
    """
    在给定范围上创建 XYZ 金字塔，每级分辨率减半

    Args:
        extent: 金字塔覆盖范围
        min_zoom: 最小缩放级别
        max_zoom: 最大缩放级别
        tile_size: 瓦片像素尺寸，标量或 (width, height)

    Returns:
        TileGrid: 瓦片金字塔
    """
    if isinstance(tile_size, tuple):
        width, height = tile_size
    else:
        width = height = tile_size
    max_resolution = max(
        (extent[2] - extent[0]) / width,
        (extent[3] - extent[1]) / height,
    )
    resolutions = tuple(max_resolution / 2 ** z for z in range(max_zoom + 1))
    return TileGrid(
        extent=tuple(extent),
        min_zoom=min_zoom,
        max_zoom=max_zoom,
        tile_size=tile_size,
        origin=(extent[0], extent[3]),
        resolutions=resolutions,
    )


def build_tile_grid(
    resource: ImageryResource,
    max_zoom: int = MAX_ZOOM_UNSET,
    hidpi: bool = False,
    extent: Optional[Extent] = None,
) -> TileGrid:
    """
    根据元数据资源构建瓦片金字塔

    资源本身不在这里校验，调用前已由元数据校验拒绝格式错误的响应。

    Args:
        resource: 影像资源
        max_zoom: 最大缩放级别覆盖值，-1 使用资源中的 zoomMax
        hidpi: 高分辨率模式，瓦片像素尺寸减半以保持相同的地理覆盖
        extent: 金字塔范围，默认 EPSG:3857 全图

    Returns:
        TileGrid: 瓦片金字塔
    """
    if max_zoom is None or max_zoom == MAX_ZOOM_UNSET:
        max_zoom = resource.zoom_max
    divisor = 2 if hidpi else 1
    if resource.image_width == resource.image_height:
        tile_size = resource.image_width / divisor
        if tile_size == int(tile_size):
            tile_size = int(tile_size)
    else:
        tile_size = (resource.image_width / divisor, resource.image_height / divisor)
    if extent is None:
        extent = EPSG_3857.extent
    return create_xyz(
        extent=extent,
        min_zoom=resource.zoom_min,
        max_zoom=max_zoom,
        tile_size=tile_size,
    )
