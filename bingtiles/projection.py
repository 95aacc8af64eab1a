# bingtiles/projection.py
"""
经纬度到 Web Mercator 的坐标转换以及范围（extent）运算

extent 统一使用 (min_x, min_y, max_x, max_y) 顺序。
"""

import math
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

Extent = Tuple[float, float, float, float]
TransformFunction = Callable[[Sequence[float]], List[float]]

# WGS84 椭球长半轴
RADIUS = 6378137.0
HALF_SIZE = math.pi * RADIUS


@dataclass(frozen=True)
class Projection:
    """
    投影编码及其有效范围
    """

    code: str
    extent: Extent


EPSG_4326 = Projection("EPSG:4326", (-180.0, -90.0, 180.0, 90.0))
EPSG_3857 = Projection("EPSG:3857", (-HALF_SIZE, -HALF_SIZE, HALF_SIZE, HALF_SIZE))


def from_epsg4326(coordinates: Sequence[float]) -> List[float]:
    """
    经纬度 -> Web Mercator，纬度超出范围时夹紧到投影边界

    Args:
        coordinates: 扁平坐标序列 [lon0, lat0, lon1, lat1, ...]

    Returns:
        List[float]: [x0, y0, x1, y1, ...]，单位为米
    """
    output = list(coordinates)
    for i in range(0, len(output), 2):
        output[i] = RADIUS * math.pi * output[i] / 180.0
        lat = output[i + 1]
        if lat >= 90.0:
            y = HALF_SIZE
        elif lat <= -90.0:
            y = -HALF_SIZE
        else:
            y = RADIUS * math.log(math.tan(math.pi * (lat + 90.0) / 360.0))
        output[i + 1] = max(-HALF_SIZE, min(HALF_SIZE, y))
    return output


def _identity(coordinates: Sequence[float]) -> List[float]:
    return list(coordinates)


def get_transform(source: Projection, destination: Projection) -> TransformFunction:
    """
    获取坐标转换函数，只支持相同投影和 EPSG:4326 -> EPSG:3857

    Raises:
        ValueError: 不支持的投影组合
    """
    if source == destination:
        return _identity
    if source == EPSG_4326 and destination == EPSG_3857:
        return from_epsg4326
    raise ValueError(f"不支持的投影转换: {source.code} -> {destination.code}")


def apply_transform(extent: Extent, transform: TransformFunction) -> Extent:
    """
    转换范围的四个角点，返回包围它们的新范围

    Args:
        extent: (min_x, min_y, max_x, max_y)
        transform: 坐标转换函数

    Returns:
        Extent: 转换后的范围
    """
    min_x, min_y, max_x, max_y = extent
    coordinates = transform([min_x, min_y, min_x, max_y, max_x, min_y, max_x, max_y])
    xs = coordinates[0::2]
    ys = coordinates[1::2]
    return min(xs), min(ys), max(xs), max(ys)


def intersects(extent1: Extent, extent2: Extent) -> bool:
    """
    判断两个范围是否相交（边界接触也算相交）
    """
    return (
        extent1[0] <= extent2[2]
        and extent1[2] >= extent2[0]
        and extent1[1] <= extent2[3]
        and extent1[3] >= extent2[1]
    )
