# bingtiles/attribution.py

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .metadata import ImageryProvider
from .projection import Extent, TransformFunction, apply_transform, intersects

TOS_ATTRIBUTION = (
    '<a class="ol-attribution-bing-tos" '
    'href="https://www.microsoft.com/maps/product/terms.html">'
    "Terms of Use</a>"
)


@dataclass(frozen=True)
class FrameState:
    """
    当前帧：缩放级别和可视范围（地图投影坐标）
    """

    zoom: float
    extent: Extent


@dataclass(frozen=True)
class _ProjectedArea:
    zoom_min: int
    zoom_max: int
    extent: Extent


class AttributionResolver:
    """
    根据可视范围计算当前适用的版权信息

    覆盖区域的 bbox 在构建时一次性转换到地图投影，每帧只做比较。
    """

    def __init__(
        self,
        imagery_providers: Sequence[ImageryProvider],
        transform: TransformFunction,
        fixed_notice: str = TOS_ATTRIBUTION,
    ):
        """
        Args:
            imagery_providers: 影像提供商，按元数据顺序
            transform: 经纬度 -> 地图投影的转换函数
            fixed_notice: 始终附加在末尾的使用条款
        """
        providers: List[Tuple[str, Tuple[_ProjectedArea, ...]]] = []
        for provider in imagery_providers:
            areas = []
            for area in provider.coverage_areas:
                south, west, north, east = area.bbox
                extent = apply_transform((west, south, east, north), transform)
                areas.append(_ProjectedArea(area.zoom_min, area.zoom_max, extent))
            providers.append((provider.attribution, tuple(areas)))
        self._providers = tuple(providers)
        self.fixed_notice = fixed_notice

    def __call__(self, frame_state: FrameState) -> List[str]:
        """
        计算当前帧的版权信息

        Args:
            frame_state: 当前帧

        Returns:
            List[str]: 命中的提供商版权（元数据顺序，不重复），最后是使用条款
        """
        zoom = frame_state.zoom
        frame_extent = frame_state.extent
        attributions = []
        for attribution, areas in self._providers:
            for area in areas:
                if area.zoom_min <= zoom <= area.zoom_max and intersects(area.extent, frame_extent):
                    attributions.append(attribution)
                    break
        attributions.append(self.fixed_notice)
        return attributions
