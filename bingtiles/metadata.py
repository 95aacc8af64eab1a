# bingtiles/metadata.py
"""
Bing Maps 影像元数据（Imagery Metadata）解析与校验
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

from .exceptions import MetadataValidationError

METADATA_URL = "https://dev.virtualearth.net/REST/v1/Imagery/Metadata/"


@dataclass(frozen=True)
class CoverageArea:
    """
    版权覆盖区域

    bbox 按 Bing 的约定为 (south, west, north, east)，单位为度。
    """

    bbox: Tuple[float, float, float, float]
    zoom_min: int
    zoom_max: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CoverageArea":
        south, west, north, east = (float(v) for v in data["bbox"])
        return cls(
            bbox=(south, west, north, east),
            zoom_min=int(data["zoomMin"]),
            zoom_max=int(data["zoomMax"]),
        )


@dataclass(frozen=True)
class ImageryProvider:
    """
    影像提供商及其覆盖区域
    """

    attribution: str
    coverage_areas: Tuple[CoverageArea, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImageryProvider":
        return cls(
            attribution=str(data["attribution"]),
            coverage_areas=tuple(
                CoverageArea.from_dict(area) for area in data.get("coverageAreas") or ()
            ),
        )


@dataclass(frozen=True)
class ImageryResource:
    """
    元数据响应中唯一的影像资源
    """

    zoom_min: int
    zoom_max: int
    image_width: int
    image_height: int
    image_url: str
    image_url_subdomains: Tuple[str, ...]
    imagery_providers: Optional[Tuple[ImageryProvider, ...]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImageryResource":
        providers = data.get("imageryProviders")
        return cls(
            zoom_min=int(data["zoomMin"]),
            zoom_max=int(data["zoomMax"]),
            image_width=int(data["imageWidth"]),
            image_height=int(data["imageHeight"]),
            image_url=str(data["imageUrl"]),
            image_url_subdomains=tuple(str(s) for s in data.get("imageUrlSubdomains") or ()),
            imagery_providers=(
                tuple(ImageryProvider.from_dict(p) for p in providers)
                if providers is not None
                else None
            ),
        )


def build_metadata_url(imagery_set: str, api_key: str, culture: str) -> str:
    """
    构造元数据请求 URL

    Args:
        imagery_set: 影像集名称，如 Aerial、Road
        api_key: Bing Maps 密钥
        culture: 语言区域，如 en-us

    Returns:
        str: 请求 URL
    """
    return (
        METADATA_URL
        + quote(imagery_set, safe="")
        + "?uriScheme=https&include=ImageryProviders&key="
        + quote(api_key, safe="")
        + "&c="
        + quote(culture, safe="-")
    )


def validate_response(response: Any) -> ImageryResource:
    """
    校验元数据响应并提取唯一的影像资源

    Args:
        response: 解码后的 JSON 响应

    Returns:
        ImageryResource: 影像资源

    Raises:
        MetadataValidationError: 响应不合法
    """
    if not isinstance(response, dict):
        raise MetadataValidationError(f"元数据响应不是对象: {type(response).__name__}")

    status_code = response.get("statusCode")
    if status_code != 200:
        raise MetadataValidationError(f"元数据状态码异常: {status_code}")

    status_description = response.get("statusDescription")
    if status_description != "OK":
        raise MetadataValidationError(f"元数据状态描述异常: {status_description}")

    auth_result = response.get("authenticationResultCode")
    if auth_result != "ValidCredentials":
        raise MetadataValidationError(f"密钥认证失败: {auth_result}")

    resource_sets = response.get("resourceSets")
    if not isinstance(resource_sets, list) or len(resource_sets) != 1:
        raise MetadataValidationError(f"resourceSets 应为只含一项的数组: {resource_sets!r}")
    if not isinstance(resource_sets[0], dict):
        raise MetadataValidationError(f"resourceSet 不是对象: {type(resource_sets[0]).__name__}")

    resources = resource_sets[0].get("resources")
    if not isinstance(resources, list) or len(resources) != 1:
        raise MetadataValidationError(f"resources 应为只含一项的数组: {resources!r}")
    if not isinstance(resources[0], dict):
        raise MetadataValidationError(f"resource 不是对象: {type(resources[0]).__name__}")

    try:
        return ImageryResource.from_dict(resources[0])
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise MetadataValidationError(f"影像资源格式错误: {e}") from e
