# bingtiles/config.py

import os
from dataclasses import dataclass, field
from typing import Any, Dict

# 不覆盖服务端的最大缩放级别
MAX_ZOOM_UNSET = -1

API_KEY_ENV = "BING_MAPS_KEY"
IMAGERY_SET_ENV = "BING_MAPS_IMAGERY_SET"
DEFAULT_IMAGERY_SET = "Aerial"


@dataclass
class BingMapsOptions:
    """
    Bing Maps 瓦片源配置

    Args:
        api_key: Bing Maps 密钥（必填）
        imagery_set: 影像集名称（必填），如 Aerial、AerialWithLabels、Road
        hidpi: 是否请求高分辨率瓦片
        culture: 语言区域
        max_zoom: 最大缩放级别，-1 表示使用服务端返回的值
        timeout: 元数据请求超时（秒）
        tile_source_options: 原样转交给瓦片渲染组件的通用选项
            （cache_size、cross_origin、tile_load_function、wrap_x、transition 等）
    """

    api_key: str
    imagery_set: str
    hidpi: bool = False
    culture: str = "en-us"
    max_zoom: int = MAX_ZOOM_UNSET
    timeout: float = 10.0
    tile_source_options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.api_key:
            raise ValueError(f"缺少 Bing Maps 密钥，请通过 api_key 参数或 {API_KEY_ENV} 环境变量提供")
        if not self.imagery_set:
            raise ValueError("缺少影像集名称 imagery_set")
        if self.max_zoom != MAX_ZOOM_UNSET and self.max_zoom < 0:
            raise ValueError(f"无效的最大缩放级别: {self.max_zoom}")

    @classmethod
    def from_env(cls, **overrides) -> "BingMapsOptions":
        """
        从环境变量读取密钥和影像集，其余参数由 overrides 指定

        Returns:
            BingMapsOptions: 配置
        """
        values = {
            "api_key": os.environ.get(API_KEY_ENV, "").strip(),
            "imagery_set": os.environ.get(IMAGERY_SET_ENV, "").strip() or DEFAULT_IMAGERY_SET,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
