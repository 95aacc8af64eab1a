# bingtiles/providers/bing.py

from typing import Any, Dict, Optional

from loguru import logger

from ..attribution import TOS_ATTRIBUTION, AttributionResolver
from ..config import BingMapsOptions
from ..exceptions import MetadataValidationError
from ..metadata import ImageryResource, build_metadata_url, validate_response
from ..net import MetadataFetcher
from ..projection import EPSG_3857, EPSG_4326, get_transform
from ..tilegrid import build_tile_grid
from ..tileurlfunction import UrlTemplateConfig, create_from_template
from .base import SourceState, TileProviderType, TileSource


class BingMapsSource(TileSource):
    """
    Bing Maps 瓦片源，采用 QuadKey

    构造时立即异步请求影像元数据，响应到达后安装瓦片金字塔、URL 函数和
    版权函数并进入 READY；响应不合法或请求失败进入 ERROR。构造函数本身
    不会因请求失败而抛出异常，调用方通过 state 或 on_state_change 观察结果。
    """

    TOS_ATTRIBUTION = TOS_ATTRIBUTION

    def __init__(self, options: BingMapsOptions, fetcher: Optional[MetadataFetcher] = None):
        """
        初始化Bing瓦片源

        Args:
            options: 配置
            fetcher: 元数据请求器，默认使用 requests 的 MetadataFetcher
        """
        super().__init__(name="bing", provider_type=TileProviderType.BING)
        self.options = options
        self.projection = EPSG_3857
        self.resource: Optional[ImageryResource] = None
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or MetadataFetcher(timeout=options.timeout)

        url = build_metadata_url(options.imagery_set, options.api_key, options.culture)
        logger.info(
            f"初始化Bing瓦片源: imagery_set={options.imagery_set}, culture={options.culture}, "
            f"hidpi={options.hidpi}, max_zoom={options.max_zoom}"
        )
        self.fetcher.fetch(url, self.handle_imagery_metadata_response, self.handle_imagery_metadata_error)

    def get_api_key(self) -> str:
        return self.options.api_key

    def get_imagery_set(self) -> str:
        return self.options.imagery_set

    def get_culture(self) -> str:
        return self.options.culture

    def is_hidpi(self) -> bool:
        return self.options.hidpi

    def get_tile_source_options(self) -> Dict[str, Any]:
        """
        交给瓦片渲染组件的选项：调用方的通用选项加上本源固定的设置

        Returns:
            Dict[str, Any]: 选项
        """
        tile_source_options = dict(self.options.tile_source_options)
        tile_source_options.setdefault("wrap_x", True)
        tile_source_options.update({
            "cross_origin": "anonymous",
            "opaque": True,
            "projection": self.projection.code,
            "tile_pixel_ratio": 2 if self.options.hidpi else 1,
        })
        return tile_source_options

    def handle_imagery_metadata_response(self, response: Any):
        """
        处理元数据响应：校验，安装金字塔、URL 函数和版权函数，再转换状态

        Args:
            response: 解码后的 JSON 响应
        """
        if self.disposed:
            logger.debug(f"{self.name} - 已释放，忽略元数据响应")
            return
        if self.state is not SourceState.LOADING:
            logger.warning(f"{self.name} - 已处于 {self.state.value} 状态，忽略重复的元数据响应")
            return

        try:
            resource = validate_response(response)
            tile_grid = build_tile_grid(
                resource,
                max_zoom=self.options.max_zoom,
                hidpi=self.options.hidpi,
                extent=self.projection.extent,
            )
            tile_url_function = create_from_template(UrlTemplateConfig(
                template=resource.image_url,
                subdomains=resource.image_url_subdomains,
                culture=self.options.culture,
                hidpi=self.options.hidpi,
            ))
            attribution_function = None
            if resource.imagery_providers:
                attribution_function = AttributionResolver(
                    resource.imagery_providers,
                    get_transform(EPSG_4326, self.projection),
                    TOS_ATTRIBUTION,
                )
        except MetadataValidationError as e:
            logger.error(f"{self.name} - 元数据校验失败: {e}")
            self._finish(SourceState.ERROR)
            return
        except Exception as e:
            # 请求线程里的异常不会传给调用方，统一转为 ERROR
            logger.exception(f"{self.name} - 构建瓦片金字塔失败: {e}")
            self._finish(SourceState.ERROR)
            return

        logger.info(
            f"{self.name} - 瓦片金字塔: zoom={tile_grid.min_zoom}-{tile_grid.max_zoom}, "
            f"tile_size={tile_grid.tile_size}, 子域名数量={len(resource.image_url_subdomains)}"
        )
        self._finish(
            SourceState.READY,
            resource=resource,
            tile_grid=tile_grid,
            tile_url_function=tile_url_function,
            attribution_function=attribution_function,
        )

    def handle_imagery_metadata_error(self, error: BaseException):
        """
        处理请求失败（网络错误、超时、非 JSON 响应）
        """
        if self.disposed:
            logger.debug(f"{self.name} - 已释放，忽略元数据请求失败")
            return
        logger.error(f"{self.name} - 元数据请求失败: {error}")
        self._finish(SourceState.ERROR)

    def _finish(self, state: SourceState, **installed):
        self._set_state(state, **installed)
        if self._owns_fetcher:
            self.fetcher.close()

    def dispose(self):
        super().dispose()
        if self._owns_fetcher:
            self.fetcher.close()
