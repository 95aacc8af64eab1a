# bingtiles/providers/manager.py

from typing import Dict, List, Optional, Type

from ..config import BingMapsOptions
from ..net import MetadataFetcher
from .base import TileSource
from .bing import BingMapsSource


class ProviderManager:
    """
    简单的 provider 注册 / 创建
    """

    _providers: Dict[str, Type[TileSource]] = {}

    @classmethod
    def register_provider(cls, name: str, source_class: Type[TileSource]):
        """
        注册瓦片源类型

        Args:
            name: 提供商名称
            source_class: 瓦片源类
        """
        cls._providers[name.lower()] = source_class

    @classmethod
    def get_provider(cls, name: str) -> Type[TileSource]:
        """
        获取瓦片源类型

        Args:
            name: 提供商名称

        Returns:
            Type[TileSource]: 瓦片源类

        Raises:
            ValueError: 未知的瓦片提供商
        """
        p = cls._providers.get(name.lower())
        if not p:
            raise ValueError(f"未知瓦片源: {name}")
        return p

    @classmethod
    def list_providers(cls) -> List[str]:
        """
        列出所有已注册的瓦片提供商
        """
        return list(cls._providers.keys())

    @classmethod
    def create_source(
        cls,
        name: str,
        options: BingMapsOptions,
        fetcher: Optional[MetadataFetcher] = None,
    ) -> TileSource:
        """
        创建瓦片源实例，创建即开始请求元数据

        Args:
            name: 提供商名称
            options: 配置
            fetcher: 元数据请求器

        Returns:
            TileSource: 瓦片源
        """
        return cls.get_provider(name)(options, fetcher=fetcher)


# 注册默认 provider
ProviderManager.register_provider("bing", BingMapsSource)
