# bingtiles/providers/base.py

import threading
from enum import Enum
from typing import Callable, List, Optional

from loguru import logger

from ..attribution import FrameState
from ..tilegrid import TileGrid
from ..tileurlfunction import TileUrlFunction


class SourceState(Enum):
    """
    瓦片源状态
    """
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class TileProviderType(Enum):
    """
    瓦片提供商类型枚举
    """
    BING = "bing"


AttributionFunction = Callable[[FrameState], List[str]]
StateListener = Callable[["TileSource", SourceState], None]


class TileSource:
    """
    瓦片源基类：向渲染组件暴露 state、tile_grid、tile_url_function、attribution_function

    状态只允许从 LOADING 转换一次到 READY 或 ERROR。
    """

    def __init__(self, name: str, provider_type: TileProviderType):
        self.name = name
        self.provider_type = provider_type
        self.tile_grid: Optional[TileGrid] = None
        self.tile_url_function: Optional[TileUrlFunction] = None
        self.attribution_function: Optional[AttributionFunction] = None
        self._disposed = False
        self._state = SourceState.LOADING
        self._state_lock = threading.Lock()
        self._settled = threading.Event()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> SourceState:
        return self._state

    @property
    def disposed(self) -> bool:
        with self._state_lock:
            return self._disposed

    def on_state_change(self, listener: StateListener):
        """
        注册状态监听器；已经处于终态时立即调用

        Args:
            listener: 回调函数，参数为 (source, state)
        """
        with self._state_lock:
            self._listeners.append(listener)
            settled = self._state is not SourceState.LOADING
        if settled:
            listener(self, self._state)

    def _set_state(self, state: SourceState, **installed) -> bool:
        """
        执行状态转换，并在同一把锁内安装 installed 中的属性（tile_grid 等）

        已释放或已处于终态时不做任何修改。

        Args:
            state: 目标状态
            installed: 转换成功时一并设置的属性

        Returns:
            bool: 是否发生了转换
        """
        with self._state_lock:
            if self._disposed:
                logger.debug(f"{self.name} - 已释放，忽略状态转换 -> {state.value}")
                return False
            if self._state is not SourceState.LOADING or state is SourceState.LOADING:
                logger.warning(f"{self.name} - 忽略状态转换 {self._state.value} -> {state.value}")
                return False
            for key, value in installed.items():
                setattr(self, key, value)
            self._state = state
            listeners = list(self._listeners)
        self._settled.set()
        logger.info(f"{self.name} - 状态: {state.value}")
        for listener in listeners:
            try:
                listener(self, state)
            except Exception as e:
                logger.error(f"{self.name} - 状态监听器出错: {e}")
        return True

    def wait(self, timeout: Optional[float] = None) -> SourceState:
        """
        阻塞直到离开 LOADING 状态或超时

        Args:
            timeout: 最长等待时间（秒），None 表示一直等待

        Returns:
            SourceState: 当前状态
        """
        self._settled.wait(timeout)
        return self._state

    def get_tile_url(self, tile_coord, pixel_ratio: float = 1.0, projection=None) -> Optional[str]:
        """
        获取瓦片URL，尚未就绪时返回 None
        """
        if self.tile_url_function is None:
            return None
        return self.tile_url_function(tile_coord, pixel_ratio, projection)

    def get_attributions(self, frame_state: FrameState) -> List[str]:
        """
        当前帧的版权信息，未安装版权函数时返回空列表
        """
        if self.attribution_function is None:
            return []
        return self.attribution_function(frame_state)

    def dispose(self):
        """
        释放瓦片源，之后到达的响应不再修改状态
        """
        with self._state_lock:
            self._disposed = True
