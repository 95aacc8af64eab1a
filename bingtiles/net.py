# bingtiles/net.py

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

import requests
from loguru import logger

from .exceptions import MetadataFetchError


def create_request_session() -> requests.Session:
    """
    创建元数据请求会话，不做自动重试
    """
    session = requests.Session()
    session.headers.update({
        'User-Agent': 'bingtiles/1.0',
        'Accept': 'application/json',
        'Accept-Encoding': 'gzip, deflate',
    })

    adapter = requests.adapters.HTTPAdapter(pool_connections=1, pool_maxsize=1, max_retries=0)
    session.mount('http://', adapter)
    session.mount('https://', adapter)
    return session


class MetadataFetcher:
    """
    单线程异步获取 JSON 元数据
    """

    def __init__(self, timeout: float = 10.0, session: Optional[requests.Session] = None):
        """
        初始化

        Args:
            timeout: 请求超时（秒），超时按请求失败处理
            session: 可复用的 requests 会话，默认新建
        """
        self.timeout = timeout
        self.session = session or create_request_session()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="bing-metadata")

    def get_json(self, url: str) -> Any:
        """
        同步请求并解码 JSON

        Raises:
            MetadataFetchError: 网络错误、HTTP 错误或响应不是 JSON
        """
        logger.debug(f"请求元数据: {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise MetadataFetchError(f"元数据请求超时 ({self.timeout}s): {e}") from e
        except requests.exceptions.RequestException as e:
            raise MetadataFetchError(f"元数据请求失败: {e}") from e
        try:
            # Bing 在认证失败时也返回 JSON 正文（401），交给校验环节处理
            return response.json()
        except ValueError as e:
            raise MetadataFetchError(f"元数据响应不是 JSON (HTTP {response.status_code})") from e
        finally:
            response.close()

    def fetch(
        self,
        url: str,
        callback: Callable[[Any], None],
        errback: Optional[Callable[[BaseException], None]] = None,
    ) -> Future:
        """
        异步请求，完成后在工作线程中调用 callback 或 errback

        Args:
            url: 请求地址
            callback: 成功回调，参数为解码后的 JSON
            errback: 失败回调，参数为异常

        Returns:
            Future: 请求任务
        """
        future = self._executor.submit(self.get_json, url)

        def on_done(done: Future):
            error = done.exception()
            if error is None:
                callback(done.result())
            elif errback is not None:
                errback(error)
            else:
                logger.error(f"元数据请求失败: {error}")

        future.add_done_callback(on_done)
        return future

    def close(self):
        """
        关闭线程池和会话
        """
        self._executor.shutdown(wait=False)
        self.session.close()
