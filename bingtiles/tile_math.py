# bingtiles/tile_math.py
import math
from typing import Tuple

# (zoom, column, row)，row 采用瓦片源约定：顶行为 -1，向下递减
TileCoord = Tuple[int, int, int]


class TileMath:
    """
    瓦片坐标计算工具类（Web Mercator / QuadKey）
    """

    @staticmethod
    def latlon_to_tile(lat: float, lon: float, zoom: int) -> Tuple[int, int]:
        """
        经纬度 -> Bing 瓦片坐标 (x, y)

        返回的 y 是 Bing 行号：顶行为 0，向南递增，与瓦片源的负行号不同，
        交给 URL 函数前需经 to_tile_coord 转换。东、南边界收回到最后一块瓦片。

        Args:
            lat: 纬度
            lon: 经度
            zoom: 缩放级别

        Returns:
            Tuple[int, int]: 瓦片坐标
        """
        # 限制纬度避免溢出
        lat = max(min(lat, 85.0511), -85.0511)

        n = 2 ** zoom
        x_tile = (lon + 180.0) / 360.0 * n

        lat_rad = math.radians(lat)
        y_tile = (
            1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi
        ) / 2.0 * n

        # 东边界和南边界落在下一块瓦片之外，收回到最后一块
        x_tile = min(int(x_tile), n - 1)
        y_tile = min(int(y_tile), n - 1)
        return x_tile, y_tile

    @staticmethod
    def tile_to_quadkey(x: int, y: int, zoom: int) -> str:
        """
        将 Bing 瓦片坐标转换为QuadKey

        这里不做行号翻转：y 必须已是 Bing 行号（顶行 0，向南递增）。
        瓦片源坐标请使用 quadkey()。

        Args:
            x: 瓦片x坐标（列号）
            y: Bing 行号
            zoom: 缩放级别

        Returns:
            str: QuadKey，长度等于 zoom
        """
        digits = []
        for i in range(zoom, 0, -1):
            digit = 0
            mask = 1 << (i - 1)
            if x & mask:
                digit += 1
            if y & mask:
                digit += 2
            digits.append(str(digit))
        return "".join(digits)

    @staticmethod
    def quadkey(zoom: int, column: int, row: int) -> str:
        """
        瓦片源坐标 -> QuadKey

        瓦片源的行号为负数（顶行 -1），编码前必须翻转为 Bing 的行号
        ``-row - 1``，否则得到的是南北镜像位置的瓦片。超出当前级别范围的
        坐标照样编码，由服务端拒绝。

        Args:
            zoom: 缩放级别
            column: 列号
            row: 瓦片源行号

        Returns:
            str: QuadKey
        """
        return TileMath.tile_to_quadkey(column, -row - 1, zoom)

    @staticmethod
    def quadkey_to_tile(quadkey: str) -> Tuple[int, int, int]:
        """
        QuadKey -> Bing 瓦片坐标 (x, y, zoom)

        Args:
            quadkey: QuadKey 字符串

        Returns:
            Tuple[int, int, int]: (x, y, zoom)

        Raises:
            ValueError: 含有 0-3 以外的字符
        """
        x = y = 0
        zoom = len(quadkey)
        for i in range(zoom, 0, -1):
            mask = 1 << (i - 1)
            digit = quadkey[zoom - i]
            if digit == "0":
                continue
            elif digit == "1":
                x |= mask
            elif digit == "2":
                y |= mask
            elif digit == "3":
                x |= mask
                y |= mask
            else:
                raise ValueError(f"无效的QuadKey字符: {digit!r} ({quadkey})")
        return x, y, zoom

    @staticmethod
    def to_tile_coord(x: int, y: int, zoom: int) -> TileCoord:
        """
        Bing 瓦片坐标 -> 瓦片源坐标 (zoom, column, row)
        """
        return zoom, x, -y - 1
