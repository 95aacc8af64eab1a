"""
QuadKey 编码测试
"""

import pytest

from bingtiles.tile_math import TileMath


def test_zoom_zero_is_empty():
    assert TileMath.quadkey(0, 0, -1) == ""
    assert TileMath.quadkey(0, 5, 7) == ""


@pytest.mark.parametrize("zoom", [1, 3, 12, 23])
def test_length_equals_zoom(zoom):
    assert len(TileMath.quadkey(zoom, 3, -4)) == zoom
    assert TileMath.quadkey(zoom, 3, -4) == TileMath.quadkey(zoom, 3, -4)


def test_published_reference_quadkey():
    # Bing Maps Tile System 文档中的例子：tile (3, 5) @ level 3 -> "213"
    assert TileMath.tile_to_quadkey(3, 5, 3) == "213"
    # 瓦片源行号 -6 翻转后就是 Bing 行号 5
    assert TileMath.quadkey(3, 3, -6) == "213"


def test_row_inversion():
    for zoom, column, row in [(1, 0, -1), (4, 7, -3), (10, 512, -700)]:
        assert TileMath.quadkey(zoom, column, row) == TileMath.tile_to_quadkey(column, -row - 1, zoom)


def test_level_one_quadrants():
    # 顶行 row=-1，底行 row=-2
    assert TileMath.quadkey(1, 0, -1) == "0"
    assert TileMath.quadkey(1, 1, -1) == "1"
    assert TileMath.quadkey(1, 0, -2) == "2"
    assert TileMath.quadkey(1, 1, -2) == "3"


def test_out_of_range_is_encoded_anyway():
    assert len(TileMath.quadkey(2, 9, 4)) == 2


def test_quadkey_to_tile():
    assert TileMath.quadkey_to_tile("213") == (3, 5, 3)
    assert TileMath.quadkey_to_tile("") == (0, 0, 0)
    with pytest.raises(ValueError):
        TileMath.quadkey_to_tile("124")


def test_tile_coord_conversion():
    assert TileMath.to_tile_coord(3, 5, 3) == (3, 3, -6)
    assert TileMath.quadkey(*TileMath.to_tile_coord(3, 5, 3)) == TileMath.tile_to_quadkey(3, 5, 3)


def test_latlon_to_tile():
    assert TileMath.latlon_to_tile(0.0, 0.0, 1) == (1, 1)
    assert TileMath.latlon_to_tile(85.0, -180.0, 2) == (0, 0)
    assert TileMath.latlon_to_tile(-89.0, 180.0, 2) == (3, 3)
