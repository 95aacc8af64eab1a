import pytest

from bingtiles.config import MAX_ZOOM_UNSET, BingMapsOptions


def test_defaults():
    options = BingMapsOptions(api_key="key", imagery_set="Aerial")
    assert options.hidpi is False
    assert options.culture == "en-us"
    assert options.max_zoom == MAX_ZOOM_UNSET
    assert options.tile_source_options == {}


@pytest.mark.parametrize("kwargs", [
    {"api_key": "", "imagery_set": "Aerial"},
    {"api_key": "key", "imagery_set": ""},
    {"api_key": "key", "imagery_set": "Aerial", "max_zoom": -5},
])
def test_invalid_options(kwargs):
    with pytest.raises(ValueError):
        BingMapsOptions(**kwargs)


def test_from_env(monkeypatch):
    monkeypatch.setenv("BING_MAPS_KEY", " env-key \n")
    monkeypatch.delenv("BING_MAPS_IMAGERY_SET", raising=False)
    options = BingMapsOptions.from_env(culture="zh-cn", hidpi=None)
    assert options.api_key == "env-key"
    assert options.imagery_set == "Aerial"
    assert options.culture == "zh-cn"
    assert options.hidpi is False


def test_from_env_override_wins(monkeypatch):
    monkeypatch.setenv("BING_MAPS_KEY", "env-key")
    monkeypatch.setenv("BING_MAPS_IMAGERY_SET", "Road")
    options = BingMapsOptions.from_env(api_key="arg-key")
    assert options.api_key == "arg-key"
    assert options.imagery_set == "Road"


def test_from_env_missing_key(monkeypatch):
    monkeypatch.delenv("BING_MAPS_KEY", raising=False)
    with pytest.raises(ValueError):
        BingMapsOptions.from_env()
