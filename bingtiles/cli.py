# bingtiles/cli.py
import argparse
import sys

from loguru import logger
from rich.console import Console
from rich.table import Table

from .attribution import FrameState
from .config import API_KEY_ENV, MAX_ZOOM_UNSET, BingMapsOptions
from .projection import EPSG_4326, apply_transform, get_transform
from .providers import ProviderManager, SourceState
from .tile_math import TileMath

console = Console()


def create_source(args):
    options = BingMapsOptions.from_env(
        api_key=args.key,
        imagery_set=args.imagery_set,
        culture=args.culture,
        hidpi=args.hidpi,
        max_zoom=args.max_zoom,
        timeout=args.timeout,
    )
    source = ProviderManager.create_source(args.provider, options)
    # 请求本身有超时，这里多留一点余量
    state = source.wait(args.timeout + 5)
    if state is not SourceState.READY:
        console.print(f"[bold red]瓦片源不可用: {state.value}[/bold red]")
        source.dispose()
        return None
    return source


def cmd_list_providers():
    table = Table(title="可用瓦片源")
    table.add_column("name", style="cyan")
    for name in ProviderManager.list_providers():
        table.add_row(name)
    console.print(table)


def cmd_metadata(args) -> int:
    source = create_source(args)
    if source is None:
        return 1
    grid = source.tile_grid
    table = Table(title=f"{source.get_imagery_set()} 元数据")
    table.add_column("key", style="cyan")
    table.add_column("value")
    table.add_row("state", source.state.value)
    table.add_row("zoom_range", f"{grid.min_zoom}-{grid.max_zoom}")
    table.add_row("tile_size", str(grid.tile_size))
    table.add_row("image_url", source.resource.image_url)
    table.add_row("subdomains", ", ".join(source.resource.image_url_subdomains))
    table.add_row("imagery_providers", str(len(source.resource.imagery_providers or ())))
    console.print(table)
    return 0


def cmd_url(args) -> int:
    if args.quadkey:
        x, y, zoom = TileMath.quadkey_to_tile(args.quadkey)
    elif args.lat is not None and args.lon is not None and args.zoom is not None:
        zoom = args.zoom
        x, y = TileMath.latlon_to_tile(args.lat, args.lon, zoom)
    else:
        console.print("[bold red]需要 --quadkey 或 --lat/--lon/--zoom[/bold red]")
        return 2

    source = create_source(args)
    if source is None:
        return 1
    tile_coord = TileMath.to_tile_coord(x, y, zoom)
    console.print(f"z={zoom} x={x} y={y} quadkey={TileMath.tile_to_quadkey(x, y, zoom)}")
    console.print(source.get_tile_url(tile_coord, 2 if args.hidpi else 1, source.projection), soft_wrap=True)
    return 0


def cmd_attributions(args) -> int:
    source = create_source(args)
    if source is None:
        return 1
    transform = get_transform(EPSG_4326, source.projection)
    extent = apply_transform((args.west, args.south, args.east, args.north), transform)
    frame_state = FrameState(zoom=args.zoom, extent=extent)
    attributions = source.get_attributions(frame_state) or [source.TOS_ATTRIBUTION]

    table = Table(title=f"版权信息 (zoom={args.zoom})")
    table.add_column("attribution")
    for attribution in attributions:
        table.add_row(attribution)
    console.print(table)
    return 0


def add_source_arguments(parser):
    parser.add_argument("--provider", default="bing", help="瓦片源 (bing)")
    parser.add_argument("--key", default=None, help=f"Bing Maps 密钥，默认读取 {API_KEY_ENV}")
    parser.add_argument("--imagery-set", default=None, help="影像集 (Aerial / AerialWithLabels / Road ...)")
    parser.add_argument("--culture", default="en-us")
    parser.add_argument("--hidpi", action="store_true", help="请求高分辨率瓦片")
    parser.add_argument("--max-zoom", type=int, default=MAX_ZOOM_UNSET)
    parser.add_argument("--timeout", type=float, default=10.0, help="元数据请求超时（秒）")


def configure_logging(verbose: bool):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Bing Maps 瓦片寻址工具")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    subparsers = parser.add_subparsers(dest="cmd")

    subparsers.add_parser("list", help="列出支持的瓦片源")

    p_metadata = subparsers.add_parser("metadata", help="获取影像元数据并显示瓦片金字塔")
    add_source_arguments(p_metadata)

    p_url = subparsers.add_parser("url", help="计算瓦片URL")
    add_source_arguments(p_url)
    p_url.add_argument("--quadkey")
    p_url.add_argument("--lat", type=float)
    p_url.add_argument("--lon", type=float)
    p_url.add_argument("--zoom", type=int)

    p_attr = subparsers.add_parser("attributions", help="计算矩形区域的版权信息")
    add_source_arguments(p_attr)
    p_attr.add_argument("--north", type=float, required=True)
    p_attr.add_argument("--south", type=float, required=True)
    p_attr.add_argument("--west", type=float, required=True)
    p_attr.add_argument("--east", type=float, required=True)
    p_attr.add_argument("--zoom", type=int, required=True)

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.cmd == "list":
            cmd_list_providers()
            return 0
        elif args.cmd == "metadata":
            return cmd_metadata(args)
        elif args.cmd == "url":
            return cmd_url(args)
        elif args.cmd == "attributions":
            return cmd_attributions(args)
    except ValueError as e:
        console.print(f"[bold red]{e}[/bold red]")
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
