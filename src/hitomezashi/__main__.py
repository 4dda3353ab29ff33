# どこで: `src/hitomezashi/__main__.py`。
# 何を: `python -m hitomezashi ...` の CLI エントリポイントを提供する。
# なぜ: ブラウザ無しで 1 枚を SVG に書き出したり、EdgeMap/ColorMap を目視確認できるようにするため。

from __future__ import annotations

import argparse
import logging
import sys

from hitomezashi.controller import HitomezashiController
from hitomezashi.core.color_map import build_color_map
from hitomezashi.core.edge_map import DimensionMismatchError, EdgeMap, build_edge_map
from hitomezashi.core.output_paths import pattern_output_path
from hitomezashi.core.pattern import BinaryPattern, PatternGenerator
from hitomezashi.core.runtime_config import runtime_config, set_config_path
from hitomezashi.export.svg import SvgSurface, export_svg

_logger = logging.getLogger(__name__)


def _parse_bits(text: str) -> BinaryPattern:
    """`"0110"` / `"0,1,1,0"` 形式の文字列を BinaryPattern に変換する。"""

    digits = [c for c in str(text) if c not in {",", " ", "_"}]
    if not digits or any(c not in {"0", "1"} for c in digits):
        raise argparse.ArgumentTypeError(f"0/1 の列を指定してください: {text!r}")
    return BinaryPattern.from_bits(int(c) for c in digits)


def _format_grid(edge_map: EdgeMap, *, seed_color: bool) -> str:
    """ColorMap を塗り、縫い目を罫線として重ねたテキスト表現を返す。"""

    colors = build_color_map(edge_map, seed_color=seed_color).cells
    n = edge_map.size
    out: list[str] = []
    for i in range(n):
        row = []
        for j in range(n):
            row.append("#" if colors[i, j] else ".")
            row.append("|" if edge_map.right[i, j] else " ")
        out.append("".join(row))
        out.append("".join("- " if edge_map.bottom[i, j] else "  " for j in range(n)))
    return "\n".join(out)


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None, help="config.yaml のパス")
    p.add_argument("--seed", type=int, default=None, help="乱数 seed（指定すると再現可能）")
    p.add_argument("--subdivisions", type=int, default=None, help="1 軸あたりのセル数")
    p.add_argument("-v", "--verbose", action="store_true", help="debug ログを出力する")


def _cmd_render(args: argparse.Namespace) -> int:
    cfg = runtime_config()

    width, height = cfg.canvas.width, cfg.canvas.height
    if args.size is not None:
        width, height = float(args.size[0]), float(args.size[1])
    subdivisions = cfg.canvas.subdivisions if args.subdivisions is None else int(args.subdivisions)
    palette = cfg.palette if args.palette is None else tuple(args.palette)

    surface = SvgSurface(width=width, height=height, background=args.background)
    controller = HitomezashiController(
        surface,
        subdivisions=subdivisions,
        palette=palette,
        generator=PatternGenerator(args.seed),
        stroke=None if args.no_lines else cfg.stroke,
        seam_correction=cfg.seam_correction,
    )
    stats = controller.render()

    out = args.out
    if out is None:
        out = pattern_output_path(canvas_size=(width, height), seed=args.seed)
    path = export_svg(surface, out)
    _logger.info(
        "SVG を保存: path=%s fills=%d strokes=%d", path, stats.fills, stats.strokes
    )
    print(path)
    return 0


def _cmd_show_pattern(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if (args.horizontal is None) != (args.vertical is None):
        parser.error("--horizontal と --vertical は両方指定してください")

    if args.horizontal is not None:
        horizontal, vertical = args.horizontal, args.vertical
    else:
        n = runtime_config().canvas.subdivisions if args.subdivisions is None else int(args.subdivisions)
        horizontal, vertical = PatternGenerator(args.seed).generate_pair(n)

    try:
        edge_map = build_edge_map(horizontal, vertical)
    except DimensionMismatchError as exc:
        parser.error(str(exc))

    print("horizontal:", "".join(str(b) for b in horizontal))
    print("vertical:  ", "".join(str(b) for b in vertical))
    print(_format_grid(edge_map, seed_color=bool(args.invert)))
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="python -m hitomezashi")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_render = sub.add_parser("render", help="パターンを 1 枚生成して SVG に保存する")
    _add_common_args(p_render)
    p_render.add_argument("--out", default=None, help="出力先 SVG パス")
    p_render.add_argument(
        "--size", nargs=2, type=float, metavar=("W", "H"), default=None, help="キャンバス寸法"
    )
    p_render.add_argument(
        "--palette", nargs=2, metavar=("COLOR0", "COLOR1"), default=None, help="セルの 2 色"
    )
    p_render.add_argument("--background", default=None, help="SVG 背景色（省略時は透明）")
    p_render.add_argument("--no-lines", action="store_true", help="縫い目を描かない")

    p_show = sub.add_parser("show-pattern", help="EdgeMap / ColorMap をテキストで表示する")
    _add_common_args(p_show)
    p_show.add_argument("--horizontal", type=_parse_bits, default=None, help="例: 0110")
    p_show.add_argument("--vertical", type=_parse_bits, default=None, help="例: 1010")
    p_show.add_argument("--invert", action="store_true", help="起点セルの色を反転する")

    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.config is not None:
        set_config_path(args.config)

    if args.cmd == "render":
        return _cmd_render(args)
    if args.cmd == "show-pattern":
        return _cmd_show_pattern(args, p_show)

    raise AssertionError(f"unknown cmd: {args.cmd!r}")


if __name__ == "__main__":
    raise SystemExit(main())
