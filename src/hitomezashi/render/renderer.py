"""
どこで: `src/hitomezashi/render/renderer.py`。
何を: ColorMap / EdgeMap を DrawingSurface への fill / stroke 命令へ落とし込む。
なぜ: 塗り分けと縫い目の描画手順を 1 箇所に固定し、描画先に依存しない形にするため。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from hitomezashi.core.color_map import ColorMap
from hitomezashi.core.edge_map import DimensionMismatchError, EdgeMap
from hitomezashi.core.stitches import stitch_segments
from hitomezashi.core.style import (
    DEFAULT_PALETTE,
    DEFAULT_SEAM_CORRECTION,
    StrokeStyle,
    normalize_palette,
)
from hitomezashi.render.surface import DrawingSurface

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RenderStats:
    """1 回の描画で発行した命令数。"""

    fills: int
    strokes: int


def render_cells(
    surface: DrawingSurface,
    color_map: ColorMap,
    *,
    cell_length: float,
    palette: Sequence[str],
    seam_correction: float = DEFAULT_SEAM_CORRECTION,
) -> int:
    """セルごとに矩形を 1 つ塗り、塗った数を返す。"""

    c0, c1 = normalize_palette(palette)
    length = float(cell_length)
    side = length + float(seam_correction)
    n = color_map.size
    for row in range(n):
        y = row * length
        for col in range(n):
            surface.fill_style = c1 if color_map.cells[row, col] else c0
            surface.fill_rect(col * length, y, side, side)
    return n * n


def render_stitches(
    surface: DrawingSurface,
    edge_map: EdgeMap,
    *,
    cell_length: float,
    stroke: StrokeStyle = StrokeStyle(),
    seam_correction: float = DEFAULT_SEAM_CORRECTION,
) -> int:
    """縫い目フラグ 1 つにつき線分を 1 本引き、引いた数を返す。"""

    surface.stroke_style = stroke.color
    surface.line_width = float(stroke.width)
    surface.line_cap = stroke.cap
    surface.line_join = stroke.join

    segments = stitch_segments(edge_map, cell_length=cell_length, extend=seam_correction)
    for (x0, y0), (x1, y1) in segments.segments:
        surface.begin_path()
        surface.move_to(float(x0), float(y0))
        surface.line_to(float(x1), float(y1))
        surface.stroke()
    return len(segments)


def render_pattern(
    surface: DrawingSurface,
    color_map: ColorMap,
    edge_map: EdgeMap,
    *,
    cell_length: float,
    palette: Sequence[str] = DEFAULT_PALETTE,
    stroke: StrokeStyle | None = StrokeStyle(),
    seam_correction: float = DEFAULT_SEAM_CORRECTION,
    clear: bool = True,
) -> RenderStats:
    """刺し子パターン 1 枚を描画する。

    Parameters
    ----------
    surface : DrawingSurface
        描画先。
    color_map : ColorMap
        セルの塗り分け。
    edge_map : EdgeMap
        縫い目フラグ。
    cell_length : float
        セル 1 辺の長さ（キャンバス単位）。
    palette : Sequence[str]
        2 色のパレット。色 False → palette[0]、True → palette[1]。
    stroke : StrokeStyle or None
        縫い目の線スタイル。None の場合は縫い目を描かない。
    seam_correction : float
        塗り矩形の辺長と線分の終端へ足す補正量。
    clear : bool
        True の場合、描画前にキャンバス全体をクリアする。

    Returns
    -------
    RenderStats
        発行した fill / stroke の数。

    Raises
    ------
    DimensionMismatchError
        ColorMap と EdgeMap の寸法が異なる場合。
    ValueError
        palette が 2 色でない場合。
    """

    if color_map.size != edge_map.size:
        raise DimensionMismatchError(
            f"ColorMap と EdgeMap の寸法が一致しない: color={color_map.size} edge={edge_map.size}"
        )
    colors = normalize_palette(palette)

    _logger.debug("セル 1 辺の長さ: %s", cell_length)

    if clear:
        surface.clear_rect(0.0, 0.0, float(surface.width), float(surface.height))

    fills = render_cells(
        surface,
        color_map,
        cell_length=cell_length,
        palette=colors,
        seam_correction=seam_correction,
    )
    strokes = 0
    if stroke is not None:
        strokes = render_stitches(
            surface,
            edge_map,
            cell_length=cell_length,
            stroke=stroke,
            seam_correction=seam_correction,
        )
    return RenderStats(fills=fills, strokes=strokes)


__all__ = [
    "RenderStats",
    "render_cells",
    "render_pattern",
    "render_stitches",
]
