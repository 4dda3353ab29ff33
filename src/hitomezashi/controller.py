# どこで: `src/hitomezashi/controller.py`。
# 何を: 現在のパターン/パレットを所有し、再生成・色変更のたびに EdgeMap→ColorMap→描画を実行する。
# なぜ: UI コールバックがグローバル変数を書き換える構造をやめ、状態の持ち主を 1 つに固定するため。

from __future__ import annotations

import logging
from collections.abc import Sequence

from hitomezashi.core.color_map import ColorMap, build_color_map
from hitomezashi.core.edge_map import EdgeMap, build_edge_map
from hitomezashi.core.pattern import BinaryPattern, PatternGenerator
from hitomezashi.core.runtime_config import RuntimeConfig, runtime_config
from hitomezashi.core.style import (
    DEFAULT_PALETTE,
    DEFAULT_SEAM_CORRECTION,
    StrokeStyle,
    normalize_palette,
)
from hitomezashi.render.renderer import RenderStats, render_pattern
from hitomezashi.render.surface import DrawingSurface

_logger = logging.getLogger(__name__)


class HitomezashiController:
    """1 枚の描画先に対する刺し子パターンの状態と再描画を管理する。

    Notes
    -----
    - 状態（パターン対・パレット・起点色）はこのオブジェクトだけが保持する。
    - 各操作は同期的に「再計算 → 上書き描画」を 1 回行う。途中状態は外へ見せない。
    - 新しいパターンは EdgeMap の構築に成功してから差し替える。
    """

    def __init__(
        self,
        surface: DrawingSurface,
        *,
        subdivisions: int = 20,
        palette: Sequence[str] = DEFAULT_PALETTE,
        generator: PatternGenerator | None = None,
        stroke: StrokeStyle | None = StrokeStyle(),
        seam_correction: float = DEFAULT_SEAM_CORRECTION,
        seed_color: bool = False,
    ) -> None:
        n = int(subdivisions)
        if n < 1:
            raise ValueError(f"subdivisions は 1 以上である必要がある: got={subdivisions!r}")

        self._surface = surface
        self._subdivisions = n
        self._palette = normalize_palette(palette)
        self._generator = generator if generator is not None else PatternGenerator()
        self._stroke = stroke
        self._seam_correction = float(seam_correction)
        self._seed_color = bool(seed_color)

        horizontal, vertical = self._generator.generate_pair(n)
        self._patterns: tuple[BinaryPattern, BinaryPattern] = (horizontal, vertical)
        self._edge_map: EdgeMap = build_edge_map(horizontal, vertical)

    @classmethod
    def from_config(
        cls,
        surface: DrawingSurface,
        *,
        config: RuntimeConfig | None = None,
        generator: PatternGenerator | None = None,
        draw_lines: bool = True,
    ) -> HitomezashiController:
        """RuntimeConfig の canvas / palette / stroke を使ってコントローラを作る。"""

        cfg = runtime_config() if config is None else config
        return cls(
            surface,
            subdivisions=cfg.canvas.subdivisions,
            palette=cfg.palette,
            generator=generator,
            stroke=cfg.stroke if draw_lines else None,
            seam_correction=cfg.seam_correction,
        )

    @property
    def subdivisions(self) -> int:
        return self._subdivisions

    @property
    def palette(self) -> tuple[str, str]:
        return self._palette

    @property
    def patterns(self) -> tuple[BinaryPattern, BinaryPattern]:
        """現在の (horizontal, vertical) パターン対。"""
        return self._patterns

    @property
    def edge_map(self) -> EdgeMap:
        return self._edge_map

    @property
    def color_map(self) -> ColorMap:
        return build_color_map(self._edge_map, seed_color=self._seed_color)

    @property
    def cell_length(self) -> float:
        """セル 1 辺の長さ `min(width, height) / subdivisions`。"""
        return min(float(self._surface.width), float(self._surface.height)) / self._subdivisions

    def render(self) -> RenderStats:
        """現在の状態で描画先をクリアして描き直す。"""

        color_map = build_color_map(self._edge_map, seed_color=self._seed_color)
        return render_pattern(
            self._surface,
            color_map,
            self._edge_map,
            cell_length=self.cell_length,
            palette=self._palette,
            stroke=self._stroke,
            seam_correction=self._seam_correction,
        )

    def regenerate(self) -> RenderStats:
        """新しいパターン対を生成して描き直す。"""

        horizontal, vertical = self._generator.generate_pair(self._subdivisions)
        return self.set_patterns(horizontal, vertical)

    def set_patterns(self, horizontal: BinaryPattern, vertical: BinaryPattern) -> RenderStats:
        """パターン対を差し替えて描き直す。

        Raises
        ------
        DimensionMismatchError
            2 本の長さが異なる場合。状態は変更しない。
        """

        edge_map = build_edge_map(horizontal, vertical)
        self._patterns = (horizontal, vertical)
        self._edge_map = edge_map
        self._subdivisions = edge_map.size
        return self.render()

    def set_palette(self, colors: Sequence[str]) -> RenderStats:
        """パレットだけを差し替えて描き直す（パターンは再生成しない）。"""

        self._palette = normalize_palette(colors)
        _logger.debug("パレットを変更: %s", self._palette)
        return self.render()

    def set_seed_color(self, value: bool) -> RenderStats:
        """起点セルの色を変えて描き直す（全セルの色が反転する）。"""

        self._seed_color = bool(value)
        return self.render()


__all__ = ["HitomezashiController"]
