"""
どこで: `src/hitomezashi/__init__.py`。
何を: 刺し子パターン生成の公開 API を再エクスポートする。
なぜ: 利用側が `from hitomezashi import ...` だけでパイプライン全体を組めるようにするため。
"""

from __future__ import annotations

from hitomezashi.controller import HitomezashiController
from hitomezashi.core.color_map import ColorMap, build_color_map, verify_color_map
from hitomezashi.core.edge_map import DimensionMismatchError, EdgeMap, build_edge_map
from hitomezashi.core.pattern import BinaryPattern, PatternGenerator, generate_pattern
from hitomezashi.core.style import StrokeStyle
from hitomezashi.export.svg import SvgSurface, export_svg
from hitomezashi.render.renderer import RenderStats, render_pattern
from hitomezashi.render.surface import DrawingSurface, RecordingSurface

__all__ = [
    "BinaryPattern",
    "ColorMap",
    "DimensionMismatchError",
    "DrawingSurface",
    "EdgeMap",
    "HitomezashiController",
    "PatternGenerator",
    "RecordingSurface",
    "RenderStats",
    "StrokeStyle",
    "SvgSurface",
    "build_color_map",
    "build_edge_map",
    "export_svg",
    "generate_pattern",
    "render_pattern",
    "verify_color_map",
]
