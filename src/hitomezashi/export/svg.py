"""
どこで: `src/hitomezashi/export/svg.py`。
何を: DrawingSurface の SVG 実装と、刺し子パターンを SVG ファイルへ保存する関数を提供する。
なぜ: ブラウザの canvas を使わずに、同じ描画命令列をヘッドレスでファイル化するため。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from pathlib import Path

_DEFAULT_DECIMALS = 3


def _fmt_float(value: float, *, decimals: int = _DEFAULT_DECIMALS) -> str:
    """小数を短い固定表現の文字列にして返す。

    Notes
    -----
    出力の決定性を優先し、固定桁で丸めてから末尾の 0 を落とす。
    `-0` は `0` に正規化する。
    """

    text = f"{float(value):.{int(decimals)}f}".rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text


@dataclass(frozen=True, slots=True)
class _Element:
    """SVG 要素 1 つと、その外接矩形 (x_min, y_min, x_max, y_max)。"""

    markup: str
    bbox: tuple[float, float, float, float]


@dataclass(slots=True)
class SvgSurface:
    """描画命令を SVG 要素として蓄積する DrawingSurface。

    - `fill_rect` は `<rect>` を 1 つ追加する。
    - `stroke` は現在のパスを `<path>` 1 つとして追加する。
    - `clear_rect` は、外接矩形が指定矩形と重なる既存要素を取り除く（SVG では部分消去できないため）。
    """

    width: float = 500.0
    height: float = 500.0
    fill_style: str = "black"
    stroke_style: str = "black"
    line_width: float = 1.0
    line_cap: str = "butt"
    line_join: str = "miter"
    background: str | None = None
    _elements: list[_Element] = field(default_factory=list)
    _path: list[tuple[str, float, float]] = field(default_factory=list)

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        x_f, y_f, w_f, h_f = float(x), float(y), float(w), float(h)
        markup = (
            f'<rect x="{_fmt_float(x_f)}" y="{_fmt_float(y_f)}" '
            f'width="{_fmt_float(w_f)}" height="{_fmt_float(h_f)}" '
            f'fill="{escape(self.fill_style)}"/>'
        )
        self._elements.append(_Element(markup, (x_f, y_f, x_f + w_f, y_f + h_f)))

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        x0, y0 = float(x), float(y)
        x1, y1 = x0 + float(w), y0 + float(h)

        def _axis_overlaps(lo: float, hi: float, c0: float, c1: float) -> bool:
            # 幅 0 の軸（外周上の線分など）だけは境界接触も重なりとして扱う。
            if lo == hi:
                return c0 <= lo <= c1
            return lo < c1 and c0 < hi

        def _overlaps(bbox: tuple[float, float, float, float]) -> bool:
            return _axis_overlaps(bbox[0], bbox[2], x0, x1) and _axis_overlaps(bbox[1], bbox[3], y0, y1)

        self._elements = [e for e in self._elements if not _overlaps(e.bbox)]

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self._path.append(("M", float(x), float(y)))

    def line_to(self, x: float, y: float) -> None:
        cmd = "L" if self._path else "M"
        self._path.append((cmd, float(x), float(y)))

    def stroke(self) -> None:
        if not self._path:
            return
        d = " ".join(f"{cmd}{_fmt_float(x)} {_fmt_float(y)}" for cmd, x, y in self._path)
        xs = [p[1] for p in self._path]
        ys = [p[2] for p in self._path]
        markup = (
            f'<path d="{d}" fill="none" stroke="{escape(self.stroke_style)}" '
            f'stroke-width="{_fmt_float(self.line_width)}" '
            f'stroke-linecap="{escape(self.line_cap)}" '
            f'stroke-linejoin="{escape(self.line_join)}"/>'
        )
        self._elements.append(_Element(markup, (min(xs), min(ys), max(xs), max(ys))))

    @property
    def element_count(self) -> int:
        return len(self._elements)

    def to_svg(self) -> str:
        """蓄積した要素を SVG 文書の文字列にして返す。"""

        w = _fmt_float(self.width)
        h = _fmt_float(self.height)
        lines = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">'
        ]
        if self.background is not None:
            lines.append(
                f'  <rect x="0" y="0" width="{w}" height="{h}" fill="{escape(self.background)}"/>'
            )
        lines.extend(f"  {e.markup}" for e in self._elements)
        lines.append("</svg>")
        return "\n".join(lines) + "\n"


def export_svg(surface: SvgSurface, path: str | Path) -> Path:
    """SvgSurface の内容を UTF-8 の SVG ファイルとして保存し、保存先を返す。

    親ディレクトリが無ければ作成する。
    """

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(surface.to_svg(), encoding="utf-8")
    return out


__all__ = ["SvgSurface", "export_svg"]
