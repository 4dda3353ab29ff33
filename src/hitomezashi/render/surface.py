# どこで: `src/hitomezashi/render/surface.py`。
# 何を: Renderer が描画命令を発行する先（DrawingSurface）の最小インターフェースと、記録用実装を提供する。
# なぜ: 描画先（SVG / テスト用記録 / 将来の GUI）を差し替えても Renderer を変えずに済ませるため。

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DrawingSurface(Protocol):
    """2D 描画先の最小 API。

    Notes
    -----
    HTML canvas の 2D context と同じ語彙（fill_rect / move_to / line_to / stroke）を採る。
    スタイルは属性として設定し、以降の描画命令に適用される。
    """

    width: float
    height: float
    fill_style: str
    stroke_style: str
    line_width: float
    line_cap: str
    line_join: str

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def stroke(self) -> None: ...


@dataclass(slots=True)
class RecordingSurface:
    """受け取った描画命令を順に記録する DrawingSurface。

    `ops` の各要素は `(name, args)` 形式。
    `fill_rect` は現在の fill_style を、`stroke` は現在のパスとストロークスタイルを args に含める。
    """

    width: float = 500.0
    height: float = 500.0
    fill_style: str = "black"
    stroke_style: str = "black"
    line_width: float = 1.0
    line_cap: str = "butt"
    line_join: str = "miter"
    ops: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    _path: list[tuple[float, float]] = field(default_factory=list)

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        self.ops.append(("fill_rect", (float(x), float(y), float(w), float(h), self.fill_style)))

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        self.ops.append(("clear_rect", (float(x), float(y), float(w), float(h))))

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self._path.append((float(x), float(y)))

    def line_to(self, x: float, y: float) -> None:
        if not self._path:
            # canvas と同様、開始点が無ければ line_to は move_to として扱う。
            self.move_to(x, y)
            return
        self._path.append((float(x), float(y)))

    def stroke(self) -> None:
        self.ops.append(
            (
                "stroke",
                (
                    tuple(self._path),
                    self.stroke_style,
                    float(self.line_width),
                    self.line_cap,
                    self.line_join,
                ),
            )
        )

    def count(self, name: str) -> int:
        """指定した名前の命令数を返す。"""
        return sum(1 for op, _ in self.ops if op == name)


__all__ = ["DrawingSurface", "RecordingSurface"]
