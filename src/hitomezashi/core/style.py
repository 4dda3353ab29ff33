"""パレットと縫い目の線スタイル。"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

DEFAULT_SEAM_CORRECTION = 0.5
"""隣接する塗り/線の間にアンチエイリアスの隙間が出ないよう、寸法へ足す補正量。"""

DEFAULT_PALETTE: tuple[str, str] = ("crimson", "cornflowerblue")


@dataclass(frozen=True, slots=True)
class StrokeStyle:
    """縫い目の線スタイル。"""

    color: str = "black"
    width: float = 1.0
    cap: str = "round"
    join: str = "round"


def normalize_palette(colors: Sequence[str]) -> tuple[str, str]:
    """2 色のパレットを検証して tuple で返す。

    Raises
    ------
    ValueError
        2 色でない場合、または空の色を含む場合。
    """

    if isinstance(colors, str):
        raise ValueError(f"palette は 2 色のシーケンスである必要がある: got={colors!r}")
    try:
        items = [str(c).strip() for c in colors]
    except TypeError as exc:
        raise ValueError(f"palette は 2 色のシーケンスである必要がある: got={colors!r}") from exc
    if len(items) != 2:
        raise ValueError(f"palette は 2 色である必要がある: got={items!r}")
    if not all(items):
        raise ValueError(f"palette に空の色は使えない: got={items!r}")
    return items[0], items[1]


__all__ = ["DEFAULT_PALETTE", "DEFAULT_SEAM_CORRECTION", "StrokeStyle", "normalize_palette"]
