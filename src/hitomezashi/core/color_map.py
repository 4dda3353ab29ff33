"""EdgeMap からセルの 2 色塗り分け（ColorMap）を構築する。"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numba import njit  # type: ignore[import-untyped]

from hitomezashi.core.edge_map import DimensionMismatchError, EdgeMap


@dataclass(frozen=True, slots=True)
class ColorMap:
    """N×N グリッドの各セルの色（bool）を表現する。

    Parameters
    ----------
    cells : np.ndarray
        bool 型 shape (N, N)。False が palette[0]、True が palette[1] に対応する。

    Notes
    -----
    絶対的な色値に意味はなく、全セル反転も同じ EdgeMap に対して正しい塗り分けになる。
    """

    cells: np.ndarray

    def __post_init__(self) -> None:
        cells = np.asarray(self.cells, dtype=np.bool_)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise DimensionMismatchError(
                f"cells は正方 2 次元配列である必要がある: shape={cells.shape}"
            )
        cells = cells.copy()
        cells.setflags(write=False)
        object.__setattr__(self, "cells", cells)

    @property
    def size(self) -> int:
        """1 軸あたりのセル数 N を返す。"""
        return int(self.cells.shape[0])

    def __getitem__(self, index: tuple[int, int]) -> bool:
        return bool(self.cells[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorMap):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    def __hash__(self) -> int:
        return hash((self.cells.shape, self.cells.tobytes()))

    def inverted(self) -> ColorMap:
        """全セルの色を入れ替えた ColorMap を返す。"""
        return ColorMap(~self.cells)

    def tolist(self) -> list[list[bool]]:
        return [[bool(c) for c in row] for row in self.cells]


@njit(cache=True)
def _propagate_colors(right: np.ndarray, bottom: np.ndarray, seed: int) -> np.ndarray:
    """右下セルを起点に色を伝播させる（Numba）。"""
    n = right.shape[0]
    out = np.zeros((n, n), dtype=np.uint8)
    last = n - 1
    for i in range(last, -1, -1):
        for j in range(last, -1, -1):
            if j == last:
                if i == last:
                    out[i, j] = seed
                else:
                    # 行の右端は 1 つ下の行の右端から、下辺の縫い目で反転する。
                    out[i, j] = out[i + 1, j] ^ bottom[i, j]
            else:
                out[i, j] = out[i, j + 1] ^ right[i, j]
    return out


def build_color_map(edge_map: EdgeMap, *, seed_color: bool = False) -> ColorMap:
    """EdgeMap から ColorMap を構築する。

    Parameters
    ----------
    edge_map : EdgeMap
        入力の縫い目マップ。
    seed_color : bool, default False
        起点セル（右下隅）の色。

    Returns
    -------
    ColorMap
        隣接 2 セルが「間に縫い目がある場合に限り異なる色」となる塗り分け。

    Notes
    -----
    行は最終行から先頭行へ、行内は最終列から先頭列へ処理する。
    - `color(i, j) = color(i, j+1) XOR right(i, j)`（j が最終列でない場合）
    - `color(i, last) = color(i+1, last) XOR bottom(i, last)`（i が最終行でない場合）

    刺し子の EdgeMap は各格子点の周りで縫い目フラグの XOR が 0 になるため、
    この伝播だけで全隣接ペアについて不変条件が成り立つ。
    """
    # Numba には書き込み可能な連続配列を渡す。
    right = np.ascontiguousarray(edge_map.right, dtype=np.uint8).copy()
    bottom = np.ascontiguousarray(edge_map.bottom, dtype=np.uint8).copy()
    cells = _propagate_colors(right, bottom, 1 if seed_color else 0)
    return ColorMap(cells.astype(np.bool_))


def verify_color_map(edge_map: EdgeMap, color_map: ColorMap) -> bool:
    """ColorMap が EdgeMap に対する隣接不変条件を満たすなら True を返す。

    Raises
    ------
    DimensionMismatchError
        EdgeMap と ColorMap の寸法が異なる場合。
    """
    if edge_map.size != color_map.size:
        raise DimensionMismatchError(
            f"EdgeMap と ColorMap の寸法が一致しない: edge={edge_map.size} color={color_map.size}"
        )

    cells = color_map.cells
    # 外周上の縫い目（最終列の right / 最終行の bottom）は隣接セルを持たないので対象外。
    horizontal_ok = np.array_equal(cells[:, :-1] != cells[:, 1:], edge_map.right[:, :-1])
    vertical_ok = np.array_equal(cells[:-1, :] != cells[1:, :], edge_map.bottom[:-1, :])
    return bool(horizontal_ok and vertical_ok)


__all__ = ["ColorMap", "build_color_map", "verify_color_map"]
