# どこで: `src/hitomezashi/core/edge_map.py`。
# 何を: 2 本の BinaryPattern から、各セルの右辺/下辺に縫い目があるかを表す EdgeMap を構築する。
# なぜ: 行/列の偶奇で縫い目の有無を交互にし、刺し子特有の「破線が噛み合う」構造を作るため。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from hitomezashi.core.pattern import BinaryPattern


class DimensionMismatchError(ValueError):
    """グリッド寸法が一致しない入力を受け取ったことを表す。"""


@dataclass(frozen=True, slots=True)
class EdgeMap:
    """N×N グリッドの縫い目フラグを表現する。

    Parameters
    ----------
    right : np.ndarray
        bool 型 shape (N, N)。`right[i, j]` はセル (i, j) と (i, j+1) の間の縫い目。
    bottom : np.ndarray
        bool 型 shape (N, N)。`bottom[i, j]` はセル (i, j) と (i+1, j) の間の縫い目。

    Notes
    -----
    i は行（y）、j は列（x）の 0 始まりインデックス。
    最終列の `right` / 最終行の `bottom` はキャンバス外周上の縫い目を表す。
    """

    right: np.ndarray
    bottom: np.ndarray

    def __post_init__(self) -> None:
        right = np.asarray(self.right, dtype=np.bool_)
        bottom = np.asarray(self.bottom, dtype=np.bool_)

        if right.ndim != 2 or right.shape[0] != right.shape[1]:
            raise DimensionMismatchError(
                f"right は正方 2 次元配列である必要がある: shape={right.shape}"
            )
        if bottom.shape != right.shape:
            raise DimensionMismatchError(
                f"right と bottom の shape が一致しない: right={right.shape} bottom={bottom.shape}"
            )

        right = right.copy()
        bottom = bottom.copy()
        right.setflags(write=False)
        bottom.setflags(write=False)

        object.__setattr__(self, "right", right)
        object.__setattr__(self, "bottom", bottom)

    @property
    def size(self) -> int:
        """1 軸あたりのセル数 N を返す。"""
        return int(self.right.shape[0])

    def has_right_edge(self, i: int, j: int) -> bool:
        return bool(self.right[i, j])

    def has_bottom_edge(self, i: int, j: int) -> bool:
        return bool(self.bottom[i, j])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EdgeMap):
            return NotImplemented
        return bool(
            np.array_equal(self.right, other.right) and np.array_equal(self.bottom, other.bottom)
        )

    def __hash__(self) -> int:
        return hash((self.right.shape, self.right.tobytes(), self.bottom.tobytes()))

    def edge_count(self) -> int:
        """立っている縫い目フラグの総数を返す。"""
        return int(np.count_nonzero(self.right) + np.count_nonzero(self.bottom))


def build_edge_map(horizontal: BinaryPattern, vertical: BinaryPattern) -> EdgeMap:
    """2 本のパターンから EdgeMap を構築する。

    Parameters
    ----------
    horizontal : BinaryPattern
        列方向（x）のパターン。右辺の縫い目を決める。
    vertical : BinaryPattern
        行方向（y）のパターン。下辺の縫い目を決める。

    Returns
    -------
    EdgeMap
        `right[i, j] = (horizontal[j] + i) mod 2`,
        `bottom[i, j] = (vertical[i] + j) mod 2` を満たす N×N の縫い目マップ。

    Raises
    ------
    DimensionMismatchError
        2 本のパターン長が異なる場合（正方グリッドのみ対応）。
    """
    n_h = len(horizontal)
    n_v = len(vertical)
    if n_h != n_v:
        raise DimensionMismatchError(
            f"horizontal と vertical の長さが一致しない: horizontal={n_h} vertical={n_v}"
        )

    h = horizontal.bits.astype(np.int64)
    v = vertical.bits.astype(np.int64)
    idx = np.arange(n_h, dtype=np.int64)

    # 行 i で右辺の有無が反転するので、h[j] に行番号を足して偶奇を取る。
    right = ((h[np.newaxis, :] + idx[:, np.newaxis]) % 2).astype(np.bool_)
    bottom = ((v[:, np.newaxis] + idx[np.newaxis, :]) % 2).astype(np.bool_)
    return EdgeMap(right=right, bottom=bottom)


__all__ = ["DimensionMismatchError", "EdgeMap", "build_edge_map"]
