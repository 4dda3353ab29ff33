# src/hitomezashi/core/stitches.py
# EdgeMap の縫い目フラグを、キャンバス座標の線分配列 StitchSegments へ展開する。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from hitomezashi.core.edge_map import EdgeMap


@dataclass(frozen=True, slots=True)
class StitchSegments:
    """縫い目 1 本 = 線分 1 本の集合を表現する。

    Parameters
    ----------
    segments : np.ndarray
        float64 型 shape (M, 2, 2) の線分配列。`segments[k] = [[x0, y0], [x1, y1]]`。

    Notes
    -----
    不変性を契約とし、配列は writeable=False で返す。
    """

    segments: np.ndarray

    def __post_init__(self) -> None:
        """配列形状を検証し、不変条件を満たす形に固定する。"""
        segments = np.asarray(self.segments)

        if segments.ndim == 2 and segments.shape[0] == 0:
            # 空入力は (0, 2, 2) に揃える。
            segments = segments.reshape((0, 2, 2))

        if segments.ndim != 3 or segments.shape[1:] != (2, 2):
            raise ValueError(
                f"segments は shape (M,2,2) の 3 次元配列である必要がある: shape={segments.shape}"
            )

        if segments.dtype != np.float64:
            segments = segments.astype(np.float64)
        else:
            segments = segments.copy()

        segments.setflags(write=False)
        object.__setattr__(self, "segments", segments)

    def __len__(self) -> int:
        return int(self.segments.shape[0])


def _empty_segments() -> np.ndarray:
    return np.zeros((0, 2, 2), dtype=np.float64)


def stitch_segments(
    edge_map: EdgeMap,
    *,
    cell_length: float,
    extend: float = 0.0,
) -> StitchSegments:
    """EdgeMap の立っているフラグ 1 つにつき線分 1 本を生成する。

    Parameters
    ----------
    edge_map : EdgeMap
        入力の縫い目マップ。
    cell_length : float
        セル 1 辺の長さ（キャンバス単位）。
    extend : float, default 0.0
        各線分の終端を延長する量。隣接線分同士の継ぎ目を目立たなくする補正。

    Returns
    -------
    StitchSegments
        先に下辺（水平線）を行優先で、続いて右辺（垂直線）を行優先で並べた線分集合。
    """
    length = float(cell_length)
    ext = float(extend)

    rows_b, cols_b = np.nonzero(edge_map.bottom)
    rows_r, cols_r = np.nonzero(edge_map.right)

    horizontal = _empty_segments()
    if rows_b.size:
        y = (rows_b + 1).astype(np.float64) * length
        x0 = cols_b.astype(np.float64) * length
        horizontal = np.stack(
            [np.stack([x0, y], axis=1), np.stack([x0 + length + ext, y], axis=1)],
            axis=1,
        )

    vertical = _empty_segments()
    if rows_r.size:
        x = (cols_r + 1).astype(np.float64) * length
        y0 = rows_r.astype(np.float64) * length
        vertical = np.stack(
            [np.stack([x, y0], axis=1), np.stack([x, y0 + length + ext], axis=1)],
            axis=1,
        )

    return StitchSegments(np.concatenate([horizontal, vertical], axis=0))


__all__ = ["StitchSegments", "stitch_segments"]
