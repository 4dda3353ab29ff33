"""core.stitches の線分展開をテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from hitomezashi.core.edge_map import build_edge_map
from hitomezashi.core.pattern import BinaryPattern, PatternGenerator
from hitomezashi.core.stitches import StitchSegments, stitch_segments


def test_stitch_segments_small_example() -> None:
    edge_map = build_edge_map(BinaryPattern.from_bits([0, 1]), BinaryPattern.from_bits([1, 0]))
    segments = stitch_segments(edge_map, cell_length=10.0)

    assert segments.segments.tolist() == [
        # 下辺（水平線）: bottom(0,0), bottom(1,1)
        [[0.0, 10.0], [10.0, 10.0]],
        [[10.0, 20.0], [20.0, 20.0]],
        # 右辺（垂直線）: right(0,1), right(1,0)
        [[20.0, 0.0], [20.0, 10.0]],
        [[10.0, 10.0], [10.0, 20.0]],
    ]


def test_stitch_segments_extend_moves_end_point_only() -> None:
    edge_map = build_edge_map(BinaryPattern.from_bits([0, 1]), BinaryPattern.from_bits([1, 0]))
    segments = stitch_segments(edge_map, cell_length=10.0, extend=0.5)

    assert segments.segments[0].tolist() == [[0.0, 10.0], [10.5, 10.0]]
    assert segments.segments[2].tolist() == [[20.0, 0.0], [20.0, 10.5]]


def test_stitch_segment_count_matches_edge_flags() -> None:
    edge_map = build_edge_map(*PatternGenerator(5).generate_pair(20))
    segments = stitch_segments(edge_map, cell_length=25.0)
    assert len(segments) == edge_map.edge_count()


def test_stitch_segments_without_edges_is_empty() -> None:
    edge_map = build_edge_map(BinaryPattern.from_bits([0]), BinaryPattern.from_bits([0]))
    segments = stitch_segments(edge_map, cell_length=25.0)
    assert len(segments) == 0
    assert segments.segments.shape == (0, 2, 2)


def test_stitch_segments_validates_shape() -> None:
    with pytest.raises(ValueError):
        StitchSegments(np.zeros((3, 2), dtype=np.float64))
