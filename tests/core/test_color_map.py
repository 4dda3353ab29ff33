"""core.color_map の塗り分け伝播をテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from hitomezashi.core.color_map import ColorMap, build_color_map, verify_color_map
from hitomezashi.core.edge_map import DimensionMismatchError, EdgeMap, build_edge_map
from hitomezashi.core.pattern import BinaryPattern, PatternGenerator


def _example_edge_map() -> EdgeMap:
    return build_edge_map(BinaryPattern.from_bits([0, 1]), BinaryPattern.from_bits([1, 0]))


def _adjacency_holds(edge_map: EdgeMap, color_map: ColorMap) -> bool:
    n = edge_map.size
    for i in range(n):
        for j in range(n):
            if j + 1 < n and (color_map[i, j] != color_map[i, j + 1]) != edge_map.has_right_edge(i, j):
                return False
            if i + 1 < n and (color_map[i, j] != color_map[i + 1, j]) != edge_map.has_bottom_edge(i, j):
                return False
    return True


def test_build_color_map_small_example() -> None:
    edge_map = _example_edge_map()
    color_map = build_color_map(edge_map)

    # 右下 (1,1)=False を起点に:
    # (1,0) = (1,1) XOR right(1,0)=1 -> True
    # (0,1) = (1,1) XOR bottom(0,1)=0 -> False
    # (0,0) = (0,1) XOR right(0,0)=0 -> False
    assert color_map.tolist() == [[False, False], [True, False]]
    assert _adjacency_holds(edge_map, color_map)


def test_single_cell_takes_seed_color() -> None:
    edge_map = build_edge_map(BinaryPattern.from_bits([1]), BinaryPattern.from_bits([1]))
    assert build_color_map(edge_map).tolist() == [[False]]
    assert build_color_map(edge_map, seed_color=True).tolist() == [[True]]


@pytest.mark.parametrize("seed", range(8))
def test_adjacency_invariant_holds_for_random_patterns(seed: int) -> None:
    gen = PatternGenerator(seed)
    for n in (1, 2, 3, 5, 8, 20):
        edge_map = build_edge_map(*gen.generate_pair(n))
        color_map = build_color_map(edge_map)
        assert _adjacency_holds(edge_map, color_map)
        assert verify_color_map(edge_map, color_map)


def test_build_color_map_is_deterministic() -> None:
    edge_map = build_edge_map(*PatternGenerator(3).generate_pair(15))
    assert build_color_map(edge_map) == build_color_map(edge_map)


def test_inverted_color_map_is_also_valid() -> None:
    edge_map = build_edge_map(*PatternGenerator(9).generate_pair(12))
    color_map = build_color_map(edge_map)
    inverted = color_map.inverted()

    assert verify_color_map(edge_map, inverted)
    assert np.array_equal(inverted.cells, ~color_map.cells)
    assert build_color_map(edge_map, seed_color=True) == inverted


def test_verify_color_map_detects_broken_coloring() -> None:
    edge_map = _example_edge_map()
    cells = build_color_map(edge_map).cells.copy()
    cells[0, 0] = not cells[0, 0]
    assert verify_color_map(edge_map, ColorMap(cells)) is False


def test_verify_color_map_rejects_mismatched_sizes() -> None:
    edge_map = _example_edge_map()
    with pytest.raises(DimensionMismatchError):
        verify_color_map(edge_map, ColorMap(np.zeros((3, 3), dtype=bool)))


def test_color_map_is_read_only() -> None:
    color_map = build_color_map(_example_edge_map())
    assert color_map.cells.flags.writeable is False
    assert color_map.size == 2
