"""core.pattern の BinaryPattern / パターン生成をテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from hitomezashi.core.pattern import BinaryPattern, PatternGenerator, generate_pattern


def test_generate_pattern_returns_requested_number_of_bits() -> None:
    for n in (1, 2, 7, 20):
        pattern = generate_pattern(n, rng=np.random.default_rng(n))
        assert len(pattern) == n
        assert set(pattern.tolist()) <= {0, 1}


def test_generate_pattern_uses_injected_rng(scripted_rng) -> None:
    rng = scripted_rng([[1, 0, 0, 1]])
    pattern = generate_pattern(4, rng=rng)
    assert pattern.tolist() == [1, 0, 0, 1]
    assert rng.calls == 1


def test_pattern_generator_is_reproducible_with_seed() -> None:
    a = PatternGenerator(123)
    b = PatternGenerator(123)
    assert a.generate_pair(16) == b.generate_pair(16)
    assert a.generate(16) == b.generate(16)


def test_generate_pair_draws_horizontal_then_vertical(scripted_rng) -> None:
    gen = PatternGenerator(rng=scripted_rng([[0, 1, 1], [1, 1, 0]]))
    horizontal, vertical = gen.generate_pair(3)
    assert horizontal.tolist() == [0, 1, 1]
    assert vertical.tolist() == [1, 1, 0]


def test_binary_pattern_is_read_only_and_does_not_freeze_input() -> None:
    src = np.array([0, 1, 1], dtype=np.uint8)
    pattern = BinaryPattern(src)
    assert pattern.bits.flags.writeable is False
    assert src.flags.writeable is True
    with pytest.raises(ValueError):
        pattern.bits[0] = 1


def test_binary_pattern_accepts_bool_and_sequences() -> None:
    assert BinaryPattern(np.array([True, False])).tolist() == [1, 0]
    pattern = BinaryPattern.from_bits([1, 0, 1])
    assert list(pattern) == [1, 0, 1]
    assert pattern[2] == 1
    assert pattern == BinaryPattern.from_bits([1, 0, 1])
    assert hash(pattern) == hash(BinaryPattern.from_bits([1, 0, 1]))


@pytest.mark.parametrize(
    "bits",
    [
        np.array([0, 2, 1]),
        np.array([], dtype=np.uint8),
        np.zeros((2, 2), dtype=np.uint8),
    ],
)
def test_binary_pattern_rejects_invalid_bits(bits: np.ndarray) -> None:
    with pytest.raises(ValueError):
        BinaryPattern(bits)
