# どこで: `src/hitomezashi/core/pattern.py`。
# 何を: 刺し子パターンの種となる 0/1 列（BinaryPattern）と、その乱数生成器を提供する。
# なぜ: 乱数源を注入可能にし、テストで決定的なパターンを与えられるようにするため。

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BinaryPattern:
    """1 軸ぶんの刺し子パターン（0/1 の列）を表現する。

    Parameters
    ----------
    bits : np.ndarray
        uint8 型 shape (N,) の 0/1 配列。

    Notes
    -----
    不変性を契約とし、配列は writeable=False で保持する。
    値域（0/1 のみ）と次元はコンストラクタ内で検証する。
    """

    bits: np.ndarray

    def __post_init__(self) -> None:
        """配列形状と値域を検証し、不変条件を満たす形に固定する。"""
        bits = np.asarray(self.bits)

        if bits.ndim != 1:
            raise ValueError(f"bits は 1 次元配列である必要がある: shape={bits.shape}")

        if bits.size == 0:
            raise ValueError("bits は少なくとも 1 要素を含む必要がある")

        if bits.dtype == np.bool_:
            bits = bits.astype(np.uint8)

        if np.any((bits != 0) & (bits != 1)):
            raise ValueError(f"bits は 0/1 のみを含む必要がある: {bits.tolist()!r}")

        if bits.dtype != np.uint8:
            bits = bits.astype(np.uint8)
        else:
            # 呼び出し側の配列を凍結しないようコピーしてから固定する。
            bits = bits.copy()

        bits.setflags(write=False)
        object.__setattr__(self, "bits", bits)

    @classmethod
    def from_bits(cls, bits: Sequence[int]) -> BinaryPattern:
        """0/1 のシーケンスから BinaryPattern を作る。"""
        return cls(np.asarray(list(bits), dtype=np.int64))

    def __len__(self) -> int:
        return int(self.bits.shape[0])

    def __getitem__(self, index: int) -> int:
        return int(self.bits[index])

    def __iter__(self) -> Iterator[int]:
        return (int(b) for b in self.bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryPattern):
            return NotImplemented
        return bool(np.array_equal(self.bits, other.bits))

    def __hash__(self) -> int:
        return hash(self.bits.tobytes())

    def tolist(self) -> list[int]:
        """ビット列を int の list として返す。"""
        return [int(b) for b in self.bits]


def generate_pattern(length: int, *, rng: np.random.Generator | None = None) -> BinaryPattern:
    """独立・一様な 0/1 を `length` 個並べたパターンを生成する。

    Parameters
    ----------
    length : int
        ビット数（= subdivisions）。1 以上を想定する。
    rng : np.random.Generator or None, optional
        乱数源。None の場合は `np.random.default_rng()` を都度作る。

    Returns
    -------
    BinaryPattern
        生成したパターン。
    """
    generator = np.random.default_rng() if rng is None else rng
    bits = generator.integers(0, 2, size=int(length), dtype=np.uint8)
    return BinaryPattern(bits)


class PatternGenerator:
    """同じ乱数源からパターンを繰り返し生成する。

    Notes
    -----
    `seed` を与えると生成列が再現可能になる。
    `rng` を直接渡した場合は `seed` より優先する。
    """

    def __init__(
        self,
        seed: int | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def generate(self, length: int) -> BinaryPattern:
        """`length` ビットのパターンを 1 本生成する。"""
        return generate_pattern(length, rng=self._rng)

    def generate_pair(self, length: int) -> tuple[BinaryPattern, BinaryPattern]:
        """(horizontal, vertical) のパターン対を生成する。"""
        horizontal = self.generate(length)
        vertical = self.generate(length)
        _logger.debug(
            "パターンを生成: n=%d horizontal=%s vertical=%s",
            int(length),
            horizontal.tolist(),
            vertical.tolist(),
        )
        return horizontal, vertical


__all__ = ["BinaryPattern", "PatternGenerator", "generate_pattern"]
