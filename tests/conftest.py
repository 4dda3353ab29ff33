from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import numpy as np
import pytest

from hitomezashi.core.runtime_config import set_config_path


class ScriptedRng:
    """`integers()` が事前に与えたビット列を順に返す乱数源。"""

    def __init__(self, sequences: Sequence[Sequence[int]]) -> None:
        self._queue = [list(s) for s in sequences]
        self.calls = 0

    def integers(self, low: int, high: int, size: int, dtype=np.int64) -> np.ndarray:
        assert (low, high) == (0, 2)
        self.calls += 1
        bits = self._queue.pop(0)
        assert len(bits) == size
        return np.asarray(bits, dtype=dtype)


@pytest.fixture(autouse=True)
def _isolate_runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # CWD / HOME の config.yaml を拾わないよう、探索先を tmp に向ける。
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    set_config_path(None)
    yield
    set_config_path(None)


@pytest.fixture
def scripted_rng() -> Callable[[Sequence[Sequence[int]]], ScriptedRng]:
    return ScriptedRng
