from __future__ import annotations

from pathlib import Path

import pytest

from hitomezashi.core.output_paths import pattern_output_path
from hitomezashi.core.runtime_config import set_config_path


@pytest.fixture
def out_root(tmp_path: Path) -> Path:
    root = tmp_path / "out"
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"paths:\n  output_dir: {root.as_posix()!r}\n", encoding="utf-8")
    set_config_path(cfg)
    return root


def test_pattern_output_path_with_size_and_seed(out_root: Path) -> None:
    assert pattern_output_path(canvas_size=(500, 500), seed=42) == (
        out_root / "svg" / "hitomezashi_500x500_seed42.svg"
    )


def test_pattern_output_path_without_seed(out_root: Path) -> None:
    assert pattern_output_path(canvas_size=(500.5, 400)) == (
        out_root / "svg" / "hitomezashi_500.5x400.svg"
    )
    assert pattern_output_path() == out_root / "svg" / "hitomezashi.svg"


def test_pattern_output_path_rejects_non_positive_size(out_root: Path) -> None:
    with pytest.raises(ValueError):
        pattern_output_path(canvas_size=(0, 10))
