"""`python -m hitomezashi` の CLI をテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from hitomezashi.__main__ import main
from hitomezashi.core.edge_map import build_edge_map
from hitomezashi.core.pattern import PatternGenerator


def test_render_writes_svg(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "pattern.svg"

    code = main(["render", "--out", str(out), "--seed", "1", "--subdivisions", "4"])

    assert code == 0
    assert capsys.readouterr().out.strip() == str(out)
    svg = out.read_text(encoding="utf-8")
    assert svg.count("<rect") == 16
    edge_map = build_edge_map(*PatternGenerator(1).generate_pair(4))
    assert svg.count("<path") == edge_map.edge_count()
    assert 'fill="crimson"' in svg or 'fill="cornflowerblue"' in svg


def test_render_is_reproducible_with_seed(tmp_path: Path) -> None:
    a = tmp_path / "a.svg"
    b = tmp_path / "b.svg"
    main(["render", "--out", str(a), "--seed", "5"])
    main(["render", "--out", str(b), "--seed", "5"])
    assert a.read_text(encoding="utf-8") == b.read_text(encoding="utf-8")


def test_render_options(tmp_path: Path) -> None:
    out = tmp_path / "opts.svg"
    main(
        [
            "render",
            "--out",
            str(out),
            "--seed",
            "2",
            "--size",
            "100",
            "80",
            "--subdivisions",
            "4",
            "--palette",
            "white",
            "black",
            "--background",
            "gray",
            "--no-lines",
        ]
    )
    svg = out.read_text(encoding="utf-8")
    assert 'width="100" height="80"' in svg
    assert "<path" not in svg
    # 背景 1 + セル 16
    assert svg.count("<rect") == 17
    # セル 1 辺 = min(100, 80) / 4 = 20、補正 0.5 を加えて 20.5
    assert 'width="20.5" height="20.5"' in svg
    assert "crimson" not in svg


def test_render_default_output_path_uses_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = tmp_path / "out"
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"paths:\n  output_dir: {root.as_posix()!r}\n", encoding="utf-8")

    main(["render", "--config", str(cfg), "--seed", "3"])

    expected = root / "svg" / "hitomezashi_500x500_seed3.svg"
    assert expected.is_file()
    assert capsys.readouterr().out.strip() == str(expected)


def test_show_pattern_with_explicit_bits(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["show-pattern", "--horizontal", "01", "--vertical", "10"])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == [
        "horizontal: 01",
        "vertical:   10",
        ". .|",
        "-   ",
        "#|. ",
        "  - ",
    ]


def test_show_pattern_invert(capsys: pytest.CaptureFixture[str]) -> None:
    main(["show-pattern", "--horizontal", "0,1", "--vertical", "1,0", "--invert"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[2] == "# #|"
    assert lines[4] == ".|# "


def test_show_pattern_rejects_mismatched_lengths() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["show-pattern", "--horizontal", "010", "--vertical", "10110"])
    assert excinfo.value.code == 2


def test_show_pattern_rejects_invalid_bits() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["show-pattern", "--horizontal", "012", "--vertical", "100"])
    assert excinfo.value.code == 2
