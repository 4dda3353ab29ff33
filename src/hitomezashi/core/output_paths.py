# どこで: `src/hitomezashi/core/output_paths.py`。
# 何を: `render` で `--out` を省略したときの SVG 保存先パスを決める。
# なぜ: 同じ seed とキャンバス寸法の出力が同じ名前になり、後から再生成できるようにするため。

from __future__ import annotations

from pathlib import Path

from hitomezashi.core.runtime_config import output_root_dir


def _fmt_dim(value: float | int) -> str:
    """寸法を `500` / `500.5` のような短い表記にする。"""

    v = float(value)
    if v <= 0:
        raise ValueError(f"canvas_size は正の値である必要がある: got={value!r}")
    if v.is_integer():
        return str(int(v))
    return f"{v:.3f}".rstrip("0").rstrip(".")


def pattern_output_path(
    *,
    canvas_size: tuple[float | int, float | int] | None = None,
    seed: int | None = None,
) -> Path:
    """パターン SVG の既定保存先を返す。

    Notes
    -----
    `output_root/svg/hitomezashi[_WxH][_seed<N>].svg` 形式。
    seed が None（非再現の乱数）の場合は seed 部分を付けない。
    """

    name = "hitomezashi"
    if canvas_size is not None:
        w, h = canvas_size
        name += f"_{_fmt_dim(w)}x{_fmt_dim(h)}"
    if seed is not None:
        name += f"_seed{int(seed)}"
    return output_root_dir() / "svg" / f"{name}.svg"


__all__ = ["pattern_output_path"]
