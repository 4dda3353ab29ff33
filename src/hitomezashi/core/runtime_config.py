# どこで: `src/hitomezashi/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: キャンバス寸法・パレット・線スタイル・出力先をコードを触らずに切り替えられるようにするため。

"""実行時設定（`config.yaml`）の探索・ロード・キャッシュを担当する。

このモジュールは、以下を提供する:

- `config.yaml` を「同梱デフォルト → ユーザー設定（任意）」の順に適用して `RuntimeConfig` を構築
- 探索パス（CWD / HOME）と、明示指定（`set_config_path()`）の両方に対応
- 1 回ロードした結果をプロセス内でキャッシュ（設定を切り替える場合は `set_config_path()` で破棄）

実装メモ
--------
- ユーザー設定の適用は `dict.update()`（トップレベルの浅い上書き）で行う。
  ネストした mapping は「部分的にマージ」されず「丸ごと置換」される。
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from hitomezashi.core.style import DEFAULT_SEAM_CORRECTION, StrokeStyle


@dataclass(frozen=True, slots=True)
class CanvasConfig:
    """キャンバス設定（`config.yaml` の `canvas`）。"""

    width: float
    height: float
    subdivisions: int


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """hitomezashi の実行時設定。

    Attributes
    ----------
    config_path:
        実際に採用されたユーザー設定ファイルのパス。ユーザー設定が無い場合は None。
    output_dir:
        生成物（SVG 等）の出力先ディレクトリ。
    canvas:
        キャンバス寸法と分割数。
    palette:
        セルの 2 色。
    stroke:
        縫い目の線スタイル。
    seam_correction:
        塗り矩形と線分の継ぎ目補正量。
    """

    config_path: Path | None
    output_dir: Path
    canvas: CanvasConfig
    palette: tuple[str, str]
    stroke: StrokeStyle
    seam_correction: float


# `set_config_path()` で指定される「明示 config」のパス。
_EXPLICIT_CONFIG_PATH: Path | None = None
# `runtime_config()` のプロセス内キャッシュ。設定を切り替える場合は破棄する。
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    - `path` を None にすると明示指定を解除し、既定の探索に戻る。
    - 設定が変わるため、`runtime_config()` のキャッシュを破棄する。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _CONFIG_CACHE = None
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()


def _default_config_candidates() -> tuple[Path, ...]:
    """既定の `config.yaml` 探索候補を返す。

    探索順（先勝ち）:
    - `./.hitomezashi/config.yaml`
    - `~/.config/hitomezashi/config.yaml`
    """

    return (
        Path.cwd() / ".hitomezashi" / "config.yaml",
        Path.home() / ".config" / "hitomezashi" / "config.yaml",
    )


def _as_optional_path(value: Any) -> Path | None:
    """任意値を「空なら None / それ以外は Path」へ変換する。"""

    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(os.path.expandvars(os.path.expanduser(s)))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    """任意値を mapping として解釈し、dict に正規化して返す。"""

    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_float(value: Any, *, key: str) -> float | None:
    """任意値を float として解釈して返す。"""

    if value is None:
        return None
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_int(value: Any, *, key: str) -> int | None:
    """任意値を int として解釈して返す。"""

    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _as_str(value: Any, *, key: str) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        raise RuntimeError(f"{key} は空でない文字列である必要があります")
    return s


def _as_palette(value: Any) -> tuple[str, str] | None:
    """palette を 2 色の tuple として解釈して返す。"""

    if value is None:
        return None
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise RuntimeError(f"palette は [color0, color1] の配列である必要があります: got={value!r}")
    if len(value) != 2:
        raise RuntimeError(f"palette は 2 色である必要があります: got={value!r}")
    c0 = _as_str(value[0], key="palette[0]")
    c1 = _as_str(value[1], key="palette[1]")
    return (_require(c0, "palette[0]"), _require(c1, "palette[1]"))


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    """YAML テキストを読み、トップレベル mapping を dict として返す。"""

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")
    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    """UTF-8 の YAML ファイルを読み、dict を返す。"""

    return _load_yaml_text(path.read_text(encoding="utf-8"), source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("hitomezashi")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="hitomezashi/resource/default_config.yaml")


def _require(value: Any, key: str) -> Any:
    if value is None:
        raise RuntimeError(
            f"{key} が未設定です（同梱 default_config.yaml を確認してください）"
        )
    return value


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    読み込み元の優先順位（後勝ち）:
    1) 同梱 `hitomezashi/resource/default_config.yaml`
    2) 探索で見つかった `config.yaml`（任意）
    3) `set_config_path()` で明示指定された `config.yaml`（任意）
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload.update(_load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload.update(_load_yaml_config(explicit_path))

    version = _as_int(_require(payload.get("version"), "version"), key="version")
    if version != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    output_dir = _require(_as_optional_path(paths.get("output_dir")), "paths.output_dir")

    canvas = _as_mapping(payload.get("canvas"), key="canvas")
    width = _require(_as_float(canvas.get("width"), key="canvas.width"), "canvas.width")
    height = _require(_as_float(canvas.get("height"), key="canvas.height"), "canvas.height")
    subdivisions = _require(
        _as_int(canvas.get("subdivisions"), key="canvas.subdivisions"),
        "canvas.subdivisions",
    )
    if width <= 0.0 or height <= 0.0:
        raise ValueError(f"canvas の寸法は正の値である必要があります: got={width}x{height}")
    if subdivisions < 1:
        raise ValueError(f"canvas.subdivisions は 1 以上である必要があります: got={subdivisions}")

    palette = _require(_as_palette(payload.get("palette")), "palette")

    stroke = _as_mapping(payload.get("stroke"), key="stroke")
    stroke_width = _require(_as_float(stroke.get("width"), key="stroke.width"), "stroke.width")
    if stroke_width < 0.0:
        raise ValueError(f"stroke.width は 0 以上である必要があります: got={stroke_width}")
    stroke_style = StrokeStyle(
        color=_require(_as_str(stroke.get("color"), key="stroke.color"), "stroke.color"),
        width=float(stroke_width),
        cap=_require(_as_str(stroke.get("cap"), key="stroke.cap"), "stroke.cap"),
        join=_require(_as_str(stroke.get("join"), key="stroke.join"), "stroke.join"),
    )

    render = _as_mapping(payload.get("render"), key="render")
    seam_correction = _as_float(render.get("seam_correction"), key="render.seam_correction")
    if seam_correction is None:
        seam_correction = DEFAULT_SEAM_CORRECTION

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        output_dir=Path(output_dir),
        canvas=CanvasConfig(width=float(width), height=float(height), subdivisions=int(subdivisions)),
        palette=palette,
        stroke=stroke_style,
        seam_correction=float(seam_correction),
    )
    _CONFIG_CACHE = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。"""

    return Path(runtime_config().output_dir)


__all__ = [
    "CanvasConfig",
    "RuntimeConfig",
    "output_root_dir",
    "runtime_config",
    "set_config_path",
]
