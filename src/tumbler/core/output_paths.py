# どこで: `src/tumbler/core/output_paths.py`。
# 何を: export の出力ファイルの保存先パス（単体 / 連番フレーム）を決める。
# なぜ: `output/{kind}/` 配下に、キャンバス寸法と run_id を含む一貫した名前で保存するため。

from __future__ import annotations

import re
from pathlib import Path

from tumbler.core.runtime_config import output_root_dir


def _sanitize_run_id(run_id: str) -> str:
    """run_id をファイル名の一部として使える形に正規化して返す。"""

    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(run_id))


def _run_id_suffix(run_id: str | None) -> str:
    """run_id の接尾辞（例: `_v1`）を返す。未指定なら空文字を返す。"""

    if run_id is None:
        return ""
    s = str(run_id).strip()
    if not s:
        return ""
    sanitized = _sanitize_run_id(s)
    if not sanitized:
        return ""
    return f"_{sanitized}"


def _fmt_canvas_dim_for_filename(value: float | int) -> str:
    """canvas の寸法をファイル名に埋め込むための短い表現にして返す。"""

    v = float(value)
    if v <= 0:
        raise ValueError("canvas_size は正の値である必要がある")
    if abs(v - round(v)) < 1e-9:
        return str(int(round(v)))

    s = f"{v:.3f}".rstrip("0").rstrip(".")
    return s if s else "0"


def _canvas_size_suffix(canvas_size: tuple[float | int, float | int] | None) -> str:
    """canvas_size の接尾辞（例: `_800x800`）を返す。未指定なら空文字を返す。"""

    if canvas_size is None:
        return ""
    w, h = canvas_size
    return f"_{_fmt_canvas_dim_for_filename(w)}x{_fmt_canvas_dim_for_filename(h)}"


def output_path(
    *,
    kind: str,
    ext: str,
    stem: str = "tumbler",
    run_id: str | None = None,
    canvas_size: tuple[float | int, float | int] | None = None,
    out_root: Path | None = None,
) -> Path:
    """出力ファイルの既定保存先を返す。

    Notes
    -----
    `out_root/{kind}/<stem>[_WxH][_run_id].{ext}` 形式。
    `out_root` 省略時は `runtime_config().output_dir` を使う。
    """

    ext_norm = str(ext).lstrip(".").strip()
    if not ext_norm:
        raise ValueError("ext は空でない必要がある")

    root = output_root_dir() if out_root is None else Path(out_root)
    filename = f"{stem}{_canvas_size_suffix(canvas_size)}{_run_id_suffix(run_id)}.{ext_norm}"
    return root / str(kind) / filename


def frame_output_paths(base_path: Path, *, n_frames: int) -> list[Path]:
    """連番フレームの保存先（`<stem>_f001.png` …）を返す。1 枚なら base_path そのもの。"""

    n = int(n_frames)
    if n <= 0:
        return []
    if n == 1:
        return [base_path]

    # 例: 12 枚なら f001..f012 / 1000 枚なら f0001..f1000
    width = max(3, len(str(n)))
    return [
        base_path.with_name(f"{base_path.stem}_f{i:0{int(width)}d}{base_path.suffix}")
        for i in range(1, n + 1)
    ]


__all__ = ["frame_output_paths", "output_path"]
