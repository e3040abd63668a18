"""
どこで: `src/tumbler/export/svg.py`。
何を: 描画呼び出しを SVG の `<polygon>` 要素として書き出す。
なぜ: 1 フレームをベクタ形式で保存し、ラスタライズ前の多角形をそのまま確認できるようにするため。
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from tumbler.core.shading import RGB
from tumbler.core.surface import Point2D


def _fmt_float(value: float, *, decimals: int = 3) -> str:
    text = f"{float(value):.{int(decimals)}f}".rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text


def _hex(rgb: RGB) -> str:
    r, g, b = rgb
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


class SvgSurface:
    """多角形を SVG 要素として蓄積する描画面。"""

    def __init__(self, size: tuple[int, int], *, background: RGB = (255, 255, 255), line_width: float = 1.0) -> None:
        self._w = int(size[0])
        self._h = int(size[1])
        self._background = background
        self._line_width = float(line_width)
        self._elements: list[str] = []

    def clear(self) -> None:
        self._elements.clear()

    def draw_polygon(self, points: Sequence[Point2D], outline: RGB, fill: RGB) -> None:
        pts = " ".join(f"{_fmt_float(x)},{_fmt_float(y)}" for x, y in points)
        self._elements.append(
            f'  <polygon points="{pts}" fill="{_hex(fill)}" stroke="{_hex(outline)}"'
            f' stroke-width="{_fmt_float(self._line_width)}" stroke-linejoin="round"/>'
        )

    def to_svg(self) -> str:
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self._w}" height="{self._h}"'
            f' viewBox="0 0 {self._w} {self._h}">',
            f'  <rect width="100%" height="100%" fill="{_hex(self._background)}"/>',
            *self._elements,
            "</svg>",
        ]
        return "\n".join(lines) + "\n"


def export_svg(surface: SvgSurface, path: str | Path) -> Path:
    """SvgSurface の内容を UTF-8 テキストとして保存する。"""

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(surface.to_svg(), encoding="utf-8")
    return out


__all__ = ["SvgSurface", "export_svg"]
