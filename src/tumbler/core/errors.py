"""
どこで: `src/tumbler/core/errors.py`。
何を: 幾何/描画パイプラインが投げる例外型を定義する。
なぜ: 設定ミスやプログラム上の不変条件違反を、描画ループで握りつぶさず即座に表面化させるため。
"""

from __future__ import annotations


class TumblerError(Exception):
    """tumbler の不変条件違反を表す基底例外。"""


class DegenerateVectorError(TumblerError, ValueError):
    """長さ 0 のベクトルを正規化しようとした。"""


class DivisionError(TumblerError, ZeroDivisionError):
    """ベクトルを 0 で割ろうとした。"""


class IndexOutOfRangeError(TumblerError, IndexError):
    """軌道の時刻インデックスが `[0, len)` の範囲外。"""


class PaletteIndexError(TumblerError, IndexError):
    """クランプ後もシェーディング結果がパレット範囲に収まらない。"""


__all__ = [
    "DegenerateVectorError",
    "DivisionError",
    "IndexOutOfRangeError",
    "PaletteIndexError",
    "TumblerError",
]
