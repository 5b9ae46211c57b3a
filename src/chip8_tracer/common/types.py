"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスを定義します。
"""
from typing import Dict, Tuple

# @intent:data_structure フレームバッファ上の点灯ピクセル座標 (x, y)。
Pixel = Tuple[int, int]

# @intent:data_structure 点灯ピクセル座標の不変な列。表示コラボレータへのコピーとして渡されます。
PixelList = Tuple[Pixel, ...]

# @intent:data_structure 物理キー名から16進キー番号(0x0-0xF)への対応表。
# Config, UIなど複数のレイヤーで共通して使用されます。
KeyLayout = Dict[str, int]
