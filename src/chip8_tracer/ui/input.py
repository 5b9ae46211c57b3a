"""
キーボード入力モジュール。
物理キーを16進キー番号に対応付け、フレームごとのキーマップを生成します。
"""
from typing import Dict, Iterable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication

from chip8_tracer.common.types import KeyLayout
from chip8_tracer.arch.chip8.keymap import Keymap
from chip8_tracer.runtime.frame_loop import Input, PollResult
from .main_window import MainWindow

# @intent:utility_function キー名("Q", "1"など)をQt.Keyの整数値に変換します。
def qt_key_code(name: str) -> int:
    key = getattr(Qt.Key, f"Key_{name}", None)
    if key is None:
        raise ValueError(f"Unknown key name in key layout: '{name}'")
    return int(key)

# @intent:responsibility 設定のキー配置（キー名→番号）を、Qtキーコード→番号の対応表に変換します。
def resolve_layout(layout: KeyLayout) -> Dict[int, int]:
    return {qt_key_code(name): index for name, index in layout.items()}

def keymap_from_keys(pressed: Iterable[int], layout: Dict[int, int]) -> Keymap:
    return Keymap.from_indices(layout[code] for code in pressed if code in layout)

# @intent:responsibility ウィンドウのイベントを処理し、停止要求またはキーマップを返す入力コラボレータ。
class QtInput(Input):
    STOP_KEY = int(Qt.Key.Key_Escape)

    # @intent:pre-condition layoutはresolve_layout()で変換済みの対応表である必要があります。
    def __init__(self, window: MainWindow, layout: Dict[int, int]):
        self._window = window
        self._layout = dict(layout)

    def poll(self) -> PollResult:
        # フレームループが唯一のスレッドなので、ここでQtのイベントを処理する
        QApplication.processEvents()
        if self._window.closed:
            return PollResult.stop()
        pressed = self._window.pressed_keys()
        if self.STOP_KEY in pressed:
            return PollResult.stop()
        return PollResult.keys(keymap_from_keys(pressed, self._layout))
