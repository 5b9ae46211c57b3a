"""
メインウィンドウの実装。
スクリーンを保持し、キーボード状態とウィンドウのクローズを記録します。
"""
from typing import Set

from PySide6.QtWidgets import QMainWindow
from PySide6.QtGui import QKeyEvent, QCloseEvent

from .screen import ScreenWidget

# @intent:responsibility インタプリタの画面と、物理キーの押下状態を保持するウィンドウ。
class MainWindow(QMainWindow):
    def __init__(self, scale: int = 10, title: str = "CHIP-8", parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.screen = ScreenWidget(scale)
        self.setCentralWidget(self.screen)
        self._pressed: Set[int] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    # @intent:responsibility 現在押下されている物理キー(Qt.Keyの整数値)のコピーを返します。
    def pressed_keys(self) -> Set[int]:
        return set(self._pressed)

    def keyPressEvent(self, event: QKeyEvent):
        # オートリピートは押しっぱなしと同じ扱い
        if not event.isAutoRepeat():
            self._pressed.add(int(event.key()))
        event.accept()

    def keyReleaseEvent(self, event: QKeyEvent):
        if not event.isAutoRepeat():
            self._pressed.discard(int(event.key()))
        event.accept()

    def focusOutEvent(self, event):
        self._pressed.clear()
        super().focusOutEvent(event)

    def closeEvent(self, event: QCloseEvent):
        self._closed = True
        event.accept()
