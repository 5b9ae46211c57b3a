"""
Screen モジュール。

64x32のフレームバッファを拡大表示するウィジェットと、
それを表示コラボレータとして公開するアダプタを提供します。
"""
from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor, QPaintEvent

from chip8_tracer.common.types import PixelList
from chip8_tracer.arch.chip8.graphics import WIDTH, HEIGHT
from chip8_tracer.runtime.frame_loop import Display

# --- 色定義 ---
COLOR_BG = "#000000"
COLOR_PIXEL = "#FFFFFF"

# @intent:responsibility 点灯ピクセルを scale x scale のブロックとして描画します。
class ScreenWidget(QWidget):
    def __init__(self, scale: int = 10, parent=None):
        super().__init__(parent)
        self._scale = scale
        self._pixels: PixelList = ()
        self.setFixedSize(self.sizeHint())

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def pixels(self) -> PixelList:
        return self._pixels

    def sizeHint(self) -> QSize:
        return QSize(WIDTH * self._scale, HEIGHT * self._scale)

    def set_pixels(self, pixels: PixelList):
        self._pixels = tuple(pixels)
        self.update()

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(COLOR_BG))
        color = QColor(COLOR_PIXEL)
        s = self._scale
        for x, y in self._pixels:
            painter.fillRect(x * s, y * s, s, s, color)
        painter.end()

# @intent:responsibility ScreenWidgetを表示コラボレータ(Display)として公開します。
class QtDisplay(Display):
    def __init__(self, screen: ScreenWidget):
        self._screen = screen

    def render(self, pixels: PixelList) -> None:
        self._screen.set_pixels(pixels)
        self._screen.repaint()
