# src/chip8_tracer/arch/chip8/graphics.py
"""
64x32 モノクロフレームバッファ。

スプライトのXOR描画と衝突検出を担います。
"""
from typing import List, Sequence

from chip8_tracer.common.types import PixelList

WIDTH = 64
HEIGHT = 32
SPRITE_WIDTH = 8


# @intent:responsibility 1ビットピクセルのグリッドを保持し、クリアとXOR描画のみで変更します。
class Framebuffer:
    """
    64x32の1ビットピクセルグリッド。
    描画・クリアのたびにdirtyフラグが立ち、表示側が消費するまで保持されます。
    """
    # @intent:pre-condition wrapがTrueの場合、画面端からはみ出した部分は反対側に折り返して描画します。
    def __init__(self, wrap: bool = False):
        self._wrap = wrap
        self._pixels: List[List[int]] = [[0] * WIDTH for _ in range(HEIGHT)]
        self._dirty = False

    @property
    def wrap(self) -> bool:
        return self._wrap

    # @intent:responsibility dirtyフラグを読み出してクリアします。
    def consume_dirty(self) -> bool:
        dirty = self._dirty
        self._dirty = False
        return dirty

    def clear(self) -> None:
        for row in self._pixels:
            for x in range(WIDTH):
                row[x] = 0
        self._dirty = True

    # @intent:responsibility スプライトをXOR描画し、点灯していたピクセルが消灯したかどうかを返します。
    # @intent:rationale 各セルについて「旧値を読む→XOR→新値を書く→旧値と新値を比較」の順で値として処理します。
    def draw(self, x: int, y: int, sprite: Sequence[int]) -> bool:
        """
        8ピクセル幅のスプライトを (x mod 64, y mod 32) に描画します。
        画面外にはみ出す行・列はクリップ（wrap=Trueなら折り返し）されます。
        """
        origin_x = x % WIDTH
        origin_y = y % HEIGHT
        collision = False

        for dy, row_bits in enumerate(sprite):
            py = origin_y + dy
            if py >= HEIGHT:
                if not self._wrap:
                    break
                py %= HEIGHT
            row = self._pixels[py]
            for dx in range(SPRITE_WIDTH):
                if not row_bits & (0x80 >> dx):
                    continue
                px = origin_x + dx
                if px >= WIDTH:
                    if not self._wrap:
                        break
                    px %= WIDTH
                old = row[px]
                new = old ^ 1
                row[px] = new
                if old == 1 and new == 0:
                    collision = True

        self._dirty = True
        return collision

    # @intent:responsibility 点灯ピクセル座標のコピーを返します。表示コラボレータへの受け渡し用。
    def lit_pixels(self) -> PixelList:
        return tuple(
            (x, y)
            for y, row in enumerate(self._pixels)
            for x, bit in enumerate(row)
            if bit
        )
