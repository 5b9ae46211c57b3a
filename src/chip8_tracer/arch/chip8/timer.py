# src/chip8_tracer/arch/chip8/timer.py
"""
ディレイタイマーとサウンドタイマー。
"""
from enum import Enum


# @intent:responsibility tick()の結果を表します。
class TimerTick(Enum):
    NORMAL = "NORMAL"
    SOUND_ZERO = "SOUND_ZERO"  # サウンドタイマーがこのtickで1から0になった


# @intent:responsibility 0で飽和する2つの独立した8bitカウンタを保持します。
class Timer:
    """
    1フレームにつき1回tick()され、命令実行の有無とは無関係にカウントダウンします。
    """
    def __init__(self):
        self._delay = 0
        self._sound = 0

    @property
    def delay(self) -> int:
        return self._delay

    @delay.setter
    def delay(self, value: int) -> None:
        self._delay = value & 0xFF

    @property
    def sound(self) -> int:
        return self._sound

    @sound.setter
    def sound(self, value: int) -> None:
        self._sound = value & 0xFF

    def tick(self) -> TimerTick:
        if self._delay > 0:
            self._delay -= 1

        if self._sound > 0:
            self._sound -= 1
            if self._sound == 0:
                return TimerTick.SOUND_ZERO

        return TimerTick.NORMAL
