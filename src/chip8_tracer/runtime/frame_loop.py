# chip8_tracer/runtime/frame_loop.py
"""
フレームループモジュール。

入力・表示・音声の各コラボレータとインタプリタを結び、
固定間隔のフレームでインタプリタを駆動する責務を負います。
"""
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from chip8_tracer.common.types import PixelList
from chip8_tracer.arch.chip8.cpu import Chip8Cpu, FrameResult
from chip8_tracer.arch.chip8.keymap import Keymap
from chip8_tracer.arch.chip8.timer import TimerTick

logger = logging.getLogger(__name__)

DEFAULT_FRAME_RATE = 60


# @intent:responsibility 入力コラボレータのポーリング結果（停止要求、または16キーの押下状態）を表します。
@dataclass(frozen=True)
class PollResult:
    keymap: Optional[Keymap] = None

    @classmethod
    def stop(cls) -> 'PollResult':
        return cls(keymap=None)

    @classmethod
    def keys(cls, keymap: Keymap) -> 'PollResult':
        return cls(keymap=keymap)

    @property
    def should_stop(self) -> bool:
        return self.keymap is None


# @intent:responsibility 表示コラボレータのインターフェースを定義します。
class Display(ABC):
    # @intent:responsibility 点灯ピクセル座標のコピーを受け取り、画面に表示します。
    # @intent:pre-condition フレームバッファが前回の描画以降に変更された場合にのみ呼び出されます。
    @abstractmethod
    def render(self, pixels: PixelList) -> None:
        pass


# @intent:responsibility 音声コラボレータのインターフェースを定義します。
class Audio(ABC):
    @abstractmethod
    def play(self) -> None:
        pass

    @abstractmethod
    def stop(self) -> None:
        pass


# @intent:responsibility 入力コラボレータのインターフェースを定義します。
class Input(ABC):
    # @intent:responsibility 1フレームにつき1回呼び出され、停止要求またはキーマップを返します。
    @abstractmethod
    def poll(self) -> PollResult:
        pass


# @intent:responsibility インタプリタをフレーム単位で駆動し、停止要求を毎フレーム確認します。
class FrameLoop:
    """
    単一スレッドの協調的なフレームループ。
    唯一の中断点はフレーム間の固定時間スリープです。
    """
    def __init__(self, cpu: Chip8Cpu, display: Display, audio: Audio, input_: Input,
                 frame_rate: int = DEFAULT_FRAME_RATE,
                 sleep: Callable[[float], None] = time.sleep):
        if frame_rate <= 0:
            raise ValueError("frame_rate must be positive.")
        self._cpu = cpu
        self._display = display
        self._audio = audio
        self._input = input_
        self._frame_interval = 1.0 / frame_rate
        self._sleep = sleep
        self._tone_on = False
        self._frame_count = 0

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def frame_interval(self) -> float:
        return self._frame_interval

    # @intent:responsibility 1フレーム分を処理します。停止要求を受けた場合はNoneを返します。
    def run_frame(self) -> Optional[FrameResult]:
        poll = self._input.poll()
        if poll.should_stop:
            return None

        result = self._cpu.run_frame(poll.keymap)

        if result.redraw:
            self._display.render(self._cpu.framebuffer.lit_pixels())

        self._update_tone(result.timer_tick)
        self._frame_count += 1
        return result

    # @intent:responsibility サウンドタイマーの遷移から音声コラボレータへのplay/stopを導出します。
    def _update_tone(self, tick: TimerTick) -> None:
        # FX18でサウンドタイマーが直接0にされた場合も停止する
        if tick is TimerTick.SOUND_ZERO or self._cpu.timer.sound == 0:
            if self._tone_on:
                self._audio.stop()
                self._tone_on = False
        elif not self._tone_on:
            self._audio.play()
            self._tone_on = True

    # @intent:responsibility 停止要求または指定フレーム数に達するまでフレームを繰り返します。
    # @intent:post-condition 致命的エラーはそのまま呼び出し元へ伝播します。音声は必ず停止されます。
    def run(self, max_frames: Optional[int] = None) -> int:
        """
        フレームループを実行し、処理したフレーム数を返します。
        """
        try:
            while max_frames is None or self._frame_count < max_frames:
                if self.run_frame() is None:
                    logger.info("Stop requested after %d frames.", self._frame_count)
                    break
                self._sleep(self._frame_interval)
        finally:
            if self._tone_on:
                self._audio.stop()
                self._tone_on = False
        return self._frame_count
