"""
音声モジュール。
固定周波数の矩形波をループ再生するトーンジェネレータを提供します。
"""
import logging
import os
import struct
import tempfile
import wave

from PySide6.QtCore import QUrl
from PySide6.QtMultimedia import QSoundEffect

from chip8_tracer.runtime.frame_loop import Audio

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
LOOP_INFINITE = -2  # QSoundEffect::Infinite

# @intent:utility_function 1秒分の16bitモノラル矩形波のPCMデータを生成します。
# @intent:pre-condition 周波数が整数であれば、1秒ちょうどで位相が0に戻るためループ再生で継ぎ目が生じません。
def square_wave_pcm(frequency: int, volume: float, sample_rate: int = SAMPLE_RATE) -> bytes:
    amplitude = int(max(0.0, min(volume, 1.0)) * 0x7FFF)
    samples = []
    for i in range(sample_rate):
        phase = (i * frequency / sample_rate) % 1.0
        samples.append(amplitude if phase < 0.5 else -amplitude)
    return struct.pack(f"<{len(samples)}h", *samples)

def write_wav(path: str, pcm: bytes, sample_rate: int = SAMPLE_RATE) -> None:
    with wave.open(path, "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(sample_rate)
        w.writeframes(pcm)

# @intent:responsibility play()/stop()でトーンの開始・停止を行う音声コラボレータ。
class QtAudio(Audio):
    def __init__(self, frequency: int = 440, volume: float = 0.25):
        fd, self._path = tempfile.mkstemp(prefix="chip8-tone-", suffix=".wav")
        os.close(fd)
        write_wav(self._path, square_wave_pcm(frequency, volume))
        self._effect = QSoundEffect()
        self._effect.setSource(QUrl.fromLocalFile(self._path))
        self._effect.setLoopCount(LOOP_INFINITE)

    def play(self) -> None:
        if not self._effect.isPlaying():
            self._effect.play()

    def stop(self) -> None:
        self._effect.stop()

    def close(self) -> None:
        self._effect.stop()
        try:
            os.remove(self._path)
        except OSError as e:
            logger.warning("Cannot remove tone file %s: %s", self._path, e)
