from dataclasses import dataclass, field

from chip8_tracer.common.types import KeyLayout

# @intent:constant 標準の4x4配置。左が物理キー、右が16進キー番号。
#   1 2 3 4      1 2 3 C
#   Q W E R  ->  4 5 6 D
#   A S D F      7 8 9 E
#   Z X C V      A 0 B F
DEFAULT_KEY_LAYOUT: KeyLayout = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class AudioConfig:
    tone_frequency: int = 440
    volume: float = 0.25

@dataclass
class MachineConfig:
    frame_rate: int = 60
    instructions_per_frame: int = 1
    scale: int = 10
    wrap_sprites: bool = False
    program_start: int = 0x200
    audio: AudioConfig = field(default_factory=AudioConfig)
    key_layout: KeyLayout = field(default_factory=lambda: dict(DEFAULT_KEY_LAYOUT))
