# src/chip8_tracer/arch/chip8/__init__.py
"""
CHIP-8 Architecture Package
"""
from .cpu import Chip8Cpu, FrameResult
from .state import Chip8CpuState
from .keymap import Keymap, KeyWait
from .timer import Timer, TimerTick
from .graphics import Framebuffer
