# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.memory import PROGRAM_START

REGISTER_COUNT = 16
STACK_DEPTH = 16
FLAG_REGISTER = 0xF


# @intent:responsibility CHIP-8のレジスタファイル（V0-VF, I, PC）とコールスタックを保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    """
    pc: int = PROGRAM_START
    i: int = 0x0000    # Index Register (16bit)
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    stack: List[int] = field(default_factory=list)

    # @intent:accessor VFはキャリー/ボロー/シフトアウト/衝突フラグを兼ねる汎用レジスタです。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    @property
    def sp(self) -> int:
        return len(self.stack)

    # @intent:responsibility リストを含むフィールドまで複製した独立コピーを返します。
    def copy(self) -> 'Chip8CpuState':
        return Chip8CpuState(pc=self.pc, i=self.i, v=list(self.v), stack=list(self.stack))
