# src/chip8_tracer/arch/chip8/instructions/load.py
"""
インデックスレジスタ、メモリ転送、タイマー関連命令の実装。
メモリへ書き込む命令は、範囲全体を検証してから書き込みを開始します。
"""
from typing import TYPE_CHECKING

from chip8_tracer.arch.chip8.font import glyph_address
from .base import Instruction

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.cpu import Chip8Cpu


# --- Index register ---
def execute_ld_i(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.state.i = op.nnn

# @intent:responsibility I += Vx。16bitで折り返し、VFは変更しません。
def execute_add_i_vx(cpu: "Chip8Cpu", op: Instruction) -> None:
    s = cpu.state
    s.i = (s.i + s.v[op.x]) & 0xFFFF

# @intent:responsibility Vxの下位ニブルが示す16進数字のフォントグリフをIに設定します。
def execute_ld_f_vx(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.state.i = glyph_address(cpu.state.v[op.x])

# --- Memory transfer ---
# @intent:responsibility Vxの10進3桁（百・十・一の位）を I, I+1, I+2 に格納します。
def execute_ld_b_vx(cpu: "Chip8Cpu", op: Instruction) -> None:
    s = cpu.state
    value = s.v[op.x]
    cpu.memory.write_block(s.i, (value // 100, (value // 10) % 10, value % 10))

# @intent:responsibility V0..Vx（Vxを含む）をIから始まるメモリへ退避し、Iをx+1進めます。
def execute_ld_i_vx(cpu: "Chip8Cpu", op: Instruction) -> None:
    s = cpu.state
    cpu.memory.write_block(s.i, s.v[:op.x + 1])
    s.i = (s.i + op.x + 1) & 0xFFFF

# @intent:responsibility Iから始まるメモリをV0..Vx（Vxを含む）へ読み込み、Iをx+1進めます。
def execute_ld_vx_i(cpu: "Chip8Cpu", op: Instruction) -> None:
    s = cpu.state
    data = cpu.memory.read_block(s.i, op.x + 1)
    s.v[:op.x + 1] = list(data)
    s.i = (s.i + op.x + 1) & 0xFFFF

# --- Timers ---
def execute_ld_vx_dt(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.state.v[op.x] = cpu.timer.delay

def execute_ld_dt_vx(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.timer.delay = cpu.state.v[op.x]

def execute_ld_st_vx(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.timer.sound = cpu.state.v[op.x]
