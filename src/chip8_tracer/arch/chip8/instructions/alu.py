# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
レジスタ演算命令の実装。

フラグを設定する命令では、結果を書き込んだ後にVFを書き込みます。
そのため x=F の場合はフラグ値が残ります。
"""
from typing import TYPE_CHECKING

from .base import Instruction

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.cpu import Chip8Cpu


# --- LD / ADD (immediate) ---
def execute_ld_vx_nn(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.state.v[op.x] = op.nn

# @intent:responsibility 定数加算。8bitで折り返し、VFは変更しません。
def execute_add_vx_nn(cpu: "Chip8Cpu", op: Instruction) -> None:
    v = cpu.state.v
    v[op.x] = (v[op.x] + op.nn) & 0xFF

# --- Register to register ---
def execute_ld_vx_vy(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.state.v[op.x] = cpu.state.v[op.y]

def execute_or(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.state.v[op.x] |= cpu.state.v[op.y]

def execute_and(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.state.v[op.x] &= cpu.state.v[op.y]

def execute_xor(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.state.v[op.x] ^= cpu.state.v[op.y]

# @intent:responsibility 9bitの和が255を超えた場合にVF=1とし、結果を8bitに切り詰めます。
def execute_add_vx_vy(cpu: "Chip8Cpu", op: Instruction) -> None:
    v = cpu.state.v
    res = v[op.x] + v[op.y]
    v[op.x] = res & 0xFF
    cpu.state.vf = 1 if res > 0xFF else 0

# @intent:utility_function 8bit減算。借りが発生しない(a >= b)場合はフラグ1。
def _subtract(a: int, b: int):
    if a >= b:
        return a - b, 1
    return 0x100 - (b - a), 0

def execute_sub(cpu: "Chip8Cpu", op: Instruction) -> None:
    v = cpu.state.v
    res, no_borrow = _subtract(v[op.x], v[op.y])
    v[op.x] = res
    cpu.state.vf = no_borrow

# @intent:responsibility Vx = Vy - Vx。SUBのオペランドを入れ替えたもの。
def execute_subn(cpu: "Chip8Cpu", op: Instruction) -> None:
    v = cpu.state.v
    res, no_borrow = _subtract(v[op.y], v[op.x])
    v[op.x] = res
    cpu.state.vf = no_borrow

# --- Shifts (Vyは参照しない) ---
def execute_shr(cpu: "Chip8Cpu", op: Instruction) -> None:
    v = cpu.state.v
    lsb = v[op.x] & 0x01
    v[op.x] >>= 1
    cpu.state.vf = lsb

def execute_shl(cpu: "Chip8Cpu", op: Instruction) -> None:
    v = cpu.state.v
    msb = (v[op.x] & 0x80) >> 7
    v[op.x] = (v[op.x] << 1) & 0xFF
    cpu.state.vf = msb

# --- RND ---
def execute_rnd(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.state.v[op.x] = cpu.random_byte() & op.nn
