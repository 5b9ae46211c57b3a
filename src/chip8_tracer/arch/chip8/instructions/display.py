# src/chip8_tracer/arch/chip8/instructions/display.py
"""
画面クリアとスプライト描画命令の実装。
"""
from typing import TYPE_CHECKING

from .base import Instruction

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.cpu import Chip8Cpu


def execute_cls(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.framebuffer.clear()

# @intent:responsibility Iから読んだn行のスプライトを (Vx, Vy) にXOR描画し、衝突の有無をVFに設定します。
# @intent:pre-condition スプライト全体がメモリ範囲内であることを描画前に検証します（範囲外ならMemoryFault）。
def execute_drw(cpu: "Chip8Cpu", op: Instruction) -> None:
    s = cpu.state
    vx = s.v[op.x]
    vy = s.v[op.y]
    sprite = cpu.memory.read_block(s.i, op.n)

    s.vf = 0
    if cpu.framebuffer.draw(vx, vy, sprite):
        s.vf = 1
