# src/chip8_tracer/arch/chip8/instructions/control.py
"""
制御フロー命令（ジャンプ、サブルーチン、条件スキップ）の実装。
実行時点でPCは既に次の命令を指しています。
"""
from typing import TYPE_CHECKING

from chip8_tracer.core.errors import StackUnderflow, StackOverflow
from chip8_tracer.arch.chip8.state import STACK_DEPTH
from .base import Instruction, skip_next

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.cpu import Chip8Cpu


# --- JP / CALL / RET ---
def execute_jp(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.state.pc = op.nnn

# @intent:responsibility JP V0, addr。ジャンプ先は nnn + V0。
def execute_jp_v0(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.state.pc = (op.nnn + cpu.state.v[0]) & 0xFFFF

# @intent:responsibility 戻り先（現在のPC）をプッシュしてからジャンプします。
# @intent:pre-condition スタック深さが上限に達している場合は状態を変更せずにStackOverflowを送出します。
def execute_call(cpu: "Chip8Cpu", op: Instruction) -> None:
    s = cpu.state
    if len(s.stack) >= STACK_DEPTH:
        raise StackOverflow(STACK_DEPTH)
    s.stack.append(s.pc)
    s.pc = op.nnn

# @intent:responsibility スタックからポップしたアドレスへ戻ります。ポップはPCの上書きより先に行います。
def execute_ret(cpu: "Chip8Cpu", op: Instruction) -> None:
    s = cpu.state
    if not s.stack:
        raise StackUnderflow((s.pc - 2) & 0xFFFF)
    s.pc = s.stack.pop()

# --- Skips ---
def execute_se_vx_nn(cpu: "Chip8Cpu", op: Instruction) -> None:
    skip_next(cpu.state, cpu.state.v[op.x] == op.nn)

def execute_sne_vx_nn(cpu: "Chip8Cpu", op: Instruction) -> None:
    skip_next(cpu.state, cpu.state.v[op.x] != op.nn)

def execute_se_vx_vy(cpu: "Chip8Cpu", op: Instruction) -> None:
    skip_next(cpu.state, cpu.state.v[op.x] == cpu.state.v[op.y])

def execute_sne_vx_vy(cpu: "Chip8Cpu", op: Instruction) -> None:
    skip_next(cpu.state, cpu.state.v[op.x] != cpu.state.v[op.y])
