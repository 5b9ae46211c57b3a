# src/chip8_tracer/arch/chip8/instructions/keys.py
"""
キー入力命令の実装。
"""
import logging
from typing import TYPE_CHECKING

from chip8_tracer.arch.chip8.keymap import KeyWait
from .base import Instruction, skip_next

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.cpu import Chip8Cpu

logger = logging.getLogger(__name__)


# @intent:responsibility 現フレームのキーマップで、Vxの下位ニブルが示すキーが押下中ならスキップします。
def execute_skp(cpu: "Chip8Cpu", op: Instruction) -> None:
    skip_next(cpu.state, cpu.keymap.is_down(cpu.state.v[op.x] & 0xF))

def execute_sknp(cpu: "Chip8Cpu", op: Instruction) -> None:
    skip_next(cpu.state, not cpu.keymap.is_down(cpu.state.v[op.x] & 0xF))

# @intent:responsibility キー待ちを保留状態として登録します。フレームループはブロックしません。
# @intent:rationale 命令発行時点のキーマップを捕捉し、その後に「離された」キーでのみ解決します。
def execute_ld_vx_k(cpu: "Chip8Cpu", op: Instruction) -> None:
    cpu.key_wait = KeyWait(register=op.x, captured=cpu.keymap)
    logger.info("Waiting for key into V%X (held: %s)", op.x, list(cpu.keymap.pressed()))
