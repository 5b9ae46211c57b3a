# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import TYPE_CHECKING

from chip8_tracer.core.errors import InvalidOpcode
from .base import Instruction, Opcode
from .maps import DECODE_MAP, SUBSELECTOR_MAP, EXECUTE_MAP

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.cpu import Chip8Cpu


# @intent:responsibility 16bitの命令語をデコードします。状態を持たない純粋関数です。
# @intent:post-condition 既知のパターンに一致しない場合はInvalidOpcode(DecodeError)を送出します。
def decode_opcode(word: int) -> Instruction:
    """
    CHIP-8の命令語をデコードし、Instructionオブジェクトを返します。
    """
    if not 0 <= word <= 0xFFFF:
        raise InvalidOpcode(word & 0xFFFF)

    op_class = word >> 12
    opcode = DECODE_MAP.get(op_class)
    if opcode is None:
        mask, table = SUBSELECTOR_MAP[op_class]
        opcode = table.get(word & mask)
        if opcode is None:
            raise InvalidOpcode(word)
    return Instruction.from_word(opcode, word)


# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Instruction, cpu: "Chip8Cpu") -> None:
    """
    デコードされた命令を実行し、CPUの状態を変更します。
    """
    EXECUTE_MAP[operation.opcode](cpu, operation)
