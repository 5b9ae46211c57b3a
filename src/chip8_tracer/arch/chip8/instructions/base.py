# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令の表現（タグ付きバリアント）と共通ユーティリティ。
"""
from dataclasses import dataclass
from enum import Enum
from typing import List


# @intent:responsibility CHIP-8の閉じた命令集合を列挙します。値は (ビットパターン, ニーモニック, オペランド書式)。
class Opcode(Enum):
    CLS = ("00E0", "CLS", "")
    RET = ("00EE", "RET", "")
    JP = ("1NNN", "JP", "{nnn}")
    CALL = ("2NNN", "CALL", "{nnn}")
    SE_VX_NN = ("3XNN", "SE", "{vx}, {nn}")
    SNE_VX_NN = ("4XNN", "SNE", "{vx}, {nn}")
    SE_VX_VY = ("5XY0", "SE", "{vx}, {vy}")
    LD_VX_NN = ("6XNN", "LD", "{vx}, {nn}")
    ADD_VX_NN = ("7XNN", "ADD", "{vx}, {nn}")
    LD_VX_VY = ("8XY0", "LD", "{vx}, {vy}")
    OR = ("8XY1", "OR", "{vx}, {vy}")
    AND = ("8XY2", "AND", "{vx}, {vy}")
    XOR = ("8XY3", "XOR", "{vx}, {vy}")
    ADD_VX_VY = ("8XY4", "ADD", "{vx}, {vy}")
    SUB = ("8XY5", "SUB", "{vx}, {vy}")
    SHR = ("8XY6", "SHR", "{vx}")
    SUBN = ("8XY7", "SUBN", "{vx}, {vy}")
    SHL = ("8XYE", "SHL", "{vx}")
    SNE_VX_VY = ("9XY0", "SNE", "{vx}, {vy}")
    LD_I = ("ANNN", "LD", "I, {nnn}")
    JP_V0 = ("BNNN", "JP", "V0, {nnn}")
    RND = ("CXNN", "RND", "{vx}, {nn}")
    DRW = ("DXYN", "DRW", "{vx}, {vy}, {n}")
    SKP = ("EX9E", "SKP", "{vx}")
    SKNP = ("EXA1", "SKNP", "{vx}")
    LD_VX_DT = ("FX07", "LD", "{vx}, DT")
    LD_VX_K = ("FX0A", "LD", "{vx}, K")
    LD_DT_VX = ("FX15", "LD", "DT, {vx}")
    LD_ST_VX = ("FX18", "LD", "ST, {vx}")
    ADD_I_VX = ("FX1E", "ADD", "I, {vx}")
    LD_F_VX = ("FX29", "LD", "F, {vx}")
    LD_B_VX = ("FX33", "LD", "B, {vx}")
    LD_I_VX = ("FX55", "LD", "[I], {vx}")
    LD_VX_I = ("FX65", "LD", "{vx}, [I]")

    def __init__(self, pattern: str, mnemonic: str, operand_format: str):
        self.pattern = pattern
        self.mnemonic = mnemonic
        self.operand_format = operand_format


# @intent:responsibility デコード済みの1命令を不変に表します。
# @intent:rationale 全フィールドを事前に抽出しておくことで、実行関数はビット演算を意識せずに済みます。
@dataclass(frozen=True)
class Instruction:
    opcode: Opcode
    raw: int
    x: int = 0
    y: int = 0
    n: int = 0
    nn: int = 0
    nnn: int = 0

    # @intent:responsibility 命令語から全オペランドフィールドを抽出してInstructionを生成します。
    @classmethod
    def from_word(cls, opcode: Opcode, word: int) -> 'Instruction':
        return cls(
            opcode=opcode,
            raw=word,
            x=(word >> 8) & 0xF,
            y=(word >> 4) & 0xF,
            n=word & 0xF,
            nn=word & 0xFF,
            nnn=word & 0xFFF,
        )

    @property
    def opcode_hex(self) -> str:
        return f"{self.raw:04X}"

    @property
    def mnemonic(self) -> str:
        return self.opcode.mnemonic

    @property
    def operands(self) -> List[str]:
        fmt = self.opcode.operand_format
        if not fmt:
            return []
        text = fmt.format(
            vx=f"V{self.x:X}", vy=f"V{self.y:X}",
            n=f"{self.n}", nn=f"#${self.nn:02X}", nnn=f"${self.nnn:03X}",
        )
        return text.split(", ")

    def __str__(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic


# @intent:utility_function 条件成立時に次の命令を読み飛ばします。
def skip_next(state, condition: bool) -> None:
    if condition:
        state.pc = (state.pc + 2) & 0xFFFF
