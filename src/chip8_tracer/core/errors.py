# chip8_tracer/core/errors.py
"""
Core Layer (例外定義)

インタプリタが送出する致命的エラーの階層を定義します。
いずれもリトライやスキップの対象ではなく、フレームループを抜けてプロセスを終了させます。
"""
from typing import Optional


# @intent:responsibility インタプリタ由来の全ての致命的エラーの基底クラスです。
class Chip8Error(Exception):
    """CHIP-8インタプリタの致命的エラー。"""


# @intent:responsibility 既知の命令パターンに一致しない命令語を表します。
# @intent:rationale 不正な入力値であるため、ValueErrorとしても捕捉できるようにします。
class DecodeError(Chip8Error, ValueError):
    def __init__(self, word: int):
        self.word = word
        super().__init__(f"Invalid opcode dec={word}, hex={word:04X}")


InvalidOpcode = DecodeError


# @intent:responsibility 4096バイトのアドレス空間外へのアクセスを表します。
class MemoryFault(Chip8Error, IndexError):
    def __init__(self, address: int, size: int = 0x1000):
        self.address = address
        super().__init__(f"Address {address:#06x} out of bounds for memory of size {size:#06x}.")


# @intent:responsibility 空のコールスタックからのRETを表します。
class StackUnderflow(Chip8Error, IndexError):
    def __init__(self, pc: Optional[int] = None):
        self.pc = pc
        where = f" at PC {pc:#06x}" if pc is not None else ""
        super().__init__(f"Return with empty call stack{where}.")


# @intent:responsibility コールスタックの深さ上限を超えるCALLを表します。
class StackOverflow(Chip8Error, IndexError):
    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"Call stack overflow: depth limit {depth} reached.")


# @intent:responsibility プログラムイメージが読み込めないことを表します。
class RomLoadError(Chip8Error, OSError):
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot load program image '{path}': {reason}")
