# chip8_tracer/transport/memory.py
"""
Transport Layer (メモリ空間)

このモジュールは、CHIP-8の4096バイトのフラットなアドレス空間を抽象化し、
境界チェック付きの読み書きを提供する責務を負います。
"""
from typing import Iterable

from chip8_tracer.core.errors import MemoryFault

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200


# @intent:responsibility CHIP-8の仮想メモリを提供します。
# @intent:rationale 範囲外アクセスは全て致命的エラー(MemoryFault)とし、ラップアラウンドは行いません。
class Memory:
    """
    境界チェック付きのバイト配列メモリ。
    """
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int = MEMORY_SIZE):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("Memory size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    def get_size(self) -> int:
        return self._size

    # @intent:responsibility アドレス範囲 [address, address + length) が有効であることを検証します。
    def check_range(self, address: int, length: int = 1) -> None:
        """
        範囲全体を事前に検証します。書き込み前に呼び出すことで、
        命令の途中で状態が中途半端に更新されることを防ぎます。
        """
        if address < 0 or address >= self._size:
            raise MemoryFault(address, self._size)
        end = address + length - 1
        if length > 0 and end >= self._size:
            raise MemoryFault(end, self._size)

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    def read(self, address: int) -> int:
        self.check_range(address)
        return self._memory[address]

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:pre-condition データは8bit値である必要があります。
    def write(self, address: int, data: int) -> None:
        self.check_range(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:utility_function 16ビットワードをビッグエンディアン形式で読み込みます。
    def read_word(self, address: int) -> int:
        """Big-endian 16-bit read."""
        self.check_range(address, 2)
        return (self._memory[address] << 8) | self._memory[address + 1]

    def read_block(self, address: int, length: int) -> bytes:
        self.check_range(address, length)
        return bytes(self._memory[address:address + length])

    def write_block(self, address: int, data: Iterable[int]) -> None:
        data = bytes(data)
        self.check_range(address, len(data))
        self._memory[address:address + len(data)] = data

    # @intent:responsibility プログラムイメージをプログラム領域に配置します。
    # @intent:pre-condition 配置先は予約領域(0x000-0x1FF)より後ろでなければなりません。
    def load_program(self, data: bytes, start: int = PROGRAM_START) -> int:
        """
        プログラムイメージをstart以降にそのまま配置し、ロード末尾の次のアドレスを返します。
        """
        if start < PROGRAM_START:
            raise ValueError(f"Program must not be loaded below {PROGRAM_START:#05x} (got {start:#05x}).")
        capacity = self._size - start
        if len(data) > capacity:
            raise ValueError(f"Program too large: {len(data)} bytes, max {capacity}")
        self._memory[start:start + len(data)] = data
        return start + len(data)
