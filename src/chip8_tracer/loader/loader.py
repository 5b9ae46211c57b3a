# chip8_tracer/loader/loader.py
"""
プログラムイメージローダーモジュール。
ヘッダを持たない生のバイナリイメージを読み込みます。
"""
import logging
from pathlib import Path
from typing import Union

from chip8_tracer.core.errors import RomLoadError
from chip8_tracer.transport.memory import MEMORY_SIZE, PROGRAM_START
from chip8_tracer.arch.chip8.cpu import Chip8Cpu

logger = logging.getLogger(__name__)

MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START


class RomLoader:
    """
    生のCHIP-8プログラムイメージを読み込み、インタプリタのメモリへ配置するローダー。
    """
    def __init__(self, max_size: int = MAX_PROGRAM_SIZE):
        self._max_size = max_size

    # @intent:responsibility ファイルからプログラムイメージを読み込みます。
    # @intent:post-condition 読み込めない場合、またはサイズ超過の場合はRomLoadErrorを送出します。
    def read_image(self, file_path: Union[str, Path]) -> bytes:
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise RomLoadError(str(path), e.strerror or str(e)) from e

        if len(data) > self._max_size:
            raise RomLoadError(str(path), f"image too large: {len(data)} bytes, max {self._max_size}")
        if not data:
            logger.warning("Program image '%s' is empty.", path)
        return data

    def load(self, file_path: Union[str, Path], cpu: Chip8Cpu) -> int:
        """
        プログラムイメージを読み込んでCPUのメモリに配置し、イメージのバイト数を返します。
        """
        data = self.read_image(file_path)
        cpu.load_program(data)
        return len(data)
