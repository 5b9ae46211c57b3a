# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

1命令を実行した直後のCPU状態を記録する不変のデータ構造を定義します。
ログ出力とテストでの状態検証に用いる責務を負います。
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from chip8_tracer.core.state import CpuState

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.instructions.base import Instruction


# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計実行命令数、表示用テキストなど）を記録するデータクラス。
    """
    instruction_count: int
    symbol_info: Optional[str] = None # 例: "0x0204: DRW V0, V1, 5"

# @intent:responsibility ある一時点におけるCPUの状態と、直前に実行した命令を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある命令を実行した直後のCPU状態を記録した不変のデータ構造。
    stateは生成時にコピーされるため、以降の実行で変化しません。
    """
    state: CpuState
    operation: "Instruction"
    metadata: Metadata
