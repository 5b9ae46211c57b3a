# chip8_tracer/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict

from chip8_tracer.core.errors import Chip8Error
from chip8_tracer.transport.memory import Memory
from chip8_tracer.core.snapshot import Snapshot, Metadata
from chip8_tracer.core.state import CpuState

logger = logging.getLogger(__name__)


# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    メモリとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:responsibility CPUの状態とメモリへの参照を初期化します。
    # @intent:pre-condition `memory`は有効なMemoryオブジェクトである必要があります。
    def __init__(self, memory: Memory):
        self._memory = memory
        self._state: CpuState = self._create_initial_state()
        self._instruction_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        """
        CPUのレジスタを初期値にリセットします。メモリの内容は保持されます。
        """
        self._state = self._create_initial_state()
        self._instruction_count = 0

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> CpuState:
        return self._state

    def get_memory(self) -> Memory:
        return self._memory

    @property
    def instruction_count(self) -> int:
        return self._instruction_count

    # @intent:responsibility メモリから次の命令語をフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        """
        現在のPCから次の命令語をフェッチし、その値を返します。
        フェッチ自体はPCを変更しません。PCの更新は`_update_pc`が担います。
        """
        pass

    # @intent:responsibility フェッチした命令語を解析し、命令オブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int):
        pass

    # @intent:responsibility 命令のバイト長を返します。
    @abstractmethod
    def _instruction_length(self, operation) -> int:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（フェッチ→デコード→PC更新→実行→Snapshot生成）を定義します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPU状態を含むSnapshotオブジェクトを返します。
        フェッチまたはデコードに失敗した場合、状態は一切変更されずに例外が送出されます。
        """
        initial_pc = self._state.pc

        opcode = self._fetch()
        operation = self._decode(opcode)

        # 実行前にPCを命令長分進める。ジャンプ先は絶対アドレスとして上書きされる。
        self._update_pc(operation)
        try:
            self._execute(operation)
        except Chip8Error:
            # 致命的エラー時は命令の効果を一切残さない
            self._state.pc = initial_pc
            raise

        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility 命令実行前にPCを更新します。
    def _update_pc(self, operation) -> None:
        self._state.pc = (self._state.pc + self._instruction_length(operation)) & 0xFFFF

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, initial_pc: int, operation) -> Snapshot:
        self._instruction_count += 1
        symbol_info = f"{initial_pc:#06x}: {operation}"
        logger.debug("%s", symbol_info)
        return Snapshot(
            state=self._copy_state(),
            operation=operation,
            metadata=Metadata(instruction_count=self._instruction_count, symbol_info=symbol_info),
        )

    # @intent:responsibility Snapshotに格納するための状態のコピーを返します。
    @abstractmethod
    def _copy_state(self) -> CpuState:
        pass

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        ログ出力がCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass
