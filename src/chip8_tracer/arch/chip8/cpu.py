# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 インタプリタの中心モジュール。

メモリ、レジスタ、スタック、フレームバッファ、タイマー、キーマップ、キー待ち状態を
単一の集約として所有し、命令サイクルとフレーム単位の処理を駆動します。
"""
import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.transport.memory import Memory
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.font import FONT, FONT_START
from chip8_tracer.arch.chip8.graphics import Framebuffer
from chip8_tracer.arch.chip8.timer import Timer, TimerTick
from chip8_tracer.arch.chip8.keymap import Keymap, KeyWait
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction, Instruction

logger = logging.getLogger(__name__)

INSTRUCTION_LENGTH = 2


# @intent:responsibility 1フレーム分の処理結果を記録します。
@dataclass(frozen=True)
class FrameResult:
    """
    executed: このフレームで実行した命令のスナップショット（キー待ち中は空）
    redraw: フレームバッファが前回の描画以降に変更されたか
    timer_tick: このフレームのタイマーtickの結果
    waiting_for_key: フレーム終了時点でキー待ちが保留中か
    """
    executed: Tuple[Snapshot, ...]
    redraw: bool
    timer_tick: TimerTick
    waiting_for_key: bool


# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行、フレーム処理）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 インタプリタ。
    全ての状態はこのオブジェクトが排他的に所有し、外部へはコピーのみを渡します。
    """
    # @intent:responsibility Chip8Cpuを初期化し、フォントテーブルをメモリに配置します。
    # @intent:pre-condition instructions_per_frameは1以上である必要があります。
    def __init__(self, memory: Optional[Memory] = None, *, wrap_sprites: bool = False,
                 instructions_per_frame: int = 1, rng: Optional[random.Random] = None):
        if instructions_per_frame < 1:
            raise ValueError("instructions_per_frame must be at least 1.")
        self.framebuffer = Framebuffer(wrap=wrap_sprites)
        self.timer = Timer()
        self.keymap = Keymap()
        self.key_wait: Optional[KeyWait] = None
        self._instructions_per_frame = instructions_per_frame
        self._rng = rng or random.Random()
        super().__init__(memory or Memory())
        self._memory.write_block(FONT_START, FONT)

    # @intent:responsibility CHIP-8の初期状態（PC=0x200）を生成します。
    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility レジスタに加え、フレームバッファ・タイマー・キー状態も初期化します。
    def reset(self) -> None:
        super().reset()
        self.framebuffer = Framebuffer(wrap=self.framebuffer.wrap)
        self.timer = Timer()
        self.keymap = Keymap()
        self.key_wait = None

    @property
    def state(self) -> Chip8CpuState:
        return self._state

    @property
    def memory(self) -> Memory:
        return self._memory

    def random_byte(self) -> int:
        return self._rng.randrange(0x100)

    # @intent:responsibility プログラムイメージを0x200以降に配置します。
    def load_program(self, image: bytes) -> int:
        end = self._memory.load_program(image, self._state.pc)
        logger.info("Loaded program: %d bytes (%#05x-%#05x)", len(image), self._state.pc, end - 1)
        return end

    # @intent:responsibility PCから16bitのビッグエンディアン命令語をフェッチします。
    def _fetch(self) -> int:
        return self._memory.read_word(self._state.pc)

    def _decode(self, opcode: int) -> Instruction:
        return decode_opcode(opcode)

    def _instruction_length(self, operation: Instruction) -> int:
        return INSTRUCTION_LENGTH

    def _execute(self, operation: Instruction) -> None:
        execute_instruction(operation, self)

    def _copy_state(self) -> Chip8CpuState:
        return self._state.copy()

    @property
    def waiting_for_key(self) -> bool:
        return self.key_wait is not None

    # @intent:responsibility 1フレーム分の処理（キー待ち判定→命令実行→描画判定→タイマーtick）を行います。
    # @intent:flow キー待ち中は命令を実行せず、エッジ検出のみを行います。
    def run_frame(self, keymap: Keymap) -> FrameResult:
        """
        今フレームのキーマップを受け取り、1フレーム分を処理します。
        タイマーは命令実行の有無に関わらず、1フレームにつき必ず1回tickされます。
        """
        self.keymap = keymap
        executed = []

        if self.key_wait is not None:
            self._poll_key_wait(keymap)
        else:
            for _ in range(self._instructions_per_frame):
                executed.append(self.step())
                if self.key_wait is not None:
                    break

        redraw = self.framebuffer.consume_dirty()
        tick = self.timer.tick()
        return FrameResult(
            executed=tuple(executed),
            redraw=redraw,
            timer_tick=tick,
            waiting_for_key=self.key_wait is not None,
        )

    # @intent:responsibility キー待ち状態を1フレーム分進めます。
    # @intent:rationale 捕捉時に押されていたキー、または待機中に押されたキーが離された時のみ解決します（押して離す）。
    def _poll_key_wait(self, live: Keymap) -> None:
        wait = self.key_wait
        key = wait.released_key(live)
        if key is None:
            self.key_wait = wait.absorb(live)
            return
        self._state.v[wait.register] = key
        self.key_wait = None
        logger.info("Key %X released, stored in V%X", key, wait.register)

    # @intent:responsibility ログ表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        regs = {f"V{index:X}": value for index, value in enumerate(s.v)}
        regs.update({
            "I": s.i, "PC": s.pc, "SP": s.sp,
            "DT": self.timer.delay, "ST": self.timer.sound,
        })
        return regs
