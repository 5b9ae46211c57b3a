import random
from typing import Optional

from chip8_tracer.transport.memory import Memory
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .models import MachineConfig

# @intent:responsibility マシン構成（Config）に基づいてMemoryとインタプリタを生成し、初期状態を適用します。
class MachineBuilder:
    def build_machine(self, config: MachineConfig, image: Optional[bytes] = None,
                      rng: Optional[random.Random] = None) -> Chip8Cpu:
        cpu = Chip8Cpu(
            Memory(),
            wrap_sprites=config.wrap_sprites,
            instructions_per_frame=config.instructions_per_frame,
            rng=rng,
        )
        self.apply_initial_state(cpu, config)
        if image is not None:
            cpu.load_program(image)
        return cpu

    # @intent:responsibility Configで指定されたプログラム開始番地をPCに適用します。
    def apply_initial_state(self, cpu: Chip8Cpu, config: MachineConfig) -> None:
        """
        CPUをリセットし、PCをConfigのprogram_startに設定します。
        """
        cpu.reset()
        state: Chip8CpuState = cpu.get_state()
        state.pc = config.program_start
