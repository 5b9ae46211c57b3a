# tests/arch/chip8/test_chip8_load.py
"""
インデックスレジスタ、メモリ転送、タイマー命令の単体テスト。
"""
import pytest

from chip8_tracer.core.errors import MemoryFault
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.font import FONT

# @intent:test_suite I操作・BCD・レジスタ退避/復帰・タイマー読み書きを検証します。


@pytest.fixture
def cpu():
    return Chip8Cpu()


def run(cpu, word, pc=0x200):
    cpu.state.pc = pc
    cpu.memory.write_block(pc, [word >> 8, word & 0xFF])
    return cpu.step()


class TestIndexRegister:
    def test_ld_i(self, cpu):
        run(cpu, 0xA123)
        assert cpu.state.i == 0x123

    def test_add_i_vx(self, cpu):
        cpu.state.i = 0x100
        cpu.state.v[2] = 0x20
        cpu.state.vf = 0
        run(cpu, 0xF21E)
        assert cpu.state.i == 0x120
        assert cpu.state.vf == 0

    def test_add_i_vx_wraps_16bit(self, cpu):
        cpu.state.i = 0xFFFF
        cpu.state.v[2] = 0x02
        run(cpu, 0xF21E)
        assert cpu.state.i == 0x0001

    @pytest.mark.parametrize("digit", range(16))
    def test_ld_f_points_to_glyph(self, cpu, digit):
        cpu.state.v[4] = digit
        run(cpu, 0xF429)
        assert cpu.state.i == digit * 5
        assert cpu.memory.read_block(cpu.state.i, 5) == FONT[digit * 5:digit * 5 + 5]


class TestMemoryTransfer:
    def test_bcd_255(self, cpu):
        cpu.state.i = 0x300
        cpu.state.v[5] = 255
        run(cpu, 0xF533)
        assert cpu.memory.read_block(0x300, 3) == bytes([2, 5, 5])
        assert cpu.state.i == 0x300 # I is unchanged

    def test_bcd_small_value(self, cpu):
        cpu.state.i = 0x300
        cpu.state.v[5] = 7
        run(cpu, 0xF533)
        assert cpu.memory.read_block(0x300, 3) == bytes([0, 0, 7])

    def test_bcd_out_of_bounds_writes_nothing(self, cpu):
        cpu.state.i = 0xFFE
        cpu.state.v[5] = 123
        with pytest.raises(MemoryFault):
            run(cpu, 0xF533)
        assert cpu.memory.read_block(0xFFE, 2) == bytes([0, 0])
        assert cpu.state.pc == 0x200

    def test_dump_load_round_trip(self, cpu):
        values = [0x11, 0x22, 0x33, 0x44, 0x55, 0x66]
        cpu.state.v[:6] = values
        cpu.state.v[6] = 0x77
        cpu.state.i = 0x400
        run(cpu, 0xF555)
        assert cpu.state.i == 0x406
        assert cpu.memory.read_block(0x400, 7) == bytes(values + [0]) # V6 is not dumped

        cpu.state.v = [0] * 16
        cpu.state.i = 0x400
        run(cpu, 0xF565)
        assert cpu.state.v[:6] == values
        assert cpu.state.v[6] == 0
        assert cpu.state.i == 0x406

    def test_dump_v0_only(self, cpu):
        cpu.state.v[0] = 0xAB
        cpu.state.i = 0x400
        run(cpu, 0xF055)
        assert cpu.memory.read(0x400) == 0xAB
        assert cpu.state.i == 0x401

    def test_load_out_of_bounds(self, cpu):
        cpu.state.i = 0xFFC
        with pytest.raises(MemoryFault):
            run(cpu, 0xFF65)
        assert cpu.state.i == 0xFFC
        assert cpu.state.v == [0] * 16


class TestTimerInstructions:
    def test_delay_timer_round_trip(self, cpu):
        cpu.state.v[3] = 42
        run(cpu, 0xF315)
        assert cpu.timer.delay == 42
        cpu.timer.tick()
        run(cpu, 0xF707)
        assert cpu.state.v[7] == 41

    def test_sound_timer(self, cpu):
        cpu.state.v[3] = 9
        run(cpu, 0xF318)
        assert cpu.timer.sound == 9
        assert cpu.timer.delay == 0
