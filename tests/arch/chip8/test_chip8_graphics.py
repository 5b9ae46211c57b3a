# tests/arch/chip8/test_chip8_graphics.py
"""
Framebufferおよび描画命令(DXYN, 00E0)の単体テスト。
"""
import pytest

from chip8_tracer.arch.chip8.graphics import Framebuffer, WIDTH, HEIGHT
from chip8_tracer.arch.chip8.cpu import Chip8Cpu

# @intent:test_suite XOR描画、衝突検出、クリップ/折り返し、dirtyフラグを検証します。


class TestFramebuffer:
    def test_initially_blank(self):
        fb = Framebuffer()
        assert fb.lit_pixels() == ()
        assert fb.consume_dirty() is False

    def test_draw_sets_pixels(self):
        fb = Framebuffer()
        collision = fb.draw(2, 3, [0b10100000])
        assert collision is False
        assert fb.lit_pixels() == ((2, 3), (4, 3))
        assert fb.consume_dirty() is True

    def test_draw_twice_erases_and_collides(self):
        fb = Framebuffer()
        assert fb.draw(0, 0, [0xFF]) is False
        assert fb.draw(0, 0, [0xFF]) is True
        assert fb.lit_pixels() == ()

    def test_partial_overlap_collides(self):
        fb = Framebuffer()
        fb.draw(0, 0, [0b11000000])
        assert fb.draw(1, 0, [0b10000000]) is True
        assert fb.lit_pixels() == ((0, 0),)

    def test_no_collision_when_lighting_only(self):
        fb = Framebuffer()
        fb.draw(0, 0, [0b10000000])
        assert fb.draw(1, 0, [0b10000000]) is False
        assert fb.lit_pixels() == ((0, 0), (1, 0))

    def test_origin_wraps_modulo_screen(self):
        fb = Framebuffer()
        fb.draw(WIDTH + 1, HEIGHT + 2, [0x80])
        assert fb.lit_pixels() == ((1, 2),)

    def test_clips_at_right_and_bottom_edges(self):
        fb = Framebuffer()
        fb.draw(WIDTH - 2, HEIGHT - 1, [0xFF, 0xFF])
        assert fb.lit_pixels() == ((WIDTH - 2, HEIGHT - 1), (WIDTH - 1, HEIGHT - 1))

    def test_wraps_at_edges_when_enabled(self):
        fb = Framebuffer(wrap=True)
        fb.draw(WIDTH - 1, HEIGHT - 1, [0xC0, 0xC0])
        assert set(fb.lit_pixels()) == {
            (WIDTH - 1, HEIGHT - 1), (0, HEIGHT - 1),
            (WIDTH - 1, 0), (0, 0),
        }

    def test_clear(self):
        fb = Framebuffer()
        fb.draw(0, 0, [0xFF])
        fb.consume_dirty()
        fb.clear()
        assert fb.lit_pixels() == ()
        assert fb.consume_dirty() is True

    def test_consume_dirty(self):
        fb = Framebuffer()
        fb.draw(0, 0, [0x80])
        assert fb.consume_dirty() is True
        assert fb.consume_dirty() is False

    def test_lit_pixels_is_a_copy(self):
        fb = Framebuffer()
        fb.draw(0, 0, [0x80])
        pixels = fb.lit_pixels()
        fb.draw(0, 0, [0x80])
        assert pixels == ((0, 0),)


@pytest.fixture
def cpu():
    return Chip8Cpu()


def run(cpu, word):
    cpu.memory.write_block(cpu.state.pc, [word >> 8, word & 0xFF])
    return cpu.step()


class TestDrawInstructions:
    def test_drw_twice_erases_and_sets_vf(self, cpu):
        cpu.memory.write(0x300, 0xFF)
        cpu.state.i = 0x300
        cpu.state.v[0] = 0
        cpu.state.v[1] = 0

        run(cpu, 0xD011)
        assert len(cpu.framebuffer.lit_pixels()) == 8
        assert cpu.state.vf == 0

        run(cpu, 0xD011)
        assert cpu.framebuffer.lit_pixels() == ()
        assert cpu.state.vf == 1

    def test_drw_font_glyph(self, cpu):
        cpu.state.i = 0 # glyph "0"
        cpu.state.v[2] = 10
        cpu.state.v[3] = 5
        run(cpu, 0xD235)
        lit = set(cpu.framebuffer.lit_pixels())
        expected = {(x, 5) for x in range(10, 14)} | {(x, 9) for x in range(10, 14)}
        expected |= {(x, y) for y in range(6, 9) for x in (10, 13)}
        assert lit == expected

    def test_drw_n_zero_draws_nothing(self, cpu):
        cpu.state.vf = 1
        run(cpu, 0xD010)
        assert cpu.framebuffer.lit_pixels() == ()
        assert cpu.state.vf == 0

    def test_cls(self, cpu):
        cpu.framebuffer.draw(0, 0, [0xFF])
        cpu.framebuffer.consume_dirty()
        run(cpu, 0x00E0)
        assert cpu.framebuffer.lit_pixels() == ()
        assert cpu.framebuffer.consume_dirty() is True
