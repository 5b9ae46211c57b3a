# tests/runtime/test_frame_loop.py
"""
FrameLoopとコラボレータの連携を検証するテスト。
表示・音声・入力はテスト用の偽実装で置き換えます。
"""
import pytest

from chip8_tracer.core.errors import DecodeError
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.keymap import Keymap
from chip8_tracer.runtime.frame_loop import FrameLoop, Display, Audio, Input, PollResult


class FakeDisplay(Display):
    def __init__(self):
        self.frames = []

    def render(self, pixels):
        self.frames.append(pixels)


class FakeAudio(Audio):
    def __init__(self):
        self.events = []

    def play(self):
        self.events.append("play")

    def stop(self):
        self.events.append("stop")


class ScriptedInput(Input):
    """
    keymapのリストを順に返し、尽きたら停止を要求します。
    """
    def __init__(self, keymaps):
        self._keymaps = list(keymaps)
        self.polls = 0

    def poll(self):
        self.polls += 1
        if not self._keymaps:
            return PollResult.stop()
        return PollResult.keys(self._keymaps.pop(0))


def make_cpu(*words, **kwargs):
    cpu = Chip8Cpu(**kwargs)
    image = bytearray()
    for word in words:
        image += bytes([word >> 8, word & 0xFF])
    cpu.load_program(bytes(image))
    return cpu


class TestFrameLoop:
    def test_invalid_frame_rate(self):
        with pytest.raises(ValueError):
            FrameLoop(Chip8Cpu(), FakeDisplay(), FakeAudio(), ScriptedInput([]), frame_rate=0)

    def test_stop_on_first_poll(self):
        cpu = make_cpu(0x6001)
        sleeps = []
        loop = FrameLoop(cpu, FakeDisplay(), FakeAudio(), ScriptedInput([]), sleep=sleeps.append)

        assert loop.run() == 0
        assert cpu.state.pc == 0x200 # nothing executed
        assert cpu.timer.delay == 0
        assert sleeps == []

    def test_render_only_when_dirty(self):
        cpu = make_cpu(0x00E0, 0x1202)
        display = FakeDisplay()
        loop = FrameLoop(cpu, display, FakeAudio(), ScriptedInput([Keymap()] * 3), sleep=lambda s: None)

        assert loop.run() == 3
        assert display.frames == [()]

    def test_rendered_pixels(self):
        # I = glyph 0, draw at (0, 0)
        cpu = make_cpu(0xA000, 0xD015, 0x1204)
        display = FakeDisplay()
        loop = FrameLoop(cpu, display, FakeAudio(), ScriptedInput([Keymap()] * 3), sleep=lambda s: None)
        loop.run()

        assert len(display.frames) == 1
        assert display.frames[0] == cpu.framebuffer.lit_pixels()
        assert (0, 0) in display.frames[0]

    def test_tone_follows_sound_timer(self):
        cpu = make_cpu(0x6002, 0xF018, 0x1204)
        audio = FakeAudio()
        loop = FrameLoop(cpu, FakeDisplay(), audio, ScriptedInput([Keymap()] * 6), sleep=lambda s: None)

        loop.run_frame() # LD V0, 2
        assert audio.events == []
        loop.run_frame() # LD ST, V0 -> tick to 1
        assert audio.events == ["play"]
        loop.run_frame() # tick 1 -> 0
        assert audio.events == ["play", "stop"]
        loop.run_frame()
        assert audio.events == ["play", "stop"]

    def test_tone_stops_when_sound_cleared(self):
        # ST = 10, then ST = 0
        cpu = make_cpu(0x600A, 0xF018, 0x6100, 0xF118, 0x1208)
        audio = FakeAudio()
        loop = FrameLoop(cpu, FakeDisplay(), audio, ScriptedInput([Keymap()] * 4), sleep=lambda s: None)
        loop.run()
        assert audio.events == ["play", "stop"]

    def test_sleep_interval(self):
        cpu = make_cpu(0x1200)
        sleeps = []
        loop = FrameLoop(cpu, FakeDisplay(), FakeAudio(), ScriptedInput([Keymap()] * 2),
                         frame_rate=50, sleep=sleeps.append)
        loop.run()
        assert loop.frame_interval == pytest.approx(0.02)
        assert sleeps == [pytest.approx(0.02)] * 2

    def test_max_frames(self):
        cpu = make_cpu(0x1200)
        input_ = ScriptedInput([Keymap()] * 10)
        loop = FrameLoop(cpu, FakeDisplay(), FakeAudio(), input_, sleep=lambda s: None)
        assert loop.run(max_frames=4) == 4
        assert input_.polls == 4
        assert loop.frame_count == 4

    def test_keymap_reaches_cpu(self):
        cpu = make_cpu(0xF20A, 0x1202)
        key5 = Keymap.from_indices([5])
        loop = FrameLoop(cpu, FakeDisplay(), FakeAudio(),
                         ScriptedInput([Keymap(), key5, Keymap(), Keymap()]), sleep=lambda s: None)
        loop.run()
        assert cpu.state.v[2] == 5
        assert not cpu.waiting_for_key

    def test_fatal_error_propagates_and_stops_tone(self):
        # ST = 5, then an invalid word
        cpu = make_cpu(0x6005, 0xF018, 0xFFFF)
        audio = FakeAudio()
        loop = FrameLoop(cpu, FakeDisplay(), audio, ScriptedInput([Keymap()] * 5), sleep=lambda s: None)

        with pytest.raises(DecodeError):
            loop.run()
        assert audio.events == ["play", "stop"]
        assert loop.frame_count == 2
