# tests/ui/test_qt_audio_app.py
import os
import wave

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
pytest.importorskip("PySide6.QtMultimedia")

from chip8_tracer.ui.audio import square_wave_pcm, write_wav, SAMPLE_RATE
from chip8_tracer.ui.app import main, build_parser, load_config, EXIT_LOAD, EXIT_FATAL


class TestToneGeneration:
    def test_one_second_of_samples(self):
        pcm = square_wave_pcm(440, 0.5)
        assert len(pcm) == SAMPLE_RATE * 2

    def test_square_shape(self):
        # 4 samples per period at frequency = sample_rate / 4
        pcm = square_wave_pcm(2, 1.0, sample_rate=8)
        samples = [int.from_bytes(pcm[i:i + 2], "little", signed=True) for i in range(0, len(pcm), 2)]
        assert samples == [0x7FFF, 0x7FFF, -0x7FFF, -0x7FFF] * 2

    def test_volume_is_clamped(self):
        pcm = square_wave_pcm(1, 5.0, sample_rate=2)
        assert int.from_bytes(pcm[0:2], "little", signed=True) == 0x7FFF

    def test_write_wav(self, tmp_path):
        path = tmp_path / "tone.wav"
        write_wav(str(path), square_wave_pcm(440, 0.25))
        with wave.open(str(path), "rb") as w:
            assert w.getnchannels() == 1
            assert w.getsampwidth() == 2
            assert w.getframerate() == SAMPLE_RATE
            assert w.getnframes() == SAMPLE_RATE


class TestApp:
    def test_parser(self):
        args = build_parser().parse_args(["game.ch8", "--scale", "5"])
        assert args.rom == "game.ch8"
        assert args.scale == 5
        assert args.log_level == "WARNING"

    def test_scale_override(self):
        args = build_parser().parse_args(["game.ch8", "--scale", "3"])
        assert load_config(args).scale == 3

    def test_missing_rom(self, tmp_path):
        assert main([str(tmp_path / "missing.ch8")]) == EXIT_LOAD

    def test_invalid_config(self, tmp_path):
        rom = tmp_path / "game.ch8"
        rom.write_bytes(bytes([0x12, 0x00]))
        config = tmp_path / "machine.yaml"
        config.write_text("frame_rate: 0\n")
        assert main([str(rom), "--config", str(config)]) == EXIT_LOAD

    def test_missing_config(self, tmp_path):
        rom = tmp_path / "game.ch8"
        rom.write_bytes(bytes([0x12, 0x00]))
        assert main([str(rom), "--config", str(tmp_path / "none.yaml")]) == EXIT_LOAD

    def test_invalid_scale(self, tmp_path):
        rom = tmp_path / "game.ch8"
        rom.write_bytes(bytes([0x12, 0x00]))
        assert main([str(rom), "--scale", "0"]) == EXIT_LOAD

    # @intent:test_case 実行中の致命的エラー(不正な命令語0x0000)で終了コード1を返すことを検証します。
    def test_fatal_error_exit_code(self, tmp_path):
        rom = tmp_path / "bad.ch8"
        rom.write_bytes(bytes([0x00, 0x00]))
        assert main([str(rom)]) == EXIT_FATAL
