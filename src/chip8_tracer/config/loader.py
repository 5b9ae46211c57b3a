import logging
from typing import Dict, Any

import yaml

from chip8_tracer.common.types import KeyLayout
from .models import MachineConfig, AudioConfig, DEFAULT_KEY_LAYOUT

logger = logging.getLogger(__name__)

KNOWN_KEYS = {"frame_rate", "instructions_per_frame", "scale", "wrap_sprites",
              "program_start", "audio", "key_layout"}

class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            data = self._safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> MachineConfig:
        return self._parse_config(self._safe_load(text) or {})

    # @intent:responsibility YAMLの構文エラーをValueErrorとして報告します。
    def _safe_load(self, stream) -> Any:
        try:
            return yaml.safe_load(stream)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config YAML: {e}") from e

    def _parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        for key in data:
            if key not in KNOWN_KEYS:
                logger.warning("Unknown config key '%s' ignored", key)

        defaults = MachineConfig()
        frame_rate = self._parse_int(data.get("frame_rate", defaults.frame_rate))
        instructions_per_frame = self._parse_int(data.get("instructions_per_frame", defaults.instructions_per_frame))
        scale = self._parse_int(data.get("scale", defaults.scale))
        program_start = self._parse_int(data.get("program_start", defaults.program_start))

        if frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive: {frame_rate}")
        if instructions_per_frame <= 0:
            raise ValueError(f"instructions_per_frame must be positive: {instructions_per_frame}")
        if scale <= 0:
            raise ValueError(f"scale must be positive: {scale}")
        if not 0x200 <= program_start < 0x1000:
            raise ValueError(f"program_start must be within 0x200-0xFFF: {program_start:#x}")

        # Parse Audio
        audio = self._parse_audio(data.get("audio"))

        return MachineConfig(
            frame_rate=frame_rate,
            instructions_per_frame=instructions_per_frame,
            scale=scale,
            wrap_sprites=self._parse_bool("wrap_sprites", data.get("wrap_sprites", defaults.wrap_sprites)),
            program_start=program_start,
            audio=audio,
            key_layout=self._parse_key_layout(data.get("key_layout")),
        )

    # @intent:responsibility トーン設定を検証します。周波数は正の整数、音量は0.0-1.0です。
    def _parse_audio(self, audio_data: Any) -> AudioConfig:
        if audio_data is None:
            return AudioConfig()
        if not isinstance(audio_data, dict):
            raise ValueError("audio must be a mapping")

        tone_frequency = self._parse_int(audio_data.get("tone_frequency", AudioConfig.tone_frequency))
        if tone_frequency <= 0:
            raise ValueError(f"tone_frequency must be positive: {tone_frequency}")

        volume = audio_data.get("volume", AudioConfig.volume)
        if isinstance(volume, bool) or not isinstance(volume, (int, float)):
            raise ValueError(f"volume must be a number: {volume}")
        if not 0.0 <= volume <= 1.0:
            raise ValueError(f"volume must be within 0.0-1.0: {volume}")
        return AudioConfig(tone_frequency=tone_frequency, volume=float(volume))

    # @intent:responsibility 物理キー名→16進キー番号の対応表を検証します。省略時は標準配置を使います。
    def _parse_key_layout(self, layout_data: Any) -> KeyLayout:
        if layout_data is None:
            return dict(DEFAULT_KEY_LAYOUT)
        if not isinstance(layout_data, dict):
            raise ValueError("key_layout must be a mapping of key name to hex key index")

        layout: KeyLayout = {}
        for name, value in layout_data.items():
            index = self._parse_int(value)
            if not 0 <= index <= 0xF:
                raise ValueError(f"Key index for '{name}' out of range 0x0-0xF: {value}")
            layout[str(name).upper()] = index
        return layout

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")

    def _parse_bool(self, name: str, value: Any) -> bool:
        if not isinstance(value, bool):
            raise ValueError(f"{name} must be true or false: {value!r}")
        return value
