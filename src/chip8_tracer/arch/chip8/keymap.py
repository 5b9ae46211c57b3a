# src/chip8_tracer/arch/chip8/keymap.py
"""
16キーの押下状態と、キー待ち命令のための「押して離す」エッジ検出。
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

KEY_COUNT = 16


# @intent:responsibility 16キーの押下状態を不変に保持します。
# @intent:rationale フレームごとに丸ごと置き換えられる値であるため、frozenなデータクラスとします。
@dataclass(frozen=True)
class Keymap:
    keys: Tuple[bool, ...] = (False,) * KEY_COUNT

    def __post_init__(self):
        if len(self.keys) != KEY_COUNT:
            raise ValueError(f"Keymap must have exactly {KEY_COUNT} entries, got {len(self.keys)}.")
        object.__setattr__(self, "keys", tuple(bool(k) for k in self.keys))

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> 'Keymap':
        keys = [False] * KEY_COUNT
        for index in indices:
            if not 0 <= index < KEY_COUNT:
                raise ValueError(f"Key index {index} out of range 0-{KEY_COUNT - 1}.")
            keys[index] = True
        return cls(tuple(keys))

    def is_down(self, index: int) -> bool:
        return self.keys[index]

    def pressed(self) -> Tuple[int, ...]:
        return tuple(i for i, down in enumerate(self.keys) if down)

    # @intent:responsibility 2つのキーマップの論理和を返します。
    def union(self, other: 'Keymap') -> 'Keymap':
        return Keymap(tuple(a or b for a, b in zip(self.keys, other.keys)))

    # @intent:responsibility selfで押下されていて、liveでは離されているキーのうち最小の番号を返します。
    def released_in(self, live: 'Keymap') -> Optional[int]:
        for index, (was_down, is_down) in enumerate(zip(self.keys, live.keys)):
            if was_down and not is_down:
                return index
        return None


# @intent:responsibility キー待ち命令(FX0A)の保留状態 Waiting(register, captured) を表します。
# 保留がない状態(Idle)はNoneで表現します。
@dataclass(frozen=True)
class KeyWait:
    """
    register: 解決したキー番号を書き込むレジスタ番号
    captured: 命令発行時点のキーマップに、待機中に観測した押下キーを累積したもの
    """
    register: int
    captured: Keymap

    # @intent:responsibility 1フレーム分のライブキーマップを観測し、解決したキー番号を返します。
    # @intent:post-condition 解決しなかった場合はNoneを返し、absorb()で累積状態を更新すべきです。
    def released_key(self, live: Keymap) -> Optional[int]:
        return self.captured.released_in(live)

    def absorb(self, live: Keymap) -> 'KeyWait':
        return KeyWait(self.register, self.captured.union(live))
