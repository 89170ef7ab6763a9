"""
Scene configuration read from CRITTER_* environment variables.

    CRITTER_WIDTH=1920 CRITTER_HEIGHT=1080 CRITTER_LEGS=4 python -m critter_world
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import (
    DEFAULT_WIDTH, DEFAULT_HEIGHT, FPS, TRAIL_FADE, TRAIL_FRAMES,
)


def _read_int(env: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class SceneConfig:
    """Window, creature and logging settings for one session."""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    legs: Optional[int] = None      # None = random per spawn
    tail: Optional[int] = None      # None = derived from legs
    seed: Optional[int] = None
    fps: int = FPS
    trail_fade: float = TRAIL_FADE
    trail_frames: int = TRAIL_FRAMES
    status_interval: int = 600      # Ticks between status lines, 0 = off
    log_level: str = 'INFO'

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"window size must be positive, got {self.width}x{self.height}")
        if self.legs is not None and self.legs < 1:
            raise ValueError(f"CRITTER_LEGS must be at least 1, got {self.legs}")
        if self.tail is not None and self.tail < 0:
            raise ValueError(f"CRITTER_TAIL must not be negative, got {self.tail}")
        if self.fps <= 0:
            raise ValueError(f"CRITTER_FPS must be positive, got {self.fps}")
        if not 0.0 < self.trail_fade <= 1.0:
            raise ValueError(f"CRITTER_TRAIL_FADE must be in (0, 1], got {self.trail_fade}")
        if self.trail_frames < 1:
            raise ValueError(f"CRITTER_TRAIL_FRAMES must be at least 1, got {self.trail_frames}")
        if self.status_interval < 0:
            raise ValueError(f"CRITTER_STATUS_INTERVAL must not be negative, got {self.status_interval}")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'SceneConfig':
        """Build a config from the environment, falling back to defaults."""
        env = os.environ if env is None else env
        return cls(
            width=_read_int(env, 'CRITTER_WIDTH', DEFAULT_WIDTH),
            height=_read_int(env, 'CRITTER_HEIGHT', DEFAULT_HEIGHT),
            legs=_read_int(env, 'CRITTER_LEGS', None),
            tail=_read_int(env, 'CRITTER_TAIL', None),
            seed=_read_int(env, 'CRITTER_SEED', None),
            fps=_read_int(env, 'CRITTER_FPS', FPS),
            trail_fade=_read_float(env, 'CRITTER_TRAIL_FADE', TRAIL_FADE),
            trail_frames=_read_int(env, 'CRITTER_TRAIL_FRAMES', TRAIL_FRAMES),
            status_interval=_read_int(env, 'CRITTER_STATUS_INTERVAL', 600),
            log_level=env.get('CRITTER_LOG_LEVEL', 'INFO').upper(),
        )
