"""Core - constants, angle helpers, configuration and input state."""

from .angles import wrap_angle, wrap_near, direction, heading
from .config import SceneConfig
from .input import InputState, InputSnapshot
