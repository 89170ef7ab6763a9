"""
Input - Pointer and key state sampled once per tick.

Event handlers write into an InputState; the animation loop takes an
immutable InputSnapshot from it at the start of every tick and passes that
snapshot down to the creature. Nothing below the loop reads live input.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Set

import numpy as np

# Matplotlib MouseButton values
BUTTON_NAMES = {1: 'left', 2: 'middle', 3: 'right'}


@dataclass(frozen=True)
class InputSnapshot:
    """Pointer position and button/key state for one tick."""
    x: float = 0.0
    y: float = 0.0
    left: bool = False
    middle: bool = False
    right: bool = False
    keys: FrozenSet[str] = frozenset()

    @property
    def target(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)


@dataclass
class InputState:
    """Mutable input state fed by window events."""
    x: float = 0.0
    y: float = 0.0
    buttons: Set[str] = field(default_factory=set)
    keys: Set[str] = field(default_factory=set)

    def on_motion(self, x: float, y: float):
        self.x = float(x)
        self.y = float(y)

    def on_button(self, button, pressed: bool):
        name = BUTTON_NAMES.get(int(button)) if button is not None else None
        if name is None:
            return
        if pressed:
            self.buttons.add(name)
        else:
            self.buttons.discard(name)

    def on_key(self, key: str, pressed: bool):
        if key is None:
            return
        if pressed:
            self.keys.add(key)
        else:
            self.keys.discard(key)

    def snapshot(self) -> InputSnapshot:
        return InputSnapshot(
            x=self.x,
            y=self.y,
            left='left' in self.buttons,
            middle='middle' in self.buttons,
            right='right' in self.buttons,
            keys=frozenset(self.keys),
        )
