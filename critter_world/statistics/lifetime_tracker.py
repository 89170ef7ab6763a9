"""
LifetimeTracker - Tracks creature statistics over its lifetime.

Records metrics like:
- Distance travelled by the root
- Top speed reached
- Steps taken (feet lifted) across all legs
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np


@dataclass
class LifetimeTracker:
    """Tracks statistics for a single creature over its lifetime."""

    creature_id: str

    # Movement tracking
    total_distance: float = 0.0
    max_speed_achieved: float = 0.0

    # Gait tracking
    steps_taken: int = 0
    planted_count: int = 0
    leg_count: int = 0

    # Tick tracking
    birth_step: int = 0
    last_update_step: int = 0

    last_pos: Optional[tuple] = None
    _last_planted: List[bool] = field(default_factory=list, repr=False)

    def update(self, creature, step: int):
        """Update tracking with the creature's state after a tick."""
        self.last_update_step = step
        if self.birth_step == 0:
            self.birth_step = step

        pos = creature.pose.pos
        if self.last_pos is not None:
            self.total_distance += float(np.linalg.norm(pos - np.array(self.last_pos)))
        self.last_pos = tuple(pos)
        self.max_speed_achieved = max(self.max_speed_achieved, creature.speed)

        legs = [s for s in creature.systems if s.is_leg]
        planted = [s.is_planted for s in legs]
        if len(planted) == len(self._last_planted):
            # A step starts when a planted foot lifts
            self.steps_taken += sum(1 for was, now in zip(self._last_planted, planted)
                                    if was and not now)
        self._last_planted = planted
        self.planted_count = sum(planted)
        self.leg_count = len(legs)

    def get_age(self, current_step: int) -> int:
        """Get creature's age in ticks."""
        return current_step - self.birth_step

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            'creature_id': self.creature_id,
            'total_distance': self.total_distance,
            'max_speed_achieved': self.max_speed_achieved,
            'steps_taken': self.steps_taken,
            'planted_count': self.planted_count,
            'leg_count': self.leg_count,
            'birth_step': self.birth_step,
            'last_update_step': self.last_update_step,
        }
