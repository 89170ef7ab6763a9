"""
Species parameters - Locomotion constants for a creature's root body.
"""

from dataclasses import dataclass


@dataclass
class MotionParams:
    """
    Forward and rotational motion constants.

    Forward motion is thrust-driven: acceleration is applied while the target
    is farther than f_thresh, speed decays by f_res each tick and f_fric is
    subtracted before the body moves. Rotation works the same way, with
    r_thresh as the heading error below which no turning thrust is applied.
    """
    f_accel: float = 10.0
    f_fric: float = 2.0
    f_res: float = 0.5
    f_thresh: float = 16.0
    r_accel: float = 0.5
    r_fric: float = 0.085
    r_res: float = 0.5
    r_thresh: float = 0.3

    @classmethod
    def for_size(cls, size: float) -> 'MotionParams':
        """Lizard constants; linear thrust and friction scale with body size."""
        return cls(f_accel=size * 10, f_fric=size * 2)
