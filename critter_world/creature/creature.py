"""
Creature - Root body that chases a target and drives its skeleton.

The root is a rigid body with independent forward and rotational motion.
Every tick it turns and thrusts toward the target, then drags its skeleton
along behind it and lets each limb solve its IK against the new hip
positions. Forward thrust needs ground contact: it scales with the fraction
of legs currently planted.
"""

from typing import List, Optional

import numpy as np

from .species import MotionParams
from ..body.skeleton import Skeleton, Pose, ROOT
from ..body.limbs import LimbSystem
from ..core.angles import wrap_angle, direction
from ..core.constants import HEAD_RADIUS
from ..core.input import InputSnapshot
from ..statistics import LifetimeTracker


class Creature:
    """
    A creature root with its skeleton and limb systems.

    Each creature has:
    - Pose: position and heading of the head
    - Skeleton: arena of bonds hanging off the head
    - Systems: IK limbs and walking legs anchored in the skeleton
    - Lifetime tracker: distance, speed and step statistics
    """

    _global_id_counter = 0

    def __init__(self, x: float, y: float, angle: float = 0.0,
                 params: Optional[MotionParams] = None):
        """
        Initialize a creature at rest.

        Args:
            x, y: Initial head position
            angle: Initial heading
            params: Motion constants (defaults to MotionParams())
        """
        Creature._global_id_counter += 1
        self.creature_id = f"L{Creature._global_id_counter:03d}"

        self.params = params or MotionParams()
        self.pose = Pose.at(x, y, angle)
        self.skeleton = Skeleton(self.pose)
        self.systems: List[LimbSystem] = []

        # Motion state
        self.f_speed = 0.0
        self.r_speed = 0.0
        self.speed = 0.0

        self.step_count = 0
        self.lifetime_tracker = LifetimeTracker(self.creature_id)

    @property
    def x(self) -> float:
        return float(self.pose.pos[0])

    @property
    def y(self) -> float:
        return float(self.pose.pos[1])

    @property
    def abs_angle(self) -> float:
        return self.pose.abs_angle

    # =========================================================================
    # BODY PLAN
    # =========================================================================

    def add_limb(self, end: int, length: int, speed: float) -> LimbSystem:
        """Register a limb that reaches for the pointer."""
        limb = LimbSystem(self.skeleton, end, length, speed)
        self.systems.append(limb)
        return limb

    def add_leg(self, end: int, length: int, speed: float) -> LimbSystem:
        """Register a walking leg planted at its current foot position."""
        leg = LimbSystem.leg(self.skeleton, end, length, speed, self.pose.abs_angle)
        self.systems.append(leg)
        return leg

    # =========================================================================
    # MOTION
    # =========================================================================

    def planted_fraction(self) -> float:
        if not self.systems:
            return 1.0
        return sum(1 for s in self.systems if s.is_planted) / len(self.systems)

    def thrust(self, dist: float) -> float:
        """Forward acceleration for this tick given the distance to target."""
        if dist <= self.params.f_thresh:
            return 0.0
        return self.params.f_accel * self.planted_fraction()

    def _update_forward(self, dist: float):
        p = self.params
        self.f_speed += self.thrust(dist)
        self.f_speed *= 1 - p.f_res
        self.speed = max(0.0, self.f_speed - p.f_fric)

    def _update_rotation(self, dist: float, target_heading: float):
        p = self.params
        dif = wrap_angle(self.pose.abs_angle - target_heading)

        if abs(dif) > p.r_thresh and dist > p.f_thresh:
            self.r_speed -= p.r_accel * (1 if dif > 0 else -1)

        self.r_speed *= 1 - p.r_res
        # Friction only brakes, never reverses
        if abs(self.r_speed) > p.r_fric:
            self.r_speed -= p.r_fric * (1 if self.r_speed > 0 else -1)
        else:
            self.r_speed = 0.0

    def follow(self, target: InputSnapshot, surface=None):
        """
        Run one tick chasing the snapshot's pointer position.

        Order matters: the root moves first, the skeleton is dragged after
        it, and only then do the limbs solve against the new hip positions.

        Args:
            target: Input snapshot for this tick
            surface: Drawing surface; nothing is drawn when None
        """
        self.step_count += 1
        offset = target.target - self.pose.pos
        dist = float(np.hypot(offset[0], offset[1]))
        target_heading = float(np.arctan2(offset[1], offset[0]))

        self._update_forward(dist)
        self._update_rotation(dist, target_heading)

        # === INTEGRATE ===
        self.pose.abs_angle = wrap_angle(self.pose.abs_angle + self.r_speed)
        self.pose.pos = self.pose.pos + self.speed * direction(self.pose.abs_angle)

        # === SKELETON + LIMBS ===
        # Trailing structures hang off the back of the head
        self.pose.abs_angle += np.pi
        for child in self.skeleton.children[ROOT]:
            self.skeleton.follow(child, recurse=True)
        for system in self.systems:
            system.update(target)
        self.pose.abs_angle -= np.pi

        self.lifetime_tracker.update(self, self.step_count)

        if surface is not None:
            self.draw(surface)

    # =========================================================================
    # DRAWING
    # =========================================================================

    def draw(self, surface, recurse: bool = True):
        """Draw the chevron head, then the skeleton."""
        r = HEAD_RADIUS
        a = self.pose.abs_angle
        center = self.pose.pos
        surface.arc(center, r, np.pi / 4 + a, 7 * np.pi / 4 + a)
        surface.line(center + r * direction(7 * np.pi / 4 + a),
                     center + r * np.sqrt(2) * direction(a))
        surface.line(center + r * np.sqrt(2) * direction(a),
                     center + r * direction(np.pi / 4 + a))

        if recurse:
            for child in self.skeleton.children[ROOT]:
                self.skeleton.draw(child, surface)
