"""
Limbs - Inverse-kinematics chains and the stance/swing gait.

A LimbSystem is a contiguous run of skeleton segments ending in an end
effector (a hand, a foot). Each tick it reaches for a target with a single
backward pass: the effector moves at most `speed` toward the target and every
bond above it is dragged along the straight line toward the bond below.

A LimbSystem carrying a GaitState is a walking leg. Instead of reaching for
the pointer it reaches for its own goal and cycles between two steps:

    PLANTED  --(foot dragged off its goal)-->            SWINGING
    SWINGING --(foot stops moving relative to the hip)--> PLANTED

A planted foot stays put while the body moves over it; a swinging foot leaps
to a fresh, slightly randomized stance point ahead of the hip.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

import numpy as np

from .skeleton import Skeleton
from ..core.angles import wrap_angle, direction, heading
from ..core.constants import PLANT_TOLERANCE, SETTLE_TOLERANCE, REACH_FRACTION
from ..core.input import InputSnapshot
from ..events.logger import get_logger

log = get_logger('Limbs')


class Step(Enum):
    """Gait phase of a leg."""
    PLANTED = auto()     # Foot fixed on the ground, body moves past it
    SWINGING = auto()    # Foot travelling to a new stance point


@dataclass
class GaitState:
    """Per-leg gait payload."""
    goal: np.ndarray          # Where the foot is heading (world coords)
    reach: float              # Max stance radius from the hip
    swing: float              # Default stepping direction relative to the hip
    swing_offset: float       # Creature-to-hip heading offset at build time
    step: Step = Step.PLANTED
    forwardness: float = 0.0  # Last foot progress along the hip's heading


class LimbSystem:
    """
    IK chain from a hip down to an end effector.

    Attributes:
        nodes: Segment indices, hip side first, end effector last
        length: Number of nodes (may be shorter than requested)
        hip: Immovable anchor, the parent of nodes[0] (may be ROOT)
        speed: Max effector travel per tick
        gait: GaitState for walking legs, None for plain reaching limbs
    """

    def __init__(self, skeleton: Skeleton, end: int, length: int, speed: float,
                 gait: Optional[GaitState] = None):
        """
        Collect the chain by walking up from the end effector.

        Args:
            skeleton: Arena the chain lives in
            end: End effector segment index
            length: Requested number of segments, truncated at the root
            speed: Max effector travel per tick
            gait: Optional gait payload
        """
        if length < 1:
            raise ValueError(f"limb chain length must be at least 1, got {length}")

        self.skeleton = skeleton
        self.end = end
        self.speed = speed
        self.gait = gait
        self.nodes: List[int] = []
        for node in skeleton.ancestors(end):
            self.nodes.insert(0, node)
            if len(self.nodes) == length:
                break
        self.length = len(self.nodes)
        self.hip = int(skeleton.parent[self.nodes[0]])
        self._members = set(self.nodes)

    @classmethod
    def leg(cls, skeleton: Skeleton, end: int, length: int, speed: float,
            body_heading: float) -> 'LimbSystem':
        """
        Build a walking leg, planted where its foot currently rests.

        Args:
            skeleton: Arena the chain lives in
            end: Foot segment index
            length: Requested chain length
            speed: Max foot travel per tick
            body_heading: Creature heading at build time
        """
        limb = cls(skeleton, end, length, speed)
        offset = limb.end_pos - limb.hip_pos
        rel = wrap_angle(body_heading - heading(offset))
        swing = -rel + (np.pi / 2 if rel < 0 else -np.pi / 2)
        limb.gait = GaitState(
            goal=limb.end_pos.copy(),
            reach=REACH_FRACTION * float(np.hypot(offset[0], offset[1])),
            swing=swing,
            swing_offset=body_heading - limb.hip_angle,
        )
        return limb

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def end_pos(self) -> np.ndarray:
        return self.skeleton.pos[self.end]

    @property
    def hip_pos(self) -> np.ndarray:
        return self.skeleton.pose_of(self.hip)[0]

    @property
    def hip_angle(self) -> float:
        return self.skeleton.pose_of(self.hip)[1]

    @property
    def is_leg(self) -> bool:
        return self.gait is not None

    @property
    def is_planted(self) -> bool:
        """Plain limbs never count as ground contact."""
        return self.gait is not None and self.gait.step is Step.PLANTED

    # =========================================================================
    # INVERSE KINEMATICS
    # =========================================================================

    def move_to(self, target) -> None:
        """
        Reach toward `target`, falling short by up to `speed` this tick.

        Args:
            target: (x, y) world position
        """
        sk = self.skeleton
        target = np.asarray(target, dtype=float)

        # Settle resting angles before solving
        sk.update_relative(self.nodes[0], recurse=True, flex=True)

        gap = target - sk.pos[self.end]
        travel = max(0.0, float(np.hypot(gap[0], gap[1])) - self.speed)

        # Backward pass: effector first, each node on the line to the one below
        anchor = target
        for node in reversed(self.nodes):
            angle = heading(sk.pos[node] - anchor)
            sk.pos[node] = anchor + travel * direction(angle)
            anchor = sk.pos[node].copy()
            travel = sk.size[node]

        # Forward pass: angles from positions, side branches hang passively
        for node in self.nodes:
            sk.abs_angle[node] = heading(sk.pos[node] - sk.parent_pos(node))
            sk.rel_angle[node] = sk.abs_angle[node] - sk.parent_angle(node)
            for child in sk.children[node]:
                if child not in self._members:
                    sk.update_relative(child, recurse=True, flex=False)

    def update(self, snapshot: InputSnapshot) -> None:
        """Advance one tick: legs walk, plain limbs reach for the pointer."""
        if self.gait is None:
            self.move_to(snapshot.target)
        else:
            self._walk()

    # =========================================================================
    # GAIT
    # =========================================================================

    def _walk(self):
        gait = self.gait
        self.move_to(gait.goal)

        if gait.step is Step.PLANTED:
            slip = self.end_pos - gait.goal
            if np.hypot(slip[0], slip[1]) > PLANT_TOLERANCE:
                gait.step = Step.SWINGING
                gait.goal = self.swing_target()
                log.debug("Leg %d lifted, swinging to (%.1f, %.1f)",
                          self.end, gait.goal[0], gait.goal[1])
        else:
            forwardness = self.forwardness()
            change = gait.forwardness - forwardness
            gait.forwardness = forwardness
            if change * change < SETTLE_TOLERANCE:
                gait.step = Step.PLANTED
                gait.goal = self.end_pos.copy()
                log.debug("Leg %d planted at (%.1f, %.1f)",
                          self.end, gait.goal[0], gait.goal[1])

    def forwardness(self) -> float:
        """Signed progress of the foot along the hip's heading."""
        offset = self.end_pos - self.hip_pos
        theta = heading(offset) - self.hip_angle
        return float(np.hypot(offset[0], offset[1]) * np.cos(theta))

    def swing_target(self) -> np.ndarray:
        """
        Pick a new stance point ahead of the hip.

        The point sits `reach` out along the leg's stepping direction, nudged
        by up to reach/2 on each axis so legs never step in lockstep. The
        nudge is capped at length reach/2, keeping every goal within
        1.5 * reach of the hip.
        """
        gait = self.gait
        limit = gait.reach / 2
        jitter = np.random.uniform(-limit, limit, 2)
        norm = float(np.hypot(jitter[0], jitter[1]))
        if norm > limit:
            jitter *= limit / norm
        angle = gait.swing + self.hip_angle + gait.swing_offset
        return self.hip_pos + gait.reach * direction(angle) + jitter
