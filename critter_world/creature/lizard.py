"""
Lizard - Procedural body plan for the pointer-chasing lizard.

The body is assembled head to tail off the creature root:
- Neck: six vertebrae, each with a pair of short whisker ribs
- Torso: per leg pair, six ribbed vertebrae (none before the first pair)
  and a hip -> humerus -> forearm -> four toes limb on each side
- Tail: tapering ribbed vertebrae

Each forearm becomes the end effector of a walking leg.
"""

from typing import Optional, Tuple

import numpy as np

from .creature import Creature
from .species import MotionParams
from ..body.skeleton import ROOT
from ..core.constants import (
    NECK_SEGMENTS, TORSO_SEGMENTS, TOES_PER_FOOT, LEG_CHAIN_LENGTH,
    LEG_SPEED_FACTOR, MIN_LEGS, MAX_LEGS, BASE_SIZE,
)
from ..events.logger import get_logger

log = get_logger('Lizard')

SIDES = (-1, 1)


def setup_lizard(size: float, legs: int, tail: int, x: float = 0.0,
                 y: float = 0.0) -> Creature:
    """
    Build a lizard facing along +x.

    Args:
        size: Scale factor for every bond length and for linear thrust
        legs: Number of leg pairs
        tail: Number of tail vertebrae
        x, y: Head position

    Returns:
        The assembled creature with one walking leg per side per pair
    """
    if legs < 0 or tail < 0:
        raise ValueError(f"legs and tail must not be negative, got {legs}, {tail}")

    s = size
    critter = Creature(x, y, 0.0, MotionParams.for_size(s))
    sk = critter.skeleton
    spinal = ROOT

    # === NECK ===
    for _ in range(NECK_SEGMENTS):
        spinal = sk.add_segment(spinal, s * 4, 0, 3.1415 * 2 / 3, 1.1)
        for side in SIDES:
            node = sk.add_segment(spinal, s * 3, side, 0.1, 2)
            for _ in range(3):
                node = sk.add_segment(node, s * 0.1, -side * 0.1, 0.1, 2)

    # === TORSO AND LEGS ===
    for i in range(legs):
        if i > 0:
            for _ in range(TORSO_SEGMENTS):
                spinal = sk.add_segment(spinal, s * 4, 0, 1.571, 1.5)
                for side in SIDES:
                    node = sk.add_segment(spinal, s * 3, side * 1.571, 0.1, 1.5)
                    for _ in range(3):
                        node = sk.add_segment(node, s * 3, -side * 0.3, 0.1, 2)

        for side in SIDES:
            node = sk.add_segment(spinal, s * 12, side * 0.785, 0, 8)     # Hip
            node = sk.add_segment(node, s * 16, -side * 0.785, 6.28, 1)   # Humerus
            node = sk.add_segment(node, s * 16, side * 1.571, 3.1415, 2)  # Forearm
            for toe in range(TOES_PER_FOOT):
                sk.add_segment(node, s * 4, (toe / 3 - 0.5) * 1.571, 0.1, 4)
            critter.add_leg(node, LEG_CHAIN_LENGTH, s * LEG_SPEED_FACTOR)

    # === TAIL ===
    for i in range(tail):
        spinal = sk.add_segment(spinal, s * 4, 0, 3.1415 * 2 / 3, 1.1)
        for side in SIDES:
            node = sk.add_segment(spinal, s * 3, side, 0.1, 2)
            for _ in range(3):
                node = sk.add_segment(node, s * 3 * (tail - i) / tail, -side * 0.1, 0.1, 2)

    return critter


def random_body_plan(legs: Optional[int] = None,
                     tail: Optional[int] = None) -> Tuple[float, int, int]:
    """
    Draw (size, legs, tail) for a new lizard using np.random.

    Leg pairs are uniform in [2, 10); bigger lizards get more legs but
    thinner bones, and the tail grows with the leg count.
    """
    if legs is None:
        legs = int(np.random.randint(MIN_LEGS, MAX_LEGS))
    elif legs < 1:
        raise ValueError(f"a lizard needs at least one leg pair, got {legs}")
    if tail is None:
        tail = int(np.floor(4 + np.random.random() * legs * 6))
    size = BASE_SIZE / np.sqrt(legs)
    return size, legs, tail


def spawn_lizard(x: float, y: float, legs: Optional[int] = None,
                 tail: Optional[int] = None) -> Creature:
    """Build a randomly proportioned lizard at (x, y)."""
    size, legs, tail = random_body_plan(legs, tail)
    critter = setup_lizard(size, legs, tail, x, y)
    log.info("Spawned %s: %d legs, tail %d, size %.2f, %d segments",
             critter.creature_id, legs, tail, size, len(critter.skeleton))
    return critter
