"""
Skeleton - Arena of rigid bonds forming a creature's branching body tree.

Every bond (segment) lives in flat numpy arrays addressed by a stable index.
A segment owns the list of its children's indices and knows its parent by
index only; index ROOT stands for the creature root, whose pose is shared by
reference with the arena.

Two update passes keep the tree consistent:
- update_relative: spring relaxation. Each joint angle is eased toward its
  rest angle (deviation divided by stiffness) and clamped to its range.
- follow: drag-follow. Each bond swings to point from its parent's new
  position toward where the bond used to be, like a dragged rope.

After either pass, for every updated segment:
    abs_angle == parent.abs_angle + rel_angle
    pos == parent.pos + size * (cos, sin)(abs_angle)
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

import numpy as np

from ..core.angles import wrap_near, direction, heading
from ..core.constants import DIST_EPSILON

ROOT = -1


@dataclass
class Pose:
    """Position and heading of a skeleton root."""
    pos: np.ndarray
    abs_angle: float = 0.0

    @classmethod
    def at(cls, x: float, y: float, angle: float = 0.0) -> 'Pose':
        return cls(np.array([x, y], dtype=float), float(angle))


@dataclass(frozen=True)
class Segment:
    """Read-only snapshot of one bond."""
    index: int
    parent: int
    size: float
    rel_angle: float
    def_angle: float
    abs_angle: float
    range: float
    stiffness: float
    x: float
    y: float
    children: Tuple[int, ...]


class Skeleton:
    """
    Flat storage for a tree of bonds hanging off a root pose.

    Usage:
        skeleton = Skeleton(Pose.at(400, 300))
        spine = skeleton.add_segment(ROOT, 10.0, 0.0, np.pi / 2, 2.0)
        rib = skeleton.add_segment(spine, 6.0, 1.0, 0.1, 2.0)

        # Each tick, after the root moved:
        skeleton.follow(spine)
        skeleton.draw(spine, surface)
    """

    def __init__(self, root: Pose, capacity: int = 64):
        self.root = root
        self.count = 0
        self.size = np.zeros(capacity)
        self.rel_angle = np.zeros(capacity)
        self.def_angle = np.zeros(capacity)
        self.abs_angle = np.zeros(capacity)
        self.range = np.zeros(capacity)
        self.stiffness = np.ones(capacity)
        self.pos = np.zeros((capacity, 2))
        self.parent = np.full(capacity, ROOT, dtype=int)
        self.children: Dict[int, List[int]] = {ROOT: []}

    def __len__(self) -> int:
        return self.count

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    def add_segment(self, parent: int, size: float, angle: float,
                    range_: float, stiffness: float) -> int:
        """
        Attach a new bond to `parent` and return its index.

        Args:
            parent: Parent segment index, or ROOT
            size: Fixed bond length
            angle: Rest angle relative to the parent's heading
            range_: Total allowed swing around the rest angle
            stiffness: Divisor applied to the deviation on each relaxation

        Returns:
            Index of the new segment
        """
        if parent != ROOT and not 0 <= parent < self.count:
            raise ValueError(f"unknown parent segment {parent}")
        if stiffness <= 0:
            raise ValueError(f"stiffness must be positive, got {stiffness}")

        if self.count == len(self.size):
            self._grow()

        i = self.count
        self.count += 1
        self.parent[i] = parent
        self.children[parent].append(i)
        self.children[i] = []
        self.size[i] = size
        self.rel_angle[i] = angle
        self.def_angle[i] = angle
        self.range[i] = range_
        self.stiffness[i] = stiffness
        self.abs_angle[i] = self.parent_angle(i) + angle
        self._relax(i, flex=True)
        return i

    def _grow(self):
        """Double the arena capacity."""
        extra = max(len(self.size), 1)
        self.size = np.concatenate([self.size, np.zeros(extra)])
        self.rel_angle = np.concatenate([self.rel_angle, np.zeros(extra)])
        self.def_angle = np.concatenate([self.def_angle, np.zeros(extra)])
        self.abs_angle = np.concatenate([self.abs_angle, np.zeros(extra)])
        self.range = np.concatenate([self.range, np.zeros(extra)])
        self.stiffness = np.concatenate([self.stiffness, np.ones(extra)])
        self.pos = np.concatenate([self.pos, np.zeros((extra, 2))])
        self.parent = np.concatenate([self.parent, np.full(extra, ROOT, dtype=int)])

    # =========================================================================
    # TREE ACCESS
    # =========================================================================

    def parent_pos(self, i: int) -> np.ndarray:
        p = self.parent[i]
        return self.root.pos if p == ROOT else self.pos[p]

    def parent_angle(self, i: int) -> float:
        p = self.parent[i]
        return self.root.abs_angle if p == ROOT else float(self.abs_angle[p])

    def pose_of(self, i: int) -> Tuple[np.ndarray, float]:
        """Position and heading of a segment, or of the root for ROOT."""
        if i == ROOT:
            return self.root.pos, self.root.abs_angle
        return self.pos[i], float(self.abs_angle[i])

    def ancestors(self, i: int) -> Iterator[int]:
        """Yield `i` and every segment above it, stopping before the root."""
        while i != ROOT:
            yield i
            i = int(self.parent[i])

    def walk(self, i: int) -> Iterator[int]:
        """Depth-first walk of `i` and its descendants, in child order."""
        stack = [i]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(self.children[node]))

    def segment(self, i: int) -> Segment:
        return Segment(
            index=i,
            parent=int(self.parent[i]),
            size=float(self.size[i]),
            rel_angle=float(self.rel_angle[i]),
            def_angle=float(self.def_angle[i]),
            abs_angle=float(self.abs_angle[i]),
            range=float(self.range[i]),
            stiffness=float(self.stiffness[i]),
            x=float(self.pos[i, 0]),
            y=float(self.pos[i, 1]),
            children=tuple(self.children[i]),
        )

    # =========================================================================
    # UPDATE PASSES
    # =========================================================================

    def update_relative(self, i: int, recurse: bool = False, flex: bool = False):
        """
        Spring pass: wrap, optionally relax and clamp, then re-place.

        Parents are always placed before their children, so a recursive
        pass leaves the whole subtree consistent with the parent of `i`.
        """
        if not recurse:
            self._relax(i, flex)
            return
        for node in self.walk(i):
            self._relax(node, flex)

    def _relax(self, i: int, flex: bool):
        rest = self.def_angle[i]
        rel = wrap_near(self.rel_angle[i], rest)
        if flex:
            half = self.range[i] / 2
            rel = min(rest + half, max(rest - half, (rel - rest) / self.stiffness[i] + rest))
        self.rel_angle[i] = rel
        self._place(i)

    def _place(self, i: int):
        self.abs_angle[i] = self.parent_angle(i) + self.rel_angle[i]
        self.pos[i] = self.parent_pos(i) + self.size[i] * direction(self.abs_angle[i])

    def follow(self, i: int, recurse: bool = True):
        """
        Drag-follow pass for bonds pulled along by a moving parent.

        A bond sitting on its parent's new position (closer than
        DIST_EPSILON) has no drag direction and keeps its relative angle.
        """
        nodes = self.walk(i) if recurse else iter([i])
        for node in nodes:
            offset = self.pos[node] - self.parent_pos(node)
            if np.hypot(offset[0], offset[1]) > DIST_EPSILON:
                self.abs_angle[node] = heading(offset)
                self.rel_angle[node] = self.abs_angle[node] - self.parent_angle(node)
            self._relax(node, flex=True)

    # =========================================================================
    # DRAWING
    # =========================================================================

    def draw(self, i: int, surface, recurse: bool = True):
        """Stroke each bond from its parent's position to its own."""
        nodes = self.walk(i) if recurse else iter([i])
        for node in nodes:
            surface.line(self.parent_pos(node), self.pos[node])
