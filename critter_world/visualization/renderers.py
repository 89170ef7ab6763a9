"""
Renderers - Drawing surfaces the creature strokes itself onto.

A surface understands three calls:
- line(p0, p1): stroke a straight line
- arc(center, radius, start, end): stroke a circular arc (radians)
- fade(alpha): lay a translucent black fill over everything drawn so far

TrailSurface renders onto a matplotlib axes. Old frames are not erased;
each fade dims them, leaving a trail behind the moving creature.
RecordingSurface just records the calls, for headless runs and tests.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np
from matplotlib.collections import LineCollection
from matplotlib.colors import to_rgb

from ..core.constants import (
    LINE_COLOR, LINE_WIDTH, TRAIL_FRAMES, TRAIL_CUTOFF, ARC_RESOLUTION,
)

Point = Tuple[float, float]


def _point(p) -> Point:
    return (float(p[0]), float(p[1]))


def arc_points(center, radius: float, start: float, end: float,
               resolution: int = ARC_RESOLUTION) -> np.ndarray:
    """Sample an arc into resolution + 1 points."""
    t = np.linspace(start, end, resolution + 1)
    return np.column_stack([center[0] + radius * np.cos(t),
                            center[1] + radius * np.sin(t)])


class RecordingSurface:
    """Surface that records every call as a tuple in `ops`."""

    def __init__(self):
        self.ops: List[tuple] = []

    def line(self, p0, p1):
        self.ops.append(('line', _point(p0), _point(p1)))

    def arc(self, center, radius: float, start: float, end: float):
        self.ops.append(('arc', _point(center), float(radius), float(start), float(end)))

    def fade(self, alpha: float):
        self.ops.append(('fade', float(alpha)))

    def count(self, kind: str) -> int:
        return sum(1 for op in self.ops if op[0] == kind)

    def clear(self):
        self.ops.clear()


@dataclass
class _Frame:
    segments: List[Tuple[Point, Point]] = field(default_factory=list)
    intensity: float = 1.0


class TrailSurface:
    """
    Matplotlib surface with a fading trail.

    All line pieces of the last `max_frames` frames live in one
    LineCollection. Each frame's pieces carry that frame's intensity as
    alpha, so a fade of 0.1 per tick leaves a frame drawn n ticks ago at
    0.9 ** n, the same as painting translucent black over a canvas.
    """

    def __init__(self, ax, color: str = LINE_COLOR, linewidth: float = LINE_WIDTH,
                 max_frames: int = TRAIL_FRAMES):
        self.ax = ax
        self.rgb = to_rgb(color)
        self.max_frames = max_frames
        self.history: deque = deque()
        self.current = _Frame()
        self.collection = LineCollection([], linewidths=linewidth, capstyle='round')
        ax.add_collection(self.collection)

    def line(self, p0, p1):
        self.current.segments.append((_point(p0), _point(p1)))

    def arc(self, center, radius: float, start: float, end: float):
        pts = arc_points(center, radius, start, end)
        for a, b in zip(pts[:-1], pts[1:]):
            self.current.segments.append((_point(a), _point(b)))

    def fade(self, alpha: float):
        """Dim every finished frame and start a new one."""
        if self.current.segments:
            self.history.append(self.current)
        self.current = _Frame()
        keep = 1.0 - alpha
        for frame in self.history:
            frame.intensity *= keep
        while self.history and (len(self.history) > self.max_frames
                                or self.history[0].intensity < TRAIL_CUTOFF):
            self.history.popleft()

    def flush(self) -> LineCollection:
        """Push all live frames into the collection and return it."""
        frames = list(self.history) + [self.current]
        segments = [seg for frame in frames for seg in frame.segments]
        colors = [(*self.rgb, frame.intensity) for frame in frames for _ in frame.segments]
        self.collection.set_segments(segments)
        if colors:
            self.collection.set_color(colors)
        return self.collection
