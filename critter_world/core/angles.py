"""Angle helpers."""

import numpy as np

from .constants import TWO_PI


def wrap_angle(angle: float) -> float:
    """Wrap an angle into (-pi, pi]."""
    return float(np.pi - (np.pi - angle) % TWO_PI)


def wrap_near(angle: float, reference: float) -> float:
    """Return the branch of `angle` (mod 2pi) closest to `reference`."""
    return reference + wrap_angle(angle - reference)


def direction(angle: float) -> np.ndarray:
    """Unit vector pointing along `angle`."""
    return np.array([np.cos(angle), np.sin(angle)])


def heading(vector: np.ndarray) -> float:
    """Angle of a 2D vector."""
    return float(np.arctan2(vector[1], vector[0]))
