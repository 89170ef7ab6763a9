"""Visualization - drawing surfaces and the matplotlib animation window."""

from .renderers import RecordingSurface, TrailSurface
