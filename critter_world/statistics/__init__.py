"""Statistics tracking."""

from .lifetime_tracker import LifetimeTracker
