"""
Creature Manager - Owns the on-screen lizard and runs the per-tick loop body.

The manager is backend independent: it takes an input snapshot and a drawing
surface and does one simulation + render tick. The matplotlib window
(visualization.main_vis) only samples input, calls step() and flushes the
surface.
"""

from .. import __version__
from ..core.config import SceneConfig
from ..core.input import InputSnapshot
from ..creature.creature import Creature
from ..creature.lizard import spawn_lizard
from ..events.logger import get_logger

log = get_logger('Manager')


class CreatureManager:
    """
    Runs the lizard on a canvas of the given size.

    Usage:
        manager = CreatureManager(1280, 800, SceneConfig())
        surface = RecordingSurface()
        manager.step(InputSnapshot(x=900, y=400), surface)
    """

    def __init__(self, width: int, height: int, config: SceneConfig = None):
        """
        Initialize the manager and spawn the first lizard.

        Args:
            width, height: Canvas size in pixels
            config: Scene configuration (defaults to SceneConfig())
        """
        self.config = config or SceneConfig()
        self.width = width
        self.height = height
        self.step_count = 0
        self.creature: Creature = self.spawn()

    def spawn(self) -> Creature:
        """Spawn a lizard at the canvas centre."""
        return spawn_lizard(self.width / 2, self.height / 2,
                            legs=self.config.legs, tail=self.config.tail)

    def respawn(self) -> Creature:
        """Replace the current lizard with a freshly built one."""
        old = self.creature
        log.info("Retiring %s after %d ticks, %.0f px travelled",
                 old.creature_id, old.step_count, old.lifetime_tracker.total_distance)
        self.creature = self.spawn()
        return self.creature

    def resize(self, width: int, height: int):
        """Track the canvas size; the creature keeps running where it is."""
        if (width, height) == (self.width, self.height):
            return
        self.width = width
        self.height = height
        log.info("Canvas resized to %dx%d", width, height)

    def step(self, snapshot: InputSnapshot, surface):
        """
        One tick: fade the previous frames, move and draw the lizard.

        Args:
            snapshot: Input sampled for this tick
            surface: Drawing surface
        """
        self.step_count += 1
        surface.fade(self.config.trail_fade)
        self.creature.follow(snapshot, surface)

        interval = self.config.status_interval
        if interval and self.step_count % interval == 0:
            self._log_status()

    def _log_status(self):
        stats = self.get_statistics()
        log.info("Tick %d | %s age %d | %.0f px | %d steps | %d/%d planted",
                 stats['step_count'], stats['creature_id'], stats['age'], stats['total_distance'],
                 stats['steps_taken'], stats['planted_count'], stats['leg_count'])

    def get_statistics(self) -> dict:
        tracker = self.creature.lifetime_tracker
        stats = tracker.to_dict()
        stats['age'] = tracker.get_age(self.creature.step_count)
        stats['step_count'] = self.step_count
        stats['segments'] = len(self.creature.skeleton)
        stats['version'] = __version__
        return stats
