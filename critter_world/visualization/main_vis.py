"""
Main Visualization - Real-time matplotlib window for the lizard.

Owns everything that touches the windowing system:
- Pointer, button, key and resize callbacks feeding an InputState
- A FuncAnimation timer driving one CreatureManager tick per frame
- The fading-trail TrailSurface the lizard draws onto

Mount with show() (or start() to drive the loop yourself); close() detaches
every callback and stops the frame timer.
"""

from typing import List, Optional

import matplotlib.pyplot as plt
import matplotlib.animation as animation

from .renderers import TrailSurface
from ..core.config import SceneConfig
from ..core.constants import BG_COLOR, LINE_COLOR, LINE_WIDTH
from ..core.input import InputState
from ..events.logger import get_logger
from ..manager.creature_manager import CreatureManager

log = get_logger('Visualization')


class CritterVisualization:
    """
    Full-window canvas with the lizard chasing the pointer.

    Canvas coordinates are pixels with the origin top-left and y pointing
    down, matching the manager's spawn position and the pointer events.
    """

    def __init__(self, manager: CreatureManager, config: Optional[SceneConfig] = None):
        """
        Initialize visualization.

        Args:
            manager: CreatureManager running the simulation
            config: Scene configuration (defaults to the manager's)
        """
        self.manager = manager
        self.config = config or manager.config
        self.input = InputState(x=manager.width / 2, y=manager.height / 2)
        self.paused = False
        self.closed = False
        self.anim: Optional[animation.FuncAnimation] = None
        self._cids: List[int] = []

        self._setup_figure()
        self._print_controls()

    def _print_controls(self):
        log.info("Initialized (%dx%d @ %d fps)",
                 self.manager.width, self.manager.height, self.config.fps)
        log.info("Controls: Space pause/resume | R new lizard | Q/Esc quit")

    def _setup_figure(self):
        """Create the figure, the full-bleed axes and the event hooks."""
        dpi = plt.rcParams['figure.dpi']
        self.fig = plt.figure(
            figsize=(self.manager.width / dpi, self.manager.height / dpi),
            facecolor=BG_COLOR,
        )
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.ax.set_facecolor(BG_COLOR)
        self.ax.axis('off')
        self.ax.set_autoscale_on(False)

        self.surface = TrailSurface(self.ax, color=LINE_COLOR, linewidth=LINE_WIDTH,
                                    max_frames=self.config.trail_frames)
        self._fit_axes()

        canvas = self.fig.canvas
        self._cids = [
            canvas.mpl_connect('motion_notify_event', self._on_motion),
            canvas.mpl_connect('button_press_event', self._on_button_press),
            canvas.mpl_connect('button_release_event', self._on_button_release),
            canvas.mpl_connect('key_press_event', self._on_key_press),
            canvas.mpl_connect('key_release_event', self._on_key_release),
            canvas.mpl_connect('resize_event', self._on_resize),
        ]

    def _fit_axes(self):
        """Map data coordinates 1:1 onto canvas pixels, y down."""
        width, height = self.fig.canvas.get_width_height()
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.manager.resize(width, height)

    # =========================================================================
    # EVENTS
    # =========================================================================

    def _on_motion(self, event):
        if event.inaxes is not self.ax or event.xdata is None:
            return
        self.input.on_motion(event.xdata, event.ydata)

    def _on_button_press(self, event):
        self.input.on_button(event.button, True)

    def _on_button_release(self, event):
        self.input.on_button(event.button, False)

    def _on_key_press(self, event):
        self.input.on_key(event.key, True)
        if event.key == ' ':
            self.paused = not self.paused
            log.info("Paused" if self.paused else "Resumed")
        elif event.key == 'r':
            self.manager.respawn()
        elif event.key in ('q', 'escape'):
            self.close()

    def _on_key_release(self, event):
        self.input.on_key(event.key, False)

    def _on_resize(self, event):
        self._fit_axes()

    # =========================================================================
    # FRAME LOOP
    # =========================================================================

    def _animate(self, frame):
        """One frame: sample input, tick the manager, flush the surface."""
        if not self.paused:
            self.manager.step(self.input.snapshot(), self.surface)
        return [self.surface.flush()]

    def start(self) -> animation.FuncAnimation:
        """Start the frame timer."""
        self.anim = animation.FuncAnimation(
            self.fig, self._animate, interval=1000 / self.config.fps,
            blit=False, cache_frame_data=False,
        )
        return self.anim

    def show(self):
        """Start the loop and block until the window closes."""
        self.start()
        plt.show()

    def close(self):
        """Detach every callback, stop the frame timer and close the window."""
        if self.closed:
            return
        self.closed = True
        canvas = self.fig.canvas
        for cid in self._cids:
            canvas.mpl_disconnect(cid)
        self._cids = []
        if self.anim is not None and self.anim.event_source is not None:
            self.anim.event_source.stop()
        self.anim = None
        plt.close(self.fig)
        log.info("Closed after %d ticks", self.manager.step_count)
