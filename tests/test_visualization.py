from types import SimpleNamespace

import matplotlib.pyplot as plt
import pytest

from critter_world.core.config import SceneConfig
from critter_world.manager.creature_manager import CreatureManager
from critter_world.visualization.main_vis import CritterVisualization

pytestmark = pytest.mark.filterwarnings("ignore::UserWarning")


@pytest.fixture
def viz():
    config = SceneConfig(width=400, height=300, legs=2, tail=3)
    manager = CreatureManager(config.width, config.height, config)
    vis = CritterVisualization(manager)
    yield vis
    vis.close()


def test_axes_map_one_to_one_onto_pixels(viz) -> None:
    assert viz.ax.get_xlim() == (0.0, 400.0)
    assert viz.ax.get_ylim() == (300.0, 0.0)
    assert (viz.manager.width, viz.manager.height) == (400, 300)
    assert len(viz._cids) == 6


def test_pointer_motion_updates_input(viz) -> None:
    viz._on_motion(SimpleNamespace(inaxes=viz.ax, xdata=12.0, ydata=34.0))
    viz._on_motion(SimpleNamespace(inaxes=None, xdata=None, ydata=None))
    snap = viz.input.snapshot()
    assert (snap.x, snap.y) == (12.0, 34.0)


def test_buttons_and_keys_reach_the_snapshot(viz) -> None:
    viz._on_button_press(SimpleNamespace(button=1))
    viz._on_key_press(SimpleNamespace(key='shift'))
    snap = viz.input.snapshot()
    assert snap.left
    assert 'shift' in snap.keys

    viz._on_button_release(SimpleNamespace(button=1))
    viz._on_key_release(SimpleNamespace(key='shift'))
    snap = viz.input.snapshot()
    assert not snap.left
    assert not snap.keys


def test_animate_runs_one_tick(viz) -> None:
    artists = viz._animate(0)
    assert artists == [viz.surface.collection]
    assert viz.manager.step_count == 1
    assert len(viz.surface.collection.get_segments()) > 0


def test_space_pauses_the_loop(viz) -> None:
    viz._on_key_press(SimpleNamespace(key=' '))
    assert viz.paused
    viz._animate(0)
    assert viz.manager.step_count == 0
    viz._on_key_press(SimpleNamespace(key=' '))
    viz._animate(1)
    assert viz.manager.step_count == 1


def test_r_respawns(viz) -> None:
    old = viz.manager.creature
    viz._on_key_press(SimpleNamespace(key='r'))
    assert viz.manager.creature is not old


def test_quit_key_closes_the_window(viz) -> None:
    viz.start()
    number = viz.fig.number
    viz._on_key_press(SimpleNamespace(key='q'))
    assert viz.closed
    assert viz.anim is None
    assert viz._cids == []
    assert not plt.fignum_exists(number)


def test_close_is_idempotent(viz) -> None:
    viz.close()
    viz.close()
    assert viz.closed
