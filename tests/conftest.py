import logging

import matplotlib

matplotlib.use('Agg')

import matplotlib.pyplot as plt
import numpy as np
import pytest

from critter_world.creature.lizard import setup_lizard
from critter_world.events.logger import ROOT_LOGGER
from critter_world.visualization.renderers import RecordingSurface


@pytest.fixture(autouse=True)
def seeded_random():
    np.random.seed(1234)
    yield


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def lizard():
    return setup_lizard(2.0, 2, 6, 400.0, 300.0)


@pytest.fixture
def package_logger():
    """Hand the package logger to a test and restore it afterwards."""
    logger = logging.getLogger(ROOT_LOGGER)
    saved = (logger.level, list(logger.handlers), logger.propagate)
    logger.handlers = []
    logger.propagate = True
    yield logger
    level, handlers, propagate = saved
    logger.handlers = handlers
    logger.propagate = propagate
    logger.setLevel(level)
