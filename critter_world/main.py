"""
Entry point - Open the window and let the lizard chase the pointer.

Usage:
    python -m critter_world [seed]
    python -m critter_world 42
    python -m critter_world        # Unseeded, or CRITTER_SEED from the env
"""

import dataclasses
import sys
from typing import List, Optional

import numpy as np

from .core.config import SceneConfig
from .events.logger import configure_logging, get_logger
from .manager.creature_manager import CreatureManager

log = get_logger('Main')


def main_visual(seed: Optional[int] = None, config: Optional[SceneConfig] = None):
    """
    Build the scene and run the animation window until it closes.

    Args:
        seed: Seed for np.random (overrides CRITTER_SEED)
        config: Scene configuration (read from the environment if None)
    """
    from .visualization.main_vis import CritterVisualization

    config = config or SceneConfig.from_env()
    if seed is not None:
        config = dataclasses.replace(config, seed=seed)
    configure_logging(config.log_level)

    if config.seed is not None:
        np.random.seed(config.seed)
        log.info("Seed: %d", config.seed)

    manager = CreatureManager(config.width, config.height, config)
    viz = CritterVisualization(manager, config)
    try:
        viz.show()
    finally:
        viz.close()
    return manager.get_statistics()


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    seed = None
    if argv:
        try:
            seed = int(argv[0])
        except ValueError:
            print(f"usage: python -m critter_world [seed]  (seed must be an integer, got {argv[0]!r})",
                  file=sys.stderr)
            return 2
    main_visual(seed)
    return 0
