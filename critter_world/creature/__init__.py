"""Creature systems - root body, motion constants and the lizard builder."""

from .species import MotionParams
from .creature import Creature
from .lizard import setup_lizard, spawn_lizard, random_body_plan
