"""critter_world - Procedural lizard that chases the pointer across the screen."""

__version__ = '1.0.0'
