"""Creature management."""

from .creature_manager import CreatureManager
