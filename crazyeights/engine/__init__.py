"""
Core engine for the Crazy Eights package.

This package provides the game engine that drives the pure Crazy Eights
transitions in a platform-agnostic way.
"""

from crazyeights.engine.base import GameEngine
from crazyeights.engine.crazy_eights import CrazyEightsEngine

__all__ = ["GameEngine", "CrazyEightsEngine"]
