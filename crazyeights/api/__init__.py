"""
API module for the Crazy Eights package.

This module provides a high-level, platform-agnostic API for working with the
Crazy Eights engine, supporting both synchronous and asynchronous operation.
"""

from crazyeights.api.base import CardGame
from crazyeights.api.crazy_eights import CrazyEightsGame

__all__ = ["CardGame", "CrazyEightsGame"]
