"""
Platform adapters for the Crazy Eights engine.

This package provides adapters that translate between the core game engine
and the platforms that present it.
"""

from crazyeights.adapters.base import PlatformAdapter
from crazyeights.adapters.cli import CLIAdapter
from crazyeights.adapters.dummy import DummyAdapter

__all__ = ["PlatformAdapter", "CLIAdapter", "DummyAdapter"]
