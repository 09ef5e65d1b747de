"""
Event system for the Crazy Eights engine.

This package provides the event bus that connects the pure state transitions
to engines, adapters and API callers, and the typed payloads of the game
flow events.
"""

from crazyeights.events.emitter import (
    EventEmitter,
    EventBus,
    EngineEventType,
    PAYLOAD_TYPES,
    ActionRejected,
    CardDrawn,
    CardPlayed,
    GameEnded,
    GameStarted,
    GameWon,
    SuitDeclared,
    TurnPassed,
)

__all__ = [
    "EventEmitter",
    "EventBus",
    "EngineEventType",
    "PAYLOAD_TYPES",
    "ActionRejected",
    "CardDrawn",
    "CardPlayed",
    "GameEnded",
    "GameStarted",
    "GameWon",
    "SuitDeclared",
    "TurnPassed",
]
