"""
Crazy Eights card game module.

This module provides the implementation for the Crazy Eights card game,
including state models, legality rules, state transitions and the computer
opponent's policy.
"""

from crazyeights.crazy_eights.constants import WILD_RANK as WILD_RANK
from crazyeights.crazy_eights.rules import (
    is_playable as is_playable,
    playable_cards as playable_cards,
    has_playable_card as has_playable_card,
)
from crazyeights.crazy_eights.state import (
    GameState as GameState,
    Phase as Phase,
    Side as Side,
)
from crazyeights.crazy_eights.transitions import (
    StateTransitionEngine as StateTransitionEngine,
)
from crazyeights.crazy_eights.policy import (
    Move as Move,
    MoveKind as MoveKind,
    choose_move as choose_move,
    choose_suit as choose_suit,
    take_opponent_turn as take_opponent_turn,
)

__all__ = [
    "WILD_RANK",
    "is_playable",
    "playable_cards",
    "has_playable_card",
    "GameState",
    "Phase",
    "Side",
    "StateTransitionEngine",
    "Move",
    "MoveKind",
    "choose_move",
    "choose_suit",
    "take_opponent_turn",
]
