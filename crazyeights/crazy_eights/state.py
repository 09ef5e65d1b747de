"""
Immutable state models for the Crazy Eights card game.

This module provides dataclasses for representing the state of a Crazy Eights
game in an immutable manner. These classes are designed to be used with pure
transition functions that create new state instances rather than modifying
existing ones.
"""

from dataclasses import dataclass, field
from typing import Tuple, Dict, Any, Optional
from enum import Enum
import uuid
import time

from crazyeights.common.card import Card, Rank, Suit
from crazyeights.crazy_eights.constants import WILD_RANK
from crazyeights.crazy_eights.rules import has_playable_card, is_playable


class Side(Enum):
    """The two seats at the table. The current one is the state's `turn`."""

    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Side":
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER


class Phase(Enum):
    """Possible phases of a Crazy Eights game."""

    IN_PROGRESS = "in_progress"
    AWAITING_SUIT_DECLARATION = "awaiting_suit_declaration"
    PLAYER_WON = "player_won"
    OPPONENT_WON = "opponent_won"

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.PLAYER_WON, Phase.OPPONENT_WON)

    @classmethod
    def won_by(cls, side: Side) -> "Phase":
        return cls.PLAYER_WON if side is Side.PLAYER else cls.OPPONENT_WON


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the Crazy Eights game state.

    Attributes:
        id: Unique identifier for this game
        draw_pile: Face-down cards; cards are drawn from the end
        player_hand: Cards held by the human player, in dealt order
        opponent_hand: Cards held by the computer opponent, in dealt order
        discard_pile: Played cards, most recent first
        active_suit: Suit the next play must match
        active_rank: Rank the next play may match instead
        turn: Side whose move it is
        phase: Current phase of the game
        last_event: Human-readable description of the last transition
        timestamp: Time when this snapshot was created; every accepted
                   transition stamps its result anew
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    draw_pile: Tuple[Card, ...] = ()
    player_hand: Tuple[Card, ...] = ()
    opponent_hand: Tuple[Card, ...] = ()
    discard_pile: Tuple[Card, ...] = ()
    active_suit: Optional[Suit] = None
    active_rank: Optional[Rank] = None
    turn: Side = Side.PLAYER
    phase: Phase = Phase.IN_PROGRESS
    last_event: str = ""
    timestamp: float = field(default_factory=lambda: time.time())

    @property
    def top_discard(self) -> Optional[Card]:
        """Get the card on top of the discard pile."""
        return self.discard_pile[0] if self.discard_pile else None

    @property
    def game_ended(self) -> bool:
        return self.phase.is_terminal

    @property
    def winner(self) -> Optional[Side]:
        """Get the winning side, or None while the game is running."""
        if self.phase == Phase.PLAYER_WON:
            return Side.PLAYER
        if self.phase == Phase.OPPONENT_WON:
            return Side.OPPONENT
        return None

    def hand_for(self, side: Side) -> Tuple[Card, ...]:
        """Get the hand held by a side."""
        return self.player_hand if side is Side.PLAYER else self.opponent_hand

    def all_cards(self) -> Tuple[Card, ...]:
        """Every card in the game, wherever it currently lies."""
        return (
            self.draw_pile + self.player_hand + self.opponent_hand + self.discard_pile
        )

    @property
    def is_stalemate(self) -> bool:
        """
        Check whether neither side can ever move again.

        The rules have no outcome for this; turns just keep passing. It
        cannot occur with a full deck in practice but collaborators may want
        to offer a restart.
        """
        if self.phase != Phase.IN_PROGRESS or self.draw_pile:
            return False
        return not any(
            has_playable_card(hand, self.active_suit, self.active_rank)
            for hand in (self.player_hand, self.opponent_hand)
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the game state
        """
        return {
            "id": self.id,
            "phase": self.phase.value,
            "turn": self.turn.value,
            "active_suit": self.active_suit.value if self.active_suit else None,
            "active_rank": self.active_rank.value if self.active_rank else None,
            "draw_pile": [_card_dict(card) for card in self.draw_pile],
            "player_hand": [_card_dict(card) for card in self.player_hand],
            "opponent_hand": [_card_dict(card) for card in self.opponent_hand],
            "discard_pile": [_card_dict(card) for card in self.discard_pile],
            "last_event": self.last_event,
            "timestamp": self.timestamp,
        }

    def to_adapter_format(self) -> Dict[str, Any]:
        """
        Convert the game state to a format suitable for platform adapters.

        The opponent's cards are reduced to a count. `must_draw` is set when
        it is the player's move and no card in hand can be played.

        Returns:
            Dictionary in adapter-friendly format
        """
        top = self.top_discard
        players_move = self.turn is Side.PLAYER and self.phase == Phase.IN_PROGRESS
        return {
            "game_id": self.id,
            "phase": self.phase.value,
            "turn": self.turn.value,
            "active_suit": self.active_suit.value if self.active_suit else None,
            "active_suit_symbol": self.active_suit.symbol if self.active_suit else None,
            "active_rank": self.active_rank.value if self.active_rank else None,
            "top_discard": str(top) if top else None,
            "suit_declared": self.active_rank == WILD_RANK,
            "draw_pile_size": len(self.draw_pile),
            "opponent_card_count": len(self.opponent_hand),
            "player_hand": [
                {
                    "id": card.id,
                    "card": str(card),
                    "playable": players_move
                    and is_playable(card, self.active_suit, self.active_rank),
                }
                for card in self.player_hand
            ],
            "must_draw": players_move
            and not has_playable_card(
                self.player_hand, self.active_suit, self.active_rank
            ),
            "last_event": self.last_event,
        }


def _card_dict(card: Card) -> Dict[str, str]:
    return {"id": card.id, "suit": card.suit.value, "rank": card.rank.value}
