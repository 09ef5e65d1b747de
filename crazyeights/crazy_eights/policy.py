"""
Move selection for the computer opponent.

The policy is greedy and has no lookahead: play a matching card before an
eight, draw when nothing fits, and after an eight name the suit it holds the
most of. It is synchronous and deterministic for a given state; any delay
before it runs belongs to the engine.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional

from crazyeights.common.card import Card, Suit
from crazyeights.crazy_eights.constants import is_wild
from crazyeights.crazy_eights.rules import playable_cards
from crazyeights.crazy_eights.state import GameState, Phase, Side
from crazyeights.crazy_eights.transitions import StateTransitionEngine


class MoveKind(Enum):
    DRAW = auto()
    PLAY = auto()


@dataclass(frozen=True)
class Move:
    """
    A move chosen by the opponent.

    Attributes:
        kind: Whether to draw or play
        card: Card to play, for PLAY moves
        declared_suit: Suit to name after playing a wild card that does not
                       end the game
    """

    kind: MoveKind
    card: Optional[Card] = None
    declared_suit: Optional[Suit] = None


def choose_suit(hand: Iterable[Card]) -> Suit:
    """
    Pick the suit held most often in a hand.

    Suits are compared in enum order and an equal count replaces the current
    best, so ties go to the later suit.

    >>> from crazyeights.common.card import Card, Rank, Suit
    >>> choose_suit([Card(Suit.HEARTS, Rank.THREE), Card(Suit.DIAMONDS, Rank.THREE),
    ...              Card(Suit.DIAMONDS, Rank.FIVE)])
    <Suit.DIAMONDS: 'diamonds'>
    """
    counts = Counter(card.suit for card in hand)
    best = None
    for suit in Suit:
        if best is None or counts[suit] >= counts[best]:
            best = suit
    return best


def choose_move(state: GameState) -> Move:
    """
    Choose the opponent's move for the current state.

    Args:
        state: Current game state; the opponent is assumed to be on turn

    Returns:
        The move to make
    """
    hand = state.opponent_hand
    candidates = playable_cards(hand, state.active_suit, state.active_rank)
    if not candidates:
        return Move(MoveKind.DRAW)

    card = next((c for c in candidates if not is_wild(c.rank)), candidates[0])
    declared = None
    if is_wild(card.rank):
        remaining = [c for c in hand if c.id != card.id]
        if remaining:
            declared = choose_suit(remaining)
    return Move(MoveKind.PLAY, card=card, declared_suit=declared)


def take_opponent_turn(state: GameState) -> GameState:
    """
    Let the opponent make its whole move.

    A wild card and its suit declaration happen in the same call.

    Args:
        state: Current game state

    Returns:
        New game state, or the same state when it is not the opponent's turn
    """
    if state.turn is not Side.OPPONENT or state.phase != Phase.IN_PROGRESS:
        return state

    move = choose_move(state)
    if move.kind is MoveKind.DRAW:
        return StateTransitionEngine.draw(state, Side.OPPONENT)

    new_state = StateTransitionEngine.play_card(state, Side.OPPONENT, move.card.id)
    if new_state.phase == Phase.AWAITING_SUIT_DECLARATION:
        new_state = StateTransitionEngine.declare_suit(
            new_state, move.declared_suit, Side.OPPONENT
        )
    return new_state
