"""
State transition functions for the Crazy Eights card game.

This module provides pure functions for transitioning between game states,
without modifying the original state objects. A rejected intent returns the
very same state object, so callers can detect a no-op with `is`.
"""

from typing import Optional, Sequence, Union
from dataclasses import replace
import logging
import random
import time

from crazyeights.common.card import Card, Suit
from crazyeights.common.deck import create_deck
from crazyeights.events import (
    ActionRejected,
    CardDrawn,
    CardPlayed,
    EngineEventType,
    EventBus,
    GameEnded,
    GameStarted,
    GameWon,
    SuitDeclared,
    TurnPassed,
)
from crazyeights.crazy_eights.constants import HAND_SIZE, WILD_RANK, is_wild
from crazyeights.crazy_eights.rules import is_playable
from crazyeights.crazy_eights.state import GameState, Phase, Side

logger = logging.getLogger(__name__)


def _actor(side: Side) -> str:
    return "You" if side is Side.PLAYER else "Opponent"


def _advance(state: GameState, **changes) -> GameState:
    """Copy a state with changes; the copy is stamped with the current time."""
    return replace(state, timestamp=time.time(), **changes)


class StateTransitionEngine:
    """
    Pure functions for state transitions in Crazy Eights.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def deal_new_game(
        deck: Optional[Sequence[Card]] = None, rng: Optional[random.Random] = None
    ) -> GameState:
        """
        Deal a new game.

        The first eight cards go to the player, the next eight to the
        opponent. The first non-wild card of the remainder starts the
        discard pile, so a game never opens with a suit declaration.

        Args:
            deck: Already shuffled cards to deal from; a fresh deck when None
            rng: Random source for the fresh deck

        Returns:
            New game state with the player to move
        """
        cards = list(deck) if deck is not None else list(create_deck(rng))

        player_hand = tuple(cards[:HAND_SIZE])
        opponent_hand = tuple(cards[HAND_SIZE : 2 * HAND_SIZE])
        remaining = cards[2 * HAND_SIZE :]

        starter_index = next(
            (i for i, card in enumerate(remaining) if not is_wild(card.rank)), None
        )
        if starter_index is None:
            raise ValueError("Deck has no non-wild card to start the discard pile")
        starter = remaining.pop(starter_index)

        new_state = GameState(
            draw_pile=tuple(remaining),
            player_hand=player_hand,
            opponent_hand=opponent_hand,
            discard_pile=(starter,),
            active_suit=starter.suit,
            active_rank=starter.rank,
            turn=Side.PLAYER,
            phase=Phase.IN_PROGRESS,
            last_event="Game started. Your turn.",
        )

        logger.info("Dealt game %s, starter card %s", new_state.id, starter)

        EventBus.get_instance().emit(
            EngineEventType.GAME_STARTED,
            GameStarted(
                game_id=new_state.id,
                starter_card=str(starter),
                draw_pile_size=len(new_state.draw_pile),
                timestamp=new_state.timestamp,
            ),
        )

        return new_state

    @staticmethod
    def draw(state: GameState, side: Side) -> GameState:
        """
        Draw a card for a side. Drawing always ends the turn.

        Args:
            state: Current game state
            side: Side asking to draw

        Returns:
            New game state, or the same state if the draw is not allowed
        """
        reason = StateTransitionEngine._check_turn(state, side)
        if reason:
            return StateTransitionEngine._reject(state, side, "draw", reason)

        event_bus = EventBus.get_instance()

        if not state.draw_pile:
            message = (
                "Draw pile is empty, you pass"
                if side is Side.PLAYER
                else "Draw pile is empty, opponent passes"
            )
            new_state = _advance(state, turn=side.other, last_event=message)
            event_bus.emit(
                EngineEventType.TURN_PASSED,
                TurnPassed(
                    game_id=state.id,
                    side=side.value,
                    reason="draw_pile_empty",
                    timestamp=new_state.timestamp,
                ),
            )
            return new_state

        drawn = state.draw_pile[-1]
        new_hand = state.hand_for(side) + (drawn,)
        message = (
            f"You drew {drawn}" if side is Side.PLAYER else "Opponent drew a card"
        )

        new_state = StateTransitionEngine._with_hand(
            state,
            side,
            new_hand,
            draw_pile=state.draw_pile[:-1],
            turn=side.other,
            last_event=message,
        )

        event_bus.emit(
            EngineEventType.CARD_DRAWN,
            CardDrawn(
                game_id=state.id,
                side=side.value,
                card_id=drawn.id,
                draw_pile_size=len(new_state.draw_pile),
                timestamp=new_state.timestamp,
            ),
        )

        return new_state

    @staticmethod
    def play_card(state: GameState, side: Side, card_id: str) -> GameState:
        """
        Play a card from a side's hand onto the discard pile.

        Args:
            state: Current game state
            side: Side playing the card
            card_id: Id of the card to play

        Returns:
            New game state, or the same state if the play is not allowed
        """
        reason = StateTransitionEngine._check_turn(state, side)
        if reason:
            return StateTransitionEngine._reject(state, side, "play", reason)

        hand = state.hand_for(side)
        card = next((c for c in hand if c.id == card_id), None)
        if card is None:
            return StateTransitionEngine._reject(
                state, side, "play", "card_not_in_hand"
            )
        if not is_playable(card, state.active_suit, state.active_rank):
            return StateTransitionEngine._reject(state, side, "play", "illegal_card")

        new_hand = tuple(c for c in hand if c.id != card_id)
        new_discard = (card,) + state.discard_pile

        if not new_hand:
            phase = Phase.won_by(side)
            new_state = StateTransitionEngine._with_hand(
                state,
                side,
                new_hand,
                discard_pile=new_discard,
                active_suit=state.active_suit if is_wild(card.rank) else card.suit,
                active_rank=state.active_rank if is_wild(card.rank) else card.rank,
                phase=phase,
                last_event="You won!" if side is Side.PLAYER else "Opponent won!",
            )
        elif is_wild(card.rank):
            # Turn stays with the side that must now name a suit
            new_state = StateTransitionEngine._with_hand(
                state,
                side,
                new_hand,
                discard_pile=new_discard,
                phase=Phase.AWAITING_SUIT_DECLARATION,
                last_event=f"{_actor(side)} played {card}, choosing a suit",
            )
        else:
            new_state = StateTransitionEngine._with_hand(
                state,
                side,
                new_hand,
                discard_pile=new_discard,
                active_suit=card.suit,
                active_rank=card.rank,
                turn=side.other,
                last_event=f"{_actor(side)} played {card}",
            )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.CARD_PLAYED,
            CardPlayed(
                game_id=state.id,
                side=side.value,
                card=str(card),
                card_id=card.id,
                wild=is_wild(card.rank),
                cards_left=len(new_hand),
                timestamp=new_state.timestamp,
            ),
        )

        if new_state.game_ended:
            logger.info("Game %s won by %s", state.id, side.value)
            won_event = (
                EngineEventType.PLAYER_WON
                if side is Side.PLAYER
                else EngineEventType.OPPONENT_WON
            )
            event_bus.emit(
                won_event,
                GameWon(
                    game_id=state.id, winner=side.value, timestamp=new_state.timestamp
                ),
            )
            event_bus.emit(
                EngineEventType.GAME_ENDED,
                GameEnded(
                    game_id=state.id,
                    phase=new_state.phase.value,
                    timestamp=new_state.timestamp,
                ),
            )

        return new_state

    @staticmethod
    def declare_suit(
        state: GameState, suit: Union[Suit, str], side: Optional[Side] = None
    ) -> GameState:
        """
        Name the suit to follow after a wild card.

        Args:
            state: Current game state
            suit: Suit being declared, or its name, initial or symbol
            side: Side declaring; when given it must be the side that played
                  the wild card

        Returns:
            New game state with the turn passed, or the same state if no
            declaration is pending or the suit is unknown

        Raises:
            TypeError: suit is neither a Suit nor a string
        """
        actor = side or state.turn
        if state.game_ended:
            return StateTransitionEngine._reject(
                state, actor, "declare_suit", "game_over"
            )
        if state.phase != Phase.AWAITING_SUIT_DECLARATION:
            return StateTransitionEngine._reject(
                state, actor, "declare_suit", "wrong_phase"
            )
        if side is not None and side is not state.turn:
            return StateTransitionEngine._reject(
                state, actor, "declare_suit", "not_your_turn"
            )
        if not isinstance(suit, (Suit, str)):
            raise TypeError(f"Invalid suit: {suit!r}")
        try:
            suit = Suit.parse(suit)
        except ValueError:
            return StateTransitionEngine._reject(
                state, actor, "declare_suit", "invalid_suit"
            )

        if state.turn is Side.PLAYER:
            message = f"You chose {suit.symbol}"
        else:
            message = f"Opponent played {state.top_discard} and chose {suit.symbol}"

        new_state = _advance(
            state,
            active_suit=suit,
            active_rank=WILD_RANK,
            phase=Phase.IN_PROGRESS,
            turn=state.turn.other,
            last_event=message,
        )

        EventBus.get_instance().emit(
            EngineEventType.SUIT_DECLARED,
            SuitDeclared(
                game_id=state.id,
                side=state.turn.value,
                suit=suit.value,
                timestamp=new_state.timestamp,
            ),
        )

        return new_state

    @staticmethod
    def _check_turn(state: GameState, side: Side) -> Optional[str]:
        """Return the rejection reason for a draw or play, or None."""
        if state.game_ended:
            return "game_over"
        if state.phase != Phase.IN_PROGRESS:
            return "wrong_phase"
        if state.turn is not side:
            return "not_your_turn"
        return None

    @staticmethod
    def _with_hand(
        state: GameState, side: Side, hand, **changes
    ) -> GameState:
        if side is Side.PLAYER:
            return _advance(state, player_hand=hand, **changes)
        return _advance(state, opponent_hand=hand, **changes)

    @staticmethod
    def _reject(state: GameState, side: Side, action: str, reason: str) -> GameState:
        logger.debug("Rejected %s by %s: %s", action, side.value, reason)
        EventBus.get_instance().emit(
            EngineEventType.ACTION_REJECTED,
            ActionRejected(
                game_id=state.id, side=side.value, action=action, reason=reason
            ),
        )
        return state
