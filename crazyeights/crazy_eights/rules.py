"""
Legality rules for Crazy Eights.

`is_playable` is the only legality check in the game; both the human's moves
and the opponent policy go through it.
"""

from typing import Iterable, List

from crazyeights.common.card import Card, Rank, Suit
from crazyeights.crazy_eights.constants import is_wild


def is_playable(card: Card, active_suit: Suit, active_rank: Rank) -> bool:
    """
    Check whether a card may be played on the current table.

    A wild card is always playable. Any other card must match the active suit
    or the active rank.

    >>> from crazyeights.common.card import Card, Rank, Suit
    >>> is_playable(Card(Suit.CLUBS, Rank.SEVEN), Suit.HEARTS, Rank.SEVEN)
    True
    """
    if is_wild(card.rank):
        return True
    return card.suit == active_suit or card.rank == active_rank


def playable_cards(
    hand: Iterable[Card], active_suit: Suit, active_rank: Rank
) -> List[Card]:
    """Get the playable cards of a hand, in hand order."""
    return [card for card in hand if is_playable(card, active_suit, active_rank)]


def has_playable_card(
    hand: Iterable[Card], active_suit: Suit, active_rank: Rank
) -> bool:
    return any(is_playable(card, active_suit, active_rank) for card in hand)
