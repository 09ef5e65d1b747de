"""
This module builds and shuffles the 52-card deck used by Crazy Eights.

Decks are plain tuples of `Card` objects. Game states never share a mutable
list, so every helper here returns a new sequence.

>>> deck = create_deck()
>>> len(deck)
52
"""

import random
from typing import Optional, Sequence, Tuple

from crazyeights.common.card import Card, Rank, Suit


def ordered_deck() -> Tuple[Card, ...]:
    """
    Construct a deck with every suit and rank combination in enum order.

    Each call tags the cards with fresh ids.

    :return: A tuple of 52 Card instances.
    """
    return tuple(Card(suit, rank) for suit in Suit for rank in Rank)


def shuffle(
    cards: Sequence[Card], rng: Optional[random.Random] = None
) -> Tuple[Card, ...]:
    """
    Return the cards in a uniformly random order.

    Fisher-Yates: walk from the last index down to 1 and swap each position
    with one drawn uniformly from [0, i]. The input sequence is not touched.

    :param cards: Cards to shuffle.
    :param rng: Random source; the module-level generator when omitted.
    :return: A new tuple holding the same cards.
    >>> cards = ordered_deck()
    >>> sorted(map(str, shuffle(cards))) == sorted(map(str, cards))
    True
    """
    rng = rng or random
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return tuple(shuffled)


def create_deck(rng: Optional[random.Random] = None) -> Tuple[Card, ...]:
    """
    Create a freshly shuffled 52-card deck.

    :param rng: Random source used for the shuffle.
    :return: A tuple of 52 unique cards in random order.
    """
    return shuffle(ordered_deck(), rng)
