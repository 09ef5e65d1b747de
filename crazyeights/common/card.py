"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Hearts, Diamonds, Clubs, and Spades. The enum order is the fixed
suit order used for tie-breaking.

- `Rank`: An enum representing the thirteen ranks of a standard deck of playing
cards: Ace through King. The eight is the wild rank in Crazy Eights.

- `Card`: A class representing a playing card. A card has an id, a suit and a
rank. The id tracks one physical card across state snapshots; equality is by
value.

This module is part of the `crazyeights` package.
"""

import itertools
from enum import Enum, unique

_card_ids = itertools.count(1)


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        """The suit glyph used for display."""
        return _SUIT_SYMBOLS[self]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    @classmethod
    def parse(cls, text: str) -> "Suit":
        """
        Parse a suit from its name, its initial or its symbol.

        >>> Suit.parse("d")
        <Suit.DIAMONDS: 'diamonds'>
        """
        if isinstance(text, Suit):
            return text
        key = str(text).strip().lower()
        for suit in cls:
            if key in (suit.value, suit.value[0], suit.symbol):
                return suit
        raise ValueError(f"Invalid suit: {text!r}")

    def __str__(self) -> str:
        return self.symbol


_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.
    """

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @property
    def rank_str(self):
        """A string representation of the rank."""
        return self.value

    def __str__(self) -> str:
        return self.rank_str


class Card:
    """
    Class representing a playing card. This class is a member of a card deck.

    >>> card = Card(Suit.HEARTS, Rank.SEVEN)
    >>> print(card)
    7♥
    """

    __slots__ = ("id", "suit", "rank")

    def __init__(self, suit: Suit, rank: Rank, card_id: str = None):
        """
        Initialize a Card instance.

        :param suit: Suit of the card (one of the Suit enums)
        :param rank: Rank of the card (one of the Rank enums)
        :param card_id: Identifier for this physical card. A fresh one is
                        generated when omitted.
        """
        if not isinstance(suit, Suit):
            raise TypeError(f"Invalid suit: {suit}")
        if not isinstance(rank, Rank):
            raise TypeError(f"Invalid rank: {rank}")
        if card_id is None:
            card_id = f"{rank.value}-{suit.value}-{next(_card_ids)}"
        object.__setattr__(self, "id", card_id)
        object.__setattr__(self, "suit", suit)
        object.__setattr__(self, "rank", rank)

    def __setattr__(self, name, value):
        raise AttributeError(f"Card is immutable, cannot set {name!r}")

    def __eq__(self, other):
        """
        Checks if this card is equal to another card.

        :param other: The other card to compare to.
        :return: True if the cards have the same rank and suit, False otherwise.
        """
        if isinstance(other, Card):
            return self.rank == other.rank and self.suit == other.suit
        return NotImplemented

    def __hash__(self):
        return hash((self.suit, self.rank))

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"{self.rank.rank_str}{self.suit.symbol}"
