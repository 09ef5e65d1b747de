"""Crazy Eights constants."""

from crazyeights.common.card import Rank

# The rank that is always playable and lets the player name a new suit
WILD_RANK = Rank.EIGHT

HAND_SIZE = 8
DECK_SIZE = 52


def is_wild(rank: Rank) -> bool:
    """Check whether a rank is the wild rank."""
    return rank == WILD_RANK
