"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures and helpers shared by the test tree.
"""

import pytest

from crazyeights.common.card import Card, Rank, Suit
from crazyeights.events import EventBus


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def recorded_events():
    """Collect every event emitted on the bus as (event_type, data) pairs."""
    events = []
    EventBus.get_instance().on_any(events.append)
    return events


@pytest.fixture
def card():
    """Return a builder for cards in short notation such as '7H', '10S' or 'QD'."""

    def build(text: str) -> Card:
        rank, suit = text[:-1], text[-1]
        return Card(Suit.parse(suit), Rank(rank))

    return build
