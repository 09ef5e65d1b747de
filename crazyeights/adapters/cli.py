"""
Command-line interface adapter for the Crazy Eights engine.

This module provides an adapter for console-based play: it draws the table as
text and turns typed commands into intents for the engine.
"""

from typing import Dict, Any, Optional, Union
from enum import Enum

from crazyeights.adapters.base import PlatformAdapter
from crazyeights.common.card import Suit
from crazyeights.common.io_interface import IOInterface, ConsoleIOInterface

_REJECTION_MESSAGES = {
    "not_your_turn": "It's not your turn.",
    "illegal_card": "That card doesn't match the suit or rank.",
    "card_not_in_hand": "You don't hold that card.",
    "game_over": "The game is over.",
    "wrong_phase": "You can't do that right now.",
    "invalid_suit": "That is not a suit.",
}

RULES = (
    "Rules of Crazy Eights:",
    "  - Each player starts with 8 cards; empty your hand first to win.",
    "  - Play a card matching the suit or the rank of the top discard.",
    "  - An 8 is wild: play it on anything, then name the suit to follow.",
    "  - Drawing a card ends your turn. With an empty draw pile you pass.",
    "Commands: a hand number plays that card, 'd' draws, '?' shows these",
    "rules, 'q' quits.",
)


class CLIAdapter(PlatformAdapter):
    """
    Command-line interface adapter for the Crazy Eights engine.

    This adapter uses the standard console for input/output, providing a
    simple text-based interface to the game.

    Commands: a hand number plays that card, ``d`` draws, ``?`` prints the
    rules, ``q`` quits, and while a suit must be named any suit name,
    initial or symbol declares it.
    """

    def __init__(self, io_interface: Optional[IOInterface] = None):
        """
        Initialize the CLI adapter.

        Args:
            io_interface: Optional IOInterface to use for I/O. If None, a
                          console IOInterface is used.
        """
        self.io_interface = io_interface or ConsoleIOInterface()
        self._last_state: Dict[str, Any] = {}

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current game state to the console.

        Args:
            state: The current game state
        """
        self._last_state = state
        out = self.io_interface.output

        out("\n=== Crazy Eights ===")
        out(f"Opponent: {state.get('opponent_card_count', 0)} cards")

        top = state.get("top_discard") or "--"
        line = f"Draw pile: {state.get('draw_pile_size', 0)}   Discard: {top}"
        if state.get("suit_declared"):
            line += f"   Suit: {state.get('active_suit_symbol')}"
        out(line)

        out("Your hand:")
        for i, entry in enumerate(state.get("player_hand", [])):
            marker = "*" if entry.get("playable") else " "
            out(f" {marker}{i + 1:>2}: {entry['card']}")
        if state.get("must_draw"):
            out("No playable card, draw ('d').")

        if state.get("last_event"):
            out(f"> {state['last_event']}")
        out("====================")

    async def request_player_action(
        self, valid_actions: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Request an intent from the player via the console.

        Args:
            valid_actions: The actions currently open to the player

        Returns:
            The chosen intent, or None if the player quits
        """
        hand = self._last_state.get("player_hand", [])

        while True:
            if valid_actions.get("declare_suit"):
                prompt = "Choose a suit (hearts/diamonds/clubs/spades): "
            else:
                prompt = "Play a card number, 'd' to draw, '?' for rules, 'q' to quit: "

            try:
                choice = self.io_interface.input(prompt).strip().lower()
            except (EOFError, KeyboardInterrupt):
                return None

            if choice in ("q", "quit"):
                return None

            if choice in ("?", "help"):
                for line in RULES:
                    self.io_interface.output(line)
                continue

            if valid_actions.get("declare_suit"):
                try:
                    suit = Suit.parse(choice)
                except ValueError:
                    self.io_interface.output("Unknown suit. Please try again.")
                    continue
                return {"action": "declare_suit", "suit": suit.value}

            if choice in ("d", "draw"):
                return {"action": "draw"}

            if choice.isdigit() and 1 <= int(choice) <= len(hand):
                return {"action": "play", "card_id": hand[int(choice) - 1]["id"]}

            self.io_interface.output("Invalid choice. Please try again.")

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the user of a game event via the console.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        message = self._format_event_message(event_type, data)
        if message:
            self.io_interface.output(message)

    def _format_event_message(
        self, event_type: str, data: Dict[str, Any]
    ) -> Optional[str]:
        """
        Format an event message based on the event type.

        Most events are already described by the state's last event line;
        only rejections and the opponent's deliberation need extra text.
        """
        if event_type == "ACTION_REJECTED" and data.get("side") == "player":
            return _REJECTION_MESSAGES.get(data.get("reason"), "Not allowed.")

        elif event_type == "OPPONENT_THINKING":
            return "Opponent is thinking..."

        elif event_type == "OPPONENT_WON":
            return "The opponent emptied its hand. Better luck next time."

        return None

    async def celebrate(self, data: Dict[str, Any]) -> None:
        """Print a victory banner."""
        banner = " ".join([suit.symbol for suit in Suit] * 3)
        self.io_interface.output(banner)
        self.io_interface.output("   YOU WIN! Every card played.")
        self.io_interface.output(banner)
