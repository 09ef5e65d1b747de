"""
Play Crazy Eights against the computer in a terminal.

    crazyeights --seed 7 --delay 0.5
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, Optional

from crazyeights.adapters import CLIAdapter
from crazyeights.common.io_interface import ConsoleIOInterface, IOInterface
from crazyeights.crazy_eights.state import Side
from crazyeights.engine import CrazyEightsEngine

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Play Crazy Eights against the computer."
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        default=None,
        help="seed for reproducible deals (default: random)",
    )
    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        default=1.5,
        help="seconds the opponent waits before moving (default: 1.5)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _wants_another_game(io_interface: IOInterface) -> bool:
    try:
        answer = io_interface.input("Play again? [y/N]: ")
    except (EOFError, KeyboardInterrupt):
        return False
    return answer.strip().lower() in ("y", "yes")


async def play(config: Dict[str, Any], io_interface: Optional[IOInterface] = None) -> int:
    """
    Run interactive games until the player quits.

    Args:
        config: Engine configuration
        io_interface: Console to play on

    Returns:
        Number of games the human player won
    """
    io_interface = io_interface or ConsoleIOInterface()
    adapter = CLIAdapter(io_interface)
    engine = CrazyEightsEngine(adapter, config)
    wins = 0

    await engine.initialize()
    try:
        await engine.start_new_game()
        while True:
            state = engine.state

            if state.game_ended or state.is_stalemate:
                if state.winner is Side.PLAYER:
                    wins += 1
                if state.is_stalemate:
                    io_interface.output("No one can move and the draw pile is empty.")
                if _wants_another_game(io_interface):
                    await engine.start_new_game()
                    continue
                break

            if state.turn is Side.OPPONENT:
                if engine.opponent_move_pending:
                    await engine.wait_for_opponent()
                else:
                    await engine.play_opponent_turn()
                continue

            intent = await adapter.request_player_action(engine.get_valid_actions())
            if intent is None:
                break
            intent = dict(intent)
            await engine.execute_player_action(intent.pop("action"), **intent)
    finally:
        await engine.shutdown()

    return wins


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    config = {"seed": args.seed, "opponent_delay": args.delay}
    logger.info("Starting with config %s", config)

    wins = asyncio.run(play(config))
    print(f"Thanks for playing. Games won: {wins}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
