"""
Main entry point for Three-Move TicTacToe.

Each player holds at most 3 pieces; placing a 4th removes that
player's oldest piece. Play against a friend or against a bot.

Run this script to open the game window, or pass --no-ui to play
in the console.
"""

import argparse
import logging
import random
import time
from typing import Any, Callable, Optional

from logic.bot_player import Difficulty
from logic.config import GameConfig
from logic.game_state import Cell, Line, Player
from logic.session import GameListener, GameMode, GameSession, Scheduler, StatusKind

logger = logging.getLogger(__name__)


class SleepScheduler(Scheduler):
    """Waits the thinking delay, then runs the callback. Console only."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        time.sleep(delay_ms / 1000.0)
        callback()
        return None

    def cancel(self, handle: Any):
        pass


class ConsoleGame(GameListener):
    """
    Console front end.

    Game flow:
    1. Print the board and whose turn it is
    2. Read a cell index (0-8) from the human
    3. If playing a bot, the bot answers after a short pause
    4. Repeat until someone wins
    """

    def __init__(self, mode: GameMode, seed: Optional[int] = None, delay_ms: int = GameConfig.BOT_THINK_DELAY_MS):
        self.mode = mode
        self.session = GameSession(
            listener=self,
            scheduler=SleepScheduler(),
            rng=random.Random(seed),
            think_delay_ms=delay_ms,
        )
        self.is_running = False

    def start(self):
        """Start the game."""
        print("\n" + "="*60)
        print("   Three-Move TicTacToe")
        if self.mode.is_vs_bot:
            bot = self.mode.bot
            print(f"   Bot: {bot.difficulty.name} playing {bot.marker.value}")
            print(f"   You play: {bot.marker.opposite().value}")
        else:
            print("   Two players")
        print("="*60)
        print("Enter a cell number (0-8), 'r' to restart, 'q' to quit\n")

        self.is_running = True
        self.session.new_game(self.mode)
        self._game_loop()

    def _game_loop(self):
        """Main game loop."""
        while self.is_running:
            state = self.session.state
            state.print_board()

            if not state.active:
                answer = input("\nPlay again? [y/N] ").strip().lower()
                if answer == "y":
                    self.session.new_game(self.mode)
                    continue
                break

            raw = input(f"\n{state.current_player.value} > ").strip().lower()
            if raw == "q":
                print("\nGame quit by user.")
                self.is_running = False
            elif raw == "r":
                print("\nRestarting game...")
                self.session.new_game(self.mode)
            elif raw.isdigit():
                if not self.session.submit_move(int(raw)):
                    print(f"Move {raw} not allowed, try another cell.")
            else:
                print("Please enter a number from 0 to 8.")

    # ==================== GameListener ====================

    def on_cell_updated(self, index: int, cell: Cell):
        if cell is None:
            logger.debug("Cell %d cleared", index)
        elif self.session.mode.is_vs_bot and cell == self.session.mode.bot.marker:
            print(f">>> Bot plays {index}")

    def on_status_changed(self, status: StatusKind):
        if status == StatusKind.BOT_THINKING:
            print(f">>> {status.text}")

    def on_game_over(self, winner: Player, line: Line):
        print("\n" + "="*60)
        print(f"   GAME OVER! {self.session.status().text} Line: {line}")
        print("="*60)


def parse_mode(name: str, play_as: str) -> GameMode:
    """Build the game mode from the command line names."""
    if name == "two-player":
        return GameMode.two_player()
    human = Player(play_as)
    return GameMode.vs_bot(Difficulty[name.upper()], human.opposite())


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Three-Move TicTacToe")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--mode",
        choices=["two-player", "easy", "medium", "hard"],
        default="medium",
        help="Console mode opponent (default: medium bot)"
    )
    parser.add_argument(
        "--play-as",
        choices=["X", "O"],
        default="X",
        help="Your marker against a bot; X moves first"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the bot's random choices"
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=GameConfig.BOT_THINK_DELAY_MS,
        help="Bot thinking pause in milliseconds"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        ui = TicTacToeUI(think_delay_ms=args.delay_ms, rng=random.Random(args.seed))
        ui.run()
        return

    game = ConsoleGame(parse_mode(args.mode, args.play_as), seed=args.seed, delay_ms=args.delay_ms)

    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
