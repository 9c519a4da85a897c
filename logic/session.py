"""
Game session for Three-Move TicTacToe.

Owns the current BoardState and is the only thing front ends talk to:
- new_game() starts a two-player or vs-bot game
- submit_move() handles a human tap on a cell
- request_bot_move() asks the bot for its cell
- a GameListener receives render events

Bot moves are delayed through a Scheduler so the bot looks like it is
thinking. Starting a new game cancels a pending bot move.
"""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from .bot_player import BotConfig, BotStrategy, Difficulty, create_bot
from .config import GameConfig
from .game_state import BoardState, Cell, Line, Move, Player
from .move_engine import MoveEngine, MoveError

logger = logging.getLogger(__name__)


class StatusKind(Enum):
    """What the status line should say."""
    X_TO_PLACE = 1
    X_TO_MOVE_OLDEST = 2
    O_TO_PLACE = 3
    O_TO_MOVE_OLDEST = 4
    BOT_THINKING = 5
    X_WINS = 6
    O_WINS = 7
    BOT_WINS = 8

    @property
    def text(self) -> str:
        return GameConfig.STATUS_TEXT[self.name]


@dataclass(frozen=True)
class GameMode:
    """Two players, or one human against a bot (bot is None for two players)."""
    bot: Optional[BotConfig] = None

    @classmethod
    def two_player(cls) -> "GameMode":
        return cls()

    @classmethod
    def vs_bot(cls, difficulty: Difficulty, bot_marker: Player = Player.O) -> "GameMode":
        return cls(BotConfig(difficulty=difficulty, marker=bot_marker))

    @property
    def is_vs_bot(self) -> bool:
        return self.bot is not None


class GameListener:
    """
    Receives render events from a GameSession.
    Override the ones you care about; the defaults do nothing.
    """

    def on_cell_updated(self, index: int, cell: Cell):
        pass

    def on_status_changed(self, status: StatusKind):
        pass

    def on_counts_changed(self, count_x: int, count_o: int):
        pass

    def on_game_over(self, winner: Player, line: Line):
        pass


class Scheduler(ABC):
    """Runs callbacks later. Handles are opaque to the session."""

    @abstractmethod
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        ...

    @abstractmethod
    def cancel(self, handle: Any):
        ...


class ImmediateScheduler(Scheduler):
    """Runs callbacks right away, ignoring the delay. Used by the console and tests."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        callback()
        return None

    def cancel(self, handle: Any):
        pass


class GameSession:
    """
    A running game plus its bot, listener and scheduler.

    Every new game bumps `generation`; a scheduled bot move remembers
    the generation it was made for and is dropped if it no longer matches.
    """

    def __init__(
        self,
        listener: Optional[GameListener] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        think_delay_ms: int = GameConfig.BOT_THINK_DELAY_MS,
    ):
        self.listener = listener or GameListener()
        self.scheduler = scheduler or ImmediateScheduler()
        self.rng = rng if rng is not None else random.Random()
        self.think_delay_ms = think_delay_ms
        self.engine = MoveEngine()

        self.mode = GameMode.two_player()
        self.state = BoardState()
        self.bot: Optional[BotStrategy] = None
        self.generation = 0
        self._pending_bot_move: Any = None

    # ==================== PUBLIC API ====================

    def new_game(self, mode: Optional[GameMode] = None) -> BoardState:
        """
        Start a fresh game, dropping the current one.

        Args:
            mode: Two players or vs bot. Defaults to two players.

        Returns:
            The new, empty board state.
        """
        self.cancel_pending_bot_move()
        self.generation += 1

        self.mode = mode or GameMode.two_player()
        state = self.state = BoardState()
        self.bot = create_bot(self.mode.bot, self.rng) if self.mode.is_vs_bot else None

        if self.mode.is_vs_bot:
            logger.info(
                "New game vs %s bot playing %s",
                self.mode.bot.difficulty.name, self.mode.bot.marker.value,
            )
        else:
            logger.info("New two-player game")

        for index in range(GameConfig.NUM_CELLS):
            self.listener.on_cell_updated(index, None)
        self.listener.on_counts_changed(0, 0)
        self.listener.on_status_changed(self.status())

        # Bot playing X moves first
        self._schedule_bot_move_if_needed()
        return state

    def submit_move(self, index: int) -> bool:
        """
        Handle a human tap on a cell.

        Returns:
            True if the move was applied, False if it was rejected
            (bot's turn, game over, bad or occupied cell).
        """
        if self.is_bot_turn():
            logger.warning("Ignoring tap on %d: it's the bot's turn", index)
            return False
        return self._play(index)

    def request_bot_move(self) -> int:
        """
        Ask the bot which cell it wants, without playing it.

        Raises:
            RuntimeError: It is not the bot's turn.
            NoLegalMoveError: No empty cell (broken game state).
        """
        if not self.is_bot_turn():
            raise RuntimeError("Bot move requested when it is not the bot's turn")
        return self.bot.choose_move(
            self.state.cells, self.state.histories, self.mode.bot.marker
        )

    def is_bot_turn(self) -> bool:
        """True if the game is running and the bot is to move."""
        return (
            self.mode.is_vs_bot
            and self.state.active
            and self.state.current_player == self.mode.bot.marker
        )

    def has_pending_bot_move(self) -> bool:
        return self._pending_bot_move is not None

    def cancel_pending_bot_move(self):
        """Drop a scheduled bot move, if any."""
        if self._pending_bot_move is not None:
            self.scheduler.cancel(self._pending_bot_move)
            logger.debug("Cancelled pending bot move")
            self._pending_bot_move = None

    def status(self) -> StatusKind:
        """Status for the current state."""
        state = self.state

        if not state.active:
            if self.mode.is_vs_bot and state.winner == self.mode.bot.marker:
                return StatusKind.BOT_WINS
            return StatusKind.X_WINS if state.winner == Player.X else StatusKind.O_WINS

        if self.is_bot_turn():
            return StatusKind.BOT_THINKING

        if state.current_player == Player.X:
            return StatusKind.X_TO_MOVE_OLDEST if state.will_evict() else StatusKind.X_TO_PLACE
        return StatusKind.O_TO_MOVE_OLDEST if state.will_evict() else StatusKind.O_TO_PLACE

    # ==================== INTERNALS ====================

    def _play(self, index: int) -> bool:
        """Apply a move for whoever is to play and notify the listener."""
        try:
            self.state = self.engine.apply_move(self.state, index)
        except MoveError as e:
            logger.warning("Move rejected: %s", e)
            return False

        self._publish(self.state.moves[-1])
        self._schedule_bot_move_if_needed()
        return True

    def _publish(self, move: Move):
        """Send the render events for a move that was just applied."""
        state = self.state

        if move.evicted is not None:
            self.listener.on_cell_updated(move.evicted, None)
        self.listener.on_cell_updated(move.index, move.player)
        self.listener.on_counts_changed(
            state.piece_count(Player.X), state.piece_count(Player.O)
        )
        self.listener.on_status_changed(self.status())

        if not state.active:
            self.listener.on_game_over(state.winner, state.winning_line)

    def _schedule_bot_move_if_needed(self):
        if not self.is_bot_turn():
            return

        generation = self.generation
        self._pending_bot_move = self.scheduler.schedule(
            self.think_delay_ms,
            lambda: self._run_scheduled_bot_move(generation),
        )

    def _run_scheduled_bot_move(self, generation: int):
        if generation != self.generation:
            logger.debug("Dropping bot move from an old game")
            return

        self._pending_bot_move = None
        if not self.is_bot_turn():
            return

        index = self.request_bot_move()
        self._play(index)
