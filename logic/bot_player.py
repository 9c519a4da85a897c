"""
Bot opponent for Three-Move TicTacToe.

Three difficulty levels, all heuristic (no game-tree search):
- EASY:   random empty cell
- MEDIUM: take a win, block a loss, then center, corners, anything
- HARD:   like MEDIUM, but once it holds 3 pieces it scores every
          candidate with its oldest piece already removed
"""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Mapping, Optional, Sequence

import numpy as np

from .config import GameConfig
from .game_state import Cell, Player
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Bot difficulty levels."""
    EASY = 1      # Random moves
    MEDIUM = 2    # Win, block, center, corners
    HARD = 3      # Medium plus eviction-aware scoring


@dataclass(frozen=True)
class BotConfig:
    """Bot settings, fixed for the whole game."""
    difficulty: Difficulty = Difficulty.MEDIUM
    marker: Player = Player.O


class NoLegalMoveError(RuntimeError):
    """The bot was asked to move on a board without empty cells."""


# Winning lines and corners as index arrays for vectorized scoring
_LINES = np.array(WinChecker.WINNING_LINES)
_CORNERS = np.array(GameConfig.CORNERS)

_EMPTY, _OWN, _OPPONENT = 0, 1, 2


def _encode(cells: Sequence[Cell], bot: Player, opponent: Player) -> np.ndarray:
    """Turn the cells into an int array from the bot's point of view."""
    codes = {None: _EMPTY, bot: _OWN, opponent: _OPPONENT}
    return np.array([codes[cell] for cell in cells], dtype=np.int8)


def score_board(cells: Sequence[Cell], bot: Player, opponent: Player) -> int:
    """
    Static evaluation of a board for the bot.

    Per line:  2 bot + 1 empty      -> +10
               1 bot + 2 empty      -> +1
               2 opponent + 1 empty -> +8
    Then +5 for holding the center and +3 per corner held.

    No lookahead: it only measures how close each line is to completion
    plus a positional preference.
    """
    board = _encode(cells, bot, opponent)
    lines = board[_LINES]  # shape (8, 3)

    own = np.count_nonzero(lines == _OWN, axis=1)
    theirs = np.count_nonzero(lines == _OPPONENT, axis=1)
    empty = np.count_nonzero(lines == _EMPTY, axis=1)

    score = (
        GameConfig.SCORE_TWO_OWN * np.count_nonzero((own == 2) & (empty == 1))
        + GameConfig.SCORE_ONE_OWN * np.count_nonzero((own == 1) & (empty == 2))
        + GameConfig.SCORE_TWO_OPPONENT * np.count_nonzero((theirs == 2) & (empty == 1))
    )

    if board[GameConfig.CENTER] == _OWN:
        score += GameConfig.SCORE_CENTER
    score += GameConfig.SCORE_CORNER * np.count_nonzero(board[_CORNERS] == _OWN)

    return int(score)


class BotStrategy(ABC):
    """
    Base class for the bot difficulty levels.

    A strategy only reads the board; it never applies moves.
    The chosen index goes back through the MoveEngine like a human move.
    """

    difficulty: Difficulty

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Args:
            rng: Random source for tie-breaking. Pass a seeded
                 random.Random for reproducible games.
        """
        self.rng = rng if rng is not None else random.Random()
        self.win_checker = WinChecker()

    def choose_move(
        self,
        cells: Sequence[Cell],
        histories: Mapping[Player, Deque[int]],
        bot_marker: Player,
    ) -> int:
        """
        Pick the cell the bot plays next.

        Args:
            cells: The 9 board cells.
            histories: Each player's pieces, oldest first.
            bot_marker: Which player the bot controls.

        Returns:
            Index of an empty cell.

        Raises:
            NoLegalMoveError: No cell is empty.
        """
        empty_cells = [i for i, cell in enumerate(cells) if cell is None]
        if not empty_cells:
            raise NoLegalMoveError("No empty cell left for the bot")

        move = self._select(cells, histories, bot_marker, empty_cells)
        logger.debug("%s bot (%s) chose %d", self.difficulty.name, bot_marker.value, move)
        return move

    @abstractmethod
    def _select(
        self,
        cells: Sequence[Cell],
        histories: Mapping[Player, Deque[int]],
        bot_marker: Player,
        empty_cells: List[int],
    ) -> int:
        ...


class EasyBot(BotStrategy):
    """Plays a random empty cell."""

    difficulty = Difficulty.EASY

    def _select(self, cells, histories, bot_marker, empty_cells):
        return self.rng.choice(empty_cells)


class MediumBot(BotStrategy):
    """Takes wins, blocks losses, then prefers center and corners."""

    difficulty = Difficulty.MEDIUM

    def _select(self, cells, histories, bot_marker, empty_cells):
        move = self._tactical_move(cells, bot_marker, empty_cells)
        if move is not None:
            return move
        return self._positional_move(empty_cells)

    def _tactical_move(
        self, cells: Sequence[Cell], bot_marker: Player, empty_cells: List[int]
    ) -> Optional[int]:
        """First winning cell for the bot, else first cell the opponent would win on."""
        for player in (bot_marker, bot_marker.opposite()):
            for pos in empty_cells:
                if self.win_checker.would_win(cells, pos, player):
                    return pos
        return None

    def _positional_move(self, empty_cells: List[int]) -> int:
        """Center, then a random free corner, then any free cell."""
        if GameConfig.CENTER in empty_cells:
            return GameConfig.CENTER

        corners = [c for c in GameConfig.CORNERS if c in empty_cells]
        if corners:
            return self.rng.choice(corners)

        return self.rng.choice(empty_cells)


class HardBot(MediumBot):
    """
    Medium play, plus a scored choice once the bot is at the piece cap.

    With 3 pieces down, every placement also removes the bot's oldest
    piece, so each candidate is scored on the board as it will look
    after that removal.
    """

    difficulty = Difficulty.HARD

    def _select(self, cells, histories, bot_marker, empty_cells):
        move = self._tactical_move(cells, bot_marker, empty_cells)
        if move is not None:
            return move

        bot_pieces = histories[bot_marker]
        if len(bot_pieces) >= GameConfig.MAX_PIECES_PER_PLAYER:
            return self._best_scored_move(cells, bot_pieces[0], bot_marker, empty_cells)

        return self._positional_move(empty_cells)

    def _best_scored_move(
        self,
        cells: Sequence[Cell],
        oldest: int,
        bot_marker: Player,
        empty_cells: List[int],
    ) -> int:
        """Highest scoring cell; on ties the lowest index wins."""
        opponent = bot_marker.opposite()
        best_score = None
        best_position = empty_cells[0]

        for pos in empty_cells:
            test_board = list(cells)
            test_board[oldest] = None
            test_board[pos] = bot_marker

            score = score_board(test_board, bot_marker, opponent)
            if best_score is None or score > best_score:
                best_score = score
                best_position = pos

        logger.debug("Best scored cell %d (score %d)", best_position, best_score)
        return best_position


BOT_STRATEGIES: Dict[Difficulty, type] = {
    Difficulty.EASY: EasyBot,
    Difficulty.MEDIUM: MediumBot,
    Difficulty.HARD: HardBot,
}


def create_bot(config: BotConfig, rng: Optional[random.Random] = None) -> BotStrategy:
    """Build the strategy for a bot configuration."""
    return BOT_STRATEGIES[config.difficulty](rng)
