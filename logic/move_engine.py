"""
Move engine for Three-Move TicTacToe.
Validates placements and applies them, including FIFO eviction.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import GameConfig
from .game_state import BoardState, Move
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


class MoveError(Exception):
    """A placement was rejected. The board is left untouched."""


class GameOverError(MoveError):
    """The game has already been won."""

    def __init__(self):
        super().__init__("Game is already over!")


class InvalidCellError(MoveError):
    """The index is not a cell on the board."""

    def __init__(self, index: int):
        super().__init__(f"Invalid cell {index}. Must be 0-{GameConfig.NUM_CELLS - 1}.")
        self.index = index


class CellOccupiedError(MoveError):
    """The target cell already holds a piece."""

    def __init__(self, index: int, occupant):
        super().__init__(f"Cell {index} is already occupied by {occupant.value}")
        self.index = index
        self.occupant = occupant


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error: Optional[MoveError] = None

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


class MoveEngine:
    """
    Applies moves to a BoardState.

    Rules:
    1. Game must not be over
    2. Can only place on empty cells
    3. A player holding 3 pieces loses their oldest one when placing another
    4. Completing a line wins; the winner keeps the turn and the game stops
    """

    def __init__(self, win_checker: Optional[WinChecker] = None):
        self.win_checker = win_checker or WinChecker()

    def validate_move(self, state: BoardState, index: int) -> ValidationResult:
        """
        Validate a move without applying it.

        Args:
            state: Current board state.
            index: Cell to place a piece on (0-8).

        Returns:
            ValidationResult with is_valid and the error that would be raised.
        """
        # Check if game is over
        if not state.active:
            return ValidationResult(is_valid=False, error=GameOverError())

        # Check if index is on the board
        if not 0 <= index < GameConfig.NUM_CELLS:
            return ValidationResult(is_valid=False, error=InvalidCellError(index))

        # Check if cell is empty
        occupant = state.cells[index]
        if occupant is not None:
            return ValidationResult(is_valid=False, error=CellOccupiedError(index, occupant))

        return ValidationResult(is_valid=True)

    def apply_move(self, state: BoardState, index: int) -> BoardState:
        """
        Place the current player's piece on a cell.

        The input state is never modified; a new state is returned.

        Args:
            state: Current board state.
            index: Cell to place a piece on (0-8).

        Returns:
            The board state after the move.

        Raises:
            GameOverError: The game has already been won.
            InvalidCellError: The index is outside the board.
            CellOccupiedError: The cell already holds a piece.
        """
        result = self.validate_move(state, index)
        if not result.is_valid:
            raise result.error

        new_state = state.copy()
        player = new_state.current_player
        history = new_state.histories[player]

        # Remove the oldest piece once the player is at the cap
        evicted = None
        if len(history) >= GameConfig.MAX_PIECES_PER_PLAYER:
            evicted = history.popleft()
            new_state.cells[evicted] = None
            logger.debug("%s: oldest piece at %d removed", player.value, evicted)

        new_state.cells[index] = player
        history.append(index)
        new_state.moves.append(Move(
            player=player,
            index=index,
            evicted=evicted,
            move_number=len(new_state.moves) + 1,
        ))
        logger.debug("%s placed at %d", player.value, index)

        line = self.win_checker.get_winning_line(new_state.cells)
        if line is not None:
            new_state.active = False
            new_state.winner = player
            new_state.winning_line = line
            logger.info("%s wins on line %s", new_state.winner.value, line)
        else:
            new_state.current_player = player.opposite()

        return new_state
