"""
Win checker for Three-Move TicTacToe.
Checks whether a board snapshot contains a completed line.
"""

from typing import List, Optional, Sequence

from .game_state import Cell, Line, Player


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 cells of the same marker in a row
    (horizontally, vertically, or diagonally).

    There is no draw: each player holds at most 3 pieces,
    so the board never fills up.
    """

    # All possible winning lines, checked in this order
    WINNING_LINES: List[Line] = [
        # Rows
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        # Columns
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        # Diagonals
        (0, 4, 8),
        (2, 4, 6),
    ]

    def get_winning_line(self, cells: Sequence[Cell]) -> Optional[Line]:
        """
        Get the winning line if there is one.

        When several lines are complete, the first one in
        WINNING_LINES order is reported.

        Args:
            cells: The 9 board cells.

        Returns:
            The winning line as a tuple of cell indices, or None.
        """
        for line in self.WINNING_LINES:
            if self._check_line(cells, line) is not None:
                return line
        return None

    def check_winner(self, cells: Sequence[Cell]) -> Optional[Player]:
        """
        Check if there's a winner.

        Args:
            cells: The 9 board cells.

        Returns:
            The winning Player, or None if no winner yet.
        """
        line = self.get_winning_line(cells)
        if line is None:
            return None
        return cells[line[0]]

    def would_win(self, cells: Sequence[Cell], index: int, player: Player) -> bool:
        """
        Check if placing the player's marker at an empty cell completes a line.
        The cells are not modified.
        """
        test_board = list(cells)
        test_board[index] = player
        return self.check_winner(test_board) == player

    def _check_line(self, cells: Sequence[Cell], line: Line) -> Optional[Player]:
        """Return the marker filling the whole line, or None."""
        a, b, c = line
        if cells[a] is not None and cells[a] == cells[b] == cells[c]:
            return cells[a]
        return None
