"""
Game state for Three-Move TicTacToe.
Tracks the board, whose turn it is, and the order each player's pieces arrived in.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Dict, List, Optional, Tuple

from .config import GameConfig


class Player(Enum):
    """The two players in the game."""
    X = "X"
    O = "O"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.O if self == Player.X else Player.X


# A cell is either empty (None) or holds a player's marker
Cell = Optional[Player]

# Three cell indices forming a row, column or diagonal
Line = Tuple[int, int, int]


@dataclass(frozen=True)
class Move:
    """
    A placement that was applied to the board.
    """
    player: Player              # Who placed the piece
    index: int                  # Cell index (0-8)
    evicted: Optional[int]      # Cell freed by FIFO eviction, if any
    move_number: int            # 1-based count of moves in this game


def _empty_histories() -> Dict[Player, Deque[int]]:
    return {Player.X: deque(), Player.O: deque()}


@dataclass
class BoardState:
    """
    The complete state of a Three-Move TicTacToe game.

    Tracks:
    - The 9 cells, row-major (None means empty)
    - Each player's pieces in the order they were placed (oldest first)
    - Current player
    - Whether the game is still running, and who won on which line
    - Every move applied so far
    """

    cells: List[Cell] = field(
        default_factory=lambda: [None] * GameConfig.NUM_CELLS
    )
    histories: Dict[Player, Deque[int]] = field(default_factory=_empty_histories)
    current_player: Player = Player.X
    active: bool = True

    winner: Optional[Player] = None
    winning_line: Optional[Line] = None

    moves: List[Move] = field(default_factory=list)

    def get_empty_cells(self) -> List[int]:
        """
        Get all empty cells on the board.

        Returns:
            Cell indices in ascending order.
        """
        return [i for i, cell in enumerate(self.cells) if cell is None]

    def piece_count(self, player: Player) -> int:
        """How many pieces the player currently has on the board."""
        return len(self.histories[player])

    def oldest_piece(self, player: Player) -> Optional[int]:
        """The cell holding the player's oldest piece, or None if they have none."""
        history = self.histories[player]
        return history[0] if history else None

    def will_evict(self, player: Optional[Player] = None) -> bool:
        """True if the player's next placement removes their oldest piece."""
        if player is None:
            player = self.current_player
        return self.piece_count(player) >= GameConfig.MAX_PIECES_PER_PLAYER

    def copy(self) -> "BoardState":
        """Create a deep copy of the board state."""
        return BoardState(
            cells=list(self.cells),
            histories={p: deque(h) for p, h in self.histories.items()},
            current_player=self.current_player,
            active=self.active,
            winner=self.winner,
            winning_line=self.winning_line,
            moves=list(self.moves),
        )

    def render(self) -> str:
        """Render the board as text, empty cells show their index."""
        size = GameConfig.BOARD_SIZE
        rows = []
        for row in range(size):
            symbols = []
            for col in range(size):
                index = row * size + col
                cell = self.cells[index]
                symbols.append(str(index) if cell is None else cell.value)
            rows.append(" " + " | ".join(symbols))
        return "\n---+---+---\n".join(rows)

    def print_board(self):
        """Print the board to console."""
        print()
        print(self.render())

        if not self.active:
            print(f"\n{self.winner.value} WINS!")
        else:
            print(f"\nCurrent turn: {self.current_player.value}")
            if self.will_evict():
                print(f"Oldest piece at {self.oldest_piece(self.current_player)} will be removed")
