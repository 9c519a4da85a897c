"""
Three-Move TicTacToe UI
A graphical interface for the game using Tkinter.

Shows:
- The 3x3 board (click a cell to play)
- Game status and piece counts
- Game mode selection (2 players or a bot) and marker choice
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Any, Callable

from logic.bot_player import Difficulty
from logic.config import GameConfig
from logic.game_state import Cell, Line, Player
from logic.session import GameListener, GameMode, GameSession, Scheduler, StatusKind

logger = logging.getLogger(__name__)

# ==================== COLORS ====================
BACKGROUND = '#1a1a2e'
CELL_BACKGROUND = '#16213e'
TITLE_COLOR = '#00d4ff'
STATUS_COLOR = '#ffd700'
PLAYER_COLORS = {
    Player.X: '#ff2e88',
    Player.O: '#00ff88',
}
WIN_BACKGROUNDS = {
    Player.X: '#5c1035',
    Player.O: '#065f46',
}

# (label, mode key) for the mode buttons
MODE_BUTTONS = [
    ("2 Players", "TWO_PLAYER", "#60a5fa"),
    ("Easy Bot", "EASY", "#4ade80"),
    ("Medium Bot", "MEDIUM", "#fbbf24"),
    ("Hard Bot", "HARD", "#f87171"),
]


class TkScheduler(Scheduler):
    """Schedules bot moves on the Tk event loop."""

    def __init__(self, root: tk.Tk):
        self.root = root

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        return self.root.after(delay_ms, callback)

    def cancel(self, handle: Any):
        self.root.after_cancel(handle)


class TicTacToeUI(GameListener):
    """
    Main UI class for Three-Move TicTacToe.
    """

    def __init__(self, think_delay_ms: int = GameConfig.BOT_THINK_DELAY_MS, rng=None):
        """Initialize the UI."""
        self.mode_key = "MEDIUM"
        self.human_marker = Player.X

        # Create UI
        self._create_ui()

        self.session = GameSession(
            listener=self,
            scheduler=TkScheduler(self.root),
            rng=rng,
            think_delay_ms=think_delay_ms,
        )

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("Three-Move TicTacToe")
        self.root.configure(bg=BACKGROUND)
        self.root.resizable(False, False)

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=20, pady=20)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background=BACKGROUND)
        style.configure('TLabel', background=BACKGROUND, foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 16, 'bold'), foreground=TITLE_COLOR)
        style.configure('Status.TLabel', font=('Segoe UI', 12), foreground=STATUS_COLOR)

        ttk.Label(main_frame, text="Three-Move TicTacToe", style='Title.TLabel').pack(pady=(0, 5))

        self.status_label = ttk.Label(main_frame, text="Pick a mode to start", style='Status.TLabel')
        self.status_label.pack(pady=5)

        # Piece counts
        counts_frame = ttk.Frame(main_frame)
        counts_frame.pack(pady=5)
        self.count_x_label = ttk.Label(counts_frame, text="X pieces: 0/3", foreground=PLAYER_COLORS[Player.X])
        self.count_x_label.pack(side=tk.LEFT, padx=10)
        self.count_o_label = ttk.Label(counts_frame, text="O pieces: 0/3", foreground=PLAYER_COLORS[Player.O])
        self.count_o_label.pack(side=tk.LEFT, padx=10)

        # Board
        self.board_frame = ttk.Frame(main_frame)
        self.board_frame.pack(pady=10)

        self.board_cells = []
        for index in range(GameConfig.NUM_CELLS):
            row, col = divmod(index, GameConfig.BOARD_SIZE)
            cell = tk.Button(
                self.board_frame,
                text="",
                font=('Segoe UI', 28, 'bold'),
                width=3,
                height=1,
                bg=CELL_BACKGROUND,
                fg='white',
                activebackground=CELL_BACKGROUND,
                relief='ridge',
                borderwidth=2,
                command=lambda i=index: self._on_cell_click(i)
            )
            cell.grid(row=row, column=col, padx=2, pady=2)
            self.board_cells.append(cell)

        # Mode section
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=15)
        ttk.Label(main_frame, text="⚙️ Game Mode", style='Title.TLabel').pack()

        mode_frame = ttk.Frame(main_frame)
        mode_frame.pack(pady=10)

        for text, value, color in MODE_BUTTONS:
            btn = tk.Button(
                mode_frame,
                text=text,
                font=('Segoe UI', 10, 'bold'),
                width=10,
                bg=color if self.mode_key == value else '#2d3748',
                fg='black' if self.mode_key == value else 'white',
                activebackground=color,
                command=lambda v=value, c=color: self._set_mode(v, c)
            )
            btn.pack(side=tk.LEFT, padx=3)
            setattr(self, f'btn_{value.lower()}', btn)

        # Marker choice (only matters against a bot)
        marker_frame = ttk.Frame(main_frame)
        marker_frame.pack(pady=5)
        self.marker_var = tk.StringVar(value=Player.X.value)
        for text, value in (("Play as X (first move)", "X"), ("Play as O (second move)", "O")):
            tk.Radiobutton(
                marker_frame,
                text=text,
                value=value,
                variable=self.marker_var,
                bg=BACKGROUND,
                fg='white',
                selectcolor=CELL_BACKGROUND,
                activebackground=BACKGROUND,
                command=self._set_marker
            ).pack(side=tk.LEFT, padx=5)

        # Control buttons
        control_frame = ttk.Frame(main_frame)
        control_frame.pack(pady=10)

        tk.Button(
            control_frame,
            text="🔄 New Game",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=12,
            command=self._start_game
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame,
            text="✕ Quit",
            font=('Segoe UI', 11, 'bold'),
            bg='#ef4444',
            fg='white',
            width=12,
            command=self._quit
        ).pack(side=tk.LEFT, padx=5)

        # Bind close event
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _set_mode(self, value: str, color: str):
        """Select the game mode; takes effect on the next game."""
        self.mode_key = value

        # Update button colors
        for _, key, _ in MODE_BUTTONS:
            btn = getattr(self, f'btn_{key.lower()}')
            if key == value:
                btn.configure(bg=color, fg='black')
            else:
                btn.configure(bg='#2d3748', fg='white')

        logger.info("Mode set to: %s", value)
        self._start_game()

    def _set_marker(self):
        self.human_marker = Player(self.marker_var.get())
        logger.info("Human plays: %s", self.human_marker.value)
        self._start_game()

    def _current_mode(self) -> GameMode:
        if self.mode_key == "TWO_PLAYER":
            return GameMode.two_player()
        return GameMode.vs_bot(Difficulty[self.mode_key], self.human_marker.opposite())

    def _start_game(self):
        """Start a new game, discarding any pending bot move."""
        self.session.new_game(self._current_mode())

    def _on_cell_click(self, index: int):
        self.session.submit_move(index)

    # ==================== GameListener ====================

    def on_cell_updated(self, index: int, cell: Cell):
        button = self.board_cells[index]
        if cell is None:
            button.configure(text="", bg=CELL_BACKGROUND, font=('Segoe UI', 28, 'bold'))
        else:
            button.configure(text=cell.value, fg=PLAYER_COLORS[cell], activeforeground=PLAYER_COLORS[cell])

    def on_status_changed(self, status: StatusKind):
        color = STATUS_COLOR
        if status in (StatusKind.X_TO_PLACE, StatusKind.X_TO_MOVE_OLDEST, StatusKind.X_WINS):
            color = PLAYER_COLORS[Player.X]
        elif status in (StatusKind.O_TO_PLACE, StatusKind.O_TO_MOVE_OLDEST, StatusKind.O_WINS):
            color = PLAYER_COLORS[Player.O]
        self.status_label.configure(text=status.text, foreground=color)

    def on_counts_changed(self, count_x: int, count_o: int):
        cap = GameConfig.MAX_PIECES_PER_PLAYER
        self.count_x_label.configure(text=f"X pieces: {count_x}/{cap}")
        self.count_o_label.configure(text=f"O pieces: {count_o}/{cap}")

    def on_game_over(self, winner: Player, line: Line):
        # Highlight the winning cells
        for index in line:
            self.board_cells[index].configure(
                bg=WIN_BACKGROUNDS[winner],
                font=('Segoe UI', 34, 'bold')
            )

    # ==================== LIFECYCLE ====================

    def _quit(self):
        """Quit the application."""
        logger.info("Quitting...")
        self.session.cancel_pending_bot_move()
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self._start_game()
        self.root.mainloop()
