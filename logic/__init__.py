"""
Logic module for Three-Move TicTacToe.
Handles game state, rules, the bot opponent and the game session.
"""

from .config import GameConfig
from .game_state import BoardState, Move, Player
from .win_checker import WinChecker
from .move_engine import (
    CellOccupiedError,
    GameOverError,
    InvalidCellError,
    MoveEngine,
    MoveError,
    ValidationResult,
)
from .bot_player import (
    BotConfig,
    BotStrategy,
    Difficulty,
    EasyBot,
    HardBot,
    MediumBot,
    NoLegalMoveError,
    create_bot,
    score_board,
)
from .session import GameListener, GameMode, GameSession, ImmediateScheduler, Scheduler, StatusKind

__version__ = "1.0.0"
