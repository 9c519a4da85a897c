"""
Game configuration for Three-Move TicTacToe.
Board geometry, rule limits, bot heuristic weights and status texts.
"""


class GameConfig:
    """
    Configuration class for the game rules and the bot.
    Change these values to tune the bot or the presentation!
    """

    # ==================== BOARD SETTINGS ====================
    BOARD_SIZE = 3
    NUM_CELLS = BOARD_SIZE * BOARD_SIZE  # 9 cells, row-major

    CENTER = 4
    CORNERS = (0, 2, 6, 8)

    # ==================== RULES ====================
    # A player never holds more than this many pieces.
    # Placing one more removes that player's oldest piece.
    MAX_PIECES_PER_PLAYER = 3

    # ==================== BOT HEURISTIC WEIGHTS ====================
    # Used by the HARD bot when it already holds MAX_PIECES_PER_PLAYER pieces
    SCORE_TWO_OWN = 10        # 2 bot pieces + 1 empty on a line
    SCORE_ONE_OWN = 1         # 1 bot piece + 2 empty on a line
    SCORE_TWO_OPPONENT = 8    # 2 opponent pieces + 1 empty on a line
    SCORE_CENTER = 5          # Bot holds the center
    SCORE_CORNER = 3          # Per corner held by the bot

    # ==================== BOT TIMING ====================
    # Pause before the bot plays, so it looks like it is thinking
    BOT_THINK_DELAY_MS = 500

    # ==================== STATUS TEXTS ====================
    # Keyed by StatusKind.name (see logic/session.py)
    STATUS_TEXT = {
        "X_TO_PLACE": "Player X's turn: place a piece",
        "X_TO_MOVE_OLDEST": "Player X's turn: your oldest piece will move",
        "O_TO_PLACE": "Player O's turn: place a piece",
        "O_TO_MOVE_OLDEST": "Player O's turn: your oldest piece will move",
        "BOT_THINKING": "Bot is thinking...",
        "X_WINS": "Player X wins!",
        "O_WINS": "Player O wins!",
        "BOT_WINS": "Bot wins!",
    }
