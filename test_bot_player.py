"""
Tests for the bot difficulty levels and the board heuristic.
"""

import random
from collections import deque

import pytest
from hypothesis import given, settings, strategies as st

from logic.bot_player import (
    BotConfig,
    Difficulty,
    EasyBot,
    HardBot,
    MediumBot,
    NoLegalMoveError,
    create_bot,
    score_board,
)
from logic.game_state import BoardState, Player
from logic.move_engine import MoveEngine, MoveError
from logic.win_checker import WinChecker

X, O = Player.X, Player.O
LINES = [(0, 1, 2), (3, 4, 5), (6, 7, 8), (0, 3, 6), (1, 4, 7), (2, 5, 8), (0, 4, 8), (2, 4, 6)]


def board(x=(), o=()):
    cells = [None] * 9
    for i in x:
        cells[i] = X
    for i in o:
        cells[i] = O
    return cells, {X: deque(x), O: deque(o)}


def reference_score(cells, bot, opponent):
    score = 0
    for line in LINES:
        values = [cells[i] for i in line]
        mine, theirs, empty = values.count(bot), values.count(opponent), values.count(None)
        if mine == 2 and empty == 1:
            score += 10
        elif mine == 1 and empty == 2:
            score += 1
        elif theirs == 2 and empty == 1:
            score += 8
    if cells[4] == bot:
        score += 5
    score += 3 * sum(1 for c in (0, 2, 6, 8) if cells[c] == bot)
    return score


def reference_hard_choice(cells, histories, bot):
    """Argmax of the heuristic after removing the bot's oldest piece."""
    oldest = histories[bot][0]
    best, best_score = None, None
    for pos in range(9):
        if cells[pos] is not None:
            continue
        trial = list(cells)
        trial[oldest] = None
        trial[pos] = bot
        score = reference_score(trial, bot, bot.opposite())
        if best_score is None or score > best_score:
            best, best_score = pos, score
    return best


def has_tactical_move(cells, bot):
    checker = WinChecker()
    empty = [i for i, c in enumerate(cells) if c is None]
    return any(
        checker.would_win(cells, pos, player)
        for player in (bot, bot.opposite())
        for pos in empty
    )


# ==================== HEURISTIC ====================

def test_score_empty_board_is_zero():
    assert score_board([None] * 9, O, X) == 0


def test_score_counts_lines_and_positions():
    # O center + corner 8: diagonal (0,4,8) has 2 O + 1 empty,
    # (3,4,5), (1,4,7), (2,4,6), (6,7,8), (2,5,8) have 1 O + 2 empty
    cells, _ = board(o=(4, 8))
    assert score_board(cells, O, X) == 10 + 5 * 1 + 5 + 3
    assert score_board(cells, O, X) == reference_score(cells, O, X)


def test_score_opponent_pair_adds_block_bonus():
    cells, _ = board(x=(0, 1))
    # Row 0 counts +8; no bot pieces anywhere
    assert score_board(cells, O, X) == 8


@settings(max_examples=200, deadline=None)
@given(st.lists(st.sampled_from([None, X, O]), min_size=9, max_size=9))
def test_score_matches_reference(cells):
    assert score_board(cells, O, X) == reference_score(cells, O, X)
    assert score_board(cells, X, O) == reference_score(cells, X, O)


# ==================== EASY ====================

def test_easy_picks_an_empty_cell():
    cells, histories = board(x=(0, 4), o=(1, 8))
    for seed in range(20):
        move = EasyBot(random.Random(seed)).choose_move(cells, histories, O)
        assert cells[move] is None


def test_easy_is_reproducible_with_seed():
    cells, histories = board(x=(0,))
    first = EasyBot(random.Random(7)).choose_move(cells, histories, O)
    second = EasyBot(random.Random(7)).choose_move(cells, histories, O)
    assert first == second


# ==================== MEDIUM ====================

def test_medium_blocks_open_row():
    cells, histories = board(x=(0, 1), o=(4,))
    assert MediumBot(random.Random(0)).choose_move(cells, histories, O) == 2


def test_medium_prefers_win_over_block():
    cells, histories = board(x=(0, 1), o=(3, 4))
    assert MediumBot(random.Random(0)).choose_move(cells, histories, O) == 5


def test_medium_takes_center_first():
    cells, histories = board()
    assert MediumBot(random.Random(0)).choose_move(cells, histories, X) == 4


def test_medium_takes_a_corner_when_center_is_gone():
    cells, histories = board(x=(4,))
    for seed in range(10):
        assert MediumBot(random.Random(seed)).choose_move(cells, histories, O) in (0, 2, 6, 8)


def test_medium_ignores_eviction_when_looking_for_a_win():
    # O holds 3 pieces with 0 the oldest; 6 completes (0, 3, 6) on the
    # current board even though placing there removes the piece at 0
    cells, histories = board(x=(1, 4, 8), o=(0, 3, 7))
    assert MediumBot(random.Random(0)).choose_move(cells, histories, O) == 6


# ==================== HARD ====================

def test_hard_takes_win_and_blocks_like_medium():
    cells, histories = board(x=(0, 1), o=(3, 4))
    assert HardBot(random.Random(0)).choose_move(cells, histories, O) == 5

    cells, histories = board(x=(0, 1), o=(4,))
    assert HardBot(random.Random(0)).choose_move(cells, histories, O) == 2


def test_hard_with_few_pieces_plays_positionally():
    cells, histories = board()
    assert HardBot(random.Random(0)).choose_move(cells, histories, X) == 4

    cells, histories = board(x=(4,))
    assert HardBot(random.Random(0)).choose_move(cells, histories, O) in (0, 2, 6, 8)


def test_hard_scores_moves_after_eviction():
    # O oldest piece is 1; candidates 2, 4, 6 score 7, 9, 7
    cells, histories = board(x=(0, 5, 7), o=(1, 3, 8))
    assert not has_tactical_move(cells, O)

    move = HardBot(random.Random(0)).choose_move(cells, histories, O)
    assert move == reference_hard_choice(cells, histories, O)
    assert move == 4


@settings(max_examples=150, deadline=None)
@given(st.lists(st.integers(min_value=0, max_value=8), min_size=6, max_size=40))
def test_hard_matches_reference_argmax(indices):
    engine = MoveEngine()
    state = BoardState()
    for index in indices:
        try:
            state = engine.apply_move(state, index)
        except MoveError:
            continue
        if not state.active:
            return

        bot = state.current_player
        if state.piece_count(bot) == 3 and not has_tactical_move(state.cells, bot):
            move = HardBot(random.Random(0)).choose_move(state.cells, state.histories, bot)
            assert move == reference_hard_choice(state.cells, state.histories, bot)


# ==================== COMMON ====================

@pytest.mark.parametrize("bot_class", [EasyBot, MediumBot, HardBot])
def test_full_board_raises_no_legal_move(bot_class):
    cells = [X, O, X, O, X, O, O, X, O]
    histories = {X: deque([0, 2, 4]), O: deque([1, 3, 5])}
    with pytest.raises(NoLegalMoveError):
        bot_class(random.Random(0)).choose_move(cells, histories, O)


@pytest.mark.parametrize("difficulty,bot_class", [
    (Difficulty.EASY, EasyBot),
    (Difficulty.MEDIUM, MediumBot),
    (Difficulty.HARD, HardBot),
])
def test_create_bot(difficulty, bot_class):
    rng = random.Random(3)
    bot = create_bot(BotConfig(difficulty=difficulty, marker=X), rng)
    assert isinstance(bot, bot_class)
    assert bot.rng is rng


def test_bot_config_is_immutable():
    config = BotConfig(Difficulty.HARD, O)
    with pytest.raises(AttributeError):
        config.marker = X
