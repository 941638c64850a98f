"""Tests for the negamax search and its configuration."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from connectfour.core.bitboard import BOARD_WIDTH, BOARD_HEIGHT, Board
from connectfour.core.outcome import WIN_SCORE
from connectfour.core.state import GameState
from connectfour.ai.negamax import (
    Negamax, SearchConfig, RefinementMode, SCORE_BOUND, color_for
)
from connectfour.ai.controller import make_step


def full_board_rows() -> list[str]:
    """A full board with no four in a row anywhere."""
    return [
        "".join('x' if ((x // 2) + y) % 2 == 0 else 'o' for x in range(BOARD_WIDTH))
        for y in range(BOARD_HEIGHT - 1, -1, -1)
    ]


def o_wins_next() -> GameState:
    """Player 2 to move with a win at (3, 0)."""
    return GameState(board=Board.from_rows([
        "xx........",
        "ooo..x....",
    ]), current_player=1)


def x_double_threat() -> GameState:
    """Player 2 to move, player 1 threatens both (1, 0) and (5, 0)."""
    return GameState(board=Board.from_rows(["..xxx...oo"]), current_player=1)


def must_block() -> GameState:
    """Player 2 to move, player 1 wins at (0, 0) unless it is taken."""
    return GameState(board=Board.from_rows([".xxxo...oo"]), current_player=1)


def midgame() -> GameState:
    return GameState(board=Board.from_rows([
        "....o.....",
        "...xo.....",
        "...ox.x...",
        "..xoxoo...",
    ]), last_move=(4, 3), current_player=1)


class TestSearchConfig:
    def test_defaults(self):
        config = SearchConfig()
        assert config.depth == 5
        assert config.num_threads == 8
        assert config.trim is None
        assert config.prune
        assert config.executor == "thread"
        assert config.refinement == RefinementMode.SINGLE

    def test_refinement_from_string(self):
        assert SearchConfig(refinement="legacy").refinement == RefinementMode.LEGACY

    @pytest.mark.parametrize("kwargs", [
        {"depth": 0},
        {"num_threads": 0},
        {"trim": 0},
        {"executor": "fiber"},
    ])
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ValueError):
            SearchConfig(**kwargs)

    def test_unknown_refinement_raises(self):
        with pytest.raises(ValueError):
            SearchConfig(refinement="sideways")


class TestColor:
    def test_color_for(self):
        assert color_for(0) == -1
        assert color_for(1) == 1

    def test_bound_exceeds_scores(self):
        assert SCORE_BOUND > WIN_SCORE


class TestLeafValues:
    def test_depth_zero_is_cached_points(self):
        state = GameState.new_game()
        assert Negamax().search(state, 0, -SCORE_BOUND, SCORE_BOUND, 1) == 0

    def test_terminal_win_seen_by_each_side(self):
        state = GameState(board=Board.from_rows(["ooo......."]), current_player=1)
        state.apply_move(3, 0, 1)
        engine = Negamax()
        # Player 1 is to move and has lost
        assert engine.search(state, 3, -SCORE_BOUND, SCORE_BOUND, -1) == -WIN_SCORE
        assert engine.search(state, 3, -SCORE_BOUND, SCORE_BOUND, 1) == WIN_SCORE
        assert engine.evaluate_root(state, 3) == -WIN_SCORE

    def test_terminal_node_counts_once(self):
        state = GameState(board=Board.from_rows(["xxx......."]))
        state.apply_move(3, 0, 0)
        engine = Negamax()
        engine.evaluate_root(state, 4)
        assert engine.nodes == 1

    def test_full_board_is_draw(self):
        state = GameState(board=Board.from_rows(full_board_rows()))
        assert state.board.is_full()
        for color in (-1, 1):
            assert Negamax().search(state, 3, -SCORE_BOUND, SCORE_BOUND, color) == 0


class TestSearch:
    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_finds_immediate_win(self, depth):
        assert Negamax().evaluate_root(o_wins_next(), depth) == WIN_SCORE

    def test_depth_one_misses_opponent_threat(self):
        assert Negamax().evaluate_root(x_double_threat(), 1) == 0

    def test_sees_forced_loss(self):
        assert Negamax().evaluate_root(x_double_threat(), 2) == -WIN_SCORE

    def test_quiet_position_is_zero(self):
        assert Negamax().evaluate_root(GameState.new_game(), 3) == 0

    def test_node_counts_full_width(self):
        engine = Negamax(SearchConfig(prune=False))
        engine.evaluate_root(GameState.new_game(), 1)
        assert engine.nodes == 1 + BOARD_WIDTH

        engine = Negamax(SearchConfig(prune=False))
        engine.evaluate_root(GameState.new_game(), 2)
        assert engine.nodes == 1 + BOARD_WIDTH + BOARD_WIDTH ** 2

    def test_search_does_not_modify_state(self):
        state = midgame()
        before = state.copy()
        Negamax().evaluate_root(state, 3)
        assert state == before


class TestPruning:
    @pytest.mark.parametrize("make_state", [midgame, o_wins_next, x_double_threat])
    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_pruning_keeps_root_value(self, make_state, depth):
        pruned = Negamax(SearchConfig(prune=True))
        full = Negamax(SearchConfig(prune=False))
        state = make_state()
        assert pruned.evaluate_root(state, depth) == full.evaluate_root(state, depth)
        assert pruned.nodes <= full.nodes

    @pytest.mark.parametrize("make_state", [midgame, o_wins_next, x_double_threat, must_block])
    @pytest.mark.parametrize("depth", [2, 3])
    def test_pruning_keeps_chosen_move(self, make_state, depth):
        pruned = make_step(make_state(), SearchConfig(depth=depth, num_threads=3, prune=True))
        full = make_step(make_state(), SearchConfig(depth=depth, num_threads=3, prune=False))
        assert (pruned.move, pruned.belief) == (full.move, full.belief)

    def test_pruning_cuts_nodes(self):
        pruned = Negamax(SearchConfig(prune=True))
        full = Negamax(SearchConfig(prune=False))
        pruned.evaluate_root(GameState.new_game(), 2)
        full.evaluate_root(GameState.new_game(), 2)
        assert pruned.nodes < full.nodes


class TestTrim:
    def test_trim_limits_children(self):
        engine = Negamax(SearchConfig(trim=2, prune=False))
        engine.evaluate_root(GameState.new_game(), 2)
        assert engine.nodes == 1 + 2 + 4

    def test_trim_can_miss_a_win(self):
        # (2, 1) has more neighbours than the winning drop at (3, 0)
        state = o_wins_next()
        assert Negamax(SearchConfig(trim=1)).evaluate_root(state, 1) == 0
